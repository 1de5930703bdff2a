"""
Contract Validation Module

Модуль для валидации JSON контрактов Buyback Custodian.
"""

from .validators import (
    AuditEventValidator,
    ContractValidator,
    CustodianConfigValidator,
    SchemaLoader,
    default_loader,
    validate_audit_event,
    validate_custodian_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AuditEventValidator",
    "CustodianConfigValidator",
    # Functions
    "default_loader",
    "validate_audit_event",
    "validate_custodian_config",
]
