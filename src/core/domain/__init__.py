"""
Domain models and value objects.

Contains fundamental domain entities: AssetRef, FungibleTransfer,
ProvenanceRecord, CustodianSnapshot, audit events.
"""

from src.core.domain.assets import AssetRef, FungibleTransfer, ProvenanceRecord
from src.core.domain.custodian_state import (
    CustodianSnapshot,
    OperationalState,
    PayoutPolicy,
)
from src.core.domain.events import (
    AssetsHarvested,
    AuditEvent,
    EventType,
    FungiblesHarvested,
    Paused,
    Unpaused,
    ValueReceived,
    Withdrawn,
)
from src.core.domain.value import (
    NON_FUNGIBLE_INTERFACE_ID,
    RECEIVER_SELECTOR,
    validate_address,
    validate_amount,
)

__all__ = [
    # Value module
    "NON_FUNGIBLE_INTERFACE_ID",
    "RECEIVER_SELECTOR",
    "validate_amount",
    "validate_address",
    # Assets
    "AssetRef",
    "FungibleTransfer",
    "ProvenanceRecord",
    # Custodian state
    "OperationalState",
    "PayoutPolicy",
    "CustodianSnapshot",
    # Events
    "EventType",
    "AuditEvent",
    "ValueReceived",
    "AssetsHarvested",
    "FungiblesHarvested",
    "Withdrawn",
    "Paused",
    "Unpaused",
]
