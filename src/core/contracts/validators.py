"""
JSON Schema Contract Validators

Контракты данных custodian, проверяемые jsonschema (Draft 2020-12):
- audit_event.json (audit log записи для off-system reconciliation)
- custodian_config.json (конфигурация custodian)

Схема читается и проходит meta-validation один раз на загрузчик;
скомпилированный Draft202012Validator кэшируется рядом со схемой.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match


# contracts/schema/ в корне репозитория
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик контрактов из каталога схем.

    Args:
        schema_dir: каталог *.json схем (по умолчанию contracts/schema/)
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Draft202012Validator] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: имя контракта без расширения ('audit_event')

        Raises:
            FileNotFoundError: нет файла контракта
            ValueError: схема не проходит meta-validation
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as exc:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {exc.message}") from exc

        self._schemas[schema_name] = schema
        return schema

    def validator_for(self, schema_name: str) -> Draft202012Validator:
        """Скомпилированный validator контракта (один на имя)."""
        validator = self._validators.get(schema_name)
        if validator is None:
            validator = Draft202012Validator(self.load_schema(schema_name))
            self._validators[schema_name] = validator
        return validator


@lru_cache(maxsize=None)
def default_loader() -> SchemaLoader:
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка dict записи против одного контракта."""

    schema_name: str = ""

    def __init__(self, schema_name: Optional[str] = None, loader: Optional[SchemaLoader] = None):
        if schema_name is not None:
            self.schema_name = schema_name
        if not self.schema_name:
            raise ValueError("schema_name is required")

        self._validator = (loader or default_loader()).validator_for(self.schema_name)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: наиболее релевантное нарушение контракта
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self._validator.iter_errors(data)


class AuditEventValidator(ContractValidator):
    schema_name = "audit_event"


class CustodianConfigValidator(ContractValidator):
    schema_name = "custodian_config"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_audit_event(data: Dict[str, Any]) -> None:
    """Raises ValidationError если запись не соответствует audit_event."""
    AuditEventValidator().validate(data)


def validate_custodian_config(data: Dict[str, Any]) -> None:
    """Raises ValidationError если конфигурация не соответствует custodian_config."""
    CustodianConfigValidator().validate(data)


__all__ = [
    "DEFAULT_SCHEMA_DIR",
    "SchemaLoader",
    "default_loader",
    "ContractValidator",
    "AuditEventValidator",
    "CustodianConfigValidator",
    "ValidationError",
    "validate_audit_event",
    "validate_custodian_config",
]
