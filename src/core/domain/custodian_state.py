"""
CustodianState — Модель состояния Buyback Custodian

Immutable Pydantic модель, представляющая снапшот состояния custodian:
- Баланс пула
- Фиксированная цена
- Operational state (ACTIVE/PAUSED)
- Счётчики provenance и holdings
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class OperationalState(str, Enum):
    """
    Operational state custodian.

    ACTIVE: intake операции (sell, deposit, receipt callback) разрешены
    PAUSED: intake запрещён, административные операции разрешены
    """

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"


class PayoutPolicy(str, Enum):
    """
    Политика выплаты за batch non-fungible активов.

    FLAT: фиксированная цена за транзакцию независимо от размера batch
    PER_ITEM: count × unit_price
    """

    FLAT = "FLAT"
    PER_ITEM = "PER_ITEM"


# =============================================================================
# SNAPSHOT
# =============================================================================


class CustodianSnapshot(BaseModel):
    """
    Снапшот состояния custodian (read-only view).

    Immutable модель (frozen=True).
    """

    address: str = Field(..., min_length=1, description="Адрес custodian")
    owner: str = Field(..., min_length=1, description="Адрес администратора")
    pool_balance: int = Field(..., ge=0, description="Баланс пула (нативные единицы)")
    unit_price: int = Field(..., ge=0, description="Фиксированная цена за актив")
    nft_payout_policy: PayoutPolicy = Field(..., description="Политика выплаты за NFT batch")
    state: OperationalState = Field(..., description="Operational state")
    provenance_count: int = Field(..., ge=0, description="Количество provenance записей")
    holdings_count: int = Field(..., ge=0, description="Количество принятых активов")
    audit_sequence: int = Field(..., ge=0, description="Номер последнего audit event")

    model_config = {"frozen": True}
