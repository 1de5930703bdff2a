"""Payout — расчёт выплаты за batch.

Цена фиксирована (не price discovery):
- Non-fungible: FLAT → unit_price за транзакцию, PER_ITEM → count × unit_price
- Fungible: фиксированная выплата независимо от длины batch
"""

from src.core.domain.custodian_state import PayoutPolicy
from src.custodian.config import CustodianConfig


def asset_payout(config: CustodianConfig, count: int) -> int:
    """
    Выплата за batch из count non-fungible активов.

    Raises:
        ValueError: если count отрицательный
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if count == 0:
        return 0
    if config.nft_payout_policy == PayoutPolicy.FLAT:
        return config.unit_price
    return count * config.unit_price


def fungible_payout(config: CustodianConfig, count: int) -> int:
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if count == 0:
        return 0
    return config.effective_fungible_payout
