"""Конфигурация Buyback Custodian.

- unit_price: фиксированная цена за non-fungible актив (immutable)
- nft_payout_policy: FLAT (цена за транзакцию) или PER_ITEM (count × unit_price)
- fungible_payout: фиксированная выплата за fungible batch (None → unit_price)
- provenance_check_enabled: проверка provenance в receipt callback
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.core.contracts import validate_custodian_config
from src.core.domain.custodian_state import PayoutPolicy
from src.core.domain.value import validate_amount


@dataclass(frozen=True)
class CustodianConfig:
    """Конфигурация custodian.

    Выплата за fungible batch не зависит от длины batch.
    """

    unit_price: int = 0
    nft_payout_policy: PayoutPolicy = PayoutPolicy.PER_ITEM
    fungible_payout: Optional[int] = None
    provenance_check_enabled: bool = True

    def __post_init__(self):
        validate_amount(self.unit_price, "unit_price")
        if self.fungible_payout is not None:
            validate_amount(self.fungible_payout, "fungible_payout")
        # Допускаем строковое значение policy
        object.__setattr__(self, "nft_payout_policy", PayoutPolicy(self.nft_payout_policy))

    @property
    def effective_fungible_payout(self) -> int:
        if self.fungible_payout is None:
            return self.unit_price
        return self.fungible_payout

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustodianConfig":
        """
        Создание конфигурации из dict (например, загруженного JSON).

        Raises:
            ValidationError: если данные не соответствуют custodian_config.json
        """
        validate_custodian_config(data)
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_price": self.unit_price,
            "nft_payout_policy": self.nft_payout_policy.value,
            "fungible_payout": self.fungible_payout,
            "provenance_check_enabled": self.provenance_check_enabled,
        }
