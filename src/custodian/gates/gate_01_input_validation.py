"""GATE 1: Input Validation

- Пустой batch → блокировка (empty_input)
- Для сумм (deposit): нулевое значение → блокировка (zero_value)
- Fungible позиция с нулевым количеством → блокировка (zero_amount)
"""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    entry_allowed: bool
    block_reason: str

    item_count: int

    details: str


class Gate01InputValidation:
    """GATE 1: проверка входа до любых side effects."""

    def evaluate_batch(self, item_count: int) -> Gate01Result:
        """Batch (assets / fungible transfers) должен быть непустым."""
        if item_count <= 0:
            return Gate01Result(
                entry_allowed=False,
                block_reason="empty_input",
                item_count=item_count,
                details="Batch is empty",
            )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            item_count=item_count,
            details=f"PASS: {item_count} items",
        )

    def evaluate_value(self, amount: int) -> Gate01Result:
        """Входящая стоимость должна быть положительной."""
        if amount <= 0:
            return Gate01Result(
                entry_allowed=False,
                block_reason="zero_value",
                item_count=0,
                details=f"Incoming value must be positive, got {amount}",
            )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            item_count=1,
            details=f"PASS: value={amount}",
        )

    def evaluate_amounts(self, amounts: Sequence[int]) -> Gate01Result:
        """Каждая fungible позиция batch должна переносить ненулевое количество."""
        for index, amount in enumerate(amounts):
            if amount <= 0:
                return Gate01Result(
                    entry_allowed=False,
                    block_reason="zero_amount",
                    item_count=len(amounts),
                    details=f"Transfer #{index} has non-positive amount {amount}",
                )

        return Gate01Result(
            entry_allowed=True,
            block_reason="",
            item_count=len(amounts),
            details=f"PASS: {len(amounts)} positive amounts",
        )
