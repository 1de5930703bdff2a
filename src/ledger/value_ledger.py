"""Value Ledger — нативный механизм перевода стоимости.

Атомарный debit/credit: перевод либо выполняется целиком,
либо падает с InsufficientFunds без изменений.
"""

from typing import Dict

from src.core.domain.value import validate_address, validate_amount
from src.core.errors import InsufficientFunds


class ValueLedger:
    """Балансы нативной валюты по адресам."""

    def __init__(self):
        self._balances: Dict[str, int] = {}

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def mint(self, account: str, amount: int) -> None:
        """Внешняя поставка стоимости на адрес (faucet / coinbase)."""
        validate_address(account, "account")
        validate_amount(amount)
        self._balances[account] = self.balance_of(account) + amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """
        Перевод amount с sender на recipient.

        Raises:
            InsufficientFunds: если баланс sender меньше amount
        """
        validate_address(sender, "sender")
        validate_address(recipient, "recipient")
        validate_amount(amount)

        available = self.balance_of(sender)
        if available < amount:
            raise InsufficientFunds(sender, amount, available)

        self._balances[sender] = available - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def total_supply(self) -> int:
        return sum(self._balances.values())

    # -- TransactionalParticipant --------------------------------------------

    def snapshot(self) -> Dict[str, int]:
        return dict(self._balances)

    def restore(self, state: Dict[str, int]) -> None:
        self._balances = dict(state)
