"""Fungible Token Registry — fixed-supply token с allowance.

Supply выпускается один раз при создании на initial_holder.
transfer_from возвращает False при недостатке баланса или allowance
(failable semantics), исключения не бросаются.
"""

import logging
from typing import Dict, Tuple

from src.core.domain.value import validate_address, validate_amount
from src.ledger.environment import ExecutionEnvironment


logger = logging.getLogger(__name__)


class FungibleTokenRegistry:
    """In-memory fungible token ledger.

    Args:
        env: окружение исполнения (регистрация по адресу)
        address: адрес token registry
        initial_holder: получатель всего supply
        total_supply: фиксированный supply
        fail_transfers: transfer_from всегда возвращает False (модель
            токена с отказывающим transfer)
    """

    def __init__(
        self,
        env: ExecutionEnvironment,
        address: str,
        initial_holder: str,
        total_supply: int,
        symbol: str = "TKN",
        fail_transfers: bool = False,
    ):
        self.address = validate_address(address)
        self.symbol = symbol
        self.fail_transfers = fail_transfers
        self._env = env
        self._total_supply = validate_amount(total_supply, "total_supply")
        self._balances: Dict[str, int] = {validate_address(initial_holder): total_supply}
        self._allowances: Dict[Tuple[str, str], int] = {}
        env.deploy(self)

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        validate_amount(amount)
        self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        validate_amount(amount)
        if self.fail_transfers or self.balance_of(sender) < amount:
            return False
        self._move(sender, recipient, amount)
        return True

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool:
        """Перевод от имени sender в пределах allowance spender."""
        validate_amount(amount)
        allowed = self.allowance(sender, spender)
        if self.fail_transfers or allowed < amount or self.balance_of(sender) < amount:
            logger.debug(
                "%s transfer_from rejected: spender=%s sender=%s amount=%d",
                self.symbol, spender, sender, amount,
            )
            return False

        self._allowances[(sender, spender)] = allowed - amount
        self._move(sender, recipient, amount)
        return True

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        self._balances[sender] = self.balance_of(sender) - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    # -- TransactionalParticipant --------------------------------------------

    def snapshot(self):
        return (dict(self._balances), dict(self._allowances))

    def restore(self, state) -> None:
        balances, allowances = state
        self._balances = dict(balances)
        self._allowances = dict(allowances)
