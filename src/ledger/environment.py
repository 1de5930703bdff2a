"""Execution Environment — атомарные транзакции над общим ledger.

Модель окружения исполнения:
- Directory: адрес → контракт (deploy / contract_at)
- Participants: всё состояние, которое откатывается при отказе
- transaction(): snapshot всех participants на входе, restore при исключении

Транзакции вложенные: отказ во внутреннем фрейме откатывает только его,
если внешний фрейм перехватил исключение. Иначе исключение доходит до
внешнего фрейма и откатывает всю операцию.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from src.core.domain.value import validate_address
from src.ledger.ports import TransactionalParticipant
from src.ledger.value_ledger import ValueLedger


logger = logging.getLogger(__name__)


class ExecutionEnvironment:
    """Окружение исполнения с глобально упорядоченным ledger.

    Нативный ValueLedger создаётся вместе с окружением и всегда
    участвует в откате.
    """

    def __init__(self, ledger: Optional[ValueLedger] = None):
        self.ledger = ledger or ValueLedger()
        self._contracts: Dict[str, Any] = {}
        self._participants: List[TransactionalParticipant] = [self.ledger]
        self._depth = 0

    @property
    def depth(self) -> int:
        """Глубина вложенности текущей транзакции (0 — вне транзакции)."""
        return self._depth

    def deploy(self, contract: Any) -> Any:
        """Регистрация контракта по адресу.

        Контракт с snapshot/restore становится participant.

        Raises:
            ValueError: если адрес уже занят
        """
        address = validate_address(contract.address)
        if address in self._contracts:
            raise ValueError(f"Address already deployed: {address}")

        self._contracts[address] = contract
        if hasattr(contract, "snapshot") and hasattr(contract, "restore"):
            self._participants.append(contract)

        logger.debug("Deployed %s at %s", type(contract).__name__, address)
        return contract

    def contract_at(self, address: str) -> Optional[Any]:
        return self._contracts.get(address)

    def is_contract(self, address: str) -> bool:
        return address in self._contracts

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Атомарный фрейм: либо все изменения остаются, либо ни одного."""
        snapshots = [(participant, participant.snapshot()) for participant in self._participants]
        self._depth += 1
        try:
            yield
        except BaseException as exc:
            for participant, state in reversed(snapshots):
                participant.restore(state)
            logger.debug(
                "Transaction rolled back at depth %d: %s", self._depth, type(exc).__name__
            )
            raise
        finally:
            self._depth -= 1
