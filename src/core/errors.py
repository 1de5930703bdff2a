"""
Errors — Типизированные отказы Buyback Custodian

Все отказы синхронные и атомарные: операция прерывается целиком,
окружение откатывает все изменения состояния.

Категории (ErrorKind):
- INPUT_VALIDATION: пустой список, нулевая сумма
- AUTHORIZATION: не владелец, не владелец актива, недостаточный allowance
- RESOURCE: недостаточно средств в пуле
- STATE_MACHINE: неверное состояние паузы, reentrant call, неизвестный provenance
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Категория отказа."""

    INPUT_VALIDATION = "INPUT_VALIDATION"
    AUTHORIZATION = "AUTHORIZATION"
    RESOURCE = "RESOURCE"
    STATE_MACHINE = "STATE_MACHINE"
    COLLABORATOR = "COLLABORATOR"


# =============================================================================
# CUSTODIAN ERRORS
# =============================================================================


class CustodianError(Exception):
    """Базовый отказ custodian.

    code — стабильный идентификатор отказа (совпадает с именем класса).
    """

    kind: ErrorKind = ErrorKind.STATE_MACHINE

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code

    @property
    def code(self) -> str:
        return type(self).__name__


class EmptyInput(CustodianError):
    kind = ErrorKind.INPUT_VALIDATION


class ZeroValue(CustodianError):
    kind = ErrorKind.INPUT_VALIDATION


class ZeroAmount(CustodianError):
    kind = ErrorKind.INPUT_VALIDATION


class SelfRecipient(CustodianError):
    kind = ErrorKind.INPUT_VALIDATION


class InsufficientPool(CustodianError):
    kind = ErrorKind.RESOURCE

    def __init__(self, required: int, available: int):
        super().__init__(f"Pool balance {available} below required payout {required}")
        self.required = required
        self.available = available


class UnsupportedCollection(CustodianError):
    kind = ErrorKind.AUTHORIZATION


class NotOwner(CustodianError):
    kind = ErrorKind.AUTHORIZATION


class InsufficientAllowance(CustodianError):
    kind = ErrorKind.AUTHORIZATION

    def __init__(self, token: str, required: int, allowed: int):
        super().__init__(f"Allowance {allowed} for token {token} below amount {required}")
        self.token = token
        self.required = required
        self.allowed = allowed


class TransferFailed(CustodianError):
    kind = ErrorKind.COLLABORATOR


class Unauthorized(CustodianError):
    """Вызывающий не является owner custodian."""

    kind = ErrorKind.AUTHORIZATION


class EnforcedPause(CustodianError):
    """Операция запрещена в состоянии PAUSED."""


class ExpectedPause(CustodianError):
    """Операция требует состояния PAUSED."""


class ReentrantCall(CustodianError):
    pass


class UnrecognizedProvenance(CustodianError):
    pass


# =============================================================================
# COLLABORATOR (LEDGER / REGISTRY) ERRORS
# =============================================================================


class LedgerError(Exception):
    """Отказ внешнего коллаборатора (ledger / registry)."""

    kind: ErrorKind = ErrorKind.COLLABORATOR


class InsufficientFunds(LedgerError):
    def __init__(self, account: str, required: int, available: int):
        super().__init__(
            f"Account {account} balance {available} below transfer amount {required}"
        )
        self.account = account
        self.required = required
        self.available = available


class NotApproved(LedgerError):
    pass


class NonexistentAsset(LedgerError):
    pass


class ReceiverRejected(LedgerError):
    pass
