"""Custodian — движок выкупа активов по фиксированной цене.

- BuybackCustodian: sell / deposit / withdraw / pause / receipt callback
- CustodianConfig: цена и политика выплат
- PauseStateMachine: ACTIVE ↔ PAUSED
- ReentrancyGuard: глобальный mutex guarded операций
"""

from .config import CustodianConfig
from .custodian import BuybackCustodian
from .guard import ReentrancyGuard
from .state_machine import PauseAction, PauseStateMachine, PauseTransitionResult

__all__ = [
    "BuybackCustodian",
    "CustodianConfig",
    "ReentrancyGuard",
    "PauseAction",
    "PauseStateMachine",
    "PauseTransitionResult",
]
