"""Ledger — внешние коллабораторы Buyback Custodian (in-memory).

- ExecutionEnvironment: адреса контрактов и атомарные транзакции
- ValueLedger: нативная стоимость
- FungibleTokenRegistry: fixed-supply token с allowance
- NonFungibleRegistry: коллекция с receipt callback
"""

from .value_ledger import ValueLedger
from .environment import ExecutionEnvironment
from .fungible import FungibleTokenRegistry
from .non_fungible import NonFungibleRegistry

__all__ = [
    "ExecutionEnvironment",
    "ValueLedger",
    "FungibleTokenRegistry",
    "NonFungibleRegistry",
]
