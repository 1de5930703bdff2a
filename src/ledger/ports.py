"""Ports — контракты внешних коллабораторов custodian.

Custodian не реализует эти контракты, только потребляет их:
- Fungible registry: allowance + failable transfer_from
- Non-fungible registry: ownership lookup + owner-authorized transfer с receipt callback
- Transactional participant: snapshot/restore для атомарного отката
"""

from typing import Any, Protocol


class TransactionalParticipant(Protocol):
    """Port: состояние, которое окружение откатывает при отказе операции."""

    def snapshot(self) -> Any: ...
    def restore(self, state: Any) -> None: ...


class FungibleRegistryPort(Protocol):
    """Port: fungible token ledger (balance / allowance / transfer_from)."""

    address: str

    def balance_of(self, account: str) -> int: ...
    def allowance(self, owner: str, spender: str) -> int: ...
    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool: ...


class NonFungibleRegistryPort(Protocol):
    """Port: non-fungible asset registry (ownership / safe transfer)."""

    address: str

    def supports_interface(self, interface_id: bytes) -> bool: ...
    def owner_of(self, asset_id: int) -> str: ...
    def safe_transfer_from(
        self, operator: str, sender: str, recipient: str, asset_id: int, data: bytes = b""
    ) -> None: ...


class AssetReceiver(Protocol):
    """Port: получатель, подтверждающий приём non-fungible актива."""

    address: str

    def on_asset_received(
        self, registry: str, operator: str, previous_owner: str, asset_id: int, data: bytes
    ) -> bytes: ...
