"""Non-Fungible Asset Registry — коллекция уникальных активов.

Семантика:
- Один владелец на актив
- Transfer разрешён owner, approved адресу или operator (approval for all)
- safe_transfer_from вызывает on_asset_received у контракта-получателя;
  получатель обязан вернуть RECEIVER_SELECTOR, иначе transfer откатывается
"""

import logging
from typing import Dict, Set, Tuple

from src.core.domain.value import (
    INTERFACE_PROBE_ID,
    NON_FUNGIBLE_INTERFACE_ID,
    RECEIVER_SELECTOR,
    validate_address,
)
from src.core.errors import NonexistentAsset, NotApproved, ReceiverRejected
from src.ledger.environment import ExecutionEnvironment


logger = logging.getLogger(__name__)


class NonFungibleRegistry:
    """In-memory non-fungible registry с receipt callback."""

    SUPPORTED_INTERFACES = frozenset({INTERFACE_PROBE_ID, NON_FUNGIBLE_INTERFACE_ID})

    def __init__(self, env: ExecutionEnvironment, address: str, name: str = "Collection"):
        self.address = validate_address(address)
        self.name = name
        self._env = env
        self._owners: Dict[int, str] = {}
        self._approvals: Dict[int, str] = {}
        self._operators: Set[Tuple[str, str]] = set()
        env.deploy(self)

    def supports_interface(self, interface_id: bytes) -> bool:
        return interface_id in self.SUPPORTED_INTERFACES

    def mint(self, recipient: str, asset_id: int) -> None:
        validate_address(recipient, "recipient")
        if asset_id in self._owners:
            raise ValueError(f"Asset {asset_id} already minted in {self.address}")
        self._owners[asset_id] = recipient

    def owner_of(self, asset_id: int) -> str:
        """
        Raises:
            NonexistentAsset: если актив не выпущен
        """
        try:
            return self._owners[asset_id]
        except KeyError:
            raise NonexistentAsset(f"Asset {asset_id} does not exist in {self.address}")

    def approve(self, owner: str, spender: str, asset_id: int) -> None:
        if self.owner_of(asset_id) != owner:
            raise NotApproved(f"{owner} is not owner of asset {asset_id}")
        self._approvals[asset_id] = spender

    def set_approval_for_all(self, owner: str, operator: str, approved: bool) -> None:
        if approved:
            self._operators.add((owner, operator))
        else:
            self._operators.discard((owner, operator))

    def is_approved_for_all(self, owner: str, operator: str) -> bool:
        return (owner, operator) in self._operators

    def get_approved(self, asset_id: int) -> str | None:
        self.owner_of(asset_id)
        return self._approvals.get(asset_id)

    def safe_transfer_from(
        self, operator: str, sender: str, recipient: str, asset_id: int, data: bytes = b""
    ) -> None:
        """
        Owner-authorized transfer с receipt callback.

        Raises:
            NonexistentAsset: актив не выпущен
            NotApproved: sender не владелец или operator не авторизован
            ReceiverRejected: контракт-получатель не подтвердил приём
        """
        with self._env.transaction():
            owner = self.owner_of(asset_id)
            if owner != sender:
                raise NotApproved(f"{sender} is not owner of asset {asset_id}")
            if not self._is_authorized(operator, owner, asset_id):
                raise NotApproved(f"{operator} is not authorized for asset {asset_id}")

            self._approvals.pop(asset_id, None)
            self._owners[asset_id] = validate_address(recipient, "recipient")

            if self._env.is_contract(recipient):
                self._check_receiver(
                    self._env.contract_at(recipient), operator, sender, asset_id, data
                )

    def _is_authorized(self, operator: str, owner: str, asset_id: int) -> bool:
        return (
            operator == owner
            or self._approvals.get(asset_id) == operator
            or self.is_approved_for_all(owner, operator)
        )

    def _check_receiver(
        self, receiver, operator: str, sender: str, asset_id: int, data: bytes
    ) -> None:
        callback = getattr(receiver, "on_asset_received", None)
        if callback is None:
            raise ReceiverRejected(f"{receiver.address} does not implement receiver callback")

        response = callback(self.address, operator, sender, asset_id, data)
        if response != RECEIVER_SELECTOR:
            logger.debug("Receiver %s returned %r", receiver.address, response)
            raise ReceiverRejected(f"{receiver.address} rejected asset {asset_id}")

    # -- TransactionalParticipant --------------------------------------------

    def snapshot(self):
        return (dict(self._owners), dict(self._approvals), set(self._operators))

    def restore(self, state) -> None:
        owners, approvals, operators = state
        self._owners = dict(owners)
        self._approvals = dict(approvals)
        self._operators = set(operators)
