"""Buyback Custodian — выкуп non-fungible и fungible активов по фиксированной цене.

Поток sell операции:
1. Reentrancy guard (глобальный mutex)
2. Intake gates: operational state → input → pool sufficiency (fail fast)
3. Pull активов у caller через registry (может вызвать receipt callback)
4. Audit event со списком всех активов
5. Выплата caller из пула

Каждая публичная операция выполняется в транзакции окружения: любой
отказ откатывает балансы, registries, provenance, holdings и audit log.
"""

import logging
from typing import Iterable, Optional, Sequence, Set, Tuple, Union

from src.core.domain.assets import AssetRef, FungibleTransfer, ProvenanceRecord
from src.core.domain.custodian_state import CustodianSnapshot, OperationalState
from src.core.domain.events import (
    AssetsHarvested,
    AuditEvent,
    FungiblesHarvested,
    Paused,
    Unpaused,
    ValueReceived,
    Withdrawn,
)
from src.core.domain.value import (
    INTERFACE_PROBE_ID,
    NON_FUNGIBLE_INTERFACE_ID,
    RECEIVER_INTERFACE_ID,
    RECEIVER_SELECTOR,
    validate_address,
    validate_amount,
)
from src.core.errors import (
    EmptyInput,
    EnforcedPause,
    InsufficientAllowance,
    InsufficientPool,
    NonexistentAsset,
    NotOwner,
    SelfRecipient,
    TransferFailed,
    Unauthorized,
    UnrecognizedProvenance,
    UnsupportedCollection,
    ZeroAmount,
    ZeroValue,
)
from src.custodian.audit import AuditLog
from src.custodian.config import CustodianConfig
from src.custodian.gates import (
    Gate00OperationalState,
    Gate01InputValidation,
    Gate02PoolSufficiency,
)
from src.custodian.guard import ReentrancyGuard
from src.custodian.pricing import asset_payout, fungible_payout
from src.custodian.provenance import ProvenanceStore
from src.custodian.state_machine import PauseAction, PauseStateMachine
from src.ledger.environment import ExecutionEnvironment
from src.ledger.ports import FungibleRegistryPort, NonFungibleRegistryPort


logger = logging.getLogger(__name__)

AssetInput = Union[AssetRef, Tuple[str, int]]
FungibleInput = Union[FungibleTransfer, Tuple[str, int]]

# block_reason gate → типизированный отказ
_GATE_ERRORS = {
    "paused": EnforcedPause,
    "empty_input": EmptyInput,
    "zero_value": ZeroValue,
    "zero_amount": ZeroAmount,
}


class BuybackCustodian:
    """Custodian пула нативной стоимости.

    Args:
        env: окружение исполнения (ledger, адреса, транзакции)
        address: адрес custodian
        owner: единственный администратор (immutable)
        config: цена и политика выплат
    """

    def __init__(
        self,
        env: ExecutionEnvironment,
        address: str,
        owner: str,
        config: Optional[CustodianConfig] = None,
    ):
        self.address = validate_address(address)
        self._owner = validate_address(owner, "owner")
        self._env = env
        self._config = config or CustodianConfig()

        self._state = OperationalState.ACTIVE
        self._guard = ReentrancyGuard()
        self._pause_sm = PauseStateMachine()
        self._provenance = ProvenanceStore()
        self._holdings: Set[Tuple[str, int]] = set()
        self._audit = AuditLog()

        self._gate00 = Gate00OperationalState()
        self._gate01 = Gate01InputValidation()
        self._gate02 = Gate02PoolSufficiency()

        env.deploy(self)

    # =========================================================================
    # VIEWS
    # =========================================================================

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def config(self) -> CustodianConfig:
        return self._config

    @property
    def unit_price(self) -> int:
        return self._config.unit_price

    @property
    def state(self) -> OperationalState:
        return self._state

    @property
    def paused(self) -> bool:
        return self._state == OperationalState.PAUSED

    @property
    def balance(self) -> int:
        """Баланс пула (нативные единицы)."""
        return self._env.ledger.balance_of(self.address)

    @property
    def audit_log(self) -> AuditLog:
        return self._audit

    @property
    def events(self) -> Tuple[AuditEvent, ...]:
        return self._audit.events

    def provenance_of(self, collection: str, asset_id: int) -> Optional[ProvenanceRecord]:
        return self._provenance.get(collection, asset_id)

    def holds(self, collection: str, asset_id: int) -> bool:
        """True если актив принят custodian через receipt callback."""
        return (collection, asset_id) in self._holdings

    def quote_assets(self, count: int) -> int:
        return asset_payout(self._config, count)

    def quote_fungibles(self, count: int) -> int:
        return fungible_payout(self._config, count)

    def supports_interface(self, interface_id: bytes) -> bool:
        return interface_id in (INTERFACE_PROBE_ID, RECEIVER_INTERFACE_ID)

    def snapshot(self):
        """Состояние для отката транзакции (не путать с describe())."""
        return (
            self._state,
            self._provenance.snapshot(),
            frozenset(self._holdings),
            self._audit.snapshot(),
        )

    def restore(self, state) -> None:
        op_state, provenance, holdings, events = state
        self._state = op_state
        self._provenance.restore(provenance)
        self._holdings = set(holdings)
        self._audit.restore(events)

    def describe(self) -> CustodianSnapshot:
        return CustodianSnapshot(
            address=self.address,
            owner=self._owner,
            pool_balance=self.balance,
            unit_price=self._config.unit_price,
            nft_payout_policy=self._config.nft_payout_policy,
            state=self._state,
            provenance_count=len(self._provenance),
            holdings_count=len(self._holdings),
            audit_sequence=self._audit.sequence,
        )

    # =========================================================================
    # SELL
    # =========================================================================

    def sell_asset(self, caller: str, assets: Iterable[AssetInput]) -> AssetsHarvested:
        """Продажа batch non-fungible активов custodian.

        Args:
            caller: продавец (текущий владелец каждого актива)
            assets: упорядоченный список (collection, asset_id)

        Returns:
            AssetsHarvested событие

        Raises:
            EnforcedPause, EmptyInput, InsufficientPool,
            UnsupportedCollection, NotOwner, ReentrantCall
        """
        refs = tuple(self._asset_ref(item) for item in assets)

        with self._guard.guarded("sell_asset"), self._env.transaction():
            payout = asset_payout(self._config, len(refs))
            self._run_intake_gates("sell_asset", len(refs), payout)

            for ref in refs:
                registry = self._non_fungible_registry(ref.collection)
                self._require_asset_owner(registry, ref, caller)
                # Provenance должен существовать до receipt callback
                self._provenance.record(ref.collection, ref.asset_id, caller)
                registry.safe_transfer_from(self.address, caller, self.address, ref.asset_id, b"")

            event = self._audit.append(AssetsHarvested, sender=caller, assets=refs, payout=payout)
            self._pay(caller, payout)

        logger.info("sell_asset: seller=%s assets=%d payout=%d", caller, len(refs), payout)
        return event

    def sell_fungible(
        self, caller: str, transfers: Iterable[FungibleInput]
    ) -> FungiblesHarvested:
        """Продажа batch fungible токенов custodian.

        Выплата фиксированная и не зависит от длины batch.

        Raises:
            EnforcedPause, EmptyInput, ZeroAmount, InsufficientPool,
            InsufficientAllowance, TransferFailed, ReentrantCall
        """
        requests = tuple(self._fungible_transfer(item) for item in transfers)

        with self._guard.guarded("sell_fungible"), self._env.transaction():
            payout = fungible_payout(self._config, len(requests))
            self._run_intake_gates(
                "sell_fungible", len(requests), payout,
                amounts=[request.amount for request in requests],
            )

            for request in requests:
                token = self._fungible_registry(request.token)
                allowed = token.allowance(caller, self.address)
                if allowed < request.amount:
                    raise InsufficientAllowance(request.token, request.amount, allowed)
                if not token.transfer_from(self.address, caller, self.address, request.amount):
                    raise TransferFailed(
                        f"transfer_from {request.token} failed for {request.amount} from {caller}"
                    )

            event = self._audit.append(
                FungiblesHarvested, sender=caller, transfers=requests, payout=payout
            )
            self._pay(caller, payout)

        logger.info("sell_fungible: seller=%s transfers=%d payout=%d", caller, len(requests), payout)
        return event

    # =========================================================================
    # RECEIPT CALLBACK
    # =========================================================================

    def on_asset_received(
        self, registry: str, operator: str, previous_owner: str, asset_id: int, data: bytes
    ) -> bytes:
        """Receipt callback, вызывается non-fungible registry при transfer в custodian.

        Выполняется вложенно в transfer шаг sell_asset, поэтому не берёт
        reentrancy guard и не трогает пул.

        Returns:
            RECEIVER_SELECTOR при подтверждении

        Raises:
            EnforcedPause: custodian в PAUSED
            UnrecognizedProvenance: нет provenance записи для
                (registry, asset_id, previous_owner) или актив уже принят
        """
        gate00 = self._gate00.evaluate(self._state, "on_asset_received")
        if not gate00.entry_allowed:
            logger.warning("Receipt rejected: %s", gate00.details)
            raise EnforcedPause(gate00.details)

        key = (registry, asset_id)
        if key in self._holdings:
            logger.warning("Receipt rejected: asset %s/%d already in custody", registry, asset_id)
            raise UnrecognizedProvenance(f"Asset {asset_id} of {registry} already accepted")

        if self._config.provenance_check_enabled and not self._provenance.matches(
            registry, asset_id, previous_owner
        ):
            logger.warning(
                "Receipt rejected: no provenance for %s/%d from %s",
                registry, asset_id, previous_owner,
            )
            raise UnrecognizedProvenance(
                f"No sale of asset {asset_id} of {registry} by {previous_owner}"
            )

        self._holdings.add(key)
        return RECEIVER_SELECTOR

    # =========================================================================
    # DEPOSIT / WITHDRAW
    # =========================================================================

    def deposit(self, sender: str, amount: int) -> ValueReceived:
        """Пополнение пула (любой отправитель, только в ACTIVE).

        Raises:
            EnforcedPause, ZeroValue, InsufficientFunds, ReentrantCall
        """
        return self._accept_value("deposit", sender, amount)

    def receive(self, sender: str, amount: int) -> ValueReceived:
        """Plain перевод стоимости на адрес custodian."""
        return self._accept_value("receive", sender, amount)

    def withdraw(self, caller: str, recipient: str, amount: int) -> Withdrawn:
        """Вывод из пула (owner-only, независимо от pause state).

        Баланс явно не проверяется: недостаток средств отвергает ledger.

        Raises:
            Unauthorized, SelfRecipient, ZeroAmount, InsufficientFunds, ReentrantCall
        """
        validate_amount(amount)

        with self._guard.guarded("withdraw"), self._env.transaction():
            self._only_owner(caller)
            if recipient == self.address:
                raise SelfRecipient("Cannot withdraw to the custodian itself")
            if amount == 0:
                raise ZeroAmount("Withdraw amount must be positive")

            self._env.ledger.transfer(self.address, recipient, amount)
            event = self._audit.append(Withdrawn, recipient=recipient, amount=amount)

        logger.info("withdraw: recipient=%s amount=%d pool=%d", recipient, amount, self.balance)
        return event

    # =========================================================================
    # PAUSE / UNPAUSE
    # =========================================================================

    def pause(self, caller: str) -> Paused:
        """ACTIVE → PAUSED (owner-only)."""
        return self._transition(caller, PauseAction.PAUSE, Paused)

    def unpause(self, caller: str) -> Unpaused:
        """PAUSED → ACTIVE (owner-only)."""
        return self._transition(caller, PauseAction.UNPAUSE, Unpaused)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _transition(self, caller: str, action: PauseAction, event_cls):
        with self._guard.guarded(action.value.lower()), self._env.transaction():
            self._only_owner(caller)
            result = self._pause_sm.evaluate_transition(self._state, action)
            self._state = result.new_state
            event = self._audit.append(event_cls, account=caller)

        logger.info("Operational state %s", result.transition_reason)
        return event

    def _accept_value(self, operation: str, sender: str, amount: int) -> ValueReceived:
        validate_amount(amount)

        with self._guard.guarded(operation), self._env.transaction():
            self._raise_if_blocked(self._gate00.evaluate(self._state, operation))
            self._raise_if_blocked(self._gate01.evaluate_value(amount))

            self._env.ledger.transfer(sender, self.address, amount)
            event = self._audit.append(ValueReceived, sender=sender, amount=amount)

        logger.info("%s: sender=%s amount=%d pool=%d", operation, sender, amount, self.balance)
        return event

    def _run_intake_gates(
        self,
        operation: str,
        item_count: int,
        payout: int,
        amounts: Optional[Sequence[int]] = None,
    ) -> None:
        """GATE 0 → GATE 1 → GATE 2, первый заблокировавший gate прерывает операцию."""
        self._raise_if_blocked(self._gate00.evaluate(self._state, operation))
        self._raise_if_blocked(self._gate01.evaluate_batch(item_count))
        if amounts is not None:
            self._raise_if_blocked(self._gate01.evaluate_amounts(amounts))

        gate02 = self._gate02.evaluate(self.balance, payout)
        if not gate02.entry_allowed:
            logger.debug("GATE 2 blocked %s: %s", operation, gate02.details)
            raise InsufficientPool(gate02.required_payout, gate02.pool_balance)

    def _raise_if_blocked(self, result) -> None:
        if result.entry_allowed:
            return
        if result.block_reason == "paused":
            logger.warning("Intake rejected: %s", result.details)
        else:
            logger.debug("Gate blocked: %s", result.details)
        raise _GATE_ERRORS[result.block_reason](result.details)

    def _only_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise Unauthorized(f"{caller} is not the custodian owner")

    def _pay(self, recipient: str, amount: int) -> None:
        if amount > 0:
            self._env.ledger.transfer(self.address, recipient, amount)

    def _non_fungible_registry(self, collection: str) -> NonFungibleRegistryPort:
        """Capability probe до доверия transfer семантике коллекции."""
        registry = self._env.contract_at(collection)
        probe = getattr(registry, "supports_interface", None)
        if probe is None:
            raise UnsupportedCollection(f"{collection} does not expose interface probe")
        try:
            supported = probe(INTERFACE_PROBE_ID) and probe(NON_FUNGIBLE_INTERFACE_ID)
        except Exception as exc:
            raise UnsupportedCollection(f"{collection} interface probe failed") from exc
        if not supported:
            raise UnsupportedCollection(f"{collection} is not a non-fungible registry")
        return registry

    def _fungible_registry(self, token: str) -> FungibleRegistryPort:
        registry = self._env.contract_at(token)
        if registry is None or not hasattr(registry, "transfer_from"):
            raise TransferFailed(f"No fungible token registry at {token}")
        return registry

    @staticmethod
    def _require_asset_owner(
        registry: NonFungibleRegistryPort, ref: AssetRef, caller: str
    ) -> None:
        try:
            owner = registry.owner_of(ref.asset_id)
        except NonexistentAsset as exc:
            raise NotOwner(f"Asset {ref.asset_id} of {ref.collection} does not exist") from exc
        if owner != caller:
            raise NotOwner(f"{caller} is not owner of asset {ref.asset_id} of {ref.collection}")

    @staticmethod
    def _asset_ref(item: AssetInput) -> AssetRef:
        if isinstance(item, AssetRef):
            return item
        collection, asset_id = item
        return AssetRef(collection=collection, asset_id=asset_id)

    @staticmethod
    def _fungible_transfer(item: FungibleInput) -> FungibleTransfer:
        if isinstance(item, FungibleTransfer):
            return item
        token, amount = item
        return FungibleTransfer(token=token, amount=amount)
