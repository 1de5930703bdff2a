"""Тесты коллабораторов: окружение, value ledger, registries.

Coverage:
- Транзакция откатывает всех participants
- Вложенный откат перехваченного исключения
- ValueLedger: InsufficientFunds
- FungibleTokenRegistry: fixed supply, allowance, failable transfer_from
- NonFungibleRegistry: авторизация, receiver callback
"""

import pytest

from src.core.domain.value import NON_FUNGIBLE_INTERFACE_ID, RECEIVER_SELECTOR
from src.core.errors import InsufficientFunds, NonexistentAsset, NotApproved, ReceiverRejected
from src.ledger import (
    ExecutionEnvironment,
    FungibleTokenRegistry,
    NonFungibleRegistry,
    ValueLedger,
)


ALICE = "0x0000000000000000000000000000000000000a11"
BOB = "0x0000000000000000000000000000000000000b0b"
NFT = "0x0000000000000000000000000000000000000c01"
FT = "0x0000000000000000000000000000000000000c02"
SINK = "0x0000000000000000000000000000000000000c03"


class Sink:
    """Контракт-получатель с настраиваемым ответом."""

    def __init__(self, address, response=RECEIVER_SELECTOR):
        self.address = address
        self.response = response
        self.received = []

    def on_asset_received(self, registry, operator, previous_owner, asset_id, data):
        self.received.append((registry, operator, previous_owner, asset_id, data))
        return self.response


class Plain:
    """Контракт без receiver callback."""

    def __init__(self, address):
        self.address = address


# =============================================================================
# ENVIRONMENT
# =============================================================================


class TestExecutionEnvironment:
    def test_rollback_restores_ledger(self):
        env = ExecutionEnvironment()
        env.ledger.mint(ALICE, 10)

        with pytest.raises(RuntimeError):
            with env.transaction():
                env.ledger.transfer(ALICE, BOB, 7)
                raise RuntimeError("abort")

        assert env.ledger.balance_of(ALICE) == 10
        assert env.ledger.balance_of(BOB) == 0
        assert env.depth == 0

    def test_commit_keeps_changes(self):
        env = ExecutionEnvironment()
        env.ledger.mint(ALICE, 10)

        with env.transaction():
            env.ledger.transfer(ALICE, BOB, 4)

        assert env.ledger.balance_of(BOB) == 4

    def test_caught_inner_failure_rolls_back_inner_only(self):
        env = ExecutionEnvironment()
        env.ledger.mint(ALICE, 10)

        with env.transaction():
            env.ledger.transfer(ALICE, BOB, 1)
            try:
                with env.transaction():
                    env.ledger.transfer(ALICE, BOB, 2)
                    raise ValueError("inner")
            except ValueError:
                pass

        assert env.ledger.balance_of(BOB) == 1

    def test_duplicate_deploy_rejected(self):
        env = ExecutionEnvironment()
        NonFungibleRegistry(env, NFT)

        with pytest.raises(ValueError):
            NonFungibleRegistry(env, NFT)

    def test_contract_directory(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)

        assert env.contract_at(NFT) is registry
        assert env.is_contract(NFT)
        assert env.contract_at(ALICE) is None


# =============================================================================
# VALUE LEDGER
# =============================================================================


def test_value_ledger_insufficient_funds():
    ledger = ValueLedger()
    ledger.mint(ALICE, 5)

    with pytest.raises(InsufficientFunds) as exc_info:
        ledger.transfer(ALICE, BOB, 6)

    assert exc_info.value.available == 5
    assert ledger.balance_of(ALICE) == 5
    assert ledger.total_supply() == 5


def test_value_ledger_rejects_negative_amount():
    ledger = ValueLedger()

    with pytest.raises(ValueError):
        ledger.mint(ALICE, -1)


# =============================================================================
# FUNGIBLE REGISTRY
# =============================================================================


class TestFungibleTokenRegistry:
    def test_fixed_supply_minted_once(self):
        env = ExecutionEnvironment()
        token = FungibleTokenRegistry(env, FT, ALICE, 1_000_000)

        assert token.total_supply == 1_000_000
        assert token.balance_of(ALICE) == 1_000_000

    def test_transfer_from_within_allowance(self):
        env = ExecutionEnvironment()
        token = FungibleTokenRegistry(env, FT, ALICE, 100)
        token.approve(ALICE, BOB, 60)

        assert token.transfer_from(BOB, ALICE, BOB, 40)
        assert token.allowance(ALICE, BOB) == 20
        assert token.balance_of(BOB) == 40

    def test_transfer_from_over_allowance_returns_false(self):
        env = ExecutionEnvironment()
        token = FungibleTokenRegistry(env, FT, ALICE, 100)
        token.approve(ALICE, BOB, 10)

        assert not token.transfer_from(BOB, ALICE, BOB, 11)
        assert token.balance_of(ALICE) == 100

    def test_plain_transfer(self):
        env = ExecutionEnvironment()
        token = FungibleTokenRegistry(env, FT, ALICE, 100)

        assert token.transfer(ALICE, BOB, 100)
        assert not token.transfer(ALICE, BOB, 1)


# =============================================================================
# NON-FUNGIBLE REGISTRY
# =============================================================================


class TestNonFungibleRegistry:
    def test_supports_interface(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)

        assert registry.supports_interface(NON_FUNGIBLE_INTERFACE_ID)
        assert not registry.supports_interface(b"\x00\x00\x00\x00")

    def test_owner_of_nonexistent(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)

        with pytest.raises(NonexistentAsset):
            registry.owner_of(1)

    def test_unauthorized_operator(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)
        registry.mint(ALICE, 1)

        with pytest.raises(NotApproved):
            registry.safe_transfer_from(BOB, ALICE, BOB, 1)

    def test_single_asset_approval_cleared_on_transfer(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)
        registry.mint(ALICE, 1)
        registry.approve(ALICE, BOB, 1)

        registry.safe_transfer_from(BOB, ALICE, BOB, 1)

        assert registry.owner_of(1) == BOB
        assert registry.get_approved(1) is None

    def test_receiver_callback_invoked(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)
        sink = env.deploy(Sink(SINK))
        registry.mint(ALICE, 1)

        registry.safe_transfer_from(ALICE, ALICE, SINK, 1, b"hi")

        assert registry.owner_of(1) == SINK
        assert sink.received == [(NFT, ALICE, ALICE, 1, b"hi")]

    def test_receiver_wrong_selector_rolls_back(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)
        env.deploy(Sink(SINK, response=b"\x00\x00\x00\x00"))
        registry.mint(ALICE, 1)

        with pytest.raises(ReceiverRejected):
            registry.safe_transfer_from(ALICE, ALICE, SINK, 1)

        assert registry.owner_of(1) == ALICE

    def test_contract_without_callback_rejected(self):
        env = ExecutionEnvironment()
        registry = NonFungibleRegistry(env, NFT)
        env.deploy(Plain(SINK))
        registry.mint(ALICE, 1)

        with pytest.raises(ReceiverRejected):
            registry.safe_transfer_from(ALICE, ALICE, SINK, 1)

        assert registry.owner_of(1) == ALICE
