"""Общие fixtures: окружение, custodian, коллекция и токен."""

import pytest

from src.core.domain.custodian_state import PayoutPolicy
from src.custodian import BuybackCustodian, CustodianConfig
from src.ledger import ExecutionEnvironment, FungibleTokenRegistry, NonFungibleRegistry


OWNER = "0x00000000000000000000000000000000000000a1"
SELLER = "0x00000000000000000000000000000000000000b2"
STRANGER = "0x00000000000000000000000000000000000000c3"
CUSTODIAN = "0x00000000000000000000000000000000000000d4"
COLLECTION = "0x00000000000000000000000000000000000000e5"
OTHER_COLLECTION = "0x00000000000000000000000000000000000000e6"
TOKEN = "0x00000000000000000000000000000000000000f7"
OTHER_TOKEN = "0x00000000000000000000000000000000000000f8"

UNIT_PRICE = 100


@pytest.fixture
def env():
    return ExecutionEnvironment()


@pytest.fixture
def config():
    return CustodianConfig(unit_price=UNIT_PRICE, nft_payout_policy=PayoutPolicy.PER_ITEM)


@pytest.fixture
def custodian(env, config):
    return BuybackCustodian(env, CUSTODIAN, OWNER, config)


@pytest.fixture
def collection(env, custodian):
    """Коллекция: активы 1..5 у SELLER, custodian — approved operator."""
    registry = NonFungibleRegistry(env, COLLECTION, name="Punks")
    for asset_id in range(1, 6):
        registry.mint(SELLER, asset_id)
    registry.mint(STRANGER, 99)
    registry.set_approval_for_all(SELLER, CUSTODIAN, True)
    return registry


@pytest.fixture
def token(env, custodian):
    """Fixed-supply токен: весь supply у SELLER, allowance custodian = 1000."""
    registry = FungibleTokenRegistry(env, TOKEN, SELLER, 10_000, symbol="GLD")
    registry.approve(SELLER, CUSTODIAN, 1_000)
    return registry


@pytest.fixture
def funded(env, custodian):
    """Пул пополнен на 5 × UNIT_PRICE."""
    env.ledger.mint(OWNER, 10 * UNIT_PRICE)
    custodian.deposit(OWNER, 5 * UNIT_PRICE)
    return custodian
