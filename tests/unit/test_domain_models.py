"""
Unit tests for domain models: AssetRef, FungibleTransfer, ProvenanceRecord,
CustodianSnapshot, audit events.

Проверяет:
- Валидацию полей
- Immutability (frozen=True)
- Сериализацию событий
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    AssetRef,
    AssetsHarvested,
    CustodianSnapshot,
    EventType,
    FungibleTransfer,
    OperationalState,
    PayoutPolicy,
    ProvenanceRecord,
    ValueReceived,
    validate_amount,
)
from src.core.errors import CustodianError, ErrorKind, InsufficientPool, NotOwner


COLLECTION = "0x00000000000000000000000000000000000000e5"
SELLER = "0x00000000000000000000000000000000000000b2"


class TestAssetRef:
    def test_create(self):
        ref = AssetRef(collection=COLLECTION, asset_id=7)

        assert ref.key == (COLLECTION, 7)
        assert ref.to_record() == {"collection": COLLECTION, "asset_id": 7}

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            AssetRef(collection=COLLECTION, asset_id=-1)

    def test_empty_collection_rejected(self):
        with pytest.raises(ValidationError):
            AssetRef(collection="", asset_id=1)

    def test_frozen_and_hashable(self):
        ref = AssetRef(collection=COLLECTION, asset_id=1)

        with pytest.raises(ValidationError):
            ref.asset_id = 2
        assert len({ref, AssetRef(collection=COLLECTION, asset_id=1)}) == 1


class TestFungibleTransfer:
    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            FungibleTransfer(token=COLLECTION, amount=-5)


class TestProvenanceRecord:
    def test_matches_exact_triple(self):
        record = ProvenanceRecord(collection=COLLECTION, asset_id=1, seller=SELLER)

        assert record.matches(COLLECTION, 1, SELLER)
        assert not record.matches(COLLECTION, 2, SELLER)
        assert not record.matches(COLLECTION, 1, "0xother")
        assert not record.matches("0xother", 1, SELLER)


class TestEvents:
    def test_value_received_record(self):
        event = ValueReceived(sequence=1, sender=SELLER, amount=10)

        assert event.event_type == EventType.VALUE_RECEIVED
        assert event.to_record() == {
            "event": "ValueReceived",
            "sequence": 1,
            "payload": {"sender": SELLER, "amount": 10},
        }

    def test_zero_value_rejected(self):
        with pytest.raises(ValidationError):
            ValueReceived(sequence=1, sender=SELLER, amount=0)

    def test_assets_harvested_requires_assets(self):
        with pytest.raises(ValidationError):
            AssetsHarvested(sequence=1, sender=SELLER, assets=(), payout=0)


class TestCustodianSnapshot:
    def test_frozen(self):
        view = CustodianSnapshot(
            address="0xc",
            owner="0xo",
            pool_balance=0,
            unit_price=1,
            nft_payout_policy=PayoutPolicy.PER_ITEM,
            state=OperationalState.ACTIVE,
            provenance_count=0,
            holdings_count=0,
            audit_sequence=0,
        )

        with pytest.raises(ValidationError):
            view.pool_balance = 5


class TestErrors:
    def test_error_codes_and_kinds(self):
        error = InsufficientPool(required=10, available=3)

        assert isinstance(error, CustodianError)
        assert error.code == "InsufficientPool"
        assert error.kind == ErrorKind.RESOURCE
        assert NotOwner().kind == ErrorKind.AUTHORIZATION
        assert str(NotOwner()) == "NotOwner"


@pytest.mark.parametrize("bad", [True, 1.0, "5"])
def test_validate_amount_types(bad):
    with pytest.raises(TypeError):
        validate_amount(bad)
