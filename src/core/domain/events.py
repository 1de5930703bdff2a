"""
Events — Audit events Buyback Custodian

Append-only записи для off-system reconciliation. Каждое событие несёт
identity отправителя и полный список элементов операции.

Сериализация (to_record) соответствует contracts/schema/audit_event.json.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field

from .assets import AssetRef, FungibleTransfer


class EventType(str, Enum):
    VALUE_RECEIVED = "ValueReceived"
    ASSETS_HARVESTED = "AssetsHarvested"
    FUNGIBLES_HARVESTED = "FungiblesHarvested"
    WITHDRAWN = "Withdrawn"
    PAUSED = "Paused"
    UNPAUSED = "Unpaused"


class AuditEvent(BaseModel):
    """Базовое audit событие."""

    sequence: int = Field(..., ge=1, description="Монотонный номер события")

    model_config = {"frozen": True}

    @property
    def event_type(self) -> EventType:
        raise NotImplementedError

    def payload(self) -> dict:
        raise NotImplementedError

    def to_record(self) -> dict:
        return {
            "event": self.event_type.value,
            "sequence": self.sequence,
            "payload": self.payload(),
        }


class ValueReceived(AuditEvent):
    sender: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)

    @property
    def event_type(self) -> EventType:
        return EventType.VALUE_RECEIVED

    def payload(self) -> dict:
        return {"sender": self.sender, "amount": self.amount}


class AssetsHarvested(AuditEvent):
    """Batch non-fungible активов, принятых у sender (в порядке входа)."""

    sender: str = Field(..., min_length=1)
    assets: tuple[AssetRef, ...] = Field(..., min_length=1)
    payout: int = Field(..., ge=0)

    @property
    def event_type(self) -> EventType:
        return EventType.ASSETS_HARVESTED

    def payload(self) -> dict:
        return {
            "sender": self.sender,
            "assets": [asset.to_record() for asset in self.assets],
            "payout": self.payout,
        }


class FungiblesHarvested(AuditEvent):
    """Batch fungible переводов, принятых у sender (в порядке входа)."""

    sender: str = Field(..., min_length=1)
    transfers: tuple[FungibleTransfer, ...] = Field(..., min_length=1)
    payout: int = Field(..., ge=0)

    @property
    def event_type(self) -> EventType:
        return EventType.FUNGIBLES_HARVESTED

    def payload(self) -> dict:
        return {
            "sender": self.sender,
            "transfers": [transfer.to_record() for transfer in self.transfers],
            "payout": self.payout,
        }


class Withdrawn(AuditEvent):
    recipient: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)

    @property
    def event_type(self) -> EventType:
        return EventType.WITHDRAWN

    def payload(self) -> dict:
        return {"recipient": self.recipient, "amount": self.amount}


class Paused(AuditEvent):
    account: str = Field(..., min_length=1)

    @property
    def event_type(self) -> EventType:
        return EventType.PAUSED

    def payload(self) -> dict:
        return {"account": self.account}


class Unpaused(AuditEvent):
    account: str = Field(..., min_length=1)

    @property
    def event_type(self) -> EventType:
        return EventType.UNPAUSED

    def payload(self) -> dict:
        return {"account": self.account}


AnyAuditEvent = Union[
    ValueReceived, AssetsHarvested, FungiblesHarvested, Withdrawn, Paused, Unpaused
]
