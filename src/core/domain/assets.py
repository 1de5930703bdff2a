"""
Assets — Ссылки на активы, принимаемые custodian

Immutable Pydantic модели:
- AssetRef: (collection, asset_id) — уникальная ссылка на non-fungible актив
- FungibleTransfer: (token, amount) — запрос на перевод fungible токенов
- ProvenanceRecord: кто продал актив custodian
"""

from pydantic import BaseModel, Field


class AssetRef(BaseModel):
    """
    Ссылка на non-fungible актив.

    Пара (collection, asset_id) уникальна среди всех коллекций.
    """

    collection: str = Field(..., min_length=1, description="Адрес registry коллекции")
    asset_id: int = Field(..., ge=0, description="Идентификатор актива в коллекции")

    model_config = {"frozen": True}

    @property
    def key(self) -> tuple[str, int]:
        return (self.collection, self.asset_id)

    def to_record(self) -> dict:
        return {"collection": self.collection, "asset_id": self.asset_id}


class FungibleTransfer(BaseModel):
    """Запрос на перевод fungible токенов custodian."""

    token: str = Field(..., min_length=1, description="Адрес fungible registry")
    amount: int = Field(..., ge=0, description="Количество токенов (минимальные единицы)")

    model_config = {"frozen": True}

    def to_record(self) -> dict:
        return {"token": self.token, "amount": self.amount}


class ProvenanceRecord(BaseModel):
    """
    Запись provenance: актив был затянут custodian у seller.

    Создаётся до вызова transfer (pull step), читается в receipt callback.
    """

    collection: str = Field(..., min_length=1)
    asset_id: int = Field(..., ge=0)
    seller: str = Field(..., min_length=1, description="Адрес продавца")

    model_config = {"frozen": True}

    def matches(self, collection: str, asset_id: int, sender: str) -> bool:
        return (
            self.collection == collection
            and self.asset_id == asset_id
            and self.seller == sender
        )
