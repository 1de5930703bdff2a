"""Provenance Store — записи о продажах, инициированных custodian.

(collection, asset_id) → последний seller. Запись создаётся до transfer
(pull step) и читается в receipt callback. Записи не удаляются.
"""

from typing import Dict, Optional, Tuple

from src.core.domain.assets import ProvenanceRecord


class ProvenanceStore:
    def __init__(self):
        self._records: Dict[Tuple[str, int], ProvenanceRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def record(self, collection: str, asset_id: int, seller: str) -> ProvenanceRecord:
        record = ProvenanceRecord(collection=collection, asset_id=asset_id, seller=seller)
        self._records[(collection, asset_id)] = record
        return record

    def get(self, collection: str, asset_id: int) -> Optional[ProvenanceRecord]:
        return self._records.get((collection, asset_id))

    def matches(self, collection: str, asset_id: int, sender: str) -> bool:
        """True если существует запись для точной тройки (collection, asset_id, sender)."""
        record = self.get(collection, asset_id)
        return record is not None and record.matches(collection, asset_id, sender)

    def snapshot(self) -> Dict[Tuple[str, int], ProvenanceRecord]:
        return dict(self._records)

    def restore(self, state: Dict[Tuple[str, int], ProvenanceRecord]) -> None:
        self._records = dict(state)
