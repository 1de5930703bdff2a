"""Audit Log — append-only журнал событий custodian.

Каждое событие валидируется против contracts/schema/audit_event.json
перед добавлением. Журнал участвует в откате транзакции: событие
отказавшей операции не остаётся в журнале.
"""

import logging
from typing import List, Tuple, Type, TypeVar

from src.core.contracts import AuditEventValidator
from src.core.domain.events import AuditEvent


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=AuditEvent)


class AuditLog:
    def __init__(self):
        self._events: List[AuditEvent] = []
        self._validator = AuditEventValidator()

    def __len__(self) -> int:
        return len(self._events)

    @property
    def sequence(self) -> int:
        """Номер последнего события (0 если журнал пуст)."""
        return self._events[-1].sequence if self._events else 0

    @property
    def events(self) -> Tuple[AuditEvent, ...]:
        return tuple(self._events)

    def append(self, event_cls: Type[E], **fields) -> E:
        """
        Создание и добавление события со следующим sequence.

        Raises:
            pydantic.ValidationError: поля не соответствуют модели события
            jsonschema.ValidationError: запись не соответствует схеме
        """
        event = event_cls(sequence=self.sequence + 1, **fields)
        record = event.to_record()
        self._validator.validate(record)
        self._events.append(event)
        logger.info("Audit event #%d %s %s", event.sequence, record["event"], record["payload"])
        return event

    def of_type(self, event_cls: Type[E]) -> List[E]:
        return [event for event in self._events if isinstance(event, event_cls)]

    def snapshot(self) -> Tuple[AuditEvent, ...]:
        return tuple(self._events)

    def restore(self, state: Tuple[AuditEvent, ...]) -> None:
        self._events = list(state)
