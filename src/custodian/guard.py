"""Reentrancy Guard — глобальный mutex над всеми guarded операциями.

Пока выполняется любая guarded операция, никакая другая guarded операция
на том же экземпляре не может начаться (включая вложенный вызов через
callback). Нарушение отвергается (ReentrantCall), а не ставится в очередь.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.errors import ReentrantCall


class ReentrancyGuard:
    """Неблокирующий exclusive lock.

    Lock освобождается на любом пути выхода, включая исключения.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._operation: Optional[str] = None

    @property
    def entered(self) -> bool:
        return self._lock.locked()

    @property
    def operation(self) -> Optional[str]:
        """Имя выполняющейся guarded операции (None если свободен)."""
        return self._operation

    @contextmanager
    def guarded(self, operation: str) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise ReentrantCall(
                f"{operation} rejected: {self._operation} is already executing"
            )
        self._operation = operation
        try:
            yield
        finally:
            self._operation = None
            self._lock.release()
