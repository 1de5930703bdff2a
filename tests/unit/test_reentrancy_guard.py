"""Тесты ReentrancyGuard."""

import threading

import pytest

from src.core.errors import ReentrantCall
from src.custodian.guard import ReentrancyGuard


def test_guard_released_after_success():
    guard = ReentrancyGuard()

    with guard.guarded("sell_asset"):
        assert guard.entered
        assert guard.operation == "sell_asset"

    assert not guard.entered
    assert guard.operation is None


def test_nested_entry_rejected():
    guard = ReentrancyGuard()

    with guard.guarded("sell_asset"):
        with pytest.raises(ReentrantCall, match="sell_asset is already executing"):
            with guard.guarded("deposit"):
                pass
        # Внешний вызов продолжает владеть guard
        assert guard.operation == "sell_asset"


def test_guard_released_after_failure():
    guard = ReentrancyGuard()

    with pytest.raises(RuntimeError):
        with guard.guarded("withdraw"):
            raise RuntimeError("boom")

    assert not guard.entered
    with guard.guarded("withdraw"):
        pass


def test_concurrent_entry_rejected_not_queued():
    """Вход из другого потока отвергается сразу, без ожидания."""
    guard = ReentrancyGuard()
    entered = threading.Event()
    release = threading.Event()
    errors = []

    def hold():
        with guard.guarded("pause"):
            entered.set()
            release.wait(timeout=5)

    worker = threading.Thread(target=hold)
    worker.start()
    entered.wait(timeout=5)
    try:
        with guard.guarded("unpause"):
            pass
    except ReentrantCall as exc:
        errors.append(exc)
    finally:
        release.set()
        worker.join(timeout=5)

    assert len(errors) == 1
    assert not guard.entered
