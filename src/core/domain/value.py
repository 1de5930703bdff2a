"""
Value — Нативная единица стоимости и адреса

Все суммы — целые неотрицательные числа в минимальной единице
нативной валюты (аналог wei). Дробные значения запрещены.

Адреса — непустые строки; сравнение регистронезависимое не выполняется,
адрес используется как есть.
"""

from typing import Final


# =============================================================================
# CONSTANTS
# =============================================================================

# ERC-165 идентификатор интерфейса non-fungible registry (ERC-721)
NON_FUNGIBLE_INTERFACE_ID: Final[bytes] = bytes.fromhex("80ac58cd")

# ERC-165 идентификатор интерфейса receiver callback
RECEIVER_INTERFACE_ID: Final[bytes] = bytes.fromhex("150b7a02")

# Значение, которое receiver callback обязан вернуть для подтверждения приёма
RECEIVER_SELECTOR: Final[bytes] = RECEIVER_INTERFACE_ID

# ERC-165 идентификатор самого supportsInterface
INTERFACE_PROBE_ID: Final[bytes] = bytes.fromhex("01ffc9a7")


# =============================================================================
# VALIDATORS
# =============================================================================


def validate_amount(amount: int, name: str = "amount") -> int:
    """
    Проверка суммы в нативных единицах.

    Args:
        amount: сумма
        name: имя параметра для сообщения

    Returns:
        amount без изменений

    Raises:
        TypeError: если сумма не целое число (bool тоже отвергается)
        ValueError: если сумма отрицательная
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"{name} must be int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"{name} must be non-negative, got {amount}")
    return amount


def validate_address(address: str, name: str = "address") -> str:
    if not isinstance(address, str) or not address:
        raise ValueError(f"{name} must be a non-empty string, got {address!r}")
    return address
