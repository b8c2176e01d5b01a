"""
Limits — Централизованный модуль констант ledger

Единственный источник значений по умолчанию для:
- ёмкости реестра causes
- creation fee
- длины title / description
- зарезервированного "nobody" principal

ЗАПРЕЩЕНО дублировать эти значения в других модулях: импортируйте их отсюда.
"""

from typing import Final


# =============================================================================
# ЁМКОСТЬ И КОМИССИИ
# =============================================================================
# Максимальное количество causes в реестре
DEFAULT_MAX_CAUSES: Final[int] = 1000

# Комиссия за регистрацию cause (списывается с caller в пользу authority)
DEFAULT_CREATION_FEE: Final[int] = 1000


# =============================================================================
# ТЕКСТОВЫЕ ПОЛЯ
# =============================================================================
MAX_TITLE_LENGTH: Final[int] = 100
MAX_DESCRIPTION_LENGTH: Final[int] = 500


# =============================================================================
# PRINCIPALS
# =============================================================================
# Burn-адрес хоста: никто не владеет ключом, поэтому authority на него не назначается
NOBODY_PRINCIPAL: Final[str] = "SP000000000000000000002Q6VF78"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_text(value: object, max_length: int) -> bool:
    """
    Проверка текстового поля: непустая строка длиной не более max_length.

    Args:
        value: Проверяемое значение
        max_length: Максимально допустимая длина

    Returns:
        True если значение допустимо
    """
    return isinstance(value, str) and 0 < len(value) <= max_length


def is_positive_amount(value: object) -> bool:
    """
    Проверка суммы ledger: целое число строго больше нуля.

    bool исключается явно, т.к. является подклассом int.
    """
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_ledger_integer(value: object) -> bool:
    """
    Проверка типа суммы ledger без проверки границ (creation fee).

    Допускаются 0 и отрицательные значения; bool исключается.
    """
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_id(value: object) -> bool:
    """Идентификатор cause / donation: целое число >= 0, не bool (True == 1 в dict)."""
    return is_ledger_integer(value) and value >= 0


def is_valid_principal(principal: object) -> bool:
    """Principal — непустая строка."""
    return isinstance(principal, str) and len(principal) > 0
