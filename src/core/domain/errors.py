"""
Errors — Коды ошибок и результат операции ledger

Все отказы операций возвращаются как значения (OperationResult), а не исключения.
Числовые коды стабильны: внешние клиенты сравнивают именно их.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union


class ErrorCode(IntEnum):
    """Стабильные коды ошибок ledger."""

    # Отказ value-transfer коллаборатора (код хоста u1)
    TRANSFER_FAILED = 1

    NOT_AUTHORIZED = 100
    INVALID_CAUSE_ID = 101
    INVALID_AMOUNT = 102
    CAUSE_NOT_FOUND = 103
    DONATION_NOT_FOUND = 104
    AUTHORITY_NOT_VERIFIED = 105
    INVALID_TITLE = 107
    INVALID_DESCRIPTION = 108
    INVALID_TARGET = 109
    CAUSE_ALREADY_EXISTS = 110
    MAX_CAUSES_EXCEEDED = 111


@dataclass(frozen=True)
class OperationResult:
    """Результат мутирующей операции.

    value:
    - при успехе: новый id (register_*) или True
    - при отказе: int(error_code) для register_*, False для остальных операций
    """

    ok: bool
    value: Union[int, bool]
    error_code: Optional[ErrorCode]

    # Диагностика
    reason: str
    details: str

    @classmethod
    def success(cls, value: Union[int, bool], details: str = "") -> "OperationResult":
        return cls(ok=True, value=value, error_code=None, reason="", details=details)

    @classmethod
    def coded_failure(cls, error_code: ErrorCode, reason: str, details: str = "") -> "OperationResult":
        """Отказ, у которого value — числовой код ошибки."""
        return cls(
            ok=False,
            value=int(error_code),
            error_code=error_code,
            reason=reason,
            details=details,
        )

    @classmethod
    def flag_failure(
        cls,
        reason: str,
        error_code: Optional[ErrorCode] = None,
        details: str = "",
    ) -> "OperationResult":
        """Отказ, у которого value — False (код ошибки только для диагностики)."""
        return cls(
            ok=False,
            value=False,
            error_code=error_code,
            reason=reason,
            details=details,
        )
