"""GATE 1: Donation Registration

Порядок проверок:
1. amount > 0        → INVALID_AMOUNT
2. cause существует  → CAUSE_NOT_FOUND (id не int или bool → тоже)

При успехе возвращает cause, чтобы ledger знал получателя перевода (organization).
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.cause import Cause
from src.core.domain.errors import ErrorCode
from src.core.domain.limits import is_positive_amount, is_valid_id
from src.core.domain.ledger_state import LedgerState


@dataclass(frozen=True)
class Gate01Result:
    """Результат GATE 1."""

    entry_allowed: bool
    error_code: Optional[ErrorCode]
    block_reason: str

    cause: Optional[Cause]

    details: str


class Gate01DonationRegistration:
    """GATE 1: валидация запроса на регистрацию donation."""

    def evaluate(self, state: LedgerState, cause_id: int, amount: int) -> Gate01Result:
        if not is_positive_amount(amount):
            return Gate01Result(
                entry_allowed=False,
                error_code=ErrorCode.INVALID_AMOUNT,
                block_reason="invalid_amount",
                cause=None,
                details=f"amount must be > 0, got {amount!r}"
            )

        cause = state.causes.get(cause_id) if is_valid_id(cause_id) else None
        if cause is None:
            return Gate01Result(
                entry_allowed=False,
                error_code=ErrorCode.CAUSE_NOT_FOUND,
                block_reason="cause_not_found",
                cause=None,
                details=f"cause {cause_id!r} not registered"
            )

        return Gate01Result(
            entry_allowed=True,
            error_code=None,
            block_reason="",
            cause=cause,
            details=f"PASS: {amount} -> cause {cause.id} ({cause.organization})"
        )
