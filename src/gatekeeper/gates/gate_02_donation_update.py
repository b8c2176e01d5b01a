"""GATE 2: Donation Update

Порядок проверок:
1. new_amount > 0          → INVALID_AMOUNT
2. donation существует     → DONATION_NOT_FOUND (id не int или bool → тоже)
3. caller == donation.donor → NOT_AUTHORIZED
4. cause существует        → CAUSE_NOT_FOUND

Внешне любой отказ выглядит как False; код сохраняется для диагностики.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.cause import Cause
from src.core.domain.donation import Donation
from src.core.domain.errors import ErrorCode
from src.core.domain.limits import is_positive_amount, is_valid_id
from src.core.domain.ledger_state import LedgerState


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    entry_allowed: bool
    error_code: Optional[ErrorCode]
    block_reason: str

    donation: Optional[Donation]
    cause: Optional[Cause]

    details: str


class Gate02DonationUpdate:
    """GATE 2: валидация поправки donation. Поправлять может только исходный донор."""

    def evaluate(
        self,
        state: LedgerState,
        caller: str,
        donation_id: int,
        new_amount: int
    ) -> Gate02Result:
        # 1. Сумма
        if not is_positive_amount(new_amount):
            return self._block(
                ErrorCode.INVALID_AMOUNT,
                "invalid_amount",
                f"new_amount must be > 0, got {new_amount!r}"
            )

        # 2. Donation
        donation = state.donations.get(donation_id) if is_valid_id(donation_id) else None
        if donation is None:
            return self._block(
                ErrorCode.DONATION_NOT_FOUND,
                "donation_not_found",
                f"donation {donation_id!r} not registered"
            )

        # 3. Донор
        if donation.donor != caller:
            return self._block(
                ErrorCode.NOT_AUTHORIZED,
                "not_donor",
                f"caller {caller!r} is not donor of donation {donation_id}"
            )

        # 4. Cause
        cause = state.causes.get(donation.cause_id)
        if cause is None:
            return self._block(
                ErrorCode.CAUSE_NOT_FOUND,
                "cause_not_found",
                f"cause {donation.cause_id} of donation {donation_id} not registered"
            )

        return Gate02Result(
            entry_allowed=True,
            error_code=None,
            block_reason="",
            donation=donation,
            cause=cause,
            details=f"PASS: donation {donation_id} {donation.amount} -> {new_amount}"
        )

    def _block(self, error_code: ErrorCode, reason: str, details: str) -> Gate02Result:
        return Gate02Result(
            entry_allowed=False,
            error_code=error_code,
            block_reason=reason,
            donation=None,
            cause=None,
            details=details
        )
