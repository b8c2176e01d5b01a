"""GATE 0: Cause Registration

- Первый gate для register_cause
- Проверки в фиксированном порядке (наблюдаемый код ошибки зависит от порядка):
  1. Ёмкость реестра          → MAX_CAUSES_EXCEEDED
  2. title                    → INVALID_TITLE
  3. description              → INVALID_DESCRIPTION
  4. target > 0               → INVALID_TARGET
  5. Уникальность title       → CAUSE_ALREADY_EXISTS
  6. Authority привязан       → AUTHORITY_NOT_VERIFIED

Gate только читает LedgerState и ничего не мутирует.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.errors import ErrorCode
from src.core.domain.limits import (
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    is_positive_amount,
    is_valid_text,
)
from src.core.domain.ledger_state import LedgerState


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    entry_allowed: bool
    error_code: Optional[ErrorCode]
    block_reason: str

    # Получатель creation fee (если gate пройден)
    fee_recipient: Optional[str]

    # Детали
    details: str


class Gate00CauseRegistration:
    """GATE 0: валидация запроса на регистрацию cause."""

    def __init__(self):
        """GATE 0 не требует зависимостей (stateless)."""
        pass

    def evaluate(
        self,
        state: LedgerState,
        title: str,
        description: str,
        target: int
    ) -> Gate00Result:
        """Оценка GATE 0.

        Args:
            state: текущее состояние ledger
            title: название cause
            description: описание cause
            target: целевая сумма

        Returns:
            Gate00Result с решением о допуске
        """
        # 1. Ёмкость
        if state.total_causes >= state.max_causes:
            return self._block(
                ErrorCode.MAX_CAUSES_EXCEEDED,
                "max_causes_exceeded",
                f"total_causes={state.total_causes} >= max_causes={state.max_causes}"
            )

        # 2. Title
        if not is_valid_text(title, MAX_TITLE_LENGTH):
            return self._block(
                ErrorCode.INVALID_TITLE,
                "invalid_title",
                f"title must be 1..{MAX_TITLE_LENGTH} chars"
            )

        # 3. Description
        if not is_valid_text(description, MAX_DESCRIPTION_LENGTH):
            return self._block(
                ErrorCode.INVALID_DESCRIPTION,
                "invalid_description",
                f"description must be 1..{MAX_DESCRIPTION_LENGTH} chars"
            )

        # 4. Target
        if not is_positive_amount(target):
            return self._block(
                ErrorCode.INVALID_TARGET,
                "invalid_target",
                f"target must be > 0, got {target!r}"
            )

        # 5. Уникальность title
        if title in state.causes_by_title:
            return self._block(
                ErrorCode.CAUSE_ALREADY_EXISTS,
                "cause_already_exists",
                f"title {title!r} already registered as cause {state.causes_by_title[title]}"
            )

        # 6. Authority
        if state.authority_contract is None:
            return self._block(
                ErrorCode.AUTHORITY_NOT_VERIFIED,
                "authority_not_verified",
                "No authority bound: creation fee has no recipient"
            )

        # 7. PASS
        return Gate00Result(
            entry_allowed=True,
            error_code=None,
            block_reason="",
            fee_recipient=state.authority_contract,
            details=f"PASS: fee={state.creation_fee} -> {state.authority_contract}"
        )

    def _block(self, error_code: ErrorCode, reason: str, details: str) -> Gate00Result:
        return Gate00Result(
            entry_allowed=False,
            error_code=error_code,
            block_reason=reason,
            fee_recipient=None,
            details=details
        )
