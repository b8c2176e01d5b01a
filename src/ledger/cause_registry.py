"""CauseRegistry — регистрация causes.

- Валидация запроса через GATE 0 (фиксированный порядок проверок)
- Списание creation fee с caller в пользу authority до любых изменений состояния
- Commit: id = total_causes (с нуля), индекс по title, инкремент total_causes
"""

import logging
from typing import Optional

from src.core.domain.cause import Cause
from src.core.domain.errors import ErrorCode, OperationResult
from src.core.domain.ledger_state import LedgerState
from src.core.domain.limits import is_valid_id
from src.gatekeeper.gates.gate_00_cause_registration import Gate00CauseRegistration
from src.ledger.collaborators import Clock, ValueTransfer


logger = logging.getLogger(__name__)


class CauseRegistry:
    """Реестр causes поверх LedgerState."""

    def __init__(
        self,
        state: LedgerState,
        value_transfer: ValueTransfer,
        clock: Clock,
        gate: Optional[Gate00CauseRegistration] = None
    ):
        self._state = state
        self._value_transfer = value_transfer
        self._clock = clock
        self._gate = gate or Gate00CauseRegistration()

    def register_cause(
        self,
        caller: str,
        title: str,
        description: str,
        target: int
    ) -> OperationResult:
        """Регистрация нового cause.

        Args:
            caller: principal, регистрирующий cause (становится organization)
            title: уникальное название (1..100 символов)
            description: описание (1..500 символов)
            target: целевая сумма (> 0)

        Returns:
            OperationResult: value = id нового cause, либо код ошибки
        """
        gate_result = self._gate.evaluate(self._state, title, description, target)
        if not gate_result.entry_allowed:
            logger.debug("register_cause rejected: %s (%s)", gate_result.block_reason, gate_result.details)
            return OperationResult.coded_failure(
                gate_result.error_code,
                gate_result.block_reason,
                gate_result.details
            )

        # Модель строится до перевода: после успешного перевода commit не может упасть
        cause_id = self._state.total_causes
        cause = Cause(
            id=cause_id,
            title=title,
            description=description,
            target=target,
            collected=0,
            organization=caller,
            status=True,
            timestamp=self._clock.current_height(),
        )

        fee = self._state.creation_fee
        if not self._value_transfer.transfer(fee, caller, gate_result.fee_recipient):
            logger.warning(
                "register_cause aborted: creation fee %s %s -> %s rejected",
                fee, caller, gate_result.fee_recipient
            )
            return OperationResult.coded_failure(
                ErrorCode.TRANSFER_FAILED,
                "creation_fee_transfer_failed",
                f"creation fee {fee} from {caller} to {gate_result.fee_recipient} rejected"
            )

        # Commit
        self._state.causes[cause_id] = cause
        self._state.causes_by_title[title] = cause_id
        self._state.total_causes = cause_id + 1

        logger.info("Cause %s registered: %r by %s, target=%s", cause_id, title, caller, target)
        return OperationResult.success(cause_id, details=f"cause {cause_id} registered")

    def get_cause(self, cause_id: int) -> Optional[Cause]:
        if not is_valid_id(cause_id):
            return None
        return self._state.causes.get(cause_id)

    def get_cause_id_by_title(self, title: str) -> Optional[int]:
        if not isinstance(title, str):
            return None
        return self._state.causes_by_title.get(title)

    def get_cause_count(self) -> int:
        return self._state.total_causes
