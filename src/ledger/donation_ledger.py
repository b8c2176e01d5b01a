"""DonationLedger и DonationUpdateLog.

- register_donation: GATE 1 → перевод amount донор → organization → commit
- update_donation: GATE 2 → пересчёт collected по дельте → commit (без перевода)
- DonationUpdateLog: только последняя поправка на donation (перезапись, не история)

Инвариант: cause.collected == сумма amount всех donations, ссылающихся на cause.
"""

import logging
from typing import Optional

from src.core.domain.donation import Donation, DonationUpdate
from src.core.domain.errors import ErrorCode, OperationResult
from src.core.domain.ledger_state import LedgerState
from src.core.domain.limits import is_valid_id
from src.gatekeeper.gates.gate_01_donation_registration import Gate01DonationRegistration
from src.gatekeeper.gates.gate_02_donation_update import Gate02DonationUpdate
from src.ledger.collaborators import Clock, ValueTransfer


logger = logging.getLogger(__name__)


class DonationUpdateLog:
    """Лог поправок: donation_id → последняя DonationUpdate.

    Хранилище принадлежит LedgerState; лог — только интерфейс к нему.
    """

    def __init__(self, state: LedgerState):
        self._state = state

    def record(self, donation_id: int, update: DonationUpdate) -> None:
        """Перезапись записи для donation_id."""
        self._state.donation_updates[donation_id] = update

    def get(self, donation_id: int) -> Optional[DonationUpdate]:
        if not is_valid_id(donation_id):
            return None
        return self._state.donation_updates.get(donation_id)

    def __contains__(self, donation_id: object) -> bool:
        return is_valid_id(donation_id) and donation_id in self._state.donation_updates

    def __len__(self) -> int:
        return len(self._state.donation_updates)


class DonationLedger:
    """Ledger пожертвований поверх LedgerState."""

    def __init__(
        self,
        state: LedgerState,
        value_transfer: ValueTransfer,
        clock: Clock,
        update_log: Optional[DonationUpdateLog] = None,
        registration_gate: Optional[Gate01DonationRegistration] = None,
        update_gate: Optional[Gate02DonationUpdate] = None
    ):
        self._state = state
        self._value_transfer = value_transfer
        self._clock = clock
        self.update_log = update_log or DonationUpdateLog(state)
        self._registration_gate = registration_gate or Gate01DonationRegistration()
        self._update_gate = update_gate or Gate02DonationUpdate()

    def register_donation(self, caller: str, cause_id: int, amount: int) -> OperationResult:
        """Регистрация пожертвования.

        Args:
            caller: principal донора
            cause_id: id существующего cause
            amount: сумма (> 0)

        Returns:
            OperationResult: value = id нового donation (с единицы), либо код ошибки
        """
        gate_result = self._registration_gate.evaluate(self._state, cause_id, amount)
        if not gate_result.entry_allowed:
            logger.debug("register_donation rejected: %s (%s)", gate_result.block_reason, gate_result.details)
            return OperationResult.coded_failure(
                gate_result.error_code,
                gate_result.block_reason,
                gate_result.details
            )

        cause = gate_result.cause
        donation_id = self._state.total_donations + 1
        donation = Donation(
            id=donation_id,
            donor=caller,
            cause_id=cause.id,
            amount=amount,
            timestamp=self._clock.current_height(),
        )
        updated_cause = cause.with_collected(cause.collected + amount)

        if not self._value_transfer.transfer(amount, caller, cause.organization):
            logger.warning(
                "register_donation aborted: %s %s -> %s rejected",
                amount, caller, cause.organization
            )
            return OperationResult.coded_failure(
                ErrorCode.TRANSFER_FAILED,
                "donation_transfer_failed",
                f"donation {amount} from {caller} to {cause.organization} rejected"
            )

        # Commit
        self._state.donations[donation_id] = donation
        self._state.causes[cause.id] = updated_cause
        self._state.total_donations = donation_id

        logger.info(
            "Donation %s registered: %s -> cause %s (collected=%s)",
            donation_id, amount, cause.id, updated_cause.collected
        )
        return OperationResult.success(donation_id, details=f"donation {donation_id} registered")

    def update_donation(self, caller: str, donation_id: int, new_amount: int) -> OperationResult:
        """Поправка суммы пожертвования исходным донором.

        Перевода средств нет: меняется только учёт (collected, amount, лог поправок).

        Returns:
            OperationResult: value = True при успехе, False при отказе
        """
        gate_result = self._update_gate.evaluate(self._state, caller, donation_id, new_amount)
        if not gate_result.entry_allowed:
            logger.debug("update_donation rejected: %s (%s)", gate_result.block_reason, gate_result.details)
            return OperationResult.flag_failure(
                reason=gate_result.block_reason,
                error_code=gate_result.error_code,
                details=gate_result.details
            )

        donation = gate_result.donation
        cause = gate_result.cause
        now = self._clock.current_height()

        updated_cause = cause.with_collected(cause.collected - donation.amount + new_amount)
        updated_donation = donation.amended(new_amount, now)
        update = DonationUpdate(updated_amount=new_amount, updated_timestamp=now, updater=caller)

        # Commit
        self._state.donations[donation.id] = updated_donation
        self._state.causes[cause.id] = updated_cause
        self.update_log.record(donation.id, update)

        logger.info(
            "Donation %s amended by %s: %s -> %s (cause %s collected=%s)",
            donation.id, caller, donation.amount, new_amount, cause.id, updated_cause.collected
        )
        return OperationResult.success(True, details=f"donation {donation.id} amended")

    def get_donation(self, donation_id: int) -> Optional[Donation]:
        if not is_valid_id(donation_id):
            return None
        return self._state.donations.get(donation_id)

    def get_donation_count(self) -> int:
        return self._state.total_donations
