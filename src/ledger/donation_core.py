"""DonationCore — фасад ledger пожертвований.

- Сериализация мутаций: одна операция записи в момент времени (RLock)
- Все отказы — значения OperationResult, состояние при отказе не меняется
- Query accessors без побочных эффектов
- caller проверяется хостом до GATE 0/1/2: пустой или не-строковый caller
  даёт NOT_AUTHORIZED раньше любой проверки гейта (в т.ч. MAX_CAUSES_EXCEEDED)
- Компоненты (gate, registry, ledger) приватны: мутации идут только через фасад
  под RLock, reset() пересоздаёт их поверх нового LedgerState
"""

import logging
import threading
from typing import Any, Dict, Optional

from src.core.domain.cause import Cause
from src.core.domain.donation import Donation, DonationUpdate
from src.core.domain.errors import ErrorCode, OperationResult
from src.core.domain.ledger_state import LedgerConfig, LedgerState
from src.core.domain.limits import is_valid_principal
from src.gatekeeper.authority_gate import AuthorityGate
from src.ledger.cause_registry import CauseRegistry
from src.ledger.collaborators import Clock, ValueTransfer
from src.ledger.donation_ledger import DonationLedger


logger = logging.getLogger(__name__)


class DonationCore:
    """Ledger causes и donations с authority-gated мутациями.

    Состояние:
    - LedgerState: счётчики, реестры, индекс title, лог поправок
    Коллабораторы:
    - value_transfer: перевод средств (creation fee, donations)
    - clock: commit counter для timestamp полей
    """

    def __init__(
        self,
        value_transfer: ValueTransfer,
        clock: Clock,
        config: Optional[LedgerConfig] = None
    ):
        """
        Args:
            value_transfer: внешний механизм перевода средств
            clock: источник commit counter
            config: конфигурация ledger (default LedgerConfig())
        """
        self.config = config or LedgerConfig()
        self._value_transfer = value_transfer
        self._clock = clock
        self._lock = threading.RLock()
        self._build(LedgerState.from_config(self.config))

    def _build(self, state: LedgerState) -> None:
        self._state = state
        self._authority_gate = AuthorityGate(state, self.config.nobody_principal)
        self._cause_registry = CauseRegistry(state, self._value_transfer, self._clock)
        self._donation_ledger = DonationLedger(state, self._value_transfer, self._clock)

    # =========================================================================
    # AUTHORITY
    # =========================================================================

    def set_authority_contract(self, principal: str) -> OperationResult:
        with self._lock:
            return self._authority_gate.set_authority_contract(principal)

    def set_creation_fee(self, fee: int) -> OperationResult:
        with self._lock:
            return self._authority_gate.set_creation_fee(fee)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def register_cause(
        self,
        caller: str,
        title: str,
        description: str,
        target: int
    ) -> OperationResult:
        """Регистрация cause от имени caller. value — id cause или код ошибки."""
        if not is_valid_principal(caller):
            return self._invalid_caller(caller, coded=True)
        with self._lock:
            return self._cause_registry.register_cause(caller, title, description, target)

    def register_donation(self, caller: str, cause_id: int, amount: int) -> OperationResult:
        """Регистрация donation от имени caller. value — id donation или код ошибки."""
        if not is_valid_principal(caller):
            return self._invalid_caller(caller, coded=True)
        with self._lock:
            return self._donation_ledger.register_donation(caller, cause_id, amount)

    def update_donation(self, caller: str, donation_id: int, new_amount: int) -> OperationResult:
        """Поправка donation исходным донором. value — True/False."""
        if not is_valid_principal(caller):
            return self._invalid_caller(caller, coded=False)
        with self._lock:
            return self._donation_ledger.update_donation(caller, donation_id, new_amount)

    def reset(self) -> None:
        """Возврат к начальному состоянию (значения из config, authority не привязан)."""
        with self._lock:
            self._build(LedgerState.from_config(self.config))
            logger.info("Ledger reset")

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_cause(self, cause_id: int) -> Optional[Cause]:
        with self._lock:
            return self._cause_registry.get_cause(cause_id)

    def get_cause_id_by_title(self, title: str) -> Optional[int]:
        with self._lock:
            return self._cause_registry.get_cause_id_by_title(title)

    def get_donation(self, donation_id: int) -> Optional[Donation]:
        with self._lock:
            return self._donation_ledger.get_donation(donation_id)

    def get_donation_update(self, donation_id: int) -> Optional[DonationUpdate]:
        with self._lock:
            return self._donation_ledger.update_log.get(donation_id)

    def get_cause_count(self) -> int:
        with self._lock:
            return self._cause_registry.get_cause_count()

    def get_donation_count(self) -> int:
        with self._lock:
            return self._donation_ledger.get_donation_count()

    def get_creation_fee(self) -> int:
        with self._lock:
            return self._state.creation_fee

    def get_authority_contract(self) -> Optional[str]:
        with self._lock:
            return self._state.authority_contract

    def get_max_causes(self) -> int:
        with self._lock:
            return self._state.max_causes

    def snapshot(self) -> Dict[str, Any]:
        """JSON-совместимый экспорт состояния (см. contracts/schema/ledger_snapshot.json)."""
        with self._lock:
            return self._state.snapshot()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _invalid_caller(self, caller: Any, coded: bool) -> OperationResult:
        logger.debug("Operation rejected: invalid caller %r", caller)
        details = f"caller {caller!r} is not a valid principal"
        if coded:
            return OperationResult.coded_failure(ErrorCode.NOT_AUTHORIZED, "invalid_caller", details)
        return OperationResult.flag_failure(
            reason="invalid_caller",
            error_code=ErrorCode.NOT_AUTHORIZED,
            details=details
        )
