"""AuthorityGate — однократная привязка authority и управление creation fee.

- set_authority_contract: unset → set ровно один раз, "nobody" principal запрещён
- set_creation_fee: разрешено только после привязки authority, без проверки границ
  (тип fee проверяется: только int)
"""

import logging
from typing import Optional

from src.core.domain.errors import ErrorCode, OperationResult
from src.core.domain.limits import NOBODY_PRINCIPAL, is_ledger_integer, is_valid_principal
from src.core.domain.ledger_state import LedgerState


logger = logging.getLogger(__name__)


class AuthorityGate:
    """Гейт authority поверх LedgerState.

    Порядок проверок set_authority_contract:
    1. principal == nobody → отказ
    2. authority уже привязан → отказ
    """

    def __init__(self, state: LedgerState, nobody_principal: str = NOBODY_PRINCIPAL):
        self._state = state
        self._nobody_principal = nobody_principal

    @property
    def authority(self) -> Optional[str]:
        return self._state.authority_contract

    def is_verified(self) -> bool:
        return self._state.authority_contract is not None

    def set_authority_contract(self, principal: str) -> OperationResult:
        """Привязка authority (необратимо).

        Returns:
            OperationResult(value=True) при успехе, value=False при отказе
        """
        if not is_valid_principal(principal) or principal == self._nobody_principal:
            logger.debug("Authority rejected: invalid principal %r", principal)
            return OperationResult.flag_failure(
                reason="invalid_principal",
                error_code=ErrorCode.NOT_AUTHORIZED,
                details=f"principal {principal!r} cannot be bound as authority"
            )

        if self._state.authority_contract is not None:
            logger.debug(
                "Authority rejected: already bound to %s", self._state.authority_contract
            )
            return OperationResult.flag_failure(
                reason="authority_already_set",
                error_code=ErrorCode.NOT_AUTHORIZED,
                details=f"authority already bound to {self._state.authority_contract}"
            )

        self._state.authority_contract = principal
        logger.info("Authority bound: %s", principal)
        return OperationResult.success(True, details=f"authority={principal}")

    def set_creation_fee(self, fee: int) -> OperationResult:
        """Перезапись creation fee. Требует привязанного authority.

        Границы не проверяются, но fee обязан быть int (не bool).
        """
        if self._state.authority_contract is None:
            logger.debug("Creation fee change rejected: no authority bound")
            return OperationResult.flag_failure(
                reason="authority_not_set",
                error_code=ErrorCode.NOT_AUTHORIZED,
                details="creation fee is mutable only once an authority is bound"
            )

        if not is_ledger_integer(fee):
            logger.debug("Creation fee change rejected: invalid fee %r", fee)
            return OperationResult.flag_failure(
                reason="invalid_fee",
                details=f"creation fee must be an integer, got {fee!r}"
            )

        previous = self._state.creation_fee
        self._state.creation_fee = fee
        logger.info("Creation fee changed: %s -> %s", previous, fee)
        return OperationResult.success(True, details=f"creation_fee={fee}")
