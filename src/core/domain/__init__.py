"""
Domain models and value objects.

Contains fundamental domain entities like Cause, Donation, DonationUpdate,
the stable error codes and the ledger limits.
"""

from src.core.domain.cause import Cause
from src.core.domain.counters import GlobalCounters
from src.core.domain.donation import Donation, DonationUpdate
from src.core.domain.errors import ErrorCode, OperationResult
from src.core.domain.ledger_state import LedgerConfig, LedgerState
from src.core.domain.limits import (
    DEFAULT_CREATION_FEE,
    DEFAULT_MAX_CAUSES,
    MAX_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    NOBODY_PRINCIPAL,
    is_ledger_integer,
    is_positive_amount,
    is_valid_id,
    is_valid_principal,
    is_valid_text,
)

__all__ = [
    # Limits module
    "DEFAULT_MAX_CAUSES",
    "DEFAULT_CREATION_FEE",
    "MAX_TITLE_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "NOBODY_PRINCIPAL",
    "is_valid_text",
    "is_positive_amount",
    "is_ledger_integer",
    "is_valid_id",
    "is_valid_principal",
    # Errors
    "ErrorCode",
    "OperationResult",
    # Models
    "Cause",
    "Donation",
    "DonationUpdate",
    "GlobalCounters",
    # State
    "LedgerConfig",
    "LedgerState",
]
