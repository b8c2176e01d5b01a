"""
Contract Validation Module

Модуль для валидации JSON контрактов экспортируемого состояния ledger.
"""

from .validators import (
    CauseValidator,
    ContractValidator,
    DonationUpdateValidator,
    DonationValidator,
    LedgerSnapshotValidator,
    SchemaLoader,
    validate_cause,
    validate_donation,
    validate_donation_update,
    validate_ledger_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CauseValidator",
    "DonationValidator",
    "DonationUpdateValidator",
    "LedgerSnapshotValidator",
    # Functions
    "validate_cause",
    "validate_donation",
    "validate_donation_update",
    "validate_ledger_snapshot",
]
