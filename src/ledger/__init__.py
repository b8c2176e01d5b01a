"""Ledger — реестр causes, ledger пожертвований и внешние коллабораторы.

- CauseRegistry: регистрация causes с creation fee
- DonationLedger / DonationUpdateLog: пожертвования и их последняя поправка
- DonationCore: фасад с сериализацией мутаций и query accessors
"""

from .collaborators import (
    Clock,
    InMemoryValueTransfer,
    ManualClock,
    TransferRecord,
    ValueTransfer,
)
from .cause_registry import CauseRegistry
from .donation_ledger import DonationLedger, DonationUpdateLog
from .donation_core import DonationCore

__all__ = [
    "Clock",
    "ValueTransfer",
    "InMemoryValueTransfer",
    "ManualClock",
    "TransferRecord",
    "CauseRegistry",
    "DonationLedger",
    "DonationUpdateLog",
    "DonationCore",
]
