"""LedgerState — единственный контейнер изменяемого состояния ledger.

- Глобальные счётчики (total_causes, total_donations, creation_fee, authority)
- Реестры causes / donations, индекс по title, лог поправок
- Экспорт в JSON-совместимый снапшот (contracts/schema/ledger_snapshot.json)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .cause import Cause
from .counters import GlobalCounters
from .donation import Donation, DonationUpdate
from .limits import (
    DEFAULT_CREATION_FEE,
    DEFAULT_MAX_CAUSES,
    NOBODY_PRINCIPAL,
)


SNAPSHOT_SCHEMA_VERSION = "1"


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация ledger.

    - max_causes: ёмкость реестра causes
    - creation_fee: начальная комиссия за регистрацию cause
    - nobody_principal: зарезервированный адрес, который нельзя назначить authority
    """
    max_causes: int = DEFAULT_MAX_CAUSES
    creation_fee: int = DEFAULT_CREATION_FEE
    nobody_principal: str = NOBODY_PRINCIPAL

    def __post_init__(self):
        if self.max_causes < 0:
            raise ValueError(f"max_causes must be non-negative, got {self.max_causes}")
        if not self.nobody_principal:
            raise ValueError("nobody_principal must be non-empty")


@dataclass
class LedgerState:
    """Изменяемое состояние ledger.

    Мутируется только внутри commit-фазы операций (после всех проверок и
    успешного value transfer).
    """

    max_causes: int
    creation_fee: int
    total_causes: int = 0
    total_donations: int = 0
    authority_contract: Optional[str] = None

    causes: Dict[int, Cause] = field(default_factory=dict)
    causes_by_title: Dict[str, int] = field(default_factory=dict)
    donations: Dict[int, Donation] = field(default_factory=dict)
    donation_updates: Dict[int, DonationUpdate] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: LedgerConfig) -> "LedgerState":
        return cls(max_causes=config.max_causes, creation_fee=config.creation_fee)

    def counters(self) -> GlobalCounters:
        """Immutable снапшот счётчиков."""
        return GlobalCounters(
            total_causes=self.total_causes,
            total_donations=self.total_donations,
            max_causes=self.max_causes,
            creation_fee=self.creation_fee,
            authority_contract=self.authority_contract,
        )

    def snapshot(self) -> Dict[str, Any]:
        """JSON-совместимый экспорт полного состояния (записи упорядочены по id)."""
        return {
            "schema_version": SNAPSHOT_SCHEMA_VERSION,
            "counters": self.counters().model_dump(),
            "causes": [self.causes[i].model_dump() for i in sorted(self.causes)],
            "donations": [self.donations[i].model_dump() for i in sorted(self.donations)],
            "donation_updates": [
                {"donation_id": i, **self.donation_updates[i].model_dump()}
                for i in sorted(self.donation_updates)
            ],
        }
