"""Внешние коллабораторы ledger: value transfer и commit counter.

Ядро ledger не хранит средства и не ведёт часы. Оно зависит от двух протоколов:
- ValueTransfer: перевод суммы между principals (успех/отказ)
- Clock: текущий commit counter (block height), неубывающий

Здесь же — in-memory реализации для встраивания и тестов.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol


logger = logging.getLogger(__name__)


class ValueTransfer(Protocol):
    """Перевод amount от sender к recipient. False — перевод отклонён, состояние не изменено."""

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        ...


class Clock(Protocol):
    """Источник commit counter. Только чтение со стороны ledger."""

    def current_height(self) -> int:
        ...


@dataclass(frozen=True)
class TransferRecord:
    """Запись принятого перевода."""
    amount: int
    sender: str
    recipient: str


class InMemoryValueTransfer:
    """In-memory value transfer.

    - Без balances: принимает любой перевод с amount >= 0
    - С balances: отклоняет перевод, превышающий баланс sender
    - reject_all: отклоняет все переводы (симуляция отказа хоста)

    Перевод с amount == 0 принимается без движения средств и без записи.
    """

    def __init__(
        self,
        balances: Optional[Dict[str, int]] = None,
        reject_all: bool = False
    ):
        self.balances = dict(balances) if balances is not None else None
        self.reject_all = reject_all
        self.transfers: List[TransferRecord] = []

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        if self.reject_all:
            logger.warning("Transfer rejected (reject_all): %s %s -> %s", amount, sender, recipient)
            return False

        if amount < 0:
            logger.warning("Transfer rejected (negative amount): %s %s -> %s", amount, sender, recipient)
            return False

        if amount == 0:
            return True

        if self.balances is not None:
            available = self.balances.get(sender, 0)
            if available < amount:
                logger.warning(
                    "Transfer rejected (insufficient balance %s): %s %s -> %s",
                    available, amount, sender, recipient
                )
                return False
            self.balances[sender] = available - amount
            self.balances[recipient] = self.balances.get(recipient, 0) + amount

        self.transfers.append(TransferRecord(amount=amount, sender=sender, recipient=recipient))
        return True

    def balance_of(self, principal: str) -> int:
        if self.balances is None:
            return 0
        return self.balances.get(principal, 0)


class ManualClock:
    """Commit counter, управляемый вручную. Гарантирует неубывание."""

    def __init__(self, height: int = 0):
        if height < 0:
            raise ValueError(f"height must be non-negative, got {height}")
        self._height = height

    def current_height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError(f"blocks must be non-negative, got {blocks}")
        self._height += blocks
        return self._height

    def set_height(self, height: int) -> None:
        if height < self._height:
            raise ValueError(
                f"commit counter must be non-decreasing: {height} < {self._height}"
            )
        self._height = height
