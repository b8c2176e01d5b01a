"""Gatekeeper — authority gate и гейты валидации операций ledger.

- Каждая мутирующая операция сначала проходит свой gate
- Gate только читает состояние; мутации выполняет ledger после перевода средств
"""

from .authority_gate import AuthorityGate
from .gates import (
    Gate00CauseRegistration,
    Gate00Result,
    Gate01DonationRegistration,
    Gate01Result,
    Gate02DonationUpdate,
    Gate02Result,
)

__all__ = [
    "AuthorityGate",
    "Gate00CauseRegistration",
    "Gate00Result",
    "Gate01DonationRegistration",
    "Gate01Result",
    "Gate02DonationUpdate",
    "Gate02Result",
]
