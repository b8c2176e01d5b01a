"""Gates — индивидуальные гейты валидации мутирующих операций ledger.

- GATE 0: Cause Registration (capacity / title / description / target / uniqueness / authority)
- GATE 1: Donation Registration (amount / cause existence)
- GATE 2: Donation Update (amount / donation existence / donor / cause existence)
"""

from .gate_00_cause_registration import Gate00CauseRegistration, Gate00Result
from .gate_01_donation_registration import Gate01DonationRegistration, Gate01Result
from .gate_02_donation_update import Gate02DonationUpdate, Gate02Result

__all__ = [
    "Gate00CauseRegistration",
    "Gate00Result",
    "Gate01DonationRegistration",
    "Gate01Result",
    "Gate02DonationUpdate",
    "Gate02Result",
]
