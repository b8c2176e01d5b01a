"""
Donation — Модели пожертвования и его последней поправки

Immutable Pydantic модели:
- Donation: пожертвование донора в пользу cause
- DonationUpdate: метаданные последней поправки (история не хранится)

Соответствуют схемам contracts/schema/donation.json и donation_update.json.
"""

from pydantic import BaseModel, Field


class Donation(BaseModel):
    """
    Модель пожертвования.

    id глобальный по всем causes, начинается с 1.
    timestamp — commit counter последней мутации (создание или поправка).
    """

    id: int = Field(..., ge=1, description="Глобальный порядковый номер (с единицы)")
    donor: str = Field(..., min_length=1, description="Principal донора")
    cause_id: int = Field(..., ge=0, description="Ссылка на существующий cause")
    amount: int = Field(..., gt=0, description="Сумма пожертвования")
    timestamp: int = Field(..., ge=0, description="Commit counter последней мутации")

    model_config = {"frozen": True}

    def amended(self, amount: int, timestamp: int) -> "Donation":
        """Новый экземпляр с перезаписанными amount и timestamp."""
        return self.model_copy(update={"amount": amount, "timestamp": timestamp})


class DonationUpdate(BaseModel):
    """Последняя поправка пожертвования (перезаписывается при каждой новой)."""

    updated_amount: int = Field(..., gt=0, description="Новая сумма")
    updated_timestamp: int = Field(..., ge=0, description="Commit counter поправки")
    updater: str = Field(..., min_length=1, description="Principal, выполнивший поправку")

    model_config = {"frozen": True}
