"""
Cause — Модель благотворительной цели

Immutable Pydantic модель. Единственное поле, изменяемое после создания, —
collected; изменение выполняется через model_copy(update=...) с заменой
экземпляра в реестре.
Соответствует схеме contracts/schema/cause.json.
"""

from pydantic import BaseModel, Field

from .limits import MAX_DESCRIPTION_LENGTH, MAX_TITLE_LENGTH


class Cause(BaseModel):
    """
    Модель cause (цель сбора средств).

    Immutable модель (frozen=True) для предотвращения случайных изменений.
    """

    # Идентификация
    id: int = Field(..., ge=0, description="Порядковый номер cause (с нуля)")
    title: str = Field(
        ..., min_length=1, max_length=MAX_TITLE_LENGTH, description="Уникальное название"
    )
    description: str = Field(
        ..., min_length=1, max_length=MAX_DESCRIPTION_LENGTH, description="Описание"
    )

    # Сбор средств
    target: int = Field(..., gt=0, description="Целевая сумма")
    collected: int = Field(default=0, ge=0, description="Собрано на текущий момент")

    # Владелец и статус
    organization: str = Field(..., min_length=1, description="Principal создателя cause")
    status: bool = Field(default=True, description="Флаг активности")

    # Время
    timestamp: int = Field(..., ge=0, description="Commit counter на момент создания")

    model_config = {"frozen": True}

    def with_collected(self, collected: int) -> "Cause":
        """Новый экземпляр с обновлённым collected."""
        return self.model_copy(update={"collected": collected})

    def progress(self) -> float:
        """Доля собранного от target (может превышать 1.0)."""
        return self.collected / self.target
