"""
GlobalCounters — Снапшот глобальных счётчиков ledger

Используется для экспорта состояния (contracts/schema/ledger_snapshot.json).
Живые счётчики хранятся в LedgerState; эта модель — их immutable копия.
"""

from typing import Optional

from pydantic import BaseModel, Field


class GlobalCounters(BaseModel):
    """Глобальные счётчики и параметры ledger."""

    total_causes: int = Field(..., ge=0, description="Количество зарегистрированных causes")
    total_donations: int = Field(..., ge=0, description="Количество зарегистрированных donations")
    max_causes: int = Field(..., ge=0, description="Ёмкость реестра causes")
    creation_fee: int = Field(..., description="Комиссия за регистрацию cause")
    authority_contract: Optional[str] = Field(
        None, description="Привязанный authority principal (nullable, задаётся один раз)"
    )

    model_config = {"frozen": True}
