"""
JSON Schema Contract Validators

Модуль для валидации экспортируемых записей ledger согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- cause.json
- donation.json
- donation_update.json
- ledger_snapshot.json (оболочка снапшота; записи проверяются по своим схемам)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'cause')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class CauseValidator(ContractValidator):
    def __init__(self):
        super().__init__("cause")


class DonationValidator(ContractValidator):
    def __init__(self):
        super().__init__("donation")


class DonationUpdateValidator(ContractValidator):
    def __init__(self):
        super().__init__("donation_update")


class LedgerSnapshotValidator(ContractValidator):
    """
    Валидатор снапшота ledger.

    Схема ledger_snapshot.json описывает только оболочку; validate() дополнительно
    проверяет каждую запись по схеме её типа.
    """

    def __init__(self):
        super().__init__("ledger_snapshot")
        self._cause_validator = CauseValidator()
        self._donation_validator = DonationValidator()
        self._update_validator = DonationUpdateValidator()

    def validate(self, data: Dict[str, Any]) -> None:
        super().validate(data)
        for cause in data["causes"]:
            self._cause_validator.validate(cause)
        for donation in data["donations"]:
            self._donation_validator.validate(donation)
        for update in data["donation_updates"]:
            self._update_validator.validate(update)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        try:
            self.validate(data)
        except jsonschema.ValidationError:
            return False
        return True


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_cause(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CauseValidator().validate(data)


def validate_donation(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DonationValidator().validate(data)


def validate_donation_update(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DonationUpdateValidator().validate(data)


def validate_ledger_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация полного снапшота ledger (оболочка и все записи).

    Raises:
        ValidationError: Если данные не соответствуют схемам
    """
    LedgerSnapshotValidator().validate(data)
