"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- trade.json (сделка из ответа индексатора)
- order.json (ордер из ответа индексатора)
- order_apy.json (сериализованный результат OrderAPY для слоя отчётов)

load_trade/load_trades/load_order: входной путь движка, сырой JSON
индексатора проверяется схемой и только затем разбирается в модели.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import jsonschema
from jsonschema import Draft202012Validator

from vaultyield.core.domain import Order, Trade


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
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
            schema_name: Имя схемы без расширения (например, 'trade')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
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
        Валидация данных против схемы.

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


class TradeValidator(ContractValidator):
    """Валидатор для trade контракта."""

    def __init__(self):
        super().__init__("trade")


class OrderValidator(ContractValidator):
    """Валидатор для order контракта."""

    def __init__(self):
        super().__init__("order")


class OrderApyValidator(ContractValidator):
    """Валидатор для order_apy контракта (выход движка)."""

    def __init__(self):
        super().__init__("order_apy")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_trade(data: Dict[str, Any]) -> None:
    """
    Валидация trade данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    TradeValidator().validate(data)


def validate_order(data: Dict[str, Any]) -> None:
    """
    Валидация order данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    OrderValidator().validate(data)


def validate_order_apy(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного OrderAPY (OrderAPY.to_json_dict()).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    OrderApyValidator().validate(data)


# =============================================================================
# INGESTION
# =============================================================================


def load_trade(data: Dict[str, Any]) -> Trade:
    """
    Сделка из ответа индексатора: проверка контракта, затем Pydantic модель.

    Raises:
        ValidationError: Если данные не соответствуют схеме trade
    """
    TradeValidator().validate(data)
    return Trade.model_validate(data)


def load_trades(payloads: Iterable[Dict[str, Any]]) -> List[Trade]:
    """
    Список сделок из ответа индексатора (порядок сохраняется).

    Raises:
        ValidationError: На первой сделке, не соответствующей схеме trade
    """
    validator = TradeValidator()
    trades = []
    for data in payloads:
        validator.validate(data)
        trades.append(Trade.model_validate(data))
    return trades


def load_order(data: Dict[str, Any]) -> Order:
    """
    Ордер из ответа индексатора: проверка контракта, затем Pydantic модель.

    Raises:
        ValidationError: Если данные не соответствуют схеме order
    """
    OrderValidator().validate(data)
    return Order.model_validate(data)
