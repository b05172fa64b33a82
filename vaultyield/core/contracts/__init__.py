"""
Contract Validation Module

Модуль для валидации JSON контрактов: входные записи индексатора
(trade, order) и выходная запись движка (order_apy).
"""

from .validators import (
    ContractValidator,
    OrderApyValidator,
    OrderValidator,
    SchemaLoader,
    TradeValidator,
    load_order,
    load_trade,
    load_trades,
    validate_order,
    validate_order_apy,
    validate_trade,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TradeValidator",
    "OrderValidator",
    "OrderApyValidator",
    # Functions
    "validate_trade",
    "validate_order",
    "validate_order_apy",
    # Ingestion
    "load_trade",
    "load_trades",
    "load_order",
]
