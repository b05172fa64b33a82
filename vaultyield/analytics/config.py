"""Конфигурация движка APY.

Параметры окна стартового капитала, decimals по умолчанию и политика
проверки порядка сделок. Движок не читает ни переменные окружения, ни файлы.
"""

import dataclasses
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from vaultyield.core.math.fixed_point import CANONICAL_DECIMALS, DAY_SECONDS


class TradeOrderingPolicy(str, Enum):
    """Политика обработки порядка списка сделок.

    - STRICT: список не по убыванию timestamp → TradeOrderingViolation
    - SORT: копия списка пересортировывается (стабильно, по убыванию)
    - TRUST: список используется как есть
    """
    STRICT = "strict"
    SORT = "sort"
    TRUST = "trust"


def _wall_clock_seconds() -> int:
    return int(time.time())


@dataclass(frozen=True)
class ApyConfig:
    """Конфигурация расчёта APY."""

    # Окно после первой сделки хранилища, по концу которого берётся стартовый капитал
    first_day_window_sec: int = DAY_SECONDS

    # Точность токена, если индексатор не отдал decimals
    default_token_decimals: int = CANONICAL_DECIMALS

    ordering_policy: TradeOrderingPolicy = TradeOrderingPolicy.STRICT

    # Текущее время (секунды), если end_timestamp не задан
    now_fn: Callable[[], int] = field(default=_wall_clock_seconds, compare=False)

    def __post_init__(self) -> None:
        if self.first_day_window_sec < 0:
            raise ValueError(
                f"first_day_window_sec must be non-negative, got {self.first_day_window_sec}"
            )
        if self.default_token_decimals < 0:
            raise ValueError(
                f"default_token_decimals must be non-negative, got {self.default_token_decimals}"
            )

    def trusting_order(self) -> "ApyConfig":
        """Копия конфигурации без повторной проверки порядка (список уже проверен)."""
        return dataclasses.replace(self, ordering_policy=TradeOrderingPolicy.TRUST)


DEFAULT_CONFIG = ApyConfig()
