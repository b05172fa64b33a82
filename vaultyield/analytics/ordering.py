"""Проверка порядка списка сделок.

Движок опирается на порядок списка (по убыванию timestamp): последняя
сделка подсписка хранилища — первая хронологически, первая совпавшая
при поиске курса — самая свежая.
"""

import logging
from typing import Sequence

from vaultyield.analytics.config import TradeOrderingPolicy
from vaultyield.core.domain.trade import Trade
from vaultyield.core.errors import TradeOrderingViolation

logger = logging.getLogger(__name__)


def ensure_descending(
    trades: Sequence[Trade],
    policy: TradeOrderingPolicy = TradeOrderingPolicy.STRICT,
) -> list[Trade]:
    """Приведение списка сделок к порядку по убыванию timestamp.

    Args:
        trades: сделки (ожидается порядок по убыванию timestamp)
        policy: политика обработки нарушения порядка

    Returns:
        Новый список сделок в порядке по убыванию timestamp
        (для TRUST — копия исходного списка без проверки)

    Raises:
        TradeOrderingViolation: при STRICT и нарушенном порядке
        MalformedInputError: если timestamp не целое число
    """
    if policy == TradeOrderingPolicy.TRUST:
        return list(trades)

    timestamps = [trade.timestamp_seconds() for trade in trades]

    for index in range(1, len(timestamps)):
        if timestamps[index] > timestamps[index - 1]:
            if policy == TradeOrderingPolicy.STRICT:
                raise TradeOrderingViolation(index, timestamps[index - 1], timestamps[index])

            logger.debug("Trades are not in descending order, re-sorting %d trades", len(trades))
            # sorted() стабилен: равные timestamp сохраняют исходный порядок
            order = sorted(range(len(trades)), key=lambda i: timestamps[i], reverse=True)
            return [trades[i] for i in order]

    return list(trades)
