"""
Token Vault APY — Доходность отдельного хранилища

Для каждого VaultVolume:
- стартовый капитал = баланс хранилища после последней сделки первых суток
  (окно first_day_window_sec от первой сделки хранилища)
- net volume и капитал нормализуются к 18 знакам
- окно наблюдения [start, end]: start = max(первая сделка, start_timestamp),
  end = end_timestamp или текущее время
- APY = (net_vol / capital) / annual_rate(start, end)

ФОРМУЛЫ (18-decimal):
    annual_rate = (end - start) * 1e18 * 1e18 / YEAR_18
    apy = ((net_vol * 1e18 / capital) * 1e18) / annual_rate

APY отсутствует (None), если капитал равен нулю или annual_rate <= 0
(пустое окно или end раньше start).

ПРЕДУСЛОВИЕ: сделки отсортированы по убыванию timestamp.
"""

import logging
from typing import Sequence

from vaultyield.analytics.config import DEFAULT_CONFIG, ApyConfig
from vaultyield.analytics.ordering import ensure_descending
from vaultyield.core.domain.apy import TokenVaultAPY, VaultVolume
from vaultyield.core.domain.trade import Trade
from vaultyield.core.errors import VaultTradesNotFound
from vaultyield.core.math.fixed_point import (
    ONE_18,
    annual_rate_18,
    saturating_mul,
    to_18_decimals,
    truncating_div,
)

logger = logging.getLogger(__name__)


def vault_apy(net_vol: int, capital: int, start: int, end: int) -> int | None:
    """
    APY хранилища в 18-decimal.

    Args:
        net_vol: Net volume, 18-decimal
        capital: Стартовый капитал, 18-decimal
        start: Начало окна (секунды)
        end: Конец окна (секунды)

    Returns:
        APY или None, если капитал равен нулю или окно пустое либо перевёрнуто (end <= start)

    Examples:
        >>> vault_apy(10**18, 5 * 10**18, 1, 10_000_001)
        630720000000000000
        >>> vault_apy(10**18, 0, 1, 10_000_001) is None
        True
    """
    annual_rate = annual_rate_18(start, end)
    if capital == 0 or annual_rate <= 0:
        return None

    vol_to_capital = truncating_div(saturating_mul(net_vol, ONE_18), capital)
    return truncating_div(saturating_mul(vol_to_capital, ONE_18), annual_rate)


def get_token_vaults_apy(
    trades: Sequence[Trade],
    vols: Sequence[VaultVolume],
    start_timestamp: int | None = None,
    end_timestamp: int | None = None,
    config: ApyConfig | None = None,
) -> list[TokenVaultAPY]:
    """
    APY каждого хранилища за заданное окно.

    Args:
        trades: Сделки, отсортированные по убыванию timestamp
        vols: Объёмы хранилищ (результат get_vaults_vol)
        start_timestamp: Нижняя граница окна (секунды), опционально
        end_timestamp: Верхняя граница окна (секунды), по умолчанию — текущее время
        config: Конфигурация (по умолчанию DEFAULT_CONFIG)

    Returns:
        TokenVaultAPY в порядке vols

    Raises:
        MalformedInputError: Если timestamp, amount, balance или decimals не целые
        TradeOrderingViolation: Если порядок сделок нарушен (политика STRICT)
        VaultTradesNotFound: Если для VaultVolume нет ни одной сделки
    """
    config = config or DEFAULT_CONFIG
    trades = ensure_descending(trades, config.ordering_policy)

    end = end_timestamp if end_timestamp is not None else config.now_fn()

    token_vaults_apy: list[TokenVaultAPY] = []
    for vol in vols:
        # сделки хранилища в порядке по убыванию timestamp
        vault_trades = [t for t in trades if t.touches(vol.id, vol.token)]
        if not vault_trades:
            raise VaultTradesNotFound(vol.id, vol.token.address)

        # хронологически первая сделка хранилища
        first_trade = vault_trades[-1]
        first_ts = first_trade.timestamp_seconds()

        # самая свежая сделка в пределах первых суток (first_trade попадает всегда)
        window_end = first_ts + config.first_day_window_sec
        first_day_last_trade = next(
            t for t in vault_trades if t.timestamp_seconds() <= window_end
        )

        leg = first_day_last_trade.leg_for(vol.id, vol.token)
        capital = to_18_decimals(
            leg.new_vault_balance, leg.token.decimals, config.default_token_decimals
        )
        net_vol = to_18_decimals(vol.net_vol, vol.token.decimals, config.default_token_decimals)

        start = first_ts
        if start_timestamp is not None:
            start = max(start, start_timestamp)

        apy = vault_apy(net_vol, capital, start, end)
        if apy is None:
            logger.debug(
                "APY undefined for vault %s (capital=%d, window=[%d, %d])",
                vol.id,
                capital,
                start,
                end,
            )

        token_vaults_apy.append(
            TokenVaultAPY(
                id=vol.id,
                token=vol.token,
                start_time=start,
                end_time=end,
                net_vol=net_vol,
                capital=capital,
                apy=apy,
            )
        )

    return token_vaults_apy
