"""
Vault Volume — Агрегация объёмов хранилищ

Для каждого хранилища (vault id, token), встреченного хотя бы в одной ноге
сделки, считает приток, отток, суммарный и net объём в нативных decimals.

Порядок сделок не важен. Порядок результата — порядок первого появления
хранилища (для каждой сделки сначала input нога, затем output нога).
"""

import logging
from typing import Sequence

from vaultyield.core.domain.apy import VaultVolume
from vaultyield.core.domain.erc20 import Erc20
from vaultyield.core.domain.trade import Trade, TradeVaultBalanceChange
from vaultyield.core.math.fixed_point import U256_MAX, parse_int, saturate

logger = logging.getLogger(__name__)


class _VolumeAccumulator:
    """Изменяемый накопитель объёмов одного хранилища."""

    __slots__ = ("vault_id", "token", "total_in", "total_out")

    def __init__(self, vault_id: str, token: Erc20):
        self.vault_id = vault_id
        self.token = token
        self.total_in = 0
        self.total_out = 0

    def to_volume(self) -> VaultVolume:
        return VaultVolume(
            id=self.vault_id,
            token=self.token,
            total_in=min(self.total_in, U256_MAX),
            total_out=min(self.total_out, U256_MAX),
            total_vol=min(self.total_in + self.total_out, U256_MAX),
            net_vol=saturate(self.total_in - self.total_out),
        )


def _leg_amount(leg: TradeVaultBalanceChange) -> int:
    # output нога приходит со знаком минус, объём считается по модулю
    return abs(parse_int(leg.amount, "amount"))


def get_vaults_vol(trades: Sequence[Trade]) -> list[VaultVolume]:
    """
    Объёмы всех хранилищ, затронутых сделками.

    Args:
        trades: Список сделок (в любом порядке)

    Returns:
        Один VaultVolume на каждую пару (vault id, token)

    Raises:
        MalformedInputError: Если сумма ноги не является целым числом
    """
    accumulators: dict[tuple[str, Erc20], _VolumeAccumulator] = {}

    def accumulator_for(leg: TradeVaultBalanceChange) -> _VolumeAccumulator:
        key = (leg.vault.vault_id, leg.vault.token)
        if key not in accumulators:
            accumulators[key] = _VolumeAccumulator(*key)
        return accumulators[key]

    for trade in trades:
        accumulator_for(trade.input_vault_balance_change).total_in += _leg_amount(
            trade.input_vault_balance_change
        )
        accumulator_for(trade.output_vault_balance_change).total_out += _leg_amount(
            trade.output_vault_balance_change
        )

    volumes = [acc.to_volume() for acc in accumulators.values()]
    logger.debug("Aggregated volumes for %d vaults from %d trades", len(volumes), len(trades))
    return volumes
