"""
Pair Ratio — Курсы между токенами ордера

Для каждой неупорядоченной пары различных токенов ордера (объединение
input и output токенов) курс берётся из самой свежей сделки, ноги которой
несут ровно эти два токена. Прямой курс и обратный фиксируются вместе
из одной и той же сделки; если такой сделки нет — оба направления None.

Multi-hop курсы (через третий токен) не выводятся.

ПРЕДУСЛОВИЕ: сделки отсортированы по убыванию timestamp, поэтому первая
совпавшая сделка — самая свежая.
"""

import logging
from typing import Iterable, Sequence

from vaultyield.core.domain.apy import TokenPair, TokenVaultAPY
from vaultyield.core.domain.erc20 import Erc20
from vaultyield.core.domain.trade import Trade
from vaultyield.core.math.fixed_point import CANONICAL_DECIMALS

logger = logging.getLogger(__name__)

# Курс пары: None если прямой сделки между токенами нет
PairRatioMap = dict[TokenPair, int | None]


def resolve_pair_ratio(
    pair: TokenPair,
    trades: Sequence[Trade],
    default_decimals: int = CANONICAL_DECIMALS,
) -> tuple[int | None, int | None]:
    """
    Прямой и обратный курс пары из самой свежей сделки между её токенами.

    Прямой курс = сумма ноги с токеном pair.input / сумма другой ноги,
    обе суммы в 18-decimal. Обратный курс считается симметрично, а не как 1 / прямой.

    Args:
        pair: Направленная пара (input, output)
        trades: Сделки в порядке по убыванию timestamp
        default_decimals: Точность токена, если decimals не задан

    Returns:
        (ratio, inverse_ratio); оба None, если сделки нет или один из курсов не определён
    """
    latest_trade = next((t for t in trades if t.connects(pair.input, pair.output)), None)
    if latest_trade is None:
        return None, None

    ratio = latest_trade.ratio(default_decimals)
    inverse_ratio = latest_trade.inverse_ratio(default_decimals)
    if ratio is None or inverse_ratio is None:
        return None, None

    if latest_trade.input_vault_balance_change.token == pair.input:
        return ratio, inverse_ratio
    return inverse_ratio, ratio


def _distinct_tokens(entries: Iterable[TokenVaultAPY]) -> list[Erc20]:
    tokens: list[Erc20] = []
    for entry in entries:
        if entry.token not in tokens:
            tokens.append(entry.token)
    return tokens


def get_pairs_ratio(
    inputs: Sequence[TokenVaultAPY],
    outputs: Sequence[TokenVaultAPY],
    trades: Sequence[Trade],
    default_decimals: int = CANONICAL_DECIMALS,
) -> PairRatioMap:
    """
    Курсы всех пар токенов ордера.

    Каждая пара разрешается не более одного раза; в карту попадают оба направления.

    Args:
        inputs: TokenVaultAPY input хранилищ ордера
        outputs: TokenVaultAPY output хранилищ ордера
        trades: Сделки в порядке по убыванию timestamp
        default_decimals: Точность токена, если decimals не задан

    Returns:
        Карта TokenPair → курс (18-decimal) или None
    """
    tokens = _distinct_tokens([*inputs, *outputs])

    pair_ratio_map: PairRatioMap = {}
    for i, token_a in enumerate(tokens):
        for token_b in tokens[i + 1 :]:
            pair = TokenPair(input=token_a, output=token_b)
            inverse_pair = pair.inverse()
            if pair in pair_ratio_map or inverse_pair in pair_ratio_map:
                continue

            ratio, inverse_ratio = resolve_pair_ratio(pair, trades, default_decimals)
            pair_ratio_map[pair] = ratio
            pair_ratio_map[inverse_pair] = inverse_ratio

            if ratio is None:
                logger.debug(
                    "No direct trade between %s and %s, pair left unresolved",
                    token_a.label(),
                    token_b.label(),
                )

    return pair_ratio_map
