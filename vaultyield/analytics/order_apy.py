"""
Order APY — Комбинированная доходность ордера

Конвейер:
1. get_vaults_vol → объёмы хранилищ
2. get_token_vaults_apy → APY каждого хранилища
3. разбиение хранилищ на inputs/outputs ордера
4. get_pairs_ratio → прямые курсы между токенами ордера
5. для каждого токена-кандидата номинации: капитал и net volume всех
   хранилищ пересчитываются в этот токен по прямому курсу; если хотя бы
   одно хранилище не конвертируется, кандидат отбрасывается целиком
6. комбинированный APY = Σ annual_rate_vol / Σ capital
7. номинация = токен хранилища с наибольшим конвертированным net volume
   среди токенов с успешно посчитанным APY

ФОРМУЛЫ (18-decimal, для хранилища v в номинации d):
    capital_d(v) = capital(v) * ratio(d, v) / 1e18
    net_vol_d(v) = net_vol(v) * ratio(d, v) / 1e18
    annual_rate_vol_d(v) = net_vol_d(v) * 1e18 / annual_rate(v)
    apy_d = Σ annual_rate_vol_d * 1e18 / Σ capital_d

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Функция чистая: одинаковый вход → одинаковый результат
2. Частичных результатов для кандидата нет (всё или ничего)
3. Пустой список сделок → пустые inputs/outputs и denominated_apy = None
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from vaultyield.analytics.config import DEFAULT_CONFIG, ApyConfig
from vaultyield.analytics.ordering import ensure_descending
from vaultyield.analytics.pair_ratio import PairRatioMap, get_pairs_ratio
from vaultyield.analytics.token_vault_apy import get_token_vaults_apy
from vaultyield.analytics.volume import get_vaults_vol
from vaultyield.core.domain.apy import DenominatedAPY, OrderAPY, TokenPair, TokenVaultAPY
from vaultyield.core.domain.erc20 import Erc20
from vaultyield.core.domain.order import Order
from vaultyield.core.domain.trade import Trade
from vaultyield.core.math.fixed_point import (
    ONE_18,
    annual_rate_18,
    checked_div,
    saturating_add,
    saturating_mul,
    scale_18,
    truncating_div,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass(frozen=True)
class DenominationResult:
    """Все хранилища, пересчитанные в один токен номинации."""

    token: Erc20
    combined_capital: int
    combined_annual_rate_vol: int

    # net volume каждого хранилища в этой номинации → токен хранилища
    net_vol_ranking: dict[int, Erc20] = field(default_factory=dict)

    def apy(self) -> int | None:
        """Комбинированный APY; None если суммарный капитал равен нулю."""
        return checked_div(saturating_mul(self.combined_annual_rate_vol, ONE_18), self.combined_capital)


# =============================================================================
# DENOMINATION
# =============================================================================


def denominate(
    denomination: Erc20,
    token_vaults_apy: Sequence[TokenVaultAPY],
    pair_ratio_map: PairRatioMap,
) -> DenominationResult | None:
    """
    Пересчёт капитала и net volume всех хранилищ в токен `denomination`.

    Args:
        denomination: Токен номинации
        token_vaults_apy: APY хранилищ
        pair_ratio_map: Прямые курсы (результат get_pairs_ratio)

    Returns:
        DenominationResult, или None если хотя бы одно хранилище не конвертируется
        (нет прямого курса, пустое или перевёрнутое окно наблюдения)
    """
    combined_capital = 0
    combined_annual_rate_vol = 0
    net_vol_ranking: dict[int, Erc20] = {}

    for token_vault in token_vaults_apy:
        annual_rate = annual_rate_18(token_vault.start_time, token_vault.end_time)

        if token_vault.token == denomination:
            capital = token_vault.capital
            net_vol = token_vault.net_vol
        else:
            ratio = pair_ratio_map.get(TokenPair(input=denomination, output=token_vault.token))
            if ratio is None:
                logger.debug(
                    "No direct ratio %s/%s, denomination %s abandoned",
                    denomination.label(),
                    token_vault.token.label(),
                    denomination.label(),
                )
                return None
            capital = scale_18(token_vault.capital, ratio)
            net_vol = scale_18(token_vault.net_vol, ratio)

        if annual_rate <= 0:
            logger.debug(
                "Empty or inverted observation window for vault %s, denomination %s abandoned",
                token_vault.id,
                denomination.label(),
            )
            return None

        annual_rate_vol = truncating_div(saturating_mul(net_vol, ONE_18), annual_rate)

        combined_capital = saturating_add(combined_capital, capital)
        combined_annual_rate_vol = saturating_add(combined_annual_rate_vol, annual_rate_vol)
        net_vol_ranking[net_vol] = token_vault.token

    return DenominationResult(
        token=denomination,
        combined_capital=combined_capital,
        combined_annual_rate_vol=combined_annual_rate_vol,
        net_vol_ranking=net_vol_ranking,
    )


def select_denominated_apy(
    ranking: dict[int, Erc20],
    denominated_apys: Sequence[DenominatedAPY],
) -> DenominatedAPY | None:
    """
    Выбор номинации: от наибольшего net volume к наименьшему, первый токен
    с успешно посчитанным комбинированным APY.
    """
    for net_vol in sorted(ranking, reverse=True):
        token = ranking[net_vol]
        for denominated_apy in denominated_apys:
            if denominated_apy.token == token:
                return denominated_apy
    return None


# =============================================================================
# CALCULATOR
# =============================================================================


class OrderApyCalculator:
    """Расчёт APY ордера и каждого из его хранилищ.

    Не хранит состояния между вызовами: одинаковый вход → одинаковый результат.
    Безопасен для параллельных вызовов по разным ордерам.
    """

    def __init__(self, config: ApyConfig | None = None):
        """
        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or DEFAULT_CONFIG

    def calculate(
        self,
        order: Order,
        trades: Sequence[Trade],
        start_timestamp: int | None = None,
        end_timestamp: int | None = None,
    ) -> OrderAPY:
        """Расчёт APY ордера.

        Args:
            order: ордер
            trades: сделки ордера, отсортированные по убыванию timestamp
            start_timestamp: нижняя граница окна (секунды), опционально
            end_timestamp: верхняя граница окна (секунды), по умолчанию — текущее время

        Returns:
            OrderAPY; denominated_apy = None если ни одна номинация не удалась

        Raises:
            MalformedInputError: если поле записи не является целым числом
            TradeOrderingViolation: если порядок сделок нарушен (политика STRICT)
            VaultTradesNotFound: если у хранилища нет сделок
        """
        if not trades:
            return OrderAPY(
                order_id=order.id,
                order_hash=order.order_hash,
                start_time=start_timestamp if start_timestamp is not None else 0,
                end_time=end_timestamp if end_timestamp is not None else self.config.now_fn(),
                inputs_token_vault_apy=[],
                outputs_token_vault_apy=[],
                denominated_apy=None,
            )

        # 1. Порядок проверяется один раз на весь конвейер
        trades = ensure_descending(trades, self.config.ordering_policy)
        config = self.config.trusting_order()

        # 2. Объёмы и APY хранилищ
        vols = get_vaults_vol(trades)
        token_vaults_apy = get_token_vaults_apy(
            trades, vols, start_timestamp, end_timestamp, config
        )

        # 3. Разбиение на inputs/outputs ордера
        start_time = min(v.start_time for v in token_vaults_apy)
        end_time = max(v.end_time for v in token_vaults_apy)
        inputs = [v for v in token_vaults_apy if order.has_input(v.id, v.token)]
        outputs = [v for v in token_vaults_apy if order.has_output(v.id, v.token)]

        # 4. Курсы между токенами ордера
        pair_ratio_map = get_pairs_ratio(inputs, outputs, trades, config.default_token_decimals)

        # 5-7. Номинации
        denominated_apy = self._denominated_apy(token_vaults_apy, pair_ratio_map)

        logger.debug(
            "Order %s: %d vaults, denomination %s",
            order.id,
            len(token_vaults_apy),
            denominated_apy.token.label() if denominated_apy else None,
        )

        return OrderAPY(
            order_id=order.id,
            order_hash=order.order_hash,
            start_time=start_time,
            end_time=end_time,
            inputs_token_vault_apy=inputs,
            outputs_token_vault_apy=outputs,
            denominated_apy=denominated_apy,
        )

    def _denominated_apy(
        self,
        token_vaults_apy: Sequence[TokenVaultAPY],
        pair_ratio_map: PairRatioMap,
    ) -> DenominatedAPY | None:
        candidates: list[Erc20] = []
        for token_vault in token_vaults_apy:
            if token_vault.token not in candidates:
                candidates.append(token_vault.token)

        denominated_apys: list[DenominatedAPY] = []
        ranking: dict[int, Erc20] = {}
        for candidate in candidates:
            result = denominate(candidate, token_vaults_apy, pair_ratio_map)
            if result is None:
                continue

            apy = result.apy()
            if apy is not None:
                denominated_apys.append(DenominatedAPY(apy=apy, token=candidate))

            # ранжирование net volume берётся из первой удавшейся номинации
            if not ranking:
                ranking = result.net_vol_ranking

        return select_denominated_apy(ranking, denominated_apys)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def get_order_apy(
    order: Order,
    trades: Sequence[Trade],
    start_timestamp: int | None = None,
    end_timestamp: int | None = None,
    config: ApyConfig | None = None,
) -> OrderAPY:
    """
    APY ордера и каждого из его хранилищ.

    Сделки должны быть отсортированы по убыванию timestamp.
    """
    return OrderApyCalculator(config).calculate(order, trades, start_timestamp, end_timestamp)
