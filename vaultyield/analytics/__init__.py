"""Analytics — конвейер расчёта объёмов и APY хранилищ и ордеров.

Сделки → объёмы хранилищ → APY хранилищ → (курсы пар ∥ группировка ордера)
→ комбинированный APY ордера в выбранной номинации.
"""

from .config import DEFAULT_CONFIG, ApyConfig, TradeOrderingPolicy
from .order_apy import (
    DenominationResult,
    OrderApyCalculator,
    denominate,
    get_order_apy,
    select_denominated_apy,
)
from .ordering import ensure_descending
from .pair_ratio import PairRatioMap, get_pairs_ratio, resolve_pair_ratio
from .token_vault_apy import get_token_vaults_apy, vault_apy
from .volume import get_vaults_vol

__all__ = [
    # Config
    "ApyConfig",
    "DEFAULT_CONFIG",
    "TradeOrderingPolicy",
    # Ordering
    "ensure_descending",
    # Volume
    "get_vaults_vol",
    # Token vault APY
    "get_token_vaults_apy",
    "vault_apy",
    # Pair ratio
    "PairRatioMap",
    "get_pairs_ratio",
    "resolve_pair_ratio",
    # Order APY
    "DenominationResult",
    "OrderApyCalculator",
    "denominate",
    "get_order_apy",
    "select_denominated_apy",
]
