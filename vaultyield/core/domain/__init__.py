"""
Domain models and value objects.

Contains the records supplied by the indexing service (Erc20, Trade, Order)
and the records derived by the analytics engine (VaultVolume, TokenVaultAPY,
DenominatedAPY, OrderAPY, TokenPair).
"""

from vaultyield.core.domain.apy import (
    DenominatedAPY,
    OrderAPY,
    TokenPair,
    TokenVaultAPY,
    VaultVolume,
)
from vaultyield.core.domain.erc20 import BigIntStr, Erc20, RecordModel
from vaultyield.core.domain.order import Order, Vault
from vaultyield.core.domain.trade import (
    Trade,
    TradeStructPartialOrder,
    TradeVaultBalanceChange,
    VaultBalanceChangeVault,
)

__all__ = [
    # Base
    "BigIntStr",
    "RecordModel",
    # Token
    "Erc20",
    # Trade model
    "Trade",
    "TradeVaultBalanceChange",
    "VaultBalanceChangeVault",
    "TradeStructPartialOrder",
    # Order model
    "Order",
    "Vault",
    # Derived records
    "VaultVolume",
    "TokenVaultAPY",
    "DenominatedAPY",
    "OrderAPY",
    "TokenPair",
]
