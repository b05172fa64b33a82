"""Построители тестовых записей (токены, ноги сделок, сделки)."""

from vaultyield.core.domain import (
    Erc20,
    Trade,
    TradeVaultBalanceChange,
    VaultBalanceChangeVault,
)

ONE = 10**18

VAULT_ID_1 = "0x" + "11" * 32
VAULT_ID_2 = "0x" + "22" * 32
VAULT_ID_3 = "0x" + "33" * 32


def make_token(byte: str, name: str, decimals: str | None = "18") -> Erc20:
    address = "0x" + byte * 20
    return Erc20(id=address, address=address, name=name, symbol=name, decimals=decimals)


def make_leg(token: Erc20, vault_id: str, amount: int | str, new_balance: int | str) -> TradeVaultBalanceChange:
    return TradeVaultBalanceChange(
        amount=amount,
        new_vault_balance=new_balance,
        vault=VaultBalanceChangeVault(vault_id=vault_id, token=token),
    )


def make_trade(
    timestamp: int | str,
    input_leg: TradeVaultBalanceChange,
    output_leg: TradeVaultBalanceChange,
    trade_id: str = "",
) -> Trade:
    return Trade(
        id=trade_id,
        timestamp=timestamp,
        input_vault_balance_change=input_leg,
        output_vault_balance_change=output_leg,
    )
