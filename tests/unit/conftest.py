"""
Общие fixtures: эталонный сценарий двух токенов и двух хранилищ.

Сделки (по убыванию timestamp):
- trade2 (ts=2): vault2/token2 отдаёт 2e18, vault1/token1 получает 7e18
- trade1 (ts=1): vault1/token1 отдаёт 2e18, vault2/token2 получает 5e18
"""

from typing import Callable

import pytest

from tests.unit.builders import ONE, VAULT_ID_1, VAULT_ID_2, make_leg, make_token, make_trade
from vaultyield.core.domain import Erc20, Order, Trade, Vault


@pytest.fixture
def token1() -> Erc20:
    return make_token("11", "Token1")


@pytest.fixture
def token2() -> Erc20:
    return make_token("22", "Token2")


@pytest.fixture
def token3() -> Erc20:
    return make_token("33", "Token3")


@pytest.fixture
def build_reference_trades() -> Callable[[Erc20, Erc20, int], list[Trade]]:
    """Эталонные сделки; scale делит нативные суммы (для токенов с decimals < 18)."""

    def build(t1: Erc20, t2: Erc20, scale: int = 1) -> list[Trade]:
        trade1 = make_trade(
            1,
            input_leg=make_leg(t2, VAULT_ID_2, 5 * ONE // scale, 2 * ONE // scale),
            output_leg=make_leg(t1, VAULT_ID_1, -2 * ONE // scale, 2 * ONE // scale),
            trade_id="trade1",
        )
        trade2 = make_trade(
            2,
            input_leg=make_leg(t1, VAULT_ID_1, 7 * ONE // scale, 5 * ONE // scale),
            output_leg=make_leg(t2, VAULT_ID_2, -2 * ONE // scale, 5 * ONE // scale),
            trade_id="trade2",
        )
        return [trade2, trade1]

    return build


@pytest.fixture
def reference_trades(build_reference_trades, token1: Erc20, token2: Erc20) -> list[Trade]:
    return build_reference_trades(token1, token2)


@pytest.fixture
def build_reference_order() -> Callable[[Erc20, Erc20], Order]:
    def build(t1: Erc20, t2: Erc20) -> Order:
        vault1 = Vault(vault_id=VAULT_ID_1, token=t1)
        vault2 = Vault(vault_id=VAULT_ID_2, token=t2)
        return Order(id="order-id", order_hash="", inputs=[vault1, vault2], outputs=[vault1, vault2])

    return build


@pytest.fixture
def reference_order(build_reference_order, token1: Erc20, token2: Erc20) -> Order:
    return build_reference_order(token1, token2)
