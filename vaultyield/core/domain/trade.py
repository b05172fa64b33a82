"""
Trade — Модель исполненной сделки

Immutable Pydantic модель сделки (take order) против пары хранилищ.
Каждая сделка содержит две ноги (balance change): output нога — токен,
ушедший из хранилища, input нога — токен, пришедший в хранилище.

Суммы хранятся десятичными строками (как в ответе индексатора) и
парсятся в int при обращении, ошибки формата → MalformedInputError.
"""

from pydantic import Field

from vaultyield.core.domain.erc20 import BigIntStr, Erc20, RecordModel
from vaultyield.core.errors import MalformedInputError
from vaultyield.core.math.fixed_point import (
    CANONICAL_DECIMALS,
    ONE_18,
    mul_div,
    parse_int,
    to_18_decimals,
)


# =============================================================================
# NESTED MODELS
# =============================================================================


class VaultBalanceChangeVault(RecordModel):
    """Хранилище, затронутое ногой сделки."""

    id: str = Field("", description="Идентификатор сущности хранилища")
    vault_id: BigIntStr = Field(..., description="Идентификатор хранилища (vault id)")
    token: Erc20 = Field(..., description="Токен хранилища")


class TradeVaultBalanceChange(RecordModel):
    """
    Одна нога сделки: изменение баланса хранилища.

    amount — знаковая сумма ноги (output нога обычно отрицательная),
    new_vault_balance — баланс хранилища сразу после сделки.
    """

    id: str = Field("", description="Идентификатор изменения баланса")
    amount: BigIntStr = Field(..., description="Знаковая сумма ноги (нативные decimals)")
    new_vault_balance: BigIntStr = Field(..., description="Баланс хранилища после сделки")
    old_vault_balance: BigIntStr | None = Field(None, description="Баланс хранилища до сделки")
    vault: VaultBalanceChangeVault = Field(..., description="Затронутое хранилище")
    timestamp: BigIntStr | None = Field(None, description="Время изменения (секунды)")

    @property
    def token(self) -> Erc20:
        return self.vault.token

    def is_vault(self, vault_id: str, token: Erc20) -> bool:
        """Проверка, что нога относится к хранилищу (vault_id, token)."""
        return self.vault.vault_id == vault_id and self.vault.token == token

    def amount_18(self, default_decimals: int = CANONICAL_DECIMALS) -> int:
        """Знаковая сумма ноги в канонических единицах."""
        return to_18_decimals(self.amount, self.vault.token.decimals, default_decimals)


class TradeStructPartialOrder(RecordModel):
    """Ссылка на ордер, по которому прошла сделка."""

    id: str = Field("", description="Идентификатор ордера")
    order_hash: str = Field("", description="Хэш ордера")


# =============================================================================
# TRADE MODEL
# =============================================================================


class Trade(RecordModel):
    """
    Модель исполненной сделки.

    Списки сделок, передаваемые движку, должны быть отсортированы по
    убыванию timestamp (так их отдаёт индексатор).

    Immutable модель (frozen=True).
    """

    id: str = Field("", description="Идентификатор сделки")
    timestamp: BigIntStr = Field(..., description="Время сделки (секунды)")
    order: TradeStructPartialOrder | None = Field(None, description="Ордер сделки")
    output_vault_balance_change: TradeVaultBalanceChange = Field(
        ..., description="Output нога (токен уходит из хранилища)"
    )
    input_vault_balance_change: TradeVaultBalanceChange = Field(
        ..., description="Input нога (токен приходит в хранилище)"
    )

    def timestamp_seconds(self) -> int:
        """
        Время сделки как int.

        Raises:
            MalformedInputError: Если timestamp не целое неотрицательное число
        """
        timestamp = parse_int(self.timestamp, "timestamp")
        if timestamp < 0:
            raise MalformedInputError(f"timestamp must be non-negative, got {timestamp}")
        return timestamp

    def touches(self, vault_id: str, token: Erc20) -> bool:
        """Проверка, что любая из ног сделки относится к хранилищу (vault_id, token)."""
        return self.input_vault_balance_change.is_vault(
            vault_id, token
        ) or self.output_vault_balance_change.is_vault(vault_id, token)

    def leg_for(self, vault_id: str, token: Erc20) -> TradeVaultBalanceChange:
        """
        Нога сделки для хранилища (vault_id, token).

        Input нога имеет приоритет; если хранилище не совпадает с input,
        возвращается output нога.
        """
        if self.input_vault_balance_change.is_vault(vault_id, token):
            return self.input_vault_balance_change
        return self.output_vault_balance_change

    def connects(self, token_a: Erc20, token_b: Erc20) -> bool:
        """Проверка, что ноги сделки несут ровно эти два токена (в любом порядке)."""
        input_token = self.input_vault_balance_change.token
        output_token = self.output_vault_balance_change.token
        return (input_token == token_a and output_token == token_b) or (
            input_token == token_b and output_token == token_a
        )

    def ratio(self, default_decimals: int = CANONICAL_DECIMALS) -> int | None:
        """
        Курс сделки: |input amount| / |output amount|, 18-decimal.

        Returns:
            Курс или None если output amount равен нулю
        """
        input_18 = abs(self.input_vault_balance_change.amount_18(default_decimals))
        output_18 = abs(self.output_vault_balance_change.amount_18(default_decimals))
        return mul_div(input_18, ONE_18, output_18)

    def inverse_ratio(self, default_decimals: int = CANONICAL_DECIMALS) -> int | None:
        """
        Обратный курс сделки: |output amount| / |input amount|, 18-decimal.

        Считается независимо от ratio(), а не как 1 / ratio().
        """
        input_18 = abs(self.input_vault_balance_change.amount_18(default_decimals))
        output_18 = abs(self.output_vault_balance_change.amount_18(default_decimals))
        return mul_div(output_18, ONE_18, input_18)
