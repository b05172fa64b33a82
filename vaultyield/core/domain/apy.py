"""
APY — Производные модели расчёта объёмов и доходности

Immutable Pydantic модели результатов движка:
- VaultVolume: объёмы хранилища в нативных decimals токена
- TokenVaultAPY: капитал, net volume и APY хранилища в 18-decimal
- DenominatedAPY: комбинированный APY ордера, выраженный в одном токене
- OrderAPY: итоговая запись по ордеру
- TokenPair: направленный ключ (input токен, output токен) для курсов

Все 256-битные значения при JSON сериализации выводятся десятичными строками,
ключи — в camelCase.
"""

from typing import Any

from pydantic import Field, field_serializer

from vaultyield.core.domain.erc20 import Erc20, RecordModel


# =============================================================================
# VOLUME
# =============================================================================


class VaultVolume(RecordModel):
    """
    Объёмы хранилища (vault id, token) по списку сделок.

    Все суммы в нативных decimals токена (ещё не нормализованы).
    """

    id: str = Field(..., description="Vault id")
    token: Erc20 = Field(..., description="Токен хранилища")
    total_in: int = Field(0, ge=0, description="Суммарный приток")
    total_out: int = Field(0, ge=0, description="Суммарный отток")
    total_vol: int = Field(0, ge=0, description="Суммарный объём (приток + отток)")
    net_vol: int = Field(0, description="Net volume (приток - отток)")

    @field_serializer("total_in", "total_out", "total_vol", "net_vol", when_used="json")
    def _serialize_wide_int(self, value: int) -> str:
        return str(value)


# =============================================================================
# APY
# =============================================================================


class TokenVaultAPY(RecordModel):
    """
    APY хранилища.

    net_vol, capital и apy — в канонических единицах (18-decimal).
    apy отсутствует (None), если стартовый капитал равен нулю или
    деление не определено.
    """

    id: str = Field(..., description="Vault id")
    token: Erc20 = Field(..., description="Токен хранилища")
    start_time: int = Field(..., ge=0, description="Начало окна наблюдения (секунды)")
    end_time: int = Field(..., ge=0, description="Конец окна наблюдения (секунды)")
    net_vol: int = Field(..., description="Net volume, 18-decimal")
    capital: int = Field(..., description="Стартовый капитал, 18-decimal")
    apy: int | None = Field(None, description="APY, 18-decimal")

    @field_serializer("net_vol", "capital", "apy", when_used="json")
    def _serialize_wide_int(self, value: int | None) -> str | None:
        return None if value is None else str(value)


class DenominatedAPY(RecordModel):
    """Комбинированный APY ордера, выраженный в токене `token`."""

    apy: int = Field(..., description="APY, 18-decimal")
    token: Erc20 = Field(..., description="Токен номинации")

    @field_serializer("apy", when_used="json")
    def _serialize_wide_int(self, value: int) -> str:
        return str(value)


class OrderAPY(RecordModel):
    """
    Итоговая запись APY ордера.

    start_time/end_time — min/max по всем хранилищам ордера.
    """

    order_id: str = Field(..., description="Идентификатор ордера")
    order_hash: str = Field("", description="Хэш ордера")
    denominated_apy: DenominatedAPY | None = Field(None, description="APY в выбранной номинации")
    start_time: int = Field(..., ge=0, description="Начало окна (секунды)")
    end_time: int = Field(..., ge=0, description="Конец окна (секунды)")
    inputs_token_vault_apy: list[TokenVaultAPY] = Field(default_factory=list)
    outputs_token_vault_apy: list[TokenVaultAPY] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """
        Сериализация для слоя отчётов: camelCase ключи, 256-битные значения строками.
        """
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# TOKEN PAIR
# =============================================================================


class TokenPair(RecordModel):
    """
    Направленный ключ курса: сколько `input` токенов за один `output` токен.

    Пара и обратная пара — два разных ключа.
    """

    input: Erc20
    output: Erc20

    def inverse(self) -> "TokenPair":
        return TokenPair(input=self.output, output=self.input)
