"""
Order — Модель ордера

Immutable Pydantic модель ордера: набор input хранилищ и набор output
хранилищ, каждое помечено токеном и vault id.
"""

from pydantic import Field

from vaultyield.core.domain.erc20 import BigIntStr, Erc20, RecordModel


class Vault(RecordModel):
    """Хранилище ордера."""

    id: str = Field("", description="Идентификатор сущности хранилища")
    vault_id: BigIntStr = Field(..., description="Идентификатор хранилища (vault id)")
    token: Erc20 = Field(..., description="Токен хранилища")
    owner: str | None = Field(None, description="Владелец хранилища")
    balance: BigIntStr | None = Field(None, description="Текущий баланс (нативные decimals)")


class Order(RecordModel):
    """
    Модель ордера.

    Движок только читает ордер: сопоставляет его input/output хранилища
    с хранилищами, найденными в истории сделок.
    """

    id: str = Field(..., description="Идентификатор ордера")
    order_hash: str = Field("", description="Хэш ордера")
    owner: str | None = Field(None, description="Владелец ордера")
    active: bool | None = Field(None, description="Активен ли ордер")
    inputs: list[Vault] = Field(default_factory=list, description="Input хранилища")
    outputs: list[Vault] = Field(default_factory=list, description="Output хранилища")

    def has_input(self, vault_id: str, token: Erc20) -> bool:
        return any(v.vault_id == vault_id and v.token == token for v in self.inputs)

    def has_output(self, vault_id: str, token: Erc20) -> bool:
        return any(v.vault_id == vault_id and v.token == token for v in self.outputs)

    def tokens(self) -> list[Erc20]:
        """Уникальные токены ордера в порядке появления (сначала inputs, затем outputs)."""
        result: list[Erc20] = []
        for vault in [*self.inputs, *self.outputs]:
            if vault.token not in result:
                result.append(vault.token)
        return result
