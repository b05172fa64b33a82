"""
Erc20 — Модель токена

Immutable Pydantic модель токена в том виде, в котором её отдаёт индексатор
(camelCase JSON). Два токена равны, только если равны все поля записи.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _coerce_bigint(value: Any) -> Any:
    """Индексатор отдаёт BigInt строкой, но int тоже допустим на входе."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# Десятичная строка целого числа (BigInt scalar индексатора).
# Парсинг в int выполняется движком, чтобы ошибка формата была MalformedInputError.
BigIntStr = Annotated[str, BeforeValidator(_coerce_bigint)]


class RecordModel(BaseModel):
    """
    База для всех записей: immutable, camelCase алиасы, snake_case имена тоже принимаются.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Erc20(RecordModel):
    """
    Токен ERC20.

    decimals хранится строкой, как в ответе индексатора; None означает 18.
    """

    id: str = Field(..., description="Идентификатор сущности токена")
    address: str = Field(..., description="Адрес контракта токена")
    name: str | None = Field(None, description="Имя токена")
    symbol: str | None = Field(None, description="Символ токена")
    decimals: BigIntStr | None = Field(None, description="Точность токена (десятичная строка)")

    def label(self) -> str:
        """Символ для отчётов, адрес если символа нет."""
        return self.symbol or self.address
