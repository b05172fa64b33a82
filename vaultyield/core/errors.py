"""
Errors — Таксономия ошибок движка

Ошибки пробрасываются вызывающему коду и прерывают весь расчёт.
Неразрешимые конверсии и неопределённые деления ошибками НЕ являются:
они представлены отсутствующим (None) значением в результате.
"""


class ApyCalculationError(Exception):
    """Базовая ошибка расчёта объёмов и APY."""

    pass


class MalformedInputError(ApyCalculationError, ValueError):
    """
    Поле записи (timestamp, amount, balance, decimals) не является целым числом.

    Ошибка прерывает весь расчёт для данного вызова.
    """

    pass


class TradeOrderingViolation(MalformedInputError):
    """
    Список сделок не отсортирован по убыванию timestamp.

    Выбор первой сделки хранилища и последней сделки первых суток
    опирается на порядок списка, поэтому нарушение порядка — ошибка входа.
    """

    def __init__(self, index: int, previous_ts: int, current_ts: int):
        self.index = index
        self.previous_ts = previous_ts
        self.current_ts = current_ts
        super().__init__(
            f"Trades must be sorted by descending timestamp: trade #{index} "
            f"has timestamp {current_ts} > previous {previous_ts}"
        )


class VaultTradesNotFound(ApyCalculationError):
    """Для VaultVolume не найдено ни одной сделки (нарушение входного инварианта)."""

    def __init__(self, vault_id: str, token_address: str):
        self.vault_id = vault_id
        self.token_address = token_address
        super().__init__(
            f"No trades found for vault {vault_id} (token {token_address})"
        )
