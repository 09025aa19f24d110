"""
금액 연산 패키지

Commodity(통화/단위), Amount(단일 commodity 금액), Balance(다중 commodity 잔액)
"""

from ledger_core.value.amount import Amount, AmountError
from ledger_core.value.balance import Balance
from ledger_core.value.commodity import (
    NULL_COMMODITY,
    Annotation,
    Commodity,
    CommodityPool,
    ExchangeResult,
    exchange,
)

__all__ = [
    "Amount",
    "AmountError",
    "Balance",
    "NULL_COMMODITY",
    "Annotation",
    "Commodity",
    "CommodityPool",
    "ExchangeResult",
    "exchange",
]
