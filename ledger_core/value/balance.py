"""
Balance - 다중 commodity 잔액

commodity → Amount 매핑. 순회 순서는 commodity 생성 순서(ident)로 고정된다.
finalize 중에만 만들어지고 변경되는 임시 값이며 저장하지 않는다.
"""

from __future__ import annotations

from typing import Iterator

from ledger_core.value.amount import Amount, AmountError
from ledger_core.value.commodity import Commodity


class Balance:
    """다중 commodity 잔액

    수량이 정확히 0이 된 commodity는 매핑에서 제거된다.
    """

    def __init__(self, *amounts: Amount):
        self._amounts: dict[Commodity, Amount] = {}
        for amount in amounts:
            self._add_amount(amount)

    @property
    def amounts(self) -> list[Amount]:
        """commodity 순서로 정렬된 금액 목록"""
        return [self._amounts[c] for c in sorted(self._amounts, key=lambda c: c.ident)]

    def amount(self, commodity: Commodity) -> Amount | None:
        return self._amounts.get(commodity)

    def commodity_count(self) -> int:
        return len(self._amounts)

    def is_empty(self) -> bool:
        return not self._amounts

    def single_amount(self) -> Amount:
        """commodity가 하나일 때 그 금액

        Raises:
            ValueError: commodity가 하나가 아닌 경우
        """
        if len(self._amounts) != 1:
            raise ValueError(
                f"단일 commodity 잔액이 아닙니다 (commodity {len(self._amounts)}개)"
            )
        return next(iter(self._amounts.values()))

    def is_zero(self) -> bool:
        """모든 금액이 표시 정밀도에서 0인지"""
        return all(amount.is_zero() for amount in self._amounts.values())

    def round(self) -> Balance:
        return Balance(*(amount.round() for amount in self.amounts))

    def copy(self) -> Balance:
        return Balance(*self.amounts)

    def _add_amount(self, amount: Amount) -> None:
        if amount.is_null():
            raise AmountError("비어 있는 금액은 잔액에 더할 수 없습니다")
        existing = self._amounts.get(amount.commodity)
        total = amount if existing is None else existing + amount
        if total.is_realzero():
            self._amounts.pop(amount.commodity, None)
        else:
            self._amounts[amount.commodity] = total

    def __iadd__(self, other: Amount | Balance) -> Balance:
        if isinstance(other, Balance):
            for amount in other.amounts:
                self._add_amount(amount)
        else:
            self._add_amount(other)
        return self

    def __isub__(self, other: Amount | Balance) -> Balance:
        if isinstance(other, Balance):
            for amount in other.amounts:
                self._add_amount(-amount)
        else:
            self._add_amount(-other)
        return self

    def __add__(self, other: Amount | Balance) -> Balance:
        result = self.copy()
        result += other
        return result

    def __sub__(self, other: Amount | Balance) -> Balance:
        result = self.copy()
        result -= other
        return result

    def __neg__(self) -> Balance:
        return Balance(*(-amount for amount in self.amounts))

    def negate(self) -> Balance:
        return -self

    def __iter__(self) -> Iterator[Amount]:
        return iter(self.amounts)

    def __len__(self) -> int:
        return len(self._amounts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Amount):
            other = Balance(other)
        if not isinstance(other, Balance):
            return NotImplemented
        return self._amounts == other._amounts

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if not self._amounts:
            return "0"
        return "\n".join(str(amount) for amount in self.amounts)

    def __repr__(self) -> str:
        return f"Balance({', '.join(str(a) for a in self.amounts)})"
