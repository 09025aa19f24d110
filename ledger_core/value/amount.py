"""
Amount - 단일 commodity 금액

수량(Decimal)과 commodity의 쌍. 수량이 None이면 "비어 있는"(null) 금액으로,
finalize 과정에서 역산되어야 하는 값임을 뜻한다.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DecimalException,
    InvalidOperation,
    getcontext,
)
from typing import Any, Callable

from ledger_core.value.commodity import NULL_COMMODITY, Annotation, Commodity, CommodityPool


class AmountError(ValueError):
    """금액 연산 오류"""

    pass


_SYMBOL = r'(?:"[^"]+"|[^\s\d.,{}()\[\]@;+\-"]+)'

_AMOUNT_RE = re.compile(
    rf"""^\s*
    (?P<sign>-)?\s*
    (?:(?P<prefix>{_SYMBOL})\s*)?
    (?P<qsign>-)?
    (?P<number>\d[\d,]*(?:\.\d*)?|\.\d+)
    (?:\s*(?P<suffix>{_SYMBOL}))?
    \s*(?:\{{(?P<price>[^}}]*)\}})?
    \s*$""",
    re.VERBOSE,
)


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise AmountError(f"숫자로 변환할 수 없습니다: {value!r}") from e


def _digits(quantity: Decimal) -> int:
    """정수부 + 소수부 자릿수"""
    if not quantity.is_finite():
        return 1
    return max(quantity.adjusted(), 0) + max(-quantity.as_tuple().exponent, 0) + 1


def _operation_context(*quantities: Decimal) -> Context:
    """피연산자 자릿수만큼 정밀도를 넓힌 context

    기본 28자리로는 소수점 18자리 commodity의 큰 수량이 잘린다.
    """
    context = getcontext().copy()
    context.prec += sum(_digits(quantity) for quantity in quantities)
    return context


def _apply(operation: Callable[..., Decimal], *args: Any, **kwargs: Any) -> Decimal:
    try:
        return operation(*args, **kwargs)
    except DecimalException as e:
        raise AmountError(f"금액 연산 실패: {e!r}") from e


@dataclass(frozen=True)
class Amount:
    """단일 commodity 금액 (불변)

    곱셈/나눗셈 결과는 왼쪽 피연산자의 commodity를 따른다.
    왼쪽에 commodity가 없으면 오른쪽 것을 사용한다.
    예: $200 * 0.1 = $20, 150 USD * -2 AAPL = -300 USD
    """

    quantity: Decimal | None = None
    commodity: Commodity = NULL_COMMODITY

    def __post_init__(self) -> None:
        if self.quantity is not None and not isinstance(self.quantity, Decimal):
            object.__setattr__(self, "quantity", _to_decimal(self.quantity))

    @classmethod
    def null(cls) -> Amount:
        """비어 있는 금액"""
        return cls()

    @classmethod
    def parse(cls, text: str, pool: CommodityPool) -> Amount:
        """문자열에서 금액 생성

        지원 형식: "$100", "-$1,000.50", "$-5", "100 USD", "-2 AAPL",
        "10 AAPL {$30}", "0.1"
        처음 보는 기호는 pool에 생성되고, 소수점 자릿수만큼 표시 정밀도가 넓어진다.

        Raises:
            AmountError: 형식이 잘못된 경우
        """
        match = _AMOUNT_RE.match(text)
        if match is None:
            raise AmountError(f"금액을 해석할 수 없습니다: {text!r}")

        prefix_symbol = match.group("prefix")
        suffix_symbol = match.group("suffix")
        if prefix_symbol and suffix_symbol:
            raise AmountError(f"commodity 기호가 두 개입니다: {text!r}")

        number = match.group("number").replace(",", "")
        decimals = len(number.split(".", 1)[1]) if "." in number else 0
        quantity = _to_decimal(number)
        if bool(match.group("sign")) != bool(match.group("qsign")):
            quantity = -quantity

        symbol = prefix_symbol or suffix_symbol
        if symbol is None:
            amount = cls(quantity)
        else:
            symbol = symbol.strip('"')
            commodity = pool.find_or_create(symbol, prefix=prefix_symbol is not None)
            if decimals > commodity.precision:
                commodity.precision = decimals
            amount = cls(quantity, commodity)

        price_text = match.group("price")
        if price_text is not None:
            amount = amount.annotate(Annotation(price=cls.parse(price_text, pool)))
        return amount

    # ------------------------------------------------------------------
    # 상태
    # ------------------------------------------------------------------
    def is_null(self) -> bool:
        return self.quantity is None

    def has_commodity(self) -> bool:
        return self.commodity is not NULL_COMMODITY

    @property
    def commodity_annotated(self) -> bool:
        return self.commodity.annotated

    @property
    def annotation(self) -> Annotation | None:
        return self.commodity.annotation

    def is_realzero(self) -> bool:
        """수량이 정확히 0인지"""
        return self._require("비교").quantity == 0

    def is_zero(self) -> bool:
        """표시 정밀도로 반올림했을 때 0인지"""
        return self.round().quantity == 0

    def sign(self) -> int:
        quantity = self._require("비교").quantity
        return (quantity > 0) - (quantity < 0)

    # ------------------------------------------------------------------
    # 연산
    # ------------------------------------------------------------------
    def _require(self, op: str) -> Amount:
        if self.quantity is None:
            raise AmountError(f"비어 있는 금액으로 {op} 연산을 할 수 없습니다")
        return self

    @staticmethod
    def _coerce(other: object) -> Amount:
        if isinstance(other, Amount):
            return other
        if isinstance(other, (int, Decimal, str)):
            return Amount(_to_decimal(other))
        raise TypeError(f"Amount와 연산할 수 없는 타입입니다: {type(other).__name__}")

    def _same_commodity(self, other: Amount, op: str) -> None:
        if self.commodity is not other.commodity:
            raise AmountError(
                f"서로 다른 commodity의 금액은 {op}할 수 없습니다: {self} / {other}"
            )

    def _result_commodity(self, other: Amount) -> Commodity:
        return self.commodity if self.has_commodity() else other.commodity

    def __add__(self, other: Amount) -> Amount:
        other = self._coerce(other)
        self._require("덧셈")
        other._require("덧셈")
        self._same_commodity(other, "더")
        context = _operation_context(self.quantity, other.quantity)
        return Amount(_apply(context.add, self.quantity, other.quantity), self.commodity)

    def __sub__(self, other: Amount) -> Amount:
        other = self._coerce(other)
        self._require("뺄셈")
        other._require("뺄셈")
        self._same_commodity(other, "빼")
        context = _operation_context(self.quantity, other.quantity)
        return Amount(_apply(context.subtract, self.quantity, other.quantity), self.commodity)

    def __mul__(self, other: Amount | int | Decimal) -> Amount:
        other = self._coerce(other)
        self._require("곱셈")
        other._require("곱셈")
        context = _operation_context(self.quantity, other.quantity)
        return Amount(
            _apply(context.multiply, self.quantity, other.quantity),
            self._result_commodity(other),
        )

    def __rmul__(self, other: int | Decimal) -> Amount:
        return self._coerce(other) * self

    def __truediv__(self, other: Amount | int | Decimal) -> Amount:
        other = self._coerce(other)
        self._require("나눗셈")
        other._require("나눗셈")
        if other.quantity == 0:
            raise AmountError("0으로 나눌 수 없습니다")
        context = _operation_context(self.quantity, other.quantity)
        return Amount(
            _apply(context.divide, self.quantity, other.quantity),
            self._result_commodity(other),
        )

    def __neg__(self) -> Amount:
        self._require("부호 반전")
        return Amount(self.quantity.copy_negate(), self.commodity)

    def negate(self) -> Amount:
        return -self

    def __abs__(self) -> Amount:
        self._require("절댓값")
        return Amount(self.quantity.copy_abs(), self.commodity)

    def round(self) -> Amount:
        """commodity 표시 정밀도로 반올림 (commodity 없으면 그대로)"""
        self._require("반올림")
        if not self.has_commodity():
            return self
        precision = self.commodity.precision
        exponent = Decimal(1).scaleb(-precision)
        context = getcontext().copy()
        context.prec = max(context.prec, max(self.quantity.adjusted(), 0) + precision + 2)
        context.rounding = ROUND_HALF_UP
        return Amount(_apply(self.quantity.quantize, exponent, context=context), self.commodity)

    # ------------------------------------------------------------------
    # 주석
    # ------------------------------------------------------------------
    def annotate(self, annotation: Annotation) -> Amount:
        """주석 commodity로 바꾼 금액 반환"""
        if not self.has_commodity():
            raise AmountError("commodity 없는 금액에는 주석을 붙일 수 없습니다")
        pool = self.commodity.pool
        assert pool is not None
        annotated = pool.find_or_create_annotated(self.commodity, annotation)
        return Amount(self.quantity, annotated)

    def strip_annotations(self) -> Amount:
        if not self.commodity.annotated:
            return self
        return Amount(self.quantity, self.commodity.base)

    # ------------------------------------------------------------------
    # 표시
    # ------------------------------------------------------------------
    def _format_quantity(self) -> str:
        if not self.has_commodity():
            return format(self.quantity.normalize(), "f")
        precision = self.commodity.precision
        return f"{self.round().quantity:,.{precision}f}"

    def __str__(self) -> str:
        if self.quantity is None:
            return ""
        quantity = self._format_quantity()
        if not self.has_commodity():
            return quantity
        symbol = str(self.commodity.base)
        text = f"{symbol}{quantity}" if self.commodity.prefix else f"{quantity} {symbol}"
        if self.commodity.annotation is not None:
            text = f"{text} {self.commodity.annotation}"
        return text
