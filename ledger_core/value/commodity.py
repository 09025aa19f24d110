"""
Commodity 정의

통화/주식/단위 등 금액의 "종류"를 나타낸다.
Commodity는 생성 순서(ident)로 전순서를 가지며, Balance는 이 순서로 순회한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from ledger_core.value.amount import Amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Annotation:
    """Commodity 주석 (취득 단가, 취득일, 태그)

    예: 10 AAPL {$30} [2024/01/05] (lot-1)
    """

    price: Amount | None = None
    date: date | None = None
    tag: str | None = None

    def __str__(self) -> str:
        parts = []
        if self.price is not None:
            parts.append(f"{{{self.price}}}")
        if self.date is not None:
            parts.append(f"[{self.date:%Y/%m/%d}]")
        if self.tag is not None:
            parts.append(f"({self.tag})")
        return " ".join(parts)


class Commodity:
    """Commodity (통화, 주식, 단위)

    Args:
        symbol: 표시 기호 ("$", "USD", "AAPL")
        ident: 풀 내 생성 순번 (0은 commodity 없음)
        precision: 표시 정밀도 (소수점 이하 자릿수)
        prefix: 기호를 숫자 앞에 표시할지 여부 ($100 / 100 USD)
        pool: 소속 CommodityPool
        referent: 주석 commodity의 기준 commodity
        annotation: 주석 (취득 단가 등)
    """

    def __init__(
        self,
        symbol: str,
        ident: int,
        precision: int = 0,
        prefix: bool = False,
        pool: CommodityPool | None = None,
        referent: Commodity | None = None,
        annotation: Annotation | None = None,
    ):
        self.symbol = symbol
        self.ident = ident
        self.pool = pool
        self.referent = referent
        self.annotation = annotation
        self._precision = precision
        self._prefix = prefix

        # 환전 시 기록된 가격 이력 (기록만 하고 조회하지 않음)
        self.prices: dict[date, Amount] = {}

    @property
    def annotated(self) -> bool:
        return self.annotation is not None

    @property
    def base(self) -> Commodity:
        """주석을 벗긴 기준 commodity"""
        return self.referent if self.referent is not None else self

    @property
    def base_symbol(self) -> str:
        return self.base.symbol

    @property
    def precision(self) -> int:
        """표시 정밀도 (주석 commodity는 기준 commodity를 따름)"""
        if self.referent is not None:
            return self.referent.precision
        return self._precision

    @precision.setter
    def precision(self, value: int) -> None:
        if self.referent is not None:
            self.referent.precision = value
        else:
            self._precision = value

    @property
    def prefix(self) -> bool:
        if self.referent is not None:
            return self.referent.prefix
        return self._prefix

    def add_price(self, moment: date, price: Amount) -> None:
        """환전 가격 기록"""
        self.base.prices[moment] = price
        logger.debug(f"가격 기록: {self.base_symbol} {moment} = {price}")

    def __lt__(self, other: Commodity) -> bool:
        return self.ident < other.ident

    def __str__(self) -> str:
        symbol = self.symbol
        if any(ch.isspace() or ch.isdigit() or ch in "-+.,;@{}[]()" for ch in symbol):
            return f'"{symbol}"'
        return symbol

    def __repr__(self) -> str:
        if self.annotation is not None:
            return f"Commodity({self.symbol!r}, ident={self.ident}, annotation={self.annotation})"
        return f"Commodity({self.symbol!r}, ident={self.ident})"


# commodity 없는 금액(배수 등)에 쓰는 공용 commodity
NULL_COMMODITY = Commodity("", ident=0)


class CommodityPool:
    """Commodity 생성/조회 풀

    ident는 풀 안에서 생성 순서대로 1부터 증가한다.
    주석 commodity도 별도의 ident를 받는다.
    """

    def __init__(self):
        self._commodities: dict[str, Commodity] = {}
        self._annotated: dict[tuple[str, Annotation], Commodity] = {}
        self._next_ident = 1

    def _allocate_ident(self) -> int:
        ident = self._next_ident
        self._next_ident += 1
        return ident

    def find(self, symbol: str) -> Commodity | None:
        return self._commodities.get(symbol)

    def create(self, symbol: str, precision: int = 0, prefix: bool = False) -> Commodity:
        """새 commodity 생성

        Raises:
            ValueError: 빈 기호이거나 이미 존재하는 경우
        """
        if not symbol:
            raise ValueError("commodity 기호가 비어 있습니다")
        if symbol in self._commodities:
            raise ValueError(f"이미 존재하는 commodity입니다: {symbol}")

        commodity = Commodity(
            symbol,
            ident=self._allocate_ident(),
            precision=precision,
            prefix=prefix,
            pool=self,
        )
        self._commodities[symbol] = commodity
        logger.debug(f"commodity 생성: {commodity!r}")
        return commodity

    def find_or_create(
        self,
        symbol: str,
        precision: int = 0,
        prefix: bool = False,
    ) -> Commodity:
        commodity = self.find(symbol)
        if commodity is None:
            commodity = self.create(symbol, precision=precision, prefix=prefix)
        return commodity

    def find_or_create_annotated(self, base: Commodity, annotation: Annotation) -> Commodity:
        """주석 commodity 조회 또는 생성

        Args:
            base: 기준 commodity (주석 commodity가 오면 기준으로 치환)
            annotation: 주석
        """
        base = base.base
        key = (base.symbol, annotation)
        commodity = self._annotated.get(key)
        if commodity is None:
            commodity = Commodity(
                base.symbol,
                ident=self._allocate_ident(),
                pool=self,
                referent=base,
                annotation=annotation,
            )
            self._annotated[key] = commodity
            logger.debug(f"주석 commodity 생성: {commodity!r}")
        return commodity

    def __iter__(self) -> Iterator[Commodity]:
        return iter(self._commodities.values())

    def __len__(self) -> int:
        return len(self._commodities)


@dataclass(frozen=True)
class ExchangeResult:
    """exchange() 결과

    - annotated_amount: 취득 단가 주석이 붙은 금액
    - final_cost: 이번 거래의 총 비용
    - basis_cost: 취득 원가 기준 비용 (기존 주석 단가 × 수량, 없으면 final_cost)
    """

    annotated_amount: Amount
    final_cost: Amount
    basis_cost: Amount


def exchange(
    amount: Amount,
    total_cost: Amount,
    moment: date | None = None,
    tag: str | None = None,
) -> ExchangeResult:
    """금액을 총 비용으로 환전하고 원가 기준을 계산

    Args:
        amount: 환전 대상 금액 (주석 commodity일 수 있음)
        total_cost: 총 비용 (다른 commodity)
        moment: 거래일 (있으면 가격 이력에 기록)
        tag: 주석 태그 (보통 분개 코드)

    Returns:
        ExchangeResult
    """
    commodity = amount.commodity
    current_annotation = commodity.annotation

    per_unit_cost = abs(total_cost / amount)

    if (
        moment is not None
        and not per_unit_cost.is_realzero()
        and per_unit_cost.commodity.base_symbol != commodity.base_symbol
    ):
        commodity.add_price(moment, per_unit_cost)

    annotated_amount = amount.strip_annotations().annotate(
        Annotation(price=per_unit_cost, date=moment, tag=tag)
    )

    if current_annotation is not None and current_annotation.price is not None:
        basis_cost = current_annotation.price * amount
    else:
        basis_cost = total_cost

    return ExchangeResult(
        annotated_amount=annotated_amount,
        final_cost=total_cost,
        basis_cost=basis_cost,
    )
