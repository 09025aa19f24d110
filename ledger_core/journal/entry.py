"""
분개 (Entry)

분개 라인(Xact)의 순서 있는 묶음. finalize()가 비어 있는 금액을 역산하고,
commodity 간 환율/취득 원가를 계산한 뒤 합계가 0인지 검증한다.

사용 예시:
```python
entry = Entry(date=date(2024, 1, 5), payee="Grocery")
entry.add_xact(Xact(expenses, Amount.parse("$100", pool)))
entry.add_xact(Xact(checking))  # 금액 비어 있음 → $-100으로 역산
entry.finalize()
```
"""

from __future__ import annotations

import logging
import weakref
from datetime import date
from typing import TYPE_CHECKING, Any, Callable

from ledger_core.journal.errors import (
    AmbiguousNullError,
    BalanceError,
    EntryContext,
    ValueContext,
)
from ledger_core.journal.format import STATE_MARKS
from ledger_core.journal.xact import SourcePosition, Xact
from ledger_core.types import Ownership, XactFlag, XactState
from ledger_core.value.amount import Amount
from ledger_core.value.balance import Balance
from ledger_core.value.commodity import exchange

if TYPE_CHECKING:
    from ledger_core.journal.journal import Journal

logger = logging.getLogger(__name__)


class EntryBase:
    """분개 기본 클래스

    Entry(일반 분개)와 AutoEntry(자동 분개)의 공통 부분.

    Args:
        journal: 소속 장부 (약한 참조로 보관)
        position: 원본 위치
    """

    def __init__(
        self,
        journal: Journal | None = None,
        position: SourcePosition | None = None,
    ):
        self.xacts: list[Xact] = []
        self.position = position
        self._journal_ref: weakref.ref[Journal] | None = None
        self.journal = journal

    @property
    def journal(self) -> Journal | None:
        if self._journal_ref is None:
            return None
        return self._journal_ref()

    @journal.setter
    def journal(self, journal: Journal | None) -> None:
        self._journal_ref = weakref.ref(journal) if journal is not None else None

    # ------------------------------------------------------------------
    # 하위 클래스가 제공하는 값
    # ------------------------------------------------------------------
    @property
    def actual_date(self) -> date | None:
        return None

    @property
    def effective_date(self) -> date | None:
        return None

    @property
    def code_tag(self) -> str | None:
        """exchange()에 넘길 태그 (분개 코드가 있는 경우만)"""
        return None

    def describe_header(self) -> str | None:
        return None

    # ------------------------------------------------------------------
    # 분개 라인 관리
    # ------------------------------------------------------------------
    def add_xact(self, xact: Xact) -> None:
        self.xacts.append(xact)

    def remove_xact(self, xact: Xact) -> bool:
        """분개 라인 제거 (동일 객체 기준)

        Returns:
            제거되었으면 True
        """
        for index, candidate in enumerate(self.xacts):
            if candidate is xact:
                del self.xacts[index]
                return True
        return False

    def _copy_xacts_from(self, other: EntryBase) -> None:
        for xact in other.xacts:
            self.add_xact(xact.copy())

    def copy(self) -> EntryBase:
        """모든 분개 라인을 깊은 복사한 새 분개 (장부 연결은 복사하지 않음)"""
        clone = EntryBase(position=self.position)
        clone._copy_xacts_from(self)
        return clone

    def dispose(self) -> None:
        """분개 정리 - 각 라인의 소유권에 따라 처리"""
        for xact in self.xacts:
            if xact.ownership == Ownership.OWNED:
                xact.release()
            elif xact.ownership == Ownership.BORROWED_FROM_CACHE:
                xact.detach()
            # BORROWED_FROM_CALLER: 호출자가 정리
        self.xacts.clear()

    # ------------------------------------------------------------------
    # 균형 처리
    # ------------------------------------------------------------------
    def _line_range(self) -> str:
        if self.position is None:
            return "beg ? end ?"
        return f"beg {self.position.beg_line} end {self.position.end_line}"

    def finalize(self) -> bool:
        """비어 있는 금액을 역산하고 분개 균형을 검증

        1. 균형 대상 라인의 (cost 또는 amount) 합계 계산
        2. 라인이 하나뿐이면 장부의 basket 계정으로 자동 균형 라인 추가
        3. 비어 있는 라인에 잔액의 음수를 채움 (commodity가 여럿이면 라인 분할)
        4. 비어 있는 라인이 없고 commodity가 정확히 둘이면 환율을 구해 cost 지정
        5. cost가 있는 라인의 취득 원가 주석/손익 반영
        6. 반올림 후 잔액이 0이 아니면 BalanceError

        Returns:
            True (성공)

        Raises:
            AmbiguousNullError: 비어 있는 라인이 둘 이상
            BalanceError: 최종 잔액이 0이 아님
        """
        balance = Balance()
        null_xact: Xact | None = None

        for xact in self.xacts:
            if not xact.must_balance():
                continue
            value = xact.cost if xact.cost is not None else xact.amount
            if not value.is_null():
                balance += value
            elif null_xact is not None:
                raise AmbiguousNullError(
                    "분개당 금액이 비어 있는 라인은 하나만 허용됩니다 "
                    f"({self._line_range()})",
                    EntryContext(self, "While balancing entry:"),
                )
            else:
                null_xact = xact

        logger.debug(f"초기 잔액 = {balance!r}")

        # 라인이 하나뿐이면 basket 계정으로 균형을 맞춘다
        journal = self.journal
        if journal is not None and journal.basket is not None and len(self.xacts) == 1:
            null_xact = Xact(journal.basket, flags={XactFlag.GENERATED})
            null_xact.state = self.xacts[0].state
            self.add_xact(null_xact)

        if null_xact is not None:
            # 비어 있는 라인은 나머지 합계의 음수가 된다.
            # commodity가 여럿이면 commodity마다 라인을 하나씩 만든다.
            if balance.commodity_count() > 1:
                for index, amount in enumerate(balance.amounts):
                    if index == 0:
                        null_xact.amount = -amount
                    else:
                        self.add_xact(
                            Xact(null_xact.account, -amount, {XactFlag.GENERATED})
                        )
            elif balance.commodity_count() == 1:
                null_xact.amount = -balance.single_amount()
                null_xact.add_flags(XactFlag.CALCULATED)
            else:
                null_xact.amount = Amount(0)
                null_xact.add_flags(XactFlag.CALCULATED)

            balance = Balance()

        elif balance.commodity_count() == 2:
            # 두 commodity가 섞인 분개는 총액 비율로 단가를 정한다.
            x, y = balance.amounts

            if not y.is_realzero():
                per_unit_cost = abs(x / y)
                commodity = x.commodity

                for xact in self.xacts:
                    if (
                        xact.cost is not None
                        or not xact.must_balance()
                        or xact.amount.commodity is commodity
                    ):
                        continue

                    logger.debug(f"cost 지정 전 잔액 = {balance!r}")
                    balance -= xact.amount
                    xact.cost = per_unit_cost * xact.amount
                    balance += xact.cost
                    logger.debug(
                        f"amount = {xact.amount}, per_unit_cost = {per_unit_cost}, "
                        f"cost = {xact.cost}, 잔액 = {balance!r}"
                    )

            logger.debug(f"환율 적용 후 잔액 = {balance!r}")

        # 라인 목록이 확정된 뒤 취득 원가 기준으로 손익을 반영한다
        for xact in self.xacts:
            if xact.cost is None:
                continue

            amount = xact.amount
            assert amount.commodity is not xact.cost.commodity

            result = exchange(amount, xact.cost, xact.effective_date, self.code_tag)

            if amount.commodity_annotated:
                annotation = amount.annotation
                if annotation is not None and annotation.price is not None:
                    balance += result.basis_cost - result.final_cost
            else:
                xact.amount = result.annotated_amount

        logger.debug(f"최종 잔액 = {balance!r}")

        if not balance.is_empty():
            remainder = balance.round()
            if not remainder.is_zero():
                raise BalanceError(
                    "분개가 균형을 이루지 않습니다",
                    remainder,
                    ValueContext(remainder, "Unbalanced remainder is:"),
                    EntryContext(self, "While balancing entry:"),
                )

        return True


class Entry(EntryBase):
    """일반 분개 (날짜, 코드, 거래처 포함)

    Args:
        date: 거래일
        payee: 거래처
        code: 분개 코드 (수표 번호 등)
        date_eff: 유효일
        journal: 소속 장부
        position: 원본 위치
    """

    def __init__(
        self,
        date: date | None = None,
        payee: str = "",
        code: str | None = None,
        date_eff: date | None = None,
        journal: Journal | None = None,
        position: SourcePosition | None = None,
    ):
        super().__init__(journal=journal, position=position)
        self.date = date
        self.date_eff = date_eff
        self.code = code
        self.payee = payee

    @property
    def actual_date(self) -> date | None:
        return self.date

    @property
    def effective_date(self) -> date | None:
        return self.date_eff

    @property
    def code_tag(self) -> str | None:
        return self.code

    def describe_header(self) -> str:
        header = f"{self.date:%Y/%m/%d}" if self.date is not None else "????/??/??"
        if self.date_eff is not None:
            header += f"={self.date_eff:%Y/%m/%d}"
        state = self.get_state()
        if state is not None and STATE_MARKS[state]:
            header += f" {STATE_MARKS[state].strip()}"
        if self.code:
            header += f" ({self.code})"
        if self.payee:
            header += f" {self.payee}"
        return header

    def add_xact(self, xact: Xact) -> None:
        xact.entry = self
        super().add_xact(xact)

    def remove_xact(self, xact: Xact) -> bool:
        removed = super().remove_xact(xact)
        if removed and xact.entry is self:
            xact.entry = None
        return removed

    def copy(self) -> Entry:
        """깊은 복사 - 복사된 라인은 모두 새 분개를 가리킨다"""
        clone = Entry(
            date=self.date,
            payee=self.payee,
            code=self.code,
            date_eff=self.date_eff,
            position=self.position,
        )
        clone._copy_xacts_from(self)
        return clone

    def get_state(self) -> XactState | None:
        """모든 라인이 같은 정산 상태면 그 상태, 섞여 있거나 라인이 없으면 None"""
        states = {xact.state for xact in self.xacts}
        if len(states) != 1:
            return None
        return states.pop()

    # ------------------------------------------------------------------
    # 표현식 평가기용 이름 조회
    # ------------------------------------------------------------------
    def _get_date(self) -> date | None:
        return self.date

    def _get_payee(self) -> str:
        return self.payee

    def lookup(self, name: str) -> Callable[[], Any] | None:
        """이름으로 접근자 조회

        "d"/"date" → 거래일, "p"/"payee" → 거래처.
        그 외 이름은 None을 반환해 평가기가 바깥 스코프에서 계속 찾게 한다.
        """
        if name in ("d", "date"):
            return self._get_date
        if name in ("p", "payee"):
            return self._get_payee
        return None

    def valid(self) -> bool:
        if self.date is None or self.journal is None:
            logger.debug("분개 검증 실패: 날짜 또는 장부 없음")
            return False

        for xact in self.xacts:
            if xact.entry is not self or not xact.valid():
                logger.debug("분개 검증 실패: 라인이 유효하지 않음")
                return False

        return True
