"""
분개 라인 (Xact / Posting)

하나의 계정에 대한 한 줄. 금액이 비어 있으면 finalize에서 역산된다.
소속 Entry는 약한 참조(weakref)로만 가리킨다.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterable

from ledger_core.types import Ownership, XactFlag, XactState
from ledger_core.value.amount import Amount

if TYPE_CHECKING:
    from ledger_core.journal.account import Account
    from ledger_core.journal.entry import EntryBase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourcePosition:
    """원본 장부 파일 내 위치 (진단용)"""

    beg_pos: int = 0
    beg_line: int = 0
    end_pos: int = 0
    end_line: int = 0


class Xact:
    """분개 라인

    Args:
        account: 대상 계정 (공유, 소유하지 않음)
        amount: 금액 (None이면 비어 있는 금액)
        flags: XactFlag 집합
        cost: 총 비용 (amount와 다른 commodity)
        state: 정산 상태
        ownership: Entry 정리 시 처리 방식
        note: 메모
        date: 라인 고유 거래일 (없으면 Entry 날짜)
        date_eff: 라인 고유 유효일
        position: 원본 위치
    """

    def __init__(
        self,
        account: Account | None = None,
        amount: Amount | None = None,
        flags: Iterable[XactFlag] = (),
        *,
        cost: Amount | None = None,
        state: XactState = XactState.UNCLEARED,
        ownership: Ownership = Ownership.OWNED,
        note: str | None = None,
        date: date | None = None,
        date_eff: date | None = None,
        position: SourcePosition | None = None,
    ):
        self.account = account
        self.amount = amount if amount is not None else Amount.null()
        self.cost = cost
        self.flags: set[XactFlag] = set(flags)
        self.state = state
        self.ownership = ownership
        self.note = note
        self.date = date
        self.date_eff = date_eff
        self.position = position
        self._entry_ref: weakref.ref[EntryBase] | None = None

    # ------------------------------------------------------------------
    # 소속 Entry (약한 참조)
    # ------------------------------------------------------------------
    @property
    def entry(self) -> EntryBase | None:
        if self._entry_ref is None:
            return None
        return self._entry_ref()

    @entry.setter
    def entry(self, entry: EntryBase | None) -> None:
        self._entry_ref = weakref.ref(entry) if entry is not None else None

    # ------------------------------------------------------------------
    # 플래그
    # ------------------------------------------------------------------
    def has_flags(self, *flags: XactFlag) -> bool:
        return all(flag in self.flags for flag in flags)

    def add_flags(self, *flags: XactFlag) -> None:
        self.flags.update(flags)

    def drop_flags(self, *flags: XactFlag) -> None:
        self.flags.difference_update(flags)

    def must_balance(self) -> bool:
        """균형 검증 참여 여부 (가상 분개는 BALANCE 플래그가 있을 때만)"""
        return XactFlag.VIRTUAL not in self.flags or XactFlag.BALANCE in self.flags

    # ------------------------------------------------------------------
    # 날짜
    # ------------------------------------------------------------------
    @property
    def actual_date(self) -> date | None:
        if self.date is None:
            entry = self.entry
            if entry is not None:
                return entry.actual_date
        return self.date

    @property
    def effective_date(self) -> date | None:
        if self.date_eff is not None:
            return self.date_eff
        entry = self.entry
        if entry is not None and entry.effective_date is not None:
            return entry.effective_date
        return self.actual_date

    # ------------------------------------------------------------------
    # 수명 주기
    # ------------------------------------------------------------------
    def copy(self) -> Xact:
        """복사본 생성 (소속 Entry는 호출자가 다시 연결)"""
        return Xact(
            self.account,
            self.amount,
            self.flags,
            cost=self.cost,
            state=self.state,
            note=self.note,
            date=self.date,
            date_eff=self.date_eff,
            position=self.position,
        )

    def detach(self) -> None:
        """Entry 연결만 해제"""
        self.entry = None

    def release(self) -> None:
        """완전 해제 - 모든 참조를 끊는다"""
        self.detach()
        self.account = None
        self.amount = Amount.null()
        self.cost = None

    def valid(self) -> bool:
        if self.entry is None:
            logger.debug("분개 라인 검증 실패: entry 없음")
            return False
        if self.account is None:
            logger.debug("분개 라인 검증 실패: account 없음")
            return False
        if self.amount.is_null():
            logger.debug("분개 라인 검증 실패: 금액 비어 있음")
            return False
        if self.cost is not None and self.cost.is_null():
            logger.debug("분개 라인 검증 실패: 비용 비어 있음")
            return False
        return True

    def __repr__(self) -> str:
        account = self.account.fullname if self.account is not None else None
        return f"Xact({account!r}, {self.amount!s}, cost={self.cost!s})"
