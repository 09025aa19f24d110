"""
자동 분개 (AutoEntry)

조건(predicate)에 맞는 분개 라인이 있으면 템플릿 라인을 대상 분개에 추가한다.

- commodity가 있는 템플릿 금액: 그대로 사용 (균형 처리 전, pre 단계)
- commodity가 없는 템플릿 금액: 매칭된 라인 금액에 곱하는 배수 (균형 처리 후, post 단계)

사용 예시:
```python
auto = AutoEntry("^Expenses:Food")
auto.add_xact(Xact(journal.find_account("$account"), Amount.parse("0.1", pool)))
auto.add_xact(Xact(journal.find_account("Budget:Food"), Amount.parse("-0.1", pool)))
journal.add_auto_entry(auto)
```
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Callable, Iterable

from ledger_core.constants import Defaults
from ledger_core.journal.entry import EntryBase
from ledger_core.journal.xact import SourcePosition, Xact
from ledger_core.types import XactFlag

if TYPE_CHECKING:
    from ledger_core.journal.journal import Journal

logger = logging.getLogger(__name__)

XactPredicate = Callable[[Xact], bool]


class AccountMatcher:
    """계정 전체 이름 정규식 조건 (대소문자 무시)"""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._regex = re.compile(pattern, re.IGNORECASE)

    def __call__(self, xact: Xact) -> bool:
        if xact.account is None:
            return False
        return self._regex.search(xact.account.fullname) is not None

    def __str__(self) -> str:
        return f"/{self.pattern}/"


def account_matches(pattern: str) -> AccountMatcher:
    return AccountMatcher(pattern)


class AutoEntry(EntryBase):
    """자동 분개

    Args:
        predicate: 분개 라인 조건 (문자열이면 계정 정규식)
        journal: 소속 장부
        position: 원본 위치
    """

    def __init__(
        self,
        predicate: XactPredicate | str,
        journal: Journal | None = None,
        position: SourcePosition | None = None,
    ):
        super().__init__(journal=journal, position=position)
        if isinstance(predicate, str):
            predicate = account_matches(predicate)
        self.predicate = predicate

    def describe_header(self) -> str:
        return f"= {self.predicate}"

    def copy(self) -> AutoEntry:
        """같은 조건을 가진 깊은 복사 (장부 연결은 복사하지 않음)"""
        clone = AutoEntry(self.predicate, position=self.position)
        clone._copy_xacts_from(self)
        return clone

    def extend_entry(
        self,
        entry: EntryBase,
        post: bool,
        placeholders: Iterable[str] = Defaults.PLACEHOLDER_ACCOUNTS,
    ) -> None:
        """대상 분개에 템플릿 라인 추가

        확장 시작 시점의 라인만 조건 검사 대상이다 (추가된 라인은 다시 매칭하지 않음).
        (매칭된 라인, 템플릿 라인) 쌍마다 한 번씩 추가된다.

        Args:
            entry: 대상 분개
            post: True면 균형 처리 후 단계 (배수 템플릿만 적용)
            placeholders: 매칭된 라인의 계정으로 치환할 예약 계정명
        """
        placeholders = tuple(placeholders)
        initial_xacts = list(entry.xacts)

        for matched in initial_xacts:
            if not self.predicate(matched):
                continue

            for template in self.xacts:
                assert not template.amount.is_null()

                if not template.amount.has_commodity():
                    if not post:
                        continue
                    assert not matched.amount.is_null()
                    amount = matched.amount * template.amount
                else:
                    if post:
                        continue
                    amount = template.amount

                account = template.account
                assert account is not None and account.fullname
                if account.fullname in placeholders:
                    account = matched.account

                xact = Xact(
                    account,
                    amount,
                    template.flags | {XactFlag.AUTO},
                    state=template.state,
                    note=template.note,
                    date=template.date,
                    date_eff=template.date_eff,
                    position=template.position,
                )
                entry.add_xact(xact)
                logger.debug(f"자동 분개 라인 추가: {xact!r} ({self.predicate})")


def extend_entry_base(journal: Journal, entry: EntryBase, post: bool) -> None:
    """장부에 등록된 모든 자동 분개를 대상 분개에 적용"""
    for auto_entry in journal.auto_entries:
        auto_entry.extend_entry(entry, post, journal.placeholder_accounts)
