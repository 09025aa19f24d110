"""
장부 (Journal)

분개와 자동 분개를 소유하는 컨테이너. basket 계정과 계정 트리를 제공한다.
분개/라인은 장부를 약한 참조로만 가리킨다.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ledger_core.config.loader import LedgerConfig
from ledger_core.constants import Defaults
from ledger_core.journal.account import Account
from ledger_core.journal.auto_entry import AutoEntry, extend_entry_base
from ledger_core.journal.entry import Entry
from ledger_core.journal.errors import LedgerError

logger = logging.getLogger(__name__)


class Journal:
    """장부

    Args:
        basket: 라인이 하나뿐인 분개를 자동 균형할 기본 계정
        placeholder_accounts: 자동 분개 템플릿의 예약 계정명
    """

    def __init__(
        self,
        basket: Account | None = None,
        placeholder_accounts: Iterable[str] = Defaults.PLACEHOLDER_ACCOUNTS,
    ):
        self.master = Account()
        self.basket = basket
        self.placeholder_accounts = tuple(placeholder_accounts)
        self.entries: list[Entry] = []
        self.auto_entries: list[AutoEntry] = []

    @classmethod
    def from_config(cls, config: LedgerConfig) -> Journal:
        """설정으로 장부 생성 (basket 계정은 계정 트리에 생성)"""
        journal = cls(placeholder_accounts=config.placeholder_accounts)
        if config.basket_account:
            journal.basket = journal.find_account(config.basket_account)
        return journal

    def find_account(self, name: str, auto_create: bool = True) -> Account | None:
        return self.master.find_account(name, auto_create)

    # ------------------------------------------------------------------
    # 분개 등록
    # ------------------------------------------------------------------
    def add_entry(self, entry: Entry) -> bool:
        """분개 등록

        자동 분개(pre) → finalize → 자동 분개(post) 순서로 처리한다.
        실패하면 장부 연결을 끊고 오류를 그대로 올린다.

        Raises:
            LedgerError: 균형 처리 실패
            AmountError: 금액 연산 실패 (ValueError 하위 클래스)
            ValueError, ArithmeticError: 그 밖의 값 오류
        """
        entry.journal = self

        try:
            extend_entry_base(self, entry, False)
            entry.finalize()
            extend_entry_base(self, entry, True)
        except (LedgerError, ValueError, ArithmeticError) as e:
            entry.journal = None
            logger.warning(f"분개 등록 실패: {entry.describe_header()} ({e})")
            raise

        self.entries.append(entry)
        logger.debug(f"분개 등록: {entry.describe_header()} (라인 {len(entry.xacts)}개)")
        return True

    def remove_entry(self, entry: Entry) -> bool:
        for index, candidate in enumerate(self.entries):
            if candidate is entry:
                del self.entries[index]
                entry.journal = None
                return True
        return False

    def add_auto_entry(self, auto_entry: AutoEntry) -> None:
        auto_entry.journal = self
        self.auto_entries.append(auto_entry)

    def remove_auto_entry(self, auto_entry: AutoEntry) -> bool:
        for index, candidate in enumerate(self.auto_entries):
            if candidate is auto_entry:
                del self.auto_entries[index]
                auto_entry.journal = None
                return True
        return False

    def valid(self) -> bool:
        if not self.master.valid():
            logger.debug("장부 검증 실패: 계정 트리")
            return False
        for entry in self.entries:
            if not entry.valid():
                logger.debug(f"장부 검증 실패: {entry.describe_header()}")
                return False
        return True
