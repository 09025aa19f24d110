"""
계정 트리

"Assets:Bank:Checking" 형태의 계층 계정. 분개는 계정을 참조만 하고 소유하지 않는다.
"""

from __future__ import annotations

import logging

from ledger_core.constants import Defaults

logger = logging.getLogger(__name__)


class Account:
    """계정

    Args:
        name: 계정 이름 (한 단계, 예: "Checking")
        parent: 상위 계정 (None이면 루트)
        note: 메모
    """

    def __init__(
        self,
        name: str = "",
        parent: Account | None = None,
        note: str | None = None,
    ):
        self.name = name
        self.parent = parent
        self.note = note
        self.depth = parent.depth + 1 if parent is not None else 0
        self.accounts: dict[str, Account] = {}

    @property
    def fullname(self) -> str:
        """루트를 제외한 전체 경로"""
        names = []
        account: Account | None = self
        while account is not None and account.parent is not None:
            names.append(account.name)
            account = account.parent
        if account is not None and account.name:
            names.append(account.name)
        return Defaults.ACCOUNT_SEPARATOR.join(reversed(names))

    def add_account(self, account: Account) -> None:
        account.parent = self
        account.depth = self.depth + 1
        self.accounts[account.name] = account

    def remove_account(self, account: Account) -> bool:
        if self.accounts.get(account.name) is not account:
            return False
        del self.accounts[account.name]
        return True

    def find_account(self, name: str, auto_create: bool = True) -> Account | None:
        """하위 계정 조회 (경로 단위로 재귀)

        Args:
            name: "Assets:Bank" 형태의 상대 경로
            auto_create: 없으면 생성할지 여부

        Returns:
            Account 또는 None (auto_create=False이고 없을 때)
        """
        first, _, rest = name.partition(Defaults.ACCOUNT_SEPARATOR)
        if not first:
            raise ValueError(f"잘못된 계정 이름입니다: {name!r}")

        account = self.accounts.get(first)
        if account is None:
            if not auto_create:
                return None
            account = Account(first, parent=self)
            self.accounts[first] = account
            logger.debug(f"계정 생성: {account.fullname}")

        if rest:
            return account.find_account(rest, auto_create)
        return account

    def valid(self) -> bool:
        if self.depth > 256:
            logger.debug(f"계정 깊이 초과: {self.fullname}")
            return False
        for child in self.accounts.values():
            if child.parent is not self or not child.valid():
                logger.debug(f"하위 계정 불일치: {child.fullname}")
                return False
        return True

    def __str__(self) -> str:
        return self.fullname

    def __repr__(self) -> str:
        return f"Account({self.fullname!r})"
