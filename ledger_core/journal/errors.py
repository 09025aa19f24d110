"""
분개 엔진 오류

오류는 컨텍스트 목록(가장 최근 것이 앞)을 가지며,
소비자는 describe()로 원본 분개 위치를 가리키는 설명을 만든다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledger_core.journal.format import print_entry

if TYPE_CHECKING:
    from ledger_core.journal.entry import EntryBase
    from ledger_core.value.amount import Amount
    from ledger_core.value.balance import Balance


class ErrorContext:
    """오류 컨텍스트 기본 클래스"""

    def __init__(self, desc: str = ""):
        self.desc = desc

    def describe(self) -> str:
        raise NotImplementedError


class EntryContext(ErrorContext):
    """분개 컨텍스트 - 모든 분개 라인을 출력"""

    def __init__(self, entry: EntryBase, desc: str = ""):
        super().__init__(desc)
        self.entry = entry

    def describe(self) -> str:
        lines = []
        if self.desc:
            lines.append(self.desc)
        position = self.entry.position
        if position is not None:
            lines.append(f"  (lines {position.beg_line}-{position.end_line})")
        lines.append(print_entry(self.entry, "  "))
        return "\n".join(lines)


class ValueContext(ErrorContext):
    """값 컨텍스트 - Balance 또는 Amount 출력"""

    def __init__(self, value: Balance | Amount, desc: str = ""):
        super().__init__(desc)
        self.value = value

    def describe(self) -> str:
        lines = [self.desc] if self.desc else []
        lines.extend(f"  {line}" for line in str(self.value).splitlines())
        return "\n".join(lines)


class LedgerError(Exception):
    """분개 엔진 오류 기본 클래스"""

    def __init__(self, message: str, *context: ErrorContext):
        super().__init__(message)
        self.message = message
        self.context: list[ErrorContext] = list(context)

    def push_context(self, context: ErrorContext) -> None:
        self.context.insert(0, context)

    def describe(self) -> str:
        parts = [context.describe() for context in self.context]
        parts.append(f"Error: {self.message}")
        return "\n".join(parts)


class AmbiguousNullError(LedgerError):
    """한 분개에 금액이 비어 있는 분개 라인이 둘 이상"""

    pass


class BalanceError(LedgerError):
    """분개 잔액이 0이 아님

    remainder: 반올림 후 남은 잔액
    """

    def __init__(self, message: str, remainder: Balance, *context: ErrorContext):
        super().__init__(message, *context)
        self.remainder = remainder
