"""
분개 출력 포맷

오류 컨텍스트에서 분개 전체를 사람이 읽을 수 있게 출력할 때 사용.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ledger_core.types import XactFlag, XactState

if TYPE_CHECKING:
    from ledger_core.journal.entry import EntryBase
    from ledger_core.journal.xact import Xact


ACCOUNT_WIDTH = 34
AMOUNT_WIDTH = 12

STATE_MARKS = {
    XactState.UNCLEARED: "",
    XactState.PENDING: "! ",
    XactState.CLEARED: "* ",
}


def format_xact(xact: Xact, prefix: str = "") -> str:
    """분개 라인 한 줄 출력

    예: "    Assets:Checking                  $-100.00"
    """
    name = xact.account.fullname if xact.account is not None else "<none>"
    if xact.has_flags(XactFlag.VIRTUAL):
        name = f"[{name}]" if xact.has_flags(XactFlag.BALANCE) else f"({name})"
    name = STATE_MARKS[xact.state] + name

    line = f"{prefix}    {name:<{ACCOUNT_WIDTH}}  {str(xact.amount):>{AMOUNT_WIDTH}}"
    if xact.cost is not None:
        line += f" @@ {xact.cost}"
    if xact.note:
        line += f"  ; {xact.note}"
    return line.rstrip()


def print_entry(entry: EntryBase, prefix: str = "") -> str:
    """분개 전체 출력 (헤더 + 모든 라인)"""
    lines = []
    header = entry.describe_header()
    if header:
        lines.append(f"{prefix}{header}")
    lines.extend(format_xact(xact, prefix) for xact in entry.xacts)
    return "\n".join(lines)
