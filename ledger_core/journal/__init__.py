"""
분개 (Entry) 균형 처리 및 자동 분개 확장

사용 예시:
```python
from ledger_core.journal import Entry, Journal, Xact
from ledger_core.value import Amount, CommodityPool

pool = CommodityPool()
journal = Journal()

entry = Entry(date=date(2024, 1, 5), payee="Broker")
entry.add_xact(Xact(journal.find_account("Assets:Broker"), Amount.parse("-2 AAPL", pool)))
entry.add_xact(Xact(journal.find_account("Assets:Cash"), Amount.parse("300 USD", pool)))
journal.add_entry(entry)  # AAPL 라인에 cost 300 USD 지정
```
"""

from ledger_core.journal.account import Account
from ledger_core.journal.auto_entry import (
    AccountMatcher,
    AutoEntry,
    XactPredicate,
    account_matches,
    extend_entry_base,
)
from ledger_core.journal.entry import Entry, EntryBase
from ledger_core.journal.errors import (
    AmbiguousNullError,
    BalanceError,
    EntryContext,
    ErrorContext,
    LedgerError,
    ValueContext,
)
from ledger_core.journal.format import format_xact, print_entry
from ledger_core.journal.journal import Journal
from ledger_core.journal.xact import SourcePosition, Xact

__all__ = [
    # 핵심 클래스
    "Account",
    "AutoEntry",
    "Entry",
    "EntryBase",
    "Journal",
    "SourcePosition",
    "Xact",
    # 자동 분개 조건
    "AccountMatcher",
    "XactPredicate",
    "account_matches",
    "extend_entry_base",
    # 오류
    "AmbiguousNullError",
    "BalanceError",
    "EntryContext",
    "ErrorContext",
    "LedgerError",
    "ValueContext",
    # 출력
    "format_xact",
    "print_entry",
]
