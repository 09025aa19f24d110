"""
AutoEntry 확장 테스트

pre/post 단계 구분, 배수 템플릿, 예약 계정 치환, 스냅샷 매칭
"""

from datetime import date
from decimal import Decimal

from ledger_core.journal import AutoEntry, Entry, Journal, Xact, account_matches
from ledger_core.types import XactFlag, XactState
from ledger_core.value import Amount, CommodityPool


def food_entry(journal: Journal, pool: CommodityPool) -> Entry:
    """(Expenses:Food, $200), (Assets:Checking, 비어 있음)"""
    entry = Entry(date=date(2024, 3, 1), payee="Market")
    entry.add_xact(Xact(journal.find_account("Expenses:Food"), Amount.parse("$200", pool)))
    entry.add_xact(Xact(journal.find_account("Assets:Checking")))
    return entry


def auto_xacts(entry: Entry) -> list[Xact]:
    return [xact for xact in entry.xacts if xact.has_flags(XactFlag.AUTO)]


class TestAccountMatcher:
    """계정 정규식 조건"""

    def test_search_is_case_insensitive(self, journal: Journal) -> None:
        """부분 검색, 대소문자 무시"""
        matcher = account_matches("food")

        assert matcher(Xact(journal.find_account("Expenses:Food:Lunch"))) is True
        assert matcher(Xact(journal.find_account("Assets:Checking"))) is False
        assert matcher(Xact()) is False
        assert str(matcher) == "/food/"

    def test_string_predicate_becomes_matcher(self) -> None:
        """문자열 조건은 계정 정규식으로 변환"""
        auto = AutoEntry("^Expenses")

        assert auto.describe_header() == "= /^Expenses/"


class TestAutoEntryCopy:
    """자동 분개 복사"""

    def test_copy_keeps_predicate_and_templates(
        self, journal: Journal, pool: CommodityPool
    ) -> None:
        """복사본도 AutoEntry이며 같은 조건으로 확장"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("Budget:Food"), Amount.parse("0.1", pool)))
        journal.add_auto_entry(auto)

        clone = auto.copy()

        assert isinstance(clone, AutoEntry)
        assert clone.predicate is auto.predicate
        assert clone.journal is None
        assert len(clone.xacts) == 1
        assert clone.xacts[0] is not auto.xacts[0]
        assert clone.xacts[0].account is auto.xacts[0].account

        entry = food_entry(journal, pool)
        entry.finalize()
        clone.extend_entry(entry, True)

        assert auto_xacts(entry)[0].amount == Amount(Decimal("20"), pool.find("$"))


class TestPostPass:
    """균형 처리 후 단계 (배수 템플릿)"""

    def test_multiplier_scales_matched_amount(self, journal: Journal, pool: CommodityPool) -> None:
        """$200 * 0.1 → Budget:Food $20, AUTO"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("Budget:Food"), Amount.parse("0.1", pool)))
        journal.add_auto_entry(auto)

        entry = food_entry(journal, pool)
        journal.add_entry(entry)

        added = auto_xacts(entry)
        assert len(added) == 1
        assert added[0].account.fullname == "Budget:Food"
        assert added[0].amount == Amount(Decimal("20"), pool.find("$"))
        assert str(added[0].amount) == "$20.00"
        assert added[0].entry is entry

        # 균형 처리는 자동 분개 추가 전에 끝난다
        checking = entry.xacts[1]
        assert checking.amount == Amount(Decimal("-200"), pool.find("$"))

    def test_placeholder_account_is_matched_account(
        self, journal: Journal, pool: CommodityPool
    ) -> None:
        """$account → 매칭된 라인의 계정"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("$account"), Amount.parse("0.1", pool)))
        auto.add_xact(Xact(journal.find_account("Budget:Food"), Amount.parse("-0.1", pool)))
        journal.add_auto_entry(auto)

        entry = food_entry(journal, pool)
        journal.add_entry(entry)

        added = auto_xacts(entry)
        dollar = pool.find("$")
        assert [xact.account.fullname for xact in added] == ["Expenses:Food", "Budget:Food"]
        assert [xact.amount for xact in added] == [
            Amount(Decimal("20"), dollar),
            Amount(Decimal("-20"), dollar),
        ]

    def test_commodity_template_skipped(self, journal: Journal, pool: CommodityPool) -> None:
        """commodity가 있는 템플릿은 post 단계에서 무시"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("Budget:Food"), Amount.parse("$5", pool)))
        entry = food_entry(journal, pool)
        entry.finalize()

        auto.extend_entry(entry, True)

        assert auto_xacts(entry) == []


class TestPrePass:
    """균형 처리 전 단계 (고정 금액 템플릿)"""

    def test_fixed_amount_used_verbatim(self, journal: Journal, pool: CommodityPool) -> None:
        """고정 금액 라인이 추가된 뒤 비어 있는 금액이 역산됨"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("Expenses:Tips"), Amount.parse("$5", pool)))
        journal.add_auto_entry(auto)

        entry = food_entry(journal, pool)
        journal.add_entry(entry)

        added = auto_xacts(entry)
        dollar = pool.find("$")
        assert len(added) == 1
        assert added[0].amount == Amount(Decimal("5"), dollar)
        assert entry.xacts[1].amount == Amount(Decimal("-205"), dollar)

    def test_multiplier_template_skipped(self, journal: Journal, pool: CommodityPool) -> None:
        """배수 템플릿은 pre 단계에서 무시"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("Budget:Food"), Amount.parse("0.1", pool)))
        entry = food_entry(journal, pool)

        auto.extend_entry(entry, False)

        assert auto_xacts(entry) == []


class TestExpansionSnapshot:
    """확장 시작 시점의 라인만 매칭"""

    def test_added_lines_are_not_rematched(self, journal: Journal, pool: CommodityPool) -> None:
        """추가된 라인이 조건에 맞아도 다시 확장하지 않음"""
        auto = AutoEntry("Food")
        auto.add_xact(Xact(journal.find_account("Expenses:Food:Tax"), Amount.parse("$1", pool)))
        entry = food_entry(journal, pool)

        auto.extend_entry(entry, False)

        assert len(entry.xacts) == 3
        assert len(auto_xacts(entry)) == 1

    def test_one_line_per_match_and_template(self, journal: Journal, pool: CommodityPool) -> None:
        """매칭 2개 x 템플릿 2개 → 4개 추가"""
        auto = AutoEntry("^Expenses")
        auto.add_xact(Xact(journal.find_account("$account"), Amount.parse("0.1", pool)))
        auto.add_xact(Xact(journal.find_account("Budget"), Amount.parse("-0.1", pool)))
        journal.add_auto_entry(auto)

        entry = Entry(date=date(2024, 3, 1))
        entry.add_xact(Xact(journal.find_account("Expenses:Food"), Amount.parse("$100", pool)))
        entry.add_xact(Xact(journal.find_account("Expenses:Rent"), Amount.parse("$50", pool)))
        entry.add_xact(Xact(journal.find_account("Assets:Checking")))
        journal.add_entry(entry)

        added = auto_xacts(entry)
        dollar = pool.find("$")
        assert len(entry.xacts) == 7
        assert [(xact.account.fullname, xact.amount) for xact in added] == [
            ("Expenses:Food", Amount(Decimal("10"), dollar)),
            ("Budget", Amount(Decimal("-10"), dollar)),
            ("Expenses:Rent", Amount(Decimal("5"), dollar)),
            ("Budget", Amount(Decimal("-5"), dollar)),
        ]


class TestGeneratedXact:
    """생성된 라인의 속성"""

    def test_template_fields_are_copied(self, journal: Journal, pool: CommodityPool) -> None:
        """플래그(+AUTO), 상태, 메모, 날짜가 템플릿에서 복사됨"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(
            Xact(
                journal.find_account("Budget:Food"),
                Amount.parse("-1", pool),
                {XactFlag.VIRTUAL},
                state=XactState.PENDING,
                note="envelope",
                date=date(2024, 3, 2),
                date_eff=date(2024, 3, 3),
            )
        )
        entry = food_entry(journal, pool)
        entry.finalize()

        auto.extend_entry(entry, True)

        added = auto_xacts(entry)[0]
        assert added.flags == {XactFlag.VIRTUAL, XactFlag.AUTO}
        assert added.state == XactState.PENDING
        assert added.note == "envelope"
        assert added.date == date(2024, 3, 2)
        assert added.date_eff == date(2024, 3, 3)
        assert added.amount == Amount(Decimal("-200"), pool.find("$"))

        # 템플릿 자체는 바뀌지 않음
        assert auto.xacts[0].flags == {XactFlag.VIRTUAL}

    def test_callable_predicate(self, journal: Journal, pool: CommodityPool) -> None:
        """임의의 함수 조건"""
        auto = AutoEntry(lambda xact: xact.amount.sign() < 0)
        auto.add_xact(Xact(journal.find_account("$account"), Amount.parse("0.5", pool)))
        entry = food_entry(journal, pool)
        entry.finalize()

        auto.extend_entry(entry, True)

        added = auto_xacts(entry)
        assert len(added) == 1
        assert added[0].account.fullname == "Assets:Checking"
        assert added[0].amount == Amount(Decimal("-100"), pool.find("$"))

    def test_custom_placeholders(self, journal: Journal, pool: CommodityPool) -> None:
        """예약 계정명 목록 지정"""
        auto = AutoEntry("^Expenses:Food")
        auto.add_xact(Xact(journal.find_account("Matched"), Amount.parse("1", pool)))
        entry = food_entry(journal, pool)
        entry.finalize()

        auto.extend_entry(entry, True, placeholders=["Matched"])

        assert auto_xacts(entry)[0].account.fullname == "Expenses:Food"
