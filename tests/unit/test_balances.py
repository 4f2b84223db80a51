"""Unit tests for the balance calculator"""

import pytest
from splitbill_gateway.domain.models import Expense, Member, UnresolvedPayerPolicy
from splitbill_gateway.domain.balances import compute_balances
from splitbill_gateway.domain.exceptions import InvalidExpenseError, UnresolvedPayerError


def _balances(sheet) -> dict[str, int]:
    return {b.member_id: b.balance for b in sheet.balances}


def test_compute_balances_road_trip(trio, road_trip_expenses):
    """Even three-way split of 2,600,000"""
    sheet = compute_balances(trio, road_trip_expenses)

    assert sheet.total_expenses == 2_600_000
    assert [b.total_paid for b in sheet.balances] == [600_000, 2_000_000, 0]
    assert all(b.fair_share == 866_667 for b in sheet.balances)

    # Rounded -266,667 / +1,133,333 / -866,667 leave a residual of -1,
    # which is taken from Alice as the first non-zero balance
    assert _balances(sheet) == {"a": -266_666, "b": 1_133_333, "c": -866_667}
    assert sum(_balances(sheet).values()) == 0


def test_balance_sheet_by_member(trio, road_trip_expenses):
    by_member = compute_balances(trio, road_trip_expenses).by_member()

    assert list(by_member) == ["a", "b", "c"]
    assert by_member["b"].member_name == "Bob"
    assert by_member["b"].balance == 1_133_333


def test_compute_balances_two_members():
    members = [Member("a", "Alice"), Member("b", "Bob")]
    expenses = [Expense("e1", "Tickets", 1_000, payer_id="a", participant_ids=("a", "b"))]

    sheet = compute_balances(members, expenses)

    assert _balances(sheet) == {"a": 500, "b": -500}
    assert [b.fair_share for b in sheet.balances] == [500, 500]


def test_compute_balances_partial_participants(trio):
    """Carol is not part of the expense and stays at zero"""
    expenses = [Expense("e1", "Snacks", 300, payer_id="a", participant_ids=("a", "b"))]

    sheet = compute_balances(trio, expenses)

    assert _balances(sheet) == {"a": 150, "b": -150, "c": 0}
    assert sheet.balances[2].fair_share == 0


def test_compute_balances_empty_group():
    sheet = compute_balances([], [Expense("e1", "Lunch", 100, payer_id="a")])

    assert sheet.balances == []
    assert sheet.total_expenses == 0
    assert sheet.unresolved_expense_ids == []


def test_compute_balances_no_expenses(trio):
    sheet = compute_balances(trio, [])

    assert _balances(sheet) == {"a": 0, "b": 0, "c": 0}
    assert sheet.total_expenses == 0


def test_compute_balances_empty_participants_split_among_everyone(trio):
    expenses = [Expense("e1", "Groceries", 300, payer_id="c")]

    sheet = compute_balances(trio, expenses)

    assert _balances(sheet) == {"a": -100, "b": -100, "c": 200}


def test_residual_positive_taken_from_first_nonzero_member():
    """+67 / -33 / -33 sums to +1; Zed is skipped because his balance is zero"""
    members = [Member("z", "Zed"), Member("a", "Alice"), Member("b", "Bob"), Member("c", "Carol")]
    expenses = [Expense("e1", "Pizza", 100, payer_id="a", participant_ids=("a", "b", "c"))]

    sheet = compute_balances(members, expenses)

    assert _balances(sheet) == {"z": 0, "a": 66, "b": -33, "c": -33}


def test_residual_negative_taken_from_first_nonzero_member(trio):
    """-67 / -67 / +133 sums to -1"""
    expenses = [Expense("e1", "Pizza", 200, payer_id="c")]

    sheet = compute_balances(trio, expenses)

    assert _balances(sheet) == {"a": -66, "b": -67, "c": 133}


def test_compute_balances_name_fallback(trio):
    expenses = [Expense("e1", "Seed data", 300, payer_name="Bob")]

    sheet = compute_balances(trio, expenses)

    assert _balances(sheet) == {"a": -100, "b": 200, "c": -100}
    assert sheet.unresolved_expense_ids == []


class TestUnresolvedPayer:
    """An expense of 400 whose payer is unknown, next to a valid expense"""

    @pytest.fixture
    def pair(self) -> list[Member]:
        return [Member("a", "Alice"), Member("b", "Bob")]

    @pytest.fixture
    def expenses(self) -> list[Expense]:
        return [
            Expense("e1", "Tickets", 1_000, payer_id="a", participant_ids=("a", "b")),
            Expense("e2", "Mystery", 400, payer_id="ghost"),
        ]

    def test_exclude_drops_expense_entirely(self, pair, expenses):
        sheet = compute_balances(pair, expenses, policy=UnresolvedPayerPolicy.EXCLUDE)

        assert _balances(sheet) == {"a": 500, "b": -500}
        assert sheet.total_expenses == 1_000
        assert sheet.unresolved_expense_ids == ["e2"]

    def test_skip_paid_keeps_shares_and_residual_absorbs_gap(self, pair, expenses):
        """
        Legacy behaviour: shares of 200 each are charged but nobody is credited.
        Raw balances +300 / -700 leave a residual of -400 that lands on Alice.
        """
        sheet = compute_balances(pair, expenses, policy=UnresolvedPayerPolicy.SKIP_PAID)

        assert _balances(sheet) == {"a": 700, "b": -700}
        assert [b.total_paid for b in sheet.balances] == [1_000, 0]
        assert [b.fair_share for b in sheet.balances] == [700, 700]
        assert sheet.total_expenses == 1_400
        assert sheet.unresolved_expense_ids == ["e2"]

    def test_raise(self, pair, expenses):
        with pytest.raises(UnresolvedPayerError) as exc_info:
            compute_balances(pair, expenses, policy=UnresolvedPayerPolicy.RAISE)

        assert exc_info.value.expense_id == "e2"

    def test_name_fallback_disabled_leaves_payer_unresolved(self, pair):
        expenses = [Expense("e1", "Seed data", 100, payer_name="Alice")]

        sheet = compute_balances(pair, expenses, allow_name_fallback=False)

        assert sheet.unresolved_expense_ids == ["e1"]
        assert _balances(sheet) == {"a": 0, "b": 0}


@pytest.mark.parametrize("amount", [-1, 10.5, "100", True, None])
def test_compute_balances_rejects_invalid_amounts(trio, amount):
    expenses = [Expense("bad", "Broken", amount, payer_id="a")]

    with pytest.raises(InvalidExpenseError):
        compute_balances(trio, expenses)


def test_compute_balances_zero_amount(trio):
    sheet = compute_balances(trio, [Expense("e1", "Free sample", 0, payer_id="a")])

    assert _balances(sheet) == {"a": 0, "b": 0, "c": 0}
