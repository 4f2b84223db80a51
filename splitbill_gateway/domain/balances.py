"""Balance calculator - who paid what versus who consumed what"""

from fractions import Fraction
from typing import Dict, List, Sequence
from splitbill_gateway.domain.models import (
    BalanceResult,
    BalanceSheet,
    Expense,
    Member,
    UnresolvedPayerPolicy,
)
from splitbill_gateway.domain.exceptions import InvalidExpenseError, UnresolvedPayerError
from splitbill_gateway.domain.resolvers import resolve_participants, resolve_payer
from splitbill_gateway.utils.money import is_minor_units, round_half_up


def compute_balances(
    members: Sequence[Member],
    expenses: Sequence[Expense],
    policy: UnresolvedPayerPolicy = UnresolvedPayerPolicy.EXCLUDE,
    allow_name_fallback: bool = True,
) -> BalanceSheet:
    """
    Compute each member's signed balance (amount paid minus fair share).

    Requirements:
    - Each expense is split evenly among its resolved participants
    - Shares are kept exact and rounded once per member, half up
    - Rounding residue is absorbed by the first member with a non-zero balance,
      so balances always sum to exactly zero

    Args:
        members: Current group members, in display order
        expenses: Recorded expenses, amounts in minor units
        policy: Handling of expenses whose payer cannot be resolved
        allow_name_fallback: Match payers by display name when the id is missing

    Raises:
        InvalidExpenseError: Amount is not a non-negative int
        UnresolvedPayerError: Payer unresolved and policy is RAISE

    Example:
        A, B, C share 100 paid by A
        fair shares 33.33 each -> A +67, B -33, C -33 (sum +1)
        residual +1 taken from A -> A +66, B -33, C -33
    """
    if not members:
        return BalanceSheet()

    fair_share: Dict[str, Fraction] = {m.id: Fraction(0) for m in members}
    total_paid: Dict[str, int] = {m.id: 0 for m in members}
    total_expenses = 0
    unresolved: List[str] = []

    for expense in expenses:
        if not is_minor_units(expense.amount):
            raise InvalidExpenseError(
                f"Expense {expense.id} amount must be an integer of minor units, got {expense.amount!r}"
            )
        if expense.amount < 0:
            raise InvalidExpenseError(f"Expense {expense.id} amount must be non-negative")

        payer_id = resolve_payer(expense, members, allow_name_fallback)
        if payer_id is None:
            if policy == UnresolvedPayerPolicy.RAISE:
                raise UnresolvedPayerError(expense.id)
            unresolved.append(expense.id)
            if policy == UnresolvedPayerPolicy.EXCLUDE:
                continue

        participants = resolve_participants(expense, members)
        share = Fraction(expense.amount, len(participants))
        for member_id in participants:
            fair_share[member_id] += share

        if payer_id is not None:
            total_paid[payer_id] += expense.amount
        total_expenses += expense.amount

    balances = [
        BalanceResult(
            member_id=m.id,
            member_name=m.name,
            total_paid=total_paid[m.id],
            fair_share=round_half_up(fair_share[m.id]),
            balance=round_half_up(total_paid[m.id] - fair_share[m.id]),
        )
        for m in members
    ]

    _absorb_residual(balances)

    return BalanceSheet(
        balances=balances,
        total_expenses=total_expenses,
        unresolved_expense_ids=unresolved,
    )


def _absorb_residual(balances: List[BalanceResult]) -> None:
    """Push the rounding residue onto the first member with a non-zero balance"""
    residual = sum(b.balance for b in balances)
    if residual == 0:
        return

    target = next((b for b in balances if b.balance != 0), balances[0])
    target.balance -= residual
