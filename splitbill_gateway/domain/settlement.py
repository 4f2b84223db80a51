"""Settlement engine - core business logic for settling a group"""

from fractions import Fraction
from typing import List, Sequence
from splitbill_gateway.domain.models import (
    BalanceResult,
    DebtEntry,
    DebtSummary,
    Expense,
    Member,
    Payment,
    Settlement,
    Transaction,
    UnresolvedPayerPolicy,
)
from splitbill_gateway.domain.balances import compute_balances
from splitbill_gateway.domain.payments import apply_payments
from splitbill_gateway.domain.exceptions import MemberNotFoundError
from splitbill_gateway.utils.money import round_half_up


def minimize_transactions(balances: Sequence[BalanceResult], tolerance: int = 0) -> List[Transaction]:
    """
    Turn signed balances into transfers from debtors to creditors.

    Greedy largest-debtor to largest-creditor matching. Not an optimal
    minimum-cardinality solver, but deterministic and bounded by
    member_count - 1 transfers when balances sum to zero.

    Requirements:
    - Balances within tolerance of zero count as settled
    - Debtors and creditors are visited largest first; ties keep input order
    - Transfers of tolerance or less are not emitted

    Example:
        A -300, B -200, C +500 -> [A pays C 300, B pays C 200]
    """
    debtors = [[b, -b.balance] for b in balances if b.balance < -tolerance]
    creditors = [[b, b.balance] for b in balances if b.balance > tolerance]

    # list.sort is stable, so equal amounts stay in member order
    debtors.sort(key=lambda d: d[1], reverse=True)
    creditors.sort(key=lambda c: c[1], reverse=True)

    transactions: List[Transaction] = []
    i = j = 0

    while i < len(debtors) and j < len(creditors):
        debtor, owed = debtors[i]
        creditor, due = creditors[j]

        amount = min(owed, due)
        if amount > tolerance:
            transactions.append(
                Transaction(
                    from_member_id=debtor.member_id,
                    from_member_name=debtor.member_name,
                    to_member_id=creditor.member_id,
                    to_member_name=creditor.member_name,
                    amount=amount,
                )
            )

        debtors[i][1] = owed - amount
        creditors[j][1] = due - amount

        if debtors[i][1] <= tolerance:
            i += 1
        if creditors[j][1] <= tolerance:
            j += 1

    return transactions


def settle_group(
    members: Sequence[Member],
    expenses: Sequence[Expense],
    payments: Sequence[Payment] = (),
    policy: UnresolvedPayerPolicy = UnresolvedPayerPolicy.EXCLUDE,
    allow_name_fallback: bool = True,
    tolerance: int = 0,
) -> Settlement:
    """
    Main entry point: balances, payment offsets and transfers for one group.

    Returns complete Settlement with group totals, per-member balances,
    recommended transactions and the ids of expenses whose payer was unknown.
    """
    sheet = compute_balances(members, expenses, policy, allow_name_fallback)
    balances, ignored_payments = apply_payments(sheet.balances, payments)
    transactions = minimize_transactions(balances, tolerance)

    member_count = len(members)
    fair_share_per_person = (
        round_half_up(Fraction(sheet.total_expenses, member_count)) if member_count else 0
    )

    return Settlement(
        total_expenses=sheet.total_expenses,
        member_count=member_count,
        fair_share_per_person=fair_share_per_person,
        balances=balances,
        transactions=transactions,
        unresolved_expense_ids=sheet.unresolved_expense_ids,
        ignored_payment_indexes=ignored_payments,
    )


def build_debt_summary(settlement: Settlement, member_id: str) -> DebtSummary:
    """What one member owes and is owed according to the settlement"""
    if member_id not in {b.member_id for b in settlement.balances}:
        raise MemberNotFoundError(f"Member {member_id} is not part of this group")

    debts: List[DebtEntry] = []
    you_owe = 0
    owed_to_you = 0

    for t in settlement.transactions:
        if t.from_member_id == member_id:
            debts.append(DebtEntry(t.to_member_id, t.to_member_name, t.amount, "you_owe"))
            you_owe += t.amount
        elif t.to_member_id == member_id:
            debts.append(DebtEntry(t.from_member_id, t.from_member_name, t.amount, "owes_you"))
            owed_to_you += t.amount

    return DebtSummary(
        member_id=member_id,
        debts=debts,
        you_owe=you_owe,
        owed_to_you=owed_to_you,
        net_balance=owed_to_you - you_owe,
    )
