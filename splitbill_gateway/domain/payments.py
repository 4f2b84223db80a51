"""Confirmed payments between members and validation of new ones"""

from dataclasses import replace
from typing import List, Sequence, Tuple
from splitbill_gateway.domain.models import BalanceResult, Payment, Settlement, Transaction
from splitbill_gateway.domain.exceptions import InvalidPaymentError
from splitbill_gateway.utils.money import is_minor_units


def apply_payments(
    balances: Sequence[BalanceResult],
    payments: Sequence[Payment],
) -> Tuple[List[BalanceResult], List[int]]:
    """
    Offset balances by payments that were already made.

    Paying raises the sender's balance (less debt), receiving lowers the
    recipient's balance (less credit), so the total stays zero.

    Returns:
        (adjusted balances, indexes of payments ignored because a party is
        not a current member or both parties are the same member)

    Raises:
        InvalidPaymentError: A payment amount is not a positive int
    """
    adjusted = [replace(b) for b in balances]
    by_member = {b.member_id: b for b in adjusted}
    ignored: List[int] = []

    for index, payment in enumerate(payments):
        if not is_minor_units(payment.amount) or payment.amount <= 0:
            raise InvalidPaymentError(f"Payment amount must be a positive integer, got {payment.amount!r}")

        sender = by_member.get(payment.from_member_id)
        recipient = by_member.get(payment.to_member_id)
        if sender is None or recipient is None or sender is recipient:
            ignored.append(index)
            continue

        sender.balance += payment.amount
        recipient.balance -= payment.amount

    return adjusted, ignored


def validate_payment(
    settlement: Settlement,
    from_member_id: str,
    to_member_id: str,
    amount: int,
) -> Transaction:
    """
    Check a proposed payment against the current settlement.

    A member may only pay someone they are told to pay, and no more than the
    recommended amount.

    Returns:
        The outstanding transaction the payment counts towards

    Raises:
        InvalidPaymentError: On any rule violation
    """
    if not is_minor_units(amount) or amount <= 0:
        raise InvalidPaymentError("Payment amount must be a positive integer")

    member_ids = {b.member_id for b in settlement.balances}
    if from_member_id not in member_ids:
        raise InvalidPaymentError("Payer is not a member of this group")
    if to_member_id not in member_ids:
        raise InvalidPaymentError("Recipient is not a member of this group")
    if from_member_id == to_member_id:
        raise InvalidPaymentError("You cannot pay yourself")

    transaction = next(
        (
            t
            for t in settlement.transactions
            if t.from_member_id == from_member_id and t.to_member_id == to_member_id
        ),
        None,
    )
    if transaction is None:
        raise InvalidPaymentError("You do not owe this person any money")

    if amount > transaction.amount:
        raise InvalidPaymentError(f"Payment amount ({amount}) exceeds debt ({transaction.amount})")

    return transaction
