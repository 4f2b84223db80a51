"""Resolve expense references against the current group membership"""

from typing import List, Optional, Sequence
from splitbill_gateway.domain.models import Expense, Member


def resolve_participants(expense: Expense, members: Sequence[Member]) -> List[str]:
    """
    Participants of an expense that are still group members.

    Stale ids are dropped and duplicates collapsed, keeping the recorded order.
    When nothing valid remains the expense is shared by every current member.
    """
    member_ids = [m.id for m in members]
    known = set(member_ids)

    participants: List[str] = []
    for member_id in expense.participant_ids or ():
        if member_id in known and member_id not in participants:
            participants.append(member_id)

    return participants or member_ids


def resolve_payer(
    expense: Expense,
    members: Sequence[Member],
    allow_name_fallback: bool = True,
) -> Optional[str]:
    """
    Resolve the payer by id, then by display name.

    The name lookup only runs when the expense has no valid payer id, which is
    the case for legacy and seed records. Returns None if neither matches.
    """
    if expense.payer_id is not None:
        for member in members:
            if member.id == expense.payer_id:
                return member.id

    if allow_name_fallback and expense.payer_name:
        for member in members:
            if member.name == expense.payer_name:
                return member.id

    return None
