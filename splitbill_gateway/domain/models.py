"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence


@dataclass(frozen=True)
class Member:
    """Group member"""

    id: str
    name: str


@dataclass(frozen=True)
class Expense:
    """Shared expense recorded against a group, amount in minor units"""

    id: str
    description: str
    amount: int
    payer_id: Optional[str] = None
    payer_name: Optional[str] = None  # legacy/seed records carry only a name
    participant_ids: Sequence[str] = ()
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Payment:
    """Confirmed transfer already made between two members"""

    from_member_id: str
    to_member_id: str
    amount: int
    note: Optional[str] = None


class UnresolvedPayerPolicy(str, Enum):
    """What to do with an expense whose payer matches no current member"""

    EXCLUDE = "exclude"
    SKIP_PAID = "skip_paid"
    RAISE = "raise"


@dataclass
class BalanceResult:
    """Net position of one member"""

    member_id: str
    member_name: str
    total_paid: int
    fair_share: int
    balance: int  # positive = is owed money, negative = owes money


@dataclass
class BalanceSheet:
    """Output of the balance calculator"""

    balances: List[BalanceResult] = field(default_factory=list)
    total_expenses: int = 0
    unresolved_expense_ids: List[str] = field(default_factory=list)

    def by_member(self) -> Dict[str, BalanceResult]:
        return {b.member_id: b for b in self.balances}


@dataclass(frozen=True)
class Transaction:
    """Recommended payment that reduces outstanding balances"""

    from_member_id: str
    from_member_name: str
    to_member_id: str
    to_member_name: str
    amount: int


@dataclass
class Settlement:
    """Complete settlement of a group"""

    total_expenses: int
    member_count: int
    fair_share_per_person: int
    balances: List[BalanceResult]
    transactions: List[Transaction]
    unresolved_expense_ids: List[str] = field(default_factory=list)
    ignored_payment_indexes: List[int] = field(default_factory=list)

    @property
    def is_settled(self) -> bool:
        return not self.transactions


@dataclass(frozen=True)
class DebtEntry:
    """One counterparty as seen by the viewing member"""

    member_id: str
    member_name: str
    amount: int
    direction: str  # "you_owe" or "owes_you"


@dataclass
class DebtSummary:
    """Viewer-specific projection of a settlement"""

    member_id: str
    debts: List[DebtEntry]
    you_owe: int
    owed_to_you: int
    net_balance: int
