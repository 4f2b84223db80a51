"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Literal, Optional

from splitbill_gateway.domain.models import Expense, Member, Payment


class MemberSchema(BaseModel):
    """Group member"""

    id: str = Field(..., min_length=1, description="Member identifier")
    name: str = Field(..., description="Display name")

    def to_domain(self) -> Member:
        return Member(id=self.id, name=self.name)


class ExpenseSchema(BaseModel):
    """Recorded expense, amount in minor units"""

    id: str = Field(..., min_length=1)
    description: str = ""
    amount: int = Field(..., ge=0, description="Amount in minor units (cents)")
    payer_id: Optional[str] = Field(None, description="Member who fronted the money")
    payer_name: Optional[str] = Field(None, description="Legacy payer reference by display name")
    participant_ids: List[str] = Field(default_factory=list, description="Empty means everyone")
    created_at: Optional[datetime] = None

    def to_domain(self) -> Expense:
        return Expense(
            id=self.id,
            description=self.description,
            amount=self.amount,
            payer_id=self.payer_id,
            payer_name=self.payer_name,
            participant_ids=tuple(self.participant_ids),
            created_at=self.created_at,
        )


class PaymentSchema(BaseModel):
    """Confirmed payment between two members"""

    from_member_id: str
    to_member_id: str
    amount: int = Field(..., gt=0, description="Amount in minor units (cents)")
    note: Optional[str] = None

    def to_domain(self) -> Payment:
        return Payment(
            from_member_id=self.from_member_id,
            to_member_id=self.to_member_id,
            amount=self.amount,
            note=self.note,
        )


class SettlementRequest(BaseModel):
    """Request body for POST /v1/settlement - a consistent group snapshot"""

    members: List[MemberSchema]
    expenses: List[ExpenseSchema] = Field(default_factory=list)
    payments: List[PaymentSchema] = Field(default_factory=list)


class MemberBalanceSchema(BaseModel):
    member_id: str
    member_name: str
    total_paid: int
    fair_share: int
    balance: int


class TransactionSchema(BaseModel):
    from_member_id: str
    from_member_name: str
    to_member_id: str
    to_member_name: str
    amount: int


class SettlementResponse(BaseModel):
    """Response for POST /v1/settlement"""

    total_expenses: int
    member_count: int
    fair_share_per_person: int
    balances: List[MemberBalanceSchema]
    transactions: List[TransactionSchema]
    unresolved_expense_ids: List[str] = Field(default_factory=list)
    ignored_payment_indexes: List[int] = Field(default_factory=list)


class DebtEntrySchema(BaseModel):
    member_id: str
    member_name: str
    amount: int
    direction: Literal["you_owe", "owes_you"]


class DebtSummaryResponse(BaseModel):
    """Response for POST /v1/settlement/debts"""

    member_id: str
    debts: List[DebtEntrySchema]
    you_owe: int
    owed_to_you: int
    net_balance: int


class PaymentValidationRequest(SettlementRequest):
    """Request body for POST /v1/payment/validate"""

    from_member_id: str
    to_member_id: str
    amount: int = Field(..., description="Proposed amount in minor units")


class PaymentValidationResponse(BaseModel):
    """Response for POST /v1/payment/validate"""

    accepted: bool
    outstanding_amount: int
    remaining_after_payment: int
