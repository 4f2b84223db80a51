"""POST /v1/settlement - group balances and recommended transfers"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from splitbill_gateway.api.v1.schemas import (
    DebtEntrySchema,
    DebtSummaryResponse,
    MemberBalanceSchema,
    SettlementRequest,
    SettlementResponse,
    TransactionSchema,
)
from splitbill_gateway.api.dependencies import get_request_id, get_settings
from splitbill_gateway.config import Settings
from splitbill_gateway.domain.models import Settlement
from splitbill_gateway.domain.settlement import build_debt_summary, settle_group
from splitbill_gateway.domain.exceptions import (
    InvalidExpenseError,
    InvalidPaymentError,
    MemberNotFoundError,
    UnresolvedPayerError,
)
from splitbill_gateway.infrastructure.observability.metrics import record_settlement
from splitbill_gateway.infrastructure.observability.logging import log_settlement, log_unresolved_payers

router = APIRouter()


def compute_settlement(body: SettlementRequest, config: Settings, request_id: str) -> Settlement:
    """
    Settle a request snapshot and emit logs and metrics.

    Domain errors are mapped to HTTP errors here so every endpoint that needs a
    settlement reports them the same way.
    """
    start_time = time.time()
    policy = config.unresolved_payer_policy

    try:
        settlement = settle_group(
            members=[m.to_domain() for m in body.members],
            expenses=[e.to_domain() for e in body.expenses],
            payments=[p.to_domain() for p in body.payments],
            policy=policy,
            allow_name_fallback=config.payer_name_fallback,
            tolerance=config.settlement_tolerance,
        )

    except (InvalidExpenseError, UnresolvedPayerError) as e:
        logging.warning(f"Rejected expense data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidPaymentError as e:
        logging.warning(f"Rejected payment data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    log_unresolved_payers(request_id, settlement.unresolved_expense_ids, policy.value)
    record_settlement(len(settlement.transactions), len(settlement.unresolved_expense_ids), policy.value)
    log_settlement(
        request_id,
        settlement.member_count,
        len(body.expenses),
        len(settlement.transactions),
        duration_ms,
    )

    return settlement


@router.post("/settlement", response_model=SettlementResponse)
def create_settlement(
    request_body: SettlementRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Compute balances and the transfers that settle the group.

    Flow:
    1. Resolve participants and payers against the member list
    2. Compute per-member balances (sum to exactly zero)
    3. Offset balances by confirmed payments
    4. Match largest debtors to largest creditors
    """
    settlement = compute_settlement(request_body, config, get_request_id(request))

    return SettlementResponse(
        total_expenses=settlement.total_expenses,
        member_count=settlement.member_count,
        fair_share_per_person=settlement.fair_share_per_person,
        balances=[
            MemberBalanceSchema(
                member_id=b.member_id,
                member_name=b.member_name,
                total_paid=b.total_paid,
                fair_share=b.fair_share,
                balance=b.balance,
            )
            for b in settlement.balances
        ],
        transactions=[
            TransactionSchema(
                from_member_id=t.from_member_id,
                from_member_name=t.from_member_name,
                to_member_id=t.to_member_id,
                to_member_name=t.to_member_name,
                amount=t.amount,
            )
            for t in settlement.transactions
        ],
        unresolved_expense_ids=settlement.unresolved_expense_ids,
        ignored_payment_indexes=settlement.ignored_payment_indexes,
    )


@router.post("/settlement/debts", response_model=DebtSummaryResponse)
def get_debt_summary(
    request_body: SettlementRequest,
    request: Request,
    member_id: str = Query(..., description="Member viewing their debts"),
    config: Settings = Depends(get_settings),
):
    """What the given member owes and is owed"""
    settlement = compute_settlement(request_body, config, get_request_id(request))

    try:
        summary = build_debt_summary(settlement, member_id)
    except MemberNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return DebtSummaryResponse(
        member_id=summary.member_id,
        debts=[
            DebtEntrySchema(
                member_id=d.member_id,
                member_name=d.member_name,
                amount=d.amount,
                direction=d.direction,
            )
            for d in summary.debts
        ],
        you_owe=summary.you_owe,
        owed_to_you=summary.owed_to_you,
        net_balance=summary.net_balance,
    )
