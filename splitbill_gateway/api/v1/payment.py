"""POST /v1/payment/validate - check a proposed payment against the settlement"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from splitbill_gateway.api.v1.schemas import PaymentValidationRequest, PaymentValidationResponse
from splitbill_gateway.api.v1.settlement import compute_settlement
from splitbill_gateway.api.dependencies import get_request_id, get_settings
from splitbill_gateway.config import Settings
from splitbill_gateway.domain.payments import validate_payment
from splitbill_gateway.domain.exceptions import InvalidPaymentError
from splitbill_gateway.infrastructure.observability.metrics import payment_validation_counter

router = APIRouter()


@router.post("/payment/validate", response_model=PaymentValidationResponse)
def validate_proposed_payment(
    request_body: PaymentValidationRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Validate a payment before it is recorded.

    Payments already confirmed are part of the snapshot, so the outstanding
    debt reflects them. The caller records the payment if accepted.
    """
    request_id = get_request_id(request)
    settlement = compute_settlement(request_body, config, request_id)

    try:
        transaction = validate_payment(
            settlement,
            request_body.from_member_id,
            request_body.to_member_id,
            request_body.amount,
        )
    except InvalidPaymentError as e:
        payment_validation_counter.labels(outcome="rejected").inc()
        logging.info(f"Payment rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    payment_validation_counter.labels(outcome="accepted").inc()

    return PaymentValidationResponse(
        accepted=True,
        outstanding_amount=transaction.amount,
        remaining_after_payment=transaction.amount - request_body.amount,
    )
