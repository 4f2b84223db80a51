"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "splitbill-gateway", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "splitbill-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_settlement(
    request_id: str,
    member_count: int,
    expense_count: int,
    transaction_count: int,
    duration_ms: float,
) -> None:
    """Log structured settlement outcome for analysis"""
    logging.info(
        "Settlement computed",
        extra={
            "request_id": request_id,
            "step": "settlement_complete",
            "outcome": "pending" if transaction_count else "settled",
            "member_count": member_count,
            "expense_count": expense_count,
            "transaction_count": transaction_count,
            "duration_ms": duration_ms,
        },
    )


def log_unresolved_payers(request_id: str, expense_ids: List[str], policy: str) -> None:
    """Flag expenses whose payer matched no member - a data-quality problem upstream"""
    if not expense_ids:
        return
    logging.warning(
        "Payer not found for expenses",
        extra={
            "request_id": request_id,
            "step": "resolve_payer",
            "expense_ids": expense_ids,
            "policy": policy,
        },
    )
