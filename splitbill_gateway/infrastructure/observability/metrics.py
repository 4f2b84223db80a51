"""Prometheus metrics for monitoring settlements, data quality and payment checks"""

from prometheus_client import Counter, Histogram

# Settlement metrics
settlement_counter = Counter(
    "splitbill_settlement_total",
    "Total group settlements computed",
    ["outcome"],  # settled | pending
)

settlement_transactions_histogram = Histogram(
    "splitbill_settlement_transactions",
    "Transactions recommended per settlement",
    buckets=[0, 1, 2, 3, 5, 8, 13, 21, 50],
)

# Data quality
unresolved_payer_counter = Counter(
    "splitbill_unresolved_payer_total",
    "Expenses whose payer matched no group member",
    ["policy"],
)

# Payments
payment_validation_counter = Counter(
    "splitbill_payment_validation_total",
    "Proposed payments checked against the settlement",
    ["outcome"],  # accepted | rejected
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_settlement(transaction_count: int, unresolved_count: int, policy: str) -> None:
    """Record settlement metrics for monitoring group balance health"""
    outcome = "pending" if transaction_count else "settled"
    settlement_counter.labels(outcome=outcome).inc()
    settlement_transactions_histogram.observe(transaction_count)

    if unresolved_count:
        unresolved_payer_counter.labels(policy=policy).inc(unresolved_count)
