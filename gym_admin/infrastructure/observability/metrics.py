"""Prometheus metrics for monitoring payments, installments, attendance and membership lifecycle"""

from prometheus_client import Counter, Histogram

# Payment metrics
payment_counter = Counter(
    "gym_payments_total",
    "Total payments recorded",
    ["payment_type"],
)

payment_amount_bucket_counter = Counter(
    "gym_payment_amount_bucket",
    "Payments recorded by amount bucket",
    ["bucket"],  # 0-1k, 1k-5k, 5k-20k, 20k+ (major units)
)

installment_payment_counter = Counter(
    "gym_installment_payments_total",
    "Installment settlements",
    ["status"],  # paid | adjusted
)

late_fee_counter = Counter(
    "gym_late_fee_cents_total",
    "Late fees charged on installments, in cents",
)

# Attendance metrics
attendance_scan_counter = Counter(
    "gym_attendance_scans_total",
    "Attendance scans processed",
    ["outcome"],  # check_in | check_out | refused
)

auto_checkout_counter = Counter(
    "gym_auto_checkouts_total",
    "Attendance records closed by the auto-checkout sweep",
)

# Membership lifecycle
membership_event_counter = Counter(
    "gym_membership_events_total",
    "Membership lifecycle events",
    ["event"],  # created | cancelled | frozen | unfrozen | upgrade | downgrade | transferred | converted | expired
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payment(payment_type: str, amount_cents: int) -> None:
    """Record payment metrics for monitoring revenue mix and ticket size"""
    payment_counter.labels(payment_type=payment_type).inc()

    # Bucket amounts for distribution analysis
    if amount_cents <= 100_000:
        bucket = "0-1k"
    elif amount_cents <= 500_000:
        bucket = "1k-5k"
    elif amount_cents <= 2_000_000:
        bucket = "5k-20k"
    else:
        bucket = "20k+"

    payment_amount_bucket_counter.labels(bucket=bucket).inc()


def record_installment_payment(status: str, late_fee_cents: int) -> None:
    installment_payment_counter.labels(status=status).inc()
    if late_fee_cents > 0:
        late_fee_counter.inc(late_fee_cents)
