"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from gym_admin.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_payment(
    payment_id: str,
    member_id: str,
    payment_type: str,
    amount_cents: int,
    installment_id: Optional[str] = None,
    late_fee_cents: int = 0,
) -> None:
    """Log structured payment outcome for reconciliation"""
    logging.info(
        "Payment recorded",
        extra={
            "payment_id": payment_id,
            "member_id": member_id,
            "step": "payment_recorded",
            "payment_type": payment_type,
            "amount_cents": amount_cents,
            "installment_id": installment_id,
            "late_fee_cents": late_fee_cents,
        },
    )


def log_attendance_scan(member_code: str, success: bool, action: Optional[str], message: str) -> None:
    """Log scan outcome at the front desk"""
    logging.info(
        "Attendance scan",
        extra={
            "member_code": member_code,
            "step": "attendance_scan",
            "scan_outcome": action if success else "refused",
            "scan_message": message,
        },
    )
