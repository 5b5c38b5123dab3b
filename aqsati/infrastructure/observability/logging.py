"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from aqsati.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_portfolio_view(request_id: str, owner_id: str, summaries: list, duration_ms: float) -> None:
    """Log status distribution for a rendered client list"""
    tiers: Dict[str, int] = {}
    for summary in summaries:
        tiers[summary.status.tier.value] = tiers.get(summary.status.tier.value, 0) + 1

    logging.info(
        "Client list rendered",
        extra={
            "request_id": request_id,
            "owner_id": owner_id,
            "step": "clients_listed",
            "client_count": len(summaries),
            "tiers": tiers,
            "duration_ms": duration_ms,
        },
    )


def log_reminders(request_id: str, owner_id: str, late_count: int, sent_count: int) -> None:
    """Log bulk reminder outcome"""
    logging.info(
        "Late client reminders drafted",
        extra={
            "request_id": request_id,
            "owner_id": owner_id,
            "step": "reminders_drafted",
            "late_clients": late_count,
            "messages": sent_count,
        },
    )
