"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "credit-monitor"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


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


def log_filters_updated(fields: list, matched: int, total: int, revision: int) -> None:
    """Log an accepted filter change with the resulting subset size"""
    logging.info(
        "Filters updated",
        extra={
            "step": "filters_updated",
            "fields": sorted(fields),
            "matched": matched,
            "population": total,
            "revision": revision,
        },
    )


def log_regenerated(population: int, revision: int) -> None:
    """Log a full population replacement"""
    logging.info(
        "Population regenerated",
        extra={
            "step": "regenerated",
            "population": population,
            "revision": revision,
        },
    )


def log_feed_tick(record_id: Optional[str], credit_score: Optional[int], revision: int) -> None:
    """Log one live feed perturbation (debug level, fires every interval)"""
    logging.debug(
        "Feed tick",
        extra={
            "step": "feed_tick",
            "record_id": record_id,
            "credit_score": credit_score,
            "revision": revision,
        },
    )
