"""Structured logging utilities."""

import logging
import sys
from typing import Any, Optional

import structlog


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging for the application."""

    log_level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for the given name."""
    return structlog.get_logger(name)


class BookingLogger:
    """Logger for assignment and queue events of a single owner."""

    def __init__(self, owner_id: int):
        self.logger = get_logger("queuedesk.booking")
        self.owner_id = owner_id

    def log(self, event: str, **kwargs: Any) -> None:
        self.logger.info(event, owner_id=self.owner_id, **kwargs)

    def appointment_created(self, appointment_id: int, status: str, staff_id: Optional[int]) -> None:
        """Log the outcome of an assignment decision."""
        event = "appointment_queued" if staff_id is None else "appointment_created"
        self.logger.info(
            event,
            owner_id=self.owner_id,
            appointment_id=appointment_id,
            status=status,
            staff_id=staff_id,
        )

    def queue_promoted(self, appointment_id: int, staff_id: int) -> None:
        self.logger.info(
            "queue_promoted",
            owner_id=self.owner_id,
            appointment_id=appointment_id,
            staff_id=staff_id,
        )

    def promotion_skipped(self, reason: str, appointment_id: Optional[int] = None) -> None:
        self.logger.info(
            "queue_promotion_skipped",
            owner_id=self.owner_id,
            appointment_id=appointment_id,
            reason=reason,
        )

    def status_changed(self, appointment_id: int, old_status: str, new_status: str) -> None:
        self.logger.info(
            "status_changed",
            owner_id=self.owner_id,
            appointment_id=appointment_id,
            old_status=old_status,
            new_status=new_status,
        )
