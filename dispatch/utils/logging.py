"""Structured logging configuration."""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from dispatch.config import get_settings


def setup_logging() -> None:
    """Configure structured logging for the application."""
    settings = get_settings()

    # Configure standard library logging
    log_level = getattr(logging, settings.log_level)

    if settings.log_format == "json":
        # JSON logging for production
        handler = logging.StreamHandler(sys.stdout)
        formatter = jsonlogger.JsonFormatter(
            fmt="%(timestamp)s %(level)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
        handler.setFormatter(formatter)
    else:
        # Human-readable logging for development
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer() if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class LifecycleLogger:
    """Logger for order lifecycle decisions and the approvals that gate them.

    Every event carries the acting user; order events also carry the order id
    so a single order's history can be reconstructed from the log stream.
    """

    def __init__(self, component: str):
        self.component = component
        self.logger = get_logger(component)

    def log_created(
        self,
        order_id: str,
        actor_id: str,
        seller_id: str,
        **kwargs: Any,
    ) -> None:
        """Log a newly created order."""
        self.logger.info(
            "order_created",
            component=self.component,
            order_id=order_id,
            actor_id=actor_id,
            seller_id=seller_id,
            **kwargs,
        )

    def log_transition(
        self,
        order_id: str,
        actor_id: str,
        from_status: str,
        to_status: str,
        **kwargs: Any,
    ) -> None:
        """Log an accepted status transition."""
        self.logger.info(
            "order_transitioned",
            component=self.component,
            order_id=order_id,
            actor_id=actor_id,
            from_status=from_status,
            to_status=to_status,
            **kwargs,
        )

    def log_assignment(
        self,
        order_id: str,
        actor_id: str,
        driver_id: str,
        **kwargs: Any,
    ) -> None:
        """Log a driver being bound to an order."""
        self.logger.info(
            "driver_assigned",
            component=self.component,
            order_id=order_id,
            actor_id=actor_id,
            driver_id=driver_id,
            **kwargs,
        )

    def log_deleted(self, order_id: str, actor_id: str) -> None:
        """Log an order removed before it left pending."""
        self.logger.info(
            "order_deleted",
            component=self.component,
            order_id=order_id,
            actor_id=actor_id,
        )

    def log_approved(self, kind: str, target_id: str, actor_id: str) -> None:
        """Log an admin lifting the approval gate on a user or stock line."""
        self.logger.info(
            f"{kind}_approved",
            component=self.component,
            target_id=target_id,
            actor_id=actor_id,
        )

    def log_stock_saved(
        self,
        item_id: str,
        actor_id: str,
        seller_id: str,
        **kwargs: Any,
    ) -> None:
        """Log a stock line being added or edited."""
        self.logger.info(
            "stock_saved",
            component=self.component,
            item_id=item_id,
            actor_id=actor_id,
            seller_id=seller_id,
            **kwargs,
        )

    def log_rejection(
        self,
        error: str,
        order_id: str | None,
        actor_id: str | None,
        **kwargs: Any,
    ) -> None:
        """Log a rejected request."""
        self.logger.warning(
            "request_rejected",
            component=self.component,
            order_id=order_id,
            actor_id=actor_id,
            error=error,
            **kwargs,
        )
