"""Utility modules."""

from dispatch.utils.logging import LifecycleLogger, get_logger, setup_logging

__all__ = ["setup_logging", "get_logger", "LifecycleLogger"]
