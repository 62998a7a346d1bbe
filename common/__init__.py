"""Common utilities for the terminal checklist."""

from common.config import ChecklistConfig
from common.logging_setup import setup_logging, get_logger

__all__ = ["ChecklistConfig", "setup_logging", "get_logger"]
