"""Proxier Logging — hexagonal logging port and adapters."""

from proxier.logging.port import LoggingPort
from proxier.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
