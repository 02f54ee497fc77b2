"""Observability – structured logging (structlog) helpers."""
from labelbus.observability.logging.protocol import Logger
from labelbus.observability.logging.factory import JsonLoggerFactory
from labelbus.observability.logging.processors import CorrelationProcessor, get_logger, truncate_body

__all__ = [
    "CorrelationProcessor",
    "JsonLoggerFactory",
    "Logger",
    "get_logger",
    "truncate_body",
]
