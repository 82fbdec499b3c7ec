"""Shared utilities."""

from ._logging import LogFormatType, create_logger, get_logger

__all__ = ["LogFormatType", "create_logger", "get_logger"]
