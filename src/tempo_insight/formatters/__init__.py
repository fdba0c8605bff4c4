"""Output formatters for modularity and session results."""

from .base import BaseFormatter, format_duration
from .json_formatter import (
    ModularityJsonFormatter,
    SessionsJsonFormatter,
    modularity_to_dict,
    sessions_to_dict,
)
from .markdown_formatter import SessionsMarkdownFormatter
from .rich_formatter import ModularityRichFormatter, SessionsRichFormatter

__all__ = [
    "BaseFormatter",
    "format_duration",
    "modularity_to_dict",
    "sessions_to_dict",
    "ModularityJsonFormatter",
    "ModularityRichFormatter",
    "SessionsJsonFormatter",
    "SessionsMarkdownFormatter",
    "SessionsRichFormatter",
]
