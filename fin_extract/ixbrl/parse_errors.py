# Path: fin_extract/ixbrl/parse_errors.py
"""
Parse Error Model

Error classification for iXBRL scanning. Structural problems in a
single context or fact block are recorded here and the element is
skipped; the scan itself always continues and returns partial results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorSeverity(Enum):
    """
    Parse error severity.

    Levels:
        ERROR: Element skipped, data for it is lost
        WARNING: Element kept with a degraded attribute
        INFO: Informational (e.g., nil fact skipped)
    """
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self) -> str:
        return self.value


class ErrorCategory(Enum):
    """Parse error category for grouping related errors."""
    MALFORMED_CONTEXT = "MALFORMED_CONTEXT"
    INVALID_PERIOD = "INVALID_PERIOD"
    INVALID_FACT = "INVALID_FACT"
    UNPARSED_VALUE = "UNPARSED_VALUE"
    INVALID_SCALE = "INVALID_SCALE"
    MISSING_CONTEXT = "MISSING_CONTEXT"
    STAGE_FAILED = "STAGE_FAILED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ParseError:
    """
    One recorded structural problem.

    Attributes:
        severity: Error severity level
        category: Error category
        message: Human-readable error message
        element_id: ID of the problematic context or fact (optional)
    """
    severity: ErrorSeverity
    category: ErrorCategory
    message: str
    element_id: Optional[str] = None

    def __str__(self) -> str:
        where = f" [{self.element_id}]" if self.element_id else ''
        return f"{self.severity}/{self.category}{where}: {self.message}"


__all__ = ['ParseError', 'ErrorSeverity', 'ErrorCategory']
