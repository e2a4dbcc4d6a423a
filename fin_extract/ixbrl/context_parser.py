# Path: fin_extract/ixbrl/context_parser.py
"""
Context Parser - Reads xbrli:context definitions from iXBRL.

In iXBRL, each numeric fact references a context that defines:
- PERIOD: When (instant date or start/end duration)
- ENTITY: Who (CIK identifier)
- SEGMENT: Optional dimensional breakdown (by product, geography, etc.)

Consolidated statement mapping only uses contexts without a
dimensional qualifier. Typical filing: ~500 contexts total, ~12
non-dimensional, the rest segment-specific.

Malformed blocks are logged in the error list and the scan moves
on; partial results are always returned.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.logger.ipo_logging import get_input_logger
from .parse_errors import ParseError, ErrorSeverity, ErrorCategory


_CONTEXT_PATTERN = re.compile(
    r'<xbrli:context\b([^>]*)>(.*?)</xbrli:context>',
    re.DOTALL | re.IGNORECASE,
)
_ID_PATTERN = re.compile(r'(?<![\w:.-])id\s*=\s*["\']([^"\']+)["\']', re.IGNORECASE)
_IDENTIFIER_PATTERN = re.compile(
    r'<xbrli:identifier\b[^>]*>([^<]+)</xbrli:identifier>', re.IGNORECASE,
)
_INSTANT_PATTERN = re.compile(
    r'<xbrli:instant>([^<]*)</xbrli:instant>', re.IGNORECASE,
)
_START_PATTERN = re.compile(
    r'<xbrli:startDate>([^<]*)</xbrli:startDate>', re.IGNORECASE,
)
_END_PATTERN = re.compile(
    r'<xbrli:endDate>([^<]*)</xbrli:endDate>', re.IGNORECASE,
)
_DIMENSION_PATTERN = re.compile(
    r'<(?:xbrli:segment|xbrli:scenario|xbrldi:)', re.IGNORECASE,
)
_ISO_DATE_PATTERN = re.compile(r'^(\d{4})-(\d{2})-(\d{2})')


@dataclass(frozen=True)
class Context:
    """Parsed context definition from iXBRL."""
    context_id: str
    entity: str = ''
    instant: Optional[date] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    has_dimensions: bool = False

    @property
    def is_instant(self) -> bool:
        return self.instant is not None

    @property
    def is_duration(self) -> bool:
        return (
            self.instant is None
            and self.start_date is not None
            and self.end_date is not None
        )

    @property
    def is_dated(self) -> bool:
        return self.is_instant or self.is_duration

    @property
    def duration_days(self) -> Optional[int]:
        """Length of a duration context in days (None for instants)."""
        if not self.is_duration:
            return None
        return (self.end_date - self.start_date).days


class ContextParser:
    """
    Parses xbrli:context definitions into Context objects.

    One instance per document; the error list describes the last parse.
    """

    def __init__(self):
        """Initialize context parser."""
        self.logger = get_input_logger('context_parser')
        self.errors: list[ParseError] = []

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def parse(self, content: str) -> dict[str, Context]:
        """
        Parse all xbrli:context definitions from iXBRL content.

        Args:
            content: Full iXBRL HTML content

        Returns:
            Dictionary mapping context_id to Context, in document order
        """
        self.errors = []
        contexts: dict[str, Context] = {}

        for match in _CONTEXT_PATTERN.finditer(content or ''):
            id_match = _ID_PATTERN.search(match.group(1))
            if not id_match:
                self._error(
                    ErrorCategory.MALFORMED_CONTEXT,
                    'Context block without id attribute',
                )
                continue

            ctx_id = id_match.group(1).strip()
            if ctx_id in contexts:
                self._error(
                    ErrorCategory.MALFORMED_CONTEXT,
                    'Duplicate context id, keeping first definition',
                    ctx_id, ErrorSeverity.WARNING,
                )
                continue

            contexts[ctx_id] = self._parse_single_context(ctx_id, match.group(2))

        self._log_summary(contexts)
        return contexts

    def _parse_single_context(self, ctx_id: str, body: str) -> Context:
        """Parse a single context definition."""
        entity_match = _IDENTIFIER_PATTERN.search(body)
        entity = entity_match.group(1).strip() if entity_match else ''
        has_dimensions = bool(_DIMENSION_PATTERN.search(body))

        # Instant first, then start/end pair
        instant_match = _INSTANT_PATTERN.search(body)
        if instant_match:
            instant = self._parse_date(instant_match.group(1), ctx_id)
            if instant is not None:
                return Context(ctx_id, entity, instant=instant,
                               has_dimensions=has_dimensions)

        start_match = _START_PATTERN.search(body)
        end_match = _END_PATTERN.search(body)
        if start_match and end_match:
            start = self._parse_date(start_match.group(1), ctx_id)
            end = self._parse_date(end_match.group(1), ctx_id)
            if start is not None and end is not None:
                if end < start:
                    self._error(
                        ErrorCategory.INVALID_PERIOD,
                        f"End date {end} precedes start date {start}",
                        ctx_id,
                    )
                else:
                    return Context(ctx_id, entity, start_date=start,
                                   end_date=end, has_dimensions=has_dimensions)
        elif start_match or end_match:
            self._error(
                ErrorCategory.INVALID_PERIOD,
                'Duration with only one of startDate/endDate',
                ctx_id,
            )

        # Undated: kept for fact lookups, excluded from period resolution
        return Context(ctx_id, entity, has_dimensions=has_dimensions)

    def _parse_date(self, text: str, ctx_id: str) -> Optional[date]:
        """Parse an XBRL date (YYYY-MM-DD, optional time suffix)."""
        cleaned = (text or '').strip()
        match = _ISO_DATE_PATTERN.match(cleaned)
        if match:
            try:
                return date(*(int(part) for part in match.groups()))
            except ValueError:
                pass
        self._error(
            ErrorCategory.INVALID_PERIOD,
            f"Unparseable date '{cleaned}'",
            ctx_id,
        )
        return None

    def _error(
        self,
        category: ErrorCategory,
        message: str,
        element_id: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ) -> None:
        """Record a structural problem and keep going."""
        error = ParseError(severity, category, message, element_id)
        self.errors.append(error)
        self.logger.debug(str(error))

    def _log_summary(self, contexts: dict[str, Context]) -> None:
        """Log parse statistics."""
        total = len(contexts)
        dimensional = sum(1 for c in contexts.values() if c.has_dimensions)
        undated = sum(1 for c in contexts.values() if not c.is_dated)
        self.logger.info(
            f"Parsed {total} contexts: {total - dimensional} non-dimensional, "
            f"{dimensional} dimensional, {undated} undated, "
            f"{self.error_count} errors"
        )


__all__ = ['ContextParser', 'Context']
