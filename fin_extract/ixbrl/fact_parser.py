# Path: fin_extract/ixbrl/fact_parser.py
"""
Fact Parser - Reads ix:nonFraction numeric facts.

Computes the true value from the displayed value by honoring the
numeric attributes:
- sign: sign="-" forces a negative value
- scale: Power of 10 multiplier (scale="3" = thousands)
- decimals: Precision level ("INF" = exact)
- unitRef: Unit of measurement (USD, shares, per-share)
- format: Display format transformer

    true_value = parse(displayed_text) * 10^scale, negated when sign="-"

Signs are not additive: a parenthesised "(1,234)" tagged sign="-" is
still negative, not positive.

Text that cannot be read as a number leaves the fact UNPARSED
(value None). It is never coerced to zero, so a genuinely reported
zero stays distinguishable from a parse failure.
"""

import html
import re
from dataclasses import dataclass
from typing import Optional

from constants import DEFAULT_UNIT
from core.logger.ipo_logging import get_input_logger
from .parse_errors import ParseError, ErrorSeverity, ErrorCategory


# Self-closing facts are nil facts and carry no text
_NONFRACTION_PATTERN = re.compile(
    r'<ix:nonFraction\b([^>]*?)(?:/>|>(.*?)</ix:nonFraction>)',
    re.DOTALL | re.IGNORECASE,
)
_ATTR_PATTERN = re.compile(
    r'([\w:.-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')',
)
_TAG_PATTERN = re.compile(r'<[^>]+>')
_WHITESPACE_PATTERN = re.compile(r'\s+')
_NUMBER_PATTERN = re.compile(r'^(?:\d+\.?\d*|\.\d+)$')

_DASHES = frozenset({'-', '--', '---', '–', '—'})
_CURRENCY_SYMBOLS = ('$', '€', '£', '¥')
_ZERO_FORMATS = ('fixed-zero', 'fixedzero', 'zerodash')
_COMMA_DECIMAL_FORMATS = ('numcommadecimal', 'num-comma-decimal')


@dataclass(frozen=True)
class Fact:
    """One ix:nonFraction fact with its computed value."""
    concept: str
    context_ref: str
    value: Optional[float]
    raw_text: str = ''
    scale: int = 0
    negated: bool = False
    decimals: Optional[int] = 0
    unit_ref: str = DEFAULT_UNIT
    source_text: str = ''
    fact_id: str = ''

    @property
    def is_parsed(self) -> bool:
        """False when the displayed text could not be read as a number."""
        return self.value is not None


def parse_numeric_text(text: str, number_format: str = '') -> Optional[float]:
    """
    Parse the displayed text to a raw numeric value.

    Handles common display formats:
    - Comma-separated: "1,234,567"
    - Decimal: "1234.56"
    - Parenthesized negatives: "(1,234)" -> -1234
    - Dash for zero: "-" or "--"
    - Comma-decimal formats: "1.234,56" (when format says so)

    Returns:
        Parsed value, or None when the text is not a number
    """
    cleaned = html.unescape(_TAG_PATTERN.sub('', text or ''))
    cleaned = _WHITESPACE_PATTERN.sub('', cleaned)
    fmt = (number_format or '').lower()

    if any(marker in fmt for marker in _ZERO_FORMATS):
        return 0.0
    if not cleaned:
        return None
    if cleaned in _DASHES:
        return 0.0

    is_negative = False
    if cleaned.startswith('(') and cleaned.endswith(')'):
        is_negative = True
        cleaned = cleaned[1:-1]

    for symbol in _CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, '')

    if any(marker in fmt for marker in _COMMA_DECIMAL_FORMATS):
        cleaned = cleaned.replace('.', '').replace(',', '.')
    else:
        cleaned = cleaned.replace(',', '')

    if cleaned.startswith('-'):
        is_negative = True
        cleaned = cleaned[1:]

    if not _NUMBER_PATTERN.match(cleaned):
        return None
    value = float(cleaned)

    return -value if is_negative else value


def apply_scale_and_sign(value: float, scale: int, negated: bool) -> float:
    """Apply 10^scale and a forced sign. Order does not matter."""
    scaled = value * (10 ** scale)
    return -abs(scaled) if negated else scaled


class FactParser:
    """
    Extracts ix:nonFraction facts from iXBRL content.

    One instance per document; the error list describes the last parse.
    """

    def __init__(self):
        """Initialize fact parser."""
        self.logger = get_input_logger('fact_parser')
        self.errors: list[ParseError] = []

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def parse(self, content: str) -> list[Fact]:
        """Extract all ix:nonFraction facts in document order."""
        self.errors = []
        facts = []
        negated_count = 0

        for match in _NONFRACTION_PATTERN.finditer(content or ''):
            attrs = self._parse_attributes(match.group(1))
            inner = match.group(2)
            if inner is None:
                self._error(
                    ErrorCategory.INVALID_FACT,
                    f"Nil fact skipped: {attrs.get('name', '?')}",
                    attrs.get('id'), ErrorSeverity.INFO,
                )
                continue

            fact = self._build_fact(attrs, inner)
            if fact is None:
                continue
            if fact.negated:
                negated_count += 1
            facts.append(fact)

        unparsed = sum(1 for f in facts if not f.is_parsed)
        self.logger.info(
            f"Parsed {len(facts)} numeric facts "
            f"({negated_count} with sign=\"-\", {unparsed} unparsed, "
            f"{self.error_count} errors)"
        )
        return facts

    def _parse_attributes(self, attrs_str: str) -> dict[str, str]:
        """Parse HTML/XML attributes into a dictionary (lower-case keys)."""
        attrs = {}
        for attr_match in _ATTR_PATTERN.finditer(attrs_str or ''):
            key = attr_match.group(1).lower()
            value = attr_match.group(2)
            if value is None:
                value = attr_match.group(3)
            attrs[key] = value
        return attrs

    def _build_fact(self, attrs: dict[str, str], inner: str) -> Optional[Fact]:
        """Build a Fact from parsed attributes and inner markup."""
        concept = attrs.get('name', '').strip()
        context_ref = attrs.get('contextref', '').strip()
        fact_id = attrs.get('id', '')

        if not concept or not context_ref:
            self._error(
                ErrorCategory.INVALID_FACT,
                f"Fact without {'name' if not concept else 'contextRef'}",
                fact_id or concept or None,
            )
            return None

        scale = self._parse_scale(attrs.get('scale'), fact_id or concept)
        decimals = self._parse_decimals(attrs.get('decimals'))
        negated = attrs.get('sign', '').strip() in ('-', '\u2212')
        source_text = html.unescape(_TAG_PATTERN.sub('', inner)).strip()

        raw_value = parse_numeric_text(inner, attrs.get('format', ''))
        if raw_value is None:
            self._error(
                ErrorCategory.UNPARSED_VALUE,
                f"Cannot read '{source_text}' as a number for {concept}",
                fact_id or concept, ErrorSeverity.WARNING,
            )
            value = None
        else:
            value = apply_scale_and_sign(raw_value, scale, negated)

        return Fact(
            concept=concept,
            context_ref=context_ref,
            value=value,
            raw_text=inner,
            scale=scale,
            negated=negated,
            decimals=decimals,
            unit_ref=attrs.get('unitref', '').strip() or DEFAULT_UNIT,
            source_text=source_text,
            fact_id=fact_id,
        )

    def _parse_scale(self, scale_str: Optional[str], element_id: str) -> int:
        """Parse scale attribute to integer (default 0)."""
        if scale_str is None or not scale_str.strip():
            return 0
        try:
            return int(scale_str.strip())
        except ValueError:
            self._error(
                ErrorCategory.INVALID_SCALE,
                f"Invalid scale '{scale_str}', using 0",
                element_id, ErrorSeverity.WARNING,
            )
            return 0

    def _parse_decimals(self, decimals_str: Optional[str]) -> Optional[int]:
        """Parse decimals attribute (default 0, INF -> None)."""
        if decimals_str is None or not decimals_str.strip():
            return 0
        text = decimals_str.strip()
        if text.upper() == 'INF':
            return None
        try:
            return int(text)
        except ValueError:
            return 0

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


__all__ = ['FactParser', 'Fact', 'parse_numeric_text', 'apply_scale_and_sign']
