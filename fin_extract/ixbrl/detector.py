# Path: fin_extract/ixbrl/detector.py
"""
iXBRL Detector

Cheap presence check that gates the rest of the pipeline. A document
is treated as inline XBRL when any of these is found:
- the inline XBRL namespace declaration
- an ix:nonFraction / ix:nonNumeric / ix:continuation / ix:footnote tag
- an xbrli:context element

Single regex pass per marker, no parsing.
"""

import re

from constants import FilingType


_IX_NAMESPACE_PATTERN = re.compile(
    r'xmlns:ix\s*=\s*["\']http://www\.xbrl\.org/2013/inlineXBRL["\']',
    re.IGNORECASE,
)
_IX_TAG_PATTERN = re.compile(
    r'<ix:(?:nonFraction|nonNumeric|continuation|footnote)\b',
    re.IGNORECASE,
)
_CONTEXT_TAG_PATTERN = re.compile(r'<xbrli:context\b', re.IGNORECASE)

_ANNUAL_MARKERS = ('form 10-k', 'annual report')
_QUARTERLY_MARKERS = ('form 10-q', 'quarterly report')


def detect_ixbrl(text: str) -> bool:
    """Return True when the document carries inline XBRL markers."""
    if not text:
        return False
    return bool(
        _IX_NAMESPACE_PATTERN.search(text)
        or _IX_TAG_PATTERN.search(text)
        or _CONTEXT_TAG_PATTERN.search(text)
    )


def detect_filing_type(text: str) -> FilingType:
    """
    Guess the filing type from document wording.

    Annual markers are checked first: a 10-K frequently mentions
    quarterly results, the reverse is rare.
    """
    lowered = (text or '').lower()
    if any(marker in lowered for marker in _ANNUAL_MARKERS):
        return FilingType.ANNUAL
    if any(marker in lowered for marker in _QUARTERLY_MARKERS):
        return FilingType.QUARTERLY
    return FilingType.UNKNOWN


__all__ = ['detect_ixbrl', 'detect_filing_type']
