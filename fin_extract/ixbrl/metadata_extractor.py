# Path: fin_extract/ixbrl/metadata_extractor.py
"""
Document Metadata Extractor

Reads filer identity from dei: cover-page tags:
- dei:EntityRegistrantName -> company name (fallback: <title> before " - ")
- dei:TradingSymbol -> ticker (upper-cased)
- dei:DocumentType -> form type
- dei:EntityCentralIndexKey -> CIK (fallback: first context entity)

Tag text goes through lxml.html so nested spans and entities
resolve to plain text.
"""

import re
from dataclasses import dataclass
from typing import Optional

from lxml import html as lxml_html
from lxml.etree import ParserError

from core.logger.ipo_logging import get_input_logger
from .context_parser import Context


_NONNUMERIC_TEMPLATE = (
    r'<ix:nonNumeric\b[^>]*\bname\s*=\s*["\']{name}["\'][^>]*>'
    r'(.*?)</ix:nonNumeric>'
)
_TITLE_PATTERN = re.compile(r'<title[^>]*>(.*?)</title>', re.DOTALL | re.IGNORECASE)
_TITLE_SEPARATOR = ' - '

_REGISTRANT_NAME = 'dei:EntityRegistrantName'
_TRADING_SYMBOL = 'dei:TradingSymbol'
_DOCUMENT_TYPE = 'dei:DocumentType'
_CENTRAL_INDEX_KEY = 'dei:EntityCentralIndexKey'


@dataclass
class DocumentMetadata:
    """Filer identity read from the cover page."""
    company_name: Optional[str] = None
    ticker: Optional[str] = None
    document_type: Optional[str] = None
    cik: Optional[str] = None


def markup_to_text(markup: str) -> str:
    """Collapse an HTML fragment to its whitespace-normalised text."""
    if not markup or not markup.strip():
        return ''
    try:
        text = lxml_html.fragment_fromstring(markup, create_parent='div').text_content()
    except ParserError:
        return ''
    return ' '.join(text.split())


class MetadataExtractor:
    """Extracts DocumentMetadata from raw iXBRL text."""

    def __init__(self):
        self.logger = get_input_logger('metadata_extractor')

    def extract(
        self,
        content: str,
        contexts: Optional[dict[str, Context]] = None
    ) -> DocumentMetadata:
        """
        Read cover-page identity.

        Args:
            content: Full iXBRL HTML content
            contexts: Parsed contexts, used for the CIK fallback

        Returns:
            DocumentMetadata with None for anything not found
        """
        content = content or ''
        metadata = DocumentMetadata(
            company_name=self._company_name(content),
            ticker=self._ticker(content),
            document_type=self._nonnumeric_text(content, _DOCUMENT_TYPE),
            cik=self._cik(content, contexts or {}),
        )
        self.logger.info(
            f"Metadata: company={metadata.company_name}, ticker={metadata.ticker}, "
            f"form={metadata.document_type}, cik={metadata.cik}"
        )
        return metadata

    def _nonnumeric_text(self, content: str, name: str) -> Optional[str]:
        """Text of the first ix:nonNumeric carrying the given concept."""
        pattern = re.compile(
            _NONNUMERIC_TEMPLATE.format(name=re.escape(name)),
            re.DOTALL | re.IGNORECASE,
        )
        match = pattern.search(content)
        if not match:
            return None
        return markup_to_text(match.group(1)) or None

    def _company_name(self, content: str) -> Optional[str]:
        name = self._nonnumeric_text(content, _REGISTRANT_NAME)
        if name:
            return name

        # Titles are often "COMPANY NAME - 10-K"
        title_match = _TITLE_PATTERN.search(content)
        if title_match:
            title = markup_to_text(title_match.group(1))
            index = title.find(_TITLE_SEPARATOR)
            if index > 0:
                return title[:index].strip()
        return None

    def _ticker(self, content: str) -> Optional[str]:
        ticker = self._nonnumeric_text(content, _TRADING_SYMBOL)
        return ticker.upper() if ticker else None

    def _cik(self, content: str, contexts: dict[str, Context]) -> Optional[str]:
        cik = self._nonnumeric_text(content, _CENTRAL_INDEX_KEY)
        if cik:
            return cik
        for context in contexts.values():
            if context.entity:
                return context.entity
        return None


__all__ = ['MetadataExtractor', 'DocumentMetadata', 'markup_to_text']
