# Path: fin_extract/ixbrl/__init__.py
"""
Inline XBRL scanning.

Regex-driven readers for the parts of an iXBRL filing the extraction
core needs: contexts, numeric facts and cover-page metadata.
"""

from .detector import detect_ixbrl, detect_filing_type
from .context_parser import ContextParser, Context
from .fact_parser import FactParser, Fact, parse_numeric_text, apply_scale_and_sign
from .metadata_extractor import MetadataExtractor, DocumentMetadata
from .document_parser import DocumentParser, ParsedDocument, parse_ixbrl
from .period_resolver import PeriodResolver, ResolvedPeriods
from .parse_errors import ParseError, ErrorSeverity, ErrorCategory

__all__ = [
    'detect_ixbrl',
    'detect_filing_type',
    'ContextParser',
    'Context',
    'FactParser',
    'Fact',
    'parse_numeric_text',
    'apply_scale_and_sign',
    'MetadataExtractor',
    'DocumentMetadata',
    'DocumentParser',
    'ParsedDocument',
    'parse_ixbrl',
    'PeriodResolver',
    'ResolvedPeriods',
    'ParseError',
    'ErrorSeverity',
    'ErrorCategory',
]
