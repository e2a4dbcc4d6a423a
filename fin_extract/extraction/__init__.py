# Path: fin_extract/extraction/__init__.py
"""
Extraction Layer

Record model, AI response contract and the field-level merge.

The orchestrator sits on top of the ixbrl, mapping and validation
packages and is imported from its module:
    from extraction.orchestrator import ExtractionOrchestrator
"""

from .record import UNSET, FieldValue, ExtractionWarning, FinancialRecord, MergedRecord
from .ai_response import AIExtraction, parse_ai_response, normalize_confidence
from .merger import FieldMerger, merge_records, base_field_confidence

__all__ = [
    'UNSET',
    'FieldValue',
    'ExtractionWarning',
    'FinancialRecord',
    'MergedRecord',
    'AIExtraction',
    'parse_ai_response',
    'normalize_confidence',
    'FieldMerger',
    'merge_records',
    'base_field_confidence',
]
