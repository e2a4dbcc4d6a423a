# Path: fin_extract/extraction/merger.py
"""
Field-Level Merge

Combines the XBRL-mapped record with an AI extraction.

Priority:
- A present, non-zero XBRL value is always kept (provenance as mapped).
- Otherwise the AI value fills the field when the AI has one
  (provenance ai).
- Identity attributes come from the AI only when the XBRL side holds a
  placeholder: "Unknown Company", empty ticker/period, zero year.

Source tag is "hybrid" when the AI filled at least one numeric field,
else "xbrl".

Base confidence per field, before calibration:
    xbrl 0.95, derived 0.90, ai = AI score for the field, falling back
    to the AI overall score, then 0.5.
"""

from typing import Optional

from config_loader import ConfigLoader
from constants import (
    ExtractionSource,
    Provenance,
    ALL_FIELDS,
)
from core.logger.ipo_logging import get_process_logger
from .ai_response import AIExtraction
from .record import FinancialRecord, MergedRecord


def base_field_confidence(
    record: FinancialRecord,
    ai: Optional[AIExtraction] = None,
    config: Optional[ConfigLoader] = None,
) -> dict[str, float]:
    """Starting confidence for every populated field, keyed by wire name."""
    config = config or ConfigLoader()
    xbrl_score = config.get('xbrl_field_confidence')
    derived_score = config.get('derived_field_confidence')
    ai_default = config.get('ai_default_confidence')

    scores = {}
    for canonical in record.fields_present:
        provenance = record.get(canonical).provenance
        if provenance == Provenance.XBRL:
            score = xbrl_score
        elif provenance == Provenance.DERIVED:
            score = derived_score
        else:
            score = ai.field_confidence(canonical) if ai is not None else None
            if score is None:
                score = ai_default
        scores[canonical.value] = score
    return scores


class FieldMerger:
    """Merges an XBRL record with an AI extraction, XBRL first."""

    def __init__(self, config: Optional[ConfigLoader] = None):
        self.config = config or ConfigLoader()
        self.logger = get_process_logger('merger')

    def merge(self, xbrl_record: FinancialRecord, ai: AIExtraction) -> MergedRecord:
        """
        Merge field by field.

        Args:
            xbrl_record: Record built by the concept mapper
            ai: Validated AI extraction

        Returns:
            MergedRecord with base confidences (not yet calibrated)
        """
        merged = xbrl_record.copy()
        ai_fields_used = []

        for canonical in ALL_FIELDS:
            xbrl_value = merged.value(canonical)
            if xbrl_value is not None and xbrl_value != 0:
                continue
            ai_value = ai.value(canonical)
            if ai_value is None:
                continue
            merged.set(canonical, ai_value, Provenance.AI)
            ai_fields_used.append(canonical.value)

        self._merge_identity(merged, ai)

        xbrl_fields_used = [
            f.value for f in merged.fields_present
            if merged.get(f).provenance != Provenance.AI
        ]
        source = ExtractionSource.HYBRID if ai_fields_used else ExtractionSource.XBRL

        if source == ExtractionSource.HYBRID:
            merged.extraction_notes.append(
                f"Hybrid extraction: {len(xbrl_fields_used)} fields from iXBRL, "
                f"{len(ai_fields_used)} fields from AI"
            )

        self.logger.info(
            f"Merged: {len(xbrl_fields_used)} XBRL + {len(ai_fields_used)} AI fields "
            f"(source {source.value})"
        )

        return MergedRecord(
            financials=merged,
            field_confidence=base_field_confidence(merged, ai, self.config),
            source=source,
            warnings=list(ai.warnings),
            xbrl_fields_used=xbrl_fields_used,
            ai_fields_used=ai_fields_used,
        )

    def _merge_identity(self, merged: FinancialRecord, ai: AIExtraction) -> None:
        """Fill placeholder identity attributes from the AI side."""
        ai_record = ai.to_record(merged.filing_type)

        if merged.has_placeholder_identity() and not ai_record.has_placeholder_identity():
            merged.company_name = ai_record.company_name
        if not merged.ticker:
            merged.ticker = ai_record.ticker
        if not merged.fiscal_period:
            merged.fiscal_period = ai_record.fiscal_period
        if not merged.fiscal_year:
            merged.fiscal_year = ai_record.fiscal_year
        if not merged.cik:
            merged.cik = ai_record.cik


def merge_records(
    xbrl_record: FinancialRecord,
    ai: AIExtraction,
    config: Optional[ConfigLoader] = None,
) -> MergedRecord:
    """Merge with a fresh FieldMerger."""
    return FieldMerger(config).merge(xbrl_record, ai)


__all__ = ['FieldMerger', 'merge_records', 'base_field_confidence']
