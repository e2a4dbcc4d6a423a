# Path: fin_extract/extraction/ai_response.py
"""
AI Extraction Contract

The AI collaborator returns (or is wrapped into) an AIExtraction:
    financials: canonical keys -> number or null, plus identity keys
    confidence: per-field scores and "overall" (0-100 or 0-1)
    warnings:   [{field, message, severity}]

parse_ai_response() validates a raw payload before anything merges
it. A payload without a financials object, or missing any required
key, raises AIResponseError.
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Optional

from constants import (
    CanonicalField,
    FilingType,
    Provenance,
    Severity,
    ALL_FIELDS,
    REQUIRED_AI_FIELDS,
    SHARE_FIELDS,
    AI_SHARES_CONFIDENCE_KEY,
    UNKNOWN_COMPANY,
    UNKNOWN_PERIOD,
)
from core.exceptions import AIResponseError
from .record import ExtractionWarning, FinancialRecord


OVERALL_KEY = 'overall'
_PERCENT_SCALE = 100.0


def _is_number(value) -> bool:
    """Finite real number (bools and NaN/inf excluded)."""
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _fiscal_year(value) -> int:
    """Integral fiscal year, or 0 when absent or malformed."""
    if not _is_number(value) or float(value) != int(value):
        return 0
    return int(value)


def normalize_confidence(score) -> Optional[float]:
    """Map a 0-100 or 0-1 score onto 0-1 (None when not a number)."""
    if not _is_number(score):
        return None
    value = float(score)
    if value > 1.0:
        value /= _PERCENT_SCALE
    return max(0.0, min(1.0, value))


@dataclass
class AIExtraction:
    """Validated AI extraction result."""
    financials: dict[str, Any]
    confidence: dict[str, Any] = field(default_factory=dict)
    warnings: list[ExtractionWarning] = field(default_factory=list)

    def value(self, field_name) -> Optional[float]:
        """Numeric value for a canonical field (None when null or absent)."""
        raw = self.financials.get(CanonicalField(field_name).value)
        return float(raw) if _is_number(raw) else None

    @property
    def company_name(self) -> Optional[str]:
        return self.financials.get('companyName') or None

    @property
    def overall_confidence(self) -> Optional[float]:
        return normalize_confidence(self.confidence.get(OVERALL_KEY))

    def field_confidence(self, field_name) -> Optional[float]:
        """
        Confidence for one field on a 0-1 scale.

        Share counts use the single "sharesOutstanding" score. Falls back
        to the overall score; None when the payload carries neither.
        """
        canonical = CanonicalField(field_name)
        key = AI_SHARES_CONFIDENCE_KEY if canonical in SHARE_FIELDS else canonical.value
        score = normalize_confidence(self.confidence.get(key))
        if score is None:
            score = self.overall_confidence
        return score

    def fields_present(self) -> list[CanonicalField]:
        return [f for f in ALL_FIELDS if self.value(f) is not None]

    def to_record(self, filing_type: FilingType = FilingType.UNKNOWN) -> FinancialRecord:
        """Build a FinancialRecord with every numeric field tagged ai."""
        data = self.financials
        record = FinancialRecord(
            company_name=self.company_name or UNKNOWN_COMPANY,
            ticker=data.get('ticker') or None,
            filing_type=self._filing_type(filing_type),
            fiscal_year=_fiscal_year(data.get('fiscalYear')),
            fiscal_period=data.get('fiscalPeriod') or UNKNOWN_PERIOD,
            cik=data.get('cik') or None,
            extraction_notes=self._notes(),
        )
        for canonical in self.fields_present():
            record.set(canonical, self.value(canonical), Provenance.AI)
        return record

    def _filing_type(self, filing_type) -> FilingType:
        """Caller's filing type; the AI's only when the caller's is unknown."""
        caller = FilingType.coerce(filing_type)
        if caller != FilingType.UNKNOWN:
            return caller
        return FilingType.coerce(self.financials.get('filingType'))

    def _notes(self) -> list[str]:
        notes = self.financials.get('extractionNotes')
        if not isinstance(notes, list):
            return []
        return [str(note) for note in notes]


def _parse_warnings(raw_warnings) -> list[ExtractionWarning]:
    if raw_warnings is None:
        return []
    if not isinstance(raw_warnings, list):
        raise AIResponseError("'warnings' must be a list")

    warnings = []
    for item in raw_warnings:
        if not isinstance(item, dict):
            raise AIResponseError("Each warning must be an object")
        try:
            severity = Severity(str(item.get('severity', Severity.LOW.value)).lower())
        except ValueError:
            severity = Severity.LOW
        warnings.append(ExtractionWarning(
            field=str(item.get('field', '')),
            message=str(item.get('message', '')),
            severity=severity,
        ))
    return warnings


def parse_ai_response(payload) -> AIExtraction:
    """
    Validate a raw AI payload.

    Args:
        payload: AIExtraction (returned unchanged) or the JSON-shaped dict

    Returns:
        AIExtraction

    Raises:
        AIResponseError: If the payload does not match the contract
    """
    if isinstance(payload, AIExtraction):
        return payload
    if not isinstance(payload, dict):
        raise AIResponseError(
            f"AI payload must be an object, got {type(payload).__name__}"
        )

    financials = payload.get('financials')
    if not isinstance(financials, dict):
        raise AIResponseError("AI payload has no 'financials' object")

    missing = [key for key in REQUIRED_AI_FIELDS if key not in financials]
    if missing:
        raise AIResponseError(f"AI financials missing keys: {', '.join(missing)}")

    for canonical in ALL_FIELDS:
        value = financials.get(canonical.value)
        if value is not None and not _is_number(value):
            raise AIResponseError(
                f"AI field '{canonical.value}' is not a finite number: {value!r}"
            )

    confidence = payload.get('confidence') or {}
    if not isinstance(confidence, dict):
        raise AIResponseError("'confidence' must be an object")

    return AIExtraction(
        financials=dict(financials),
        confidence=dict(confidence),
        warnings=_parse_warnings(payload.get('warnings')),
    )


__all__ = ['AIExtraction', 'parse_ai_response', 'normalize_confidence']
