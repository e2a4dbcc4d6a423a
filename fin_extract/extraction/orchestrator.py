# Path: fin_extract/extraction/orchestrator.py
"""
Extraction Orchestrator

Coordinates the full extraction of one filing:

    1. Scan the document for inline XBRL and map the facts
    2. Sufficient XBRL (revenue present, coverage >= threshold)
       -> XBRL record, no AI involvement
    3. Otherwise await the AI collaborator under a timeout
       - success with XBRL data   -> field-level merge (XBRL first)
       - success without XBRL     -> AI-only record
       - timeout / error / invalid payload -> XBRL-only (or empty)
         record with an "AI unavailable" warning
    4. Calibrate confidence and run the scale checks

Nothing here raises to the caller except cancellation: a cancelled
extract() propagates CancelledError and leaves no state behind.

Example:
    orchestrator = ExtractionOrchestrator()
    record = await orchestrator.extract(html_text, '10-K', ai_extract=my_llm_call)
    payload = record.to_dict()
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from config_loader import ConfigLoader
from constants import (
    ExtractionSource,
    FilingType,
    Severity,
    REQUIRED_XBRL_FIELDS,
    MISSING_FIELDS_MEDIUM,
)
from core.exceptions import AIResponseError
from core.logger.ipo_logging import get_output_logger
from ixbrl.detector import detect_filing_type
from ixbrl.document_parser import ParsedDocument, parse_ixbrl
from mapping.concept_mapper import ConceptMapper, MappingResult
from validation.confidence_calibrator import ConfidenceCalibrator, calibrate_record
from validation.scale_validator import ScaleValidator, validate_record
from .ai_response import AIExtraction, parse_ai_response
from .merger import FieldMerger, base_field_confidence
from .record import FinancialRecord, MergedRecord


AIExtractor = Callable[[str, Any], Awaitable[Any]]

_MISSING_FIELDS_SHOWN = 5


@dataclass
class XBRLExtraction:
    """Result of the XBRL-only attempt."""
    document: ParsedDocument
    mapping: MappingResult
    sufficient: bool = False
    missing_required: list[str] = field(default_factory=list)

    @property
    def record(self) -> FinancialRecord:
        return self.mapping.record


class ExtractionOrchestrator:
    """
    Runs XBRL extraction and, when needed, the AI fallback.

    Components are created per call; the orchestrator itself holds
    configuration only and can serve concurrent extract() calls.
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        is_public_company: bool = True,
    ):
        self.config = config or ConfigLoader()
        self.is_public_company = is_public_company
        self.logger = get_output_logger('orchestrator')
        self.min_confidence = self.config.get('xbrl_min_confidence')
        self.ai_timeout = self.config.get('ai_timeout_seconds')

    # ------------------------------------------------------------------
    # XBRL path
    # ------------------------------------------------------------------

    def try_extract_from_xbrl(
        self,
        text: str,
        filing_type=None,
    ) -> Optional[XBRLExtraction]:
        """
        Parse and map inline XBRL.

        Returns:
            XBRLExtraction, or None when the document has no iXBRL
            or no facts survive parsing
        """
        filing_type = self._filing_type(text, filing_type)
        document = parse_ixbrl(text)
        if not document.has_xbrl:
            self.logger.info("No iXBRL detected in document")
            return None
        if not document.facts:
            self.logger.info("iXBRL detected but no usable facts found")
            return None

        mapping = ConceptMapper().map(
            document.facts, document.contexts, None, filing_type, document.metadata,
        )
        missing_required = [
            f.value for f in REQUIRED_XBRL_FIELDS if f not in mapping.fields_found
        ]
        sufficient = not missing_required and mapping.confidence >= self.min_confidence

        if missing_required:
            self.logger.info(f"XBRL missing required fields: {missing_required}")
        elif not sufficient:
            self.logger.info(
                f"XBRL coverage {mapping.confidence:.2f} below threshold "
                f"{self.min_confidence}"
            )

        return XBRLExtraction(document, mapping, sufficient, missing_required)

    def extract_xbrl_only(self, text: str, filing_type=None) -> MergedRecord:
        """Extract from inline XBRL alone, whatever the coverage."""
        filing_type = self._filing_type(text, filing_type)
        extraction = self.try_extract_from_xbrl(text, filing_type)
        if extraction is None:
            merged = self._empty_record(filing_type)
            merged.add_warning(
                'extraction', 'No inline XBRL data found in document', Severity.HIGH,
            )
        else:
            merged = self._xbrl_record(extraction)
        return self._finalize(merged)

    # ------------------------------------------------------------------
    # Full path with AI fallback
    # ------------------------------------------------------------------

    async def extract(
        self,
        text: str,
        filing_type=None,
        ai_extract: Optional[AIExtractor] = None,
        credentials: Any = None,
    ) -> MergedRecord:
        """
        Extract a validated record, consulting the AI only when needed.

        Args:
            text: Full document text
            filing_type: FilingType or form string (detected when None)
            ai_extract: async callable (text, credentials) -> AI payload
            credentials: Passed through to ai_extract untouched

        Returns:
            MergedRecord (never raises except on cancellation)
        """
        filing_type = self._filing_type(text, filing_type)
        extraction = self.try_extract_from_xbrl(text, filing_type)

        if extraction is not None and extraction.sufficient:
            self.logger.info("Sufficient XBRL data, skipping AI extraction")
            return self._finalize(self._xbrl_record(extraction))

        ai, failure = await self._run_ai(ai_extract, text, credentials)

        if ai is None:
            if extraction is not None:
                merged = self._xbrl_record(extraction)
                fallback = 'using XBRL data only'
            else:
                merged = self._empty_record(filing_type)
                fallback = 'no data extracted'
                merged.add_warning(
                    'extraction', 'No inline XBRL data found in document', Severity.HIGH,
                )
            merged.add_warning('ai', f"AI unavailable ({failure}); {fallback}", Severity.MEDIUM)
        elif extraction is not None:
            merged = FieldMerger(self.config).merge(extraction.record, ai)
            self._attach_document_stats(merged, extraction.document)
        else:
            merged = self._ai_record(ai, filing_type)

        return self._finalize(merged)

    async def _run_ai(
        self,
        ai_extract: Optional[AIExtractor],
        text: str,
        credentials: Any,
    ) -> tuple[Optional[AIExtraction], Optional[str]]:
        """Await the AI collaborator; (extraction, None) or (None, reason)."""
        if ai_extract is None:
            return None, 'no AI extractor configured'

        try:
            payload = await asyncio.wait_for(ai_extract(text, credentials), self.ai_timeout)
        except asyncio.TimeoutError:
            self.logger.warning(f"AI extraction timed out after {self.ai_timeout}s")
            return None, f"timed out after {self.ai_timeout:g}s"
        except Exception as e:
            self.logger.error(f"AI extraction failed: {e}", exc_info=True)
            return None, f"{type(e).__name__}: {e}"

        try:
            return parse_ai_response(payload), None
        except AIResponseError as e:
            self.logger.warning(f"AI response rejected: {e}")
            return None, f"invalid response: {e}"

    # ------------------------------------------------------------------
    # Record assembly
    # ------------------------------------------------------------------

    def _filing_type(self, text: str, filing_type) -> FilingType:
        if filing_type is None:
            return detect_filing_type(text)
        return FilingType.coerce(filing_type)

    def _xbrl_record(self, extraction: XBRLExtraction) -> MergedRecord:
        record = extraction.record.copy()
        merged = MergedRecord(
            financials=record,
            field_confidence=base_field_confidence(record, None, self.config),
            source=ExtractionSource.XBRL,
            xbrl_fields_used=[f.value for f in record.fields_present],
        )
        self._attach_document_stats(merged, extraction.document)
        return merged

    def _ai_record(self, ai: AIExtraction, filing_type: FilingType) -> MergedRecord:
        record = ai.to_record(filing_type)
        return MergedRecord(
            financials=record,
            field_confidence=base_field_confidence(record, ai, self.config),
            source=ExtractionSource.AI,
            warnings=list(ai.warnings),
            ai_fields_used=[f.value for f in record.fields_present],
        )

    def _empty_record(self, filing_type: FilingType) -> MergedRecord:
        return MergedRecord(
            financials=FinancialRecord(filing_type=filing_type),
            source=ExtractionSource.NONE,
        )

    def _attach_document_stats(self, merged: MergedRecord, document: ParsedDocument) -> None:
        merged.xbrl_fact_count = document.fact_count
        merged.xbrl_context_count = document.context_count
        merged.parse_errors = list(document.parse_errors)

    def _add_coverage_warning(self, merged: MergedRecord) -> None:
        missing = merged.financials.fields_missing
        if not missing or merged.source == ExtractionSource.NONE:
            return
        shown = ', '.join(f.value for f in missing[:_MISSING_FIELDS_SHOWN])
        more = '...' if len(missing) > _MISSING_FIELDS_SHOWN else ''
        severity = Severity.MEDIUM if len(missing) > MISSING_FIELDS_MEDIUM else Severity.LOW
        merged.add_warning(
            'coverage', f"Missing {len(missing)} fields: {shown}{more}", severity,
        )

    def _finalize(self, merged: MergedRecord) -> MergedRecord:
        """Coverage warning, confidence calibration and scale checks."""
        self._add_coverage_warning(merged)
        calibrate_record(merged, ConfidenceCalibrator())
        validate_record(merged, self.is_public_company, ScaleValidator(self.config))

        self.logger.info(
            f"Extraction complete: source={merged.source.value}, "
            f"{len(merged.financials.fields_present)} fields, "
            f"overall confidence {merged.overall_confidence:.2f}, "
            f"{len(merged.warnings)} warnings"
        )
        return merged


__all__ = ['ExtractionOrchestrator', 'XBRLExtraction']
