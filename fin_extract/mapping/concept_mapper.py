# Path: fin_extract/mapping/concept_mapper.py
"""
Concept Mapper

Maps parsed facts onto the canonical field set.

Rules:
- Duration fields read only facts on the current-period context,
  instant fields only the balance-sheet context, priorYearRevenue only
  the prior-period context.
- First match by alias priority: for each field the alias table is
  walked in order and the first alias with a parsed fact wins. A
  populated field is never overwritten.
- The same concept twice on one context: first occurrence in
  document order. Unparsed facts never populate a field.
- Derived fields (provenance "derived") only when the direct field is
  unset and every component is present:
      totalDebt    = shortTermDebt + longTermDebt
      grossProfit  = revenue - costOfRevenue
      freeCashFlow = operatingCashFlow - |capitalExpenditures|

Coverage:
    min(1, 0.7 * found / all_fields + 0.3 * critical_found / critical_fields)
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from constants import (
    CanonicalField as F,
    FilingType,
    PeriodKind,
    Provenance,
    ALL_FIELDS,
    CRITICAL_FIELDS,
    COVERAGE_WEIGHT,
    CRITICAL_WEIGHT,
    UNKNOWN_COMPANY,
)
from core.logger.ipo_logging import get_process_logger
from extraction.record import FinancialRecord
from ixbrl.context_parser import Context
from ixbrl.fact_parser import Fact
from ixbrl.metadata_extractor import DocumentMetadata
from ixbrl.period_resolver import PeriodResolver, ResolvedPeriods
from .concept_aliases import aliases_for


XBRL_EXTRACTION_NOTE = 'Data extracted from iXBRL structured data'

_MONTHS_PER_QUARTER = 3


@dataclass
class MappingResult:
    """Outcome of mapping one document's facts."""
    record: FinancialRecord
    fields_found: list[F] = field(default_factory=list)
    fields_missing: list[F] = field(default_factory=list)
    confidence: float = 0.0
    current_context_id: Optional[str] = None
    balance_sheet_context_id: Optional[str] = None
    prior_context_id: Optional[str] = None
    skipped_unparsed: list[str] = field(default_factory=list)

    @property
    def critical_found(self) -> int:
        return sum(1 for f in CRITICAL_FIELDS if f in self.fields_found)


def coverage_confidence(fields_found) -> float:
    """Coverage score for a set of populated fields."""
    found = set(fields_found)
    coverage = len(found) / len(ALL_FIELDS)
    critical = sum(1 for f in CRITICAL_FIELDS if f in found) / len(CRITICAL_FIELDS)
    return min(1.0, coverage * COVERAGE_WEIGHT + critical * CRITICAL_WEIGHT)


def fiscal_labels(end_date, filing_type: FilingType) -> tuple[int, str]:
    """(fiscal_year, fiscal_period) such as (2023, 'FY2023') or (2023, 'Q3 2023')."""
    if filing_type == FilingType.QUARTERLY:
        quarter = math.ceil(end_date.month / _MONTHS_PER_QUARTER)
        return end_date.year, f"Q{quarter} {end_date.year}"
    return end_date.year, f"FY{end_date.year}"


def concept_value(facts: list[Fact], concept: str, context_id: str) -> Optional[float]:
    """Value of the first parsed fact for a concept on a context."""
    for fact in facts:
        if fact.concept == concept and fact.context_ref == context_id and fact.is_parsed:
            return fact.value
    return None


def unique_concepts(facts: list[Fact]) -> list[str]:
    """Sorted distinct concept names present in the facts."""
    return sorted({fact.concept for fact in facts})


class ConceptMapper:
    """
    Maps facts to a FinancialRecord.

    Stateless between calls; safe to reuse.
    """

    def __init__(self, resolver: Optional[PeriodResolver] = None):
        self.logger = get_process_logger('concept_mapper')
        self.resolver = resolver or PeriodResolver()

    def map(
        self,
        facts: list[Fact],
        contexts: dict[str, Context],
        periods: Optional[ResolvedPeriods] = None,
        filing_type: FilingType = FilingType.ANNUAL,
        metadata: Optional[DocumentMetadata] = None,
    ) -> MappingResult:
        """
        Map facts onto canonical fields.

        Args:
            facts: Parsed facts (document order)
            contexts: Parsed contexts
            periods: Resolved periods (resolved here when None)
            filing_type: Annual or quarterly
            metadata: Cover-page identity copied into the record

        Returns:
            MappingResult with the populated record and coverage
        """
        filing_type = FilingType.coerce(filing_type)
        if periods is None:
            periods = self.resolver.resolve(contexts, filing_type)

        record = self._new_record(filing_type, periods, metadata)
        context_ids = {
            PeriodKind.DURATION: periods.current_id,
            PeriodKind.INSTANT: periods.balance_sheet_id,
            PeriodKind.PRIOR: periods.prior_id,
        }

        parsed, unparsed = self._index_facts(facts)
        skipped = []

        for canonical in ALL_FIELDS:
            for concept, period in aliases_for(canonical):
                context_id = context_ids[period]
                if context_id is None:
                    continue
                key = (context_id, concept)
                fact = parsed.get(key)
                if fact is not None:
                    record.set(canonical, fact.value, Provenance.XBRL, concept, context_id)
                    break
                if key in unparsed and concept not in skipped:
                    skipped.append(concept)

        self._derive_fields(record)

        found = record.fields_present
        result = MappingResult(
            record=record,
            fields_found=found,
            fields_missing=record.fields_missing,
            confidence=coverage_confidence(found),
            current_context_id=periods.current_id,
            balance_sheet_context_id=periods.balance_sheet_id,
            prior_context_id=periods.prior_id,
            skipped_unparsed=skipped,
        )
        self.logger.info(
            f"Mapped {len(found)} fields ({result.critical_found} critical), "
            f"coverage {result.confidence:.1%}, "
            f"{len(skipped)} unparsed concepts skipped"
        )
        return result

    def _new_record(
        self,
        filing_type: FilingType,
        periods: ResolvedPeriods,
        metadata: Optional[DocumentMetadata],
    ) -> FinancialRecord:
        metadata = metadata or DocumentMetadata()
        record = FinancialRecord(
            company_name=metadata.company_name or UNKNOWN_COMPANY,
            ticker=metadata.ticker,
            filing_type=filing_type,
            cik=metadata.cik,
            extraction_notes=[XBRL_EXTRACTION_NOTE],
        )
        if periods.current is not None:
            record.fiscal_year, record.fiscal_period = fiscal_labels(
                periods.current.end_date, filing_type,
            )
        return record

    def _index_facts(self, facts: list[Fact]) -> tuple[dict, set]:
        """First parsed fact per (context, concept), plus unparsed keys."""
        parsed: dict[tuple[str, str], Fact] = {}
        unparsed: set[tuple[str, str]] = set()
        for fact in facts:
            key = (fact.context_ref, fact.concept)
            if not fact.is_parsed:
                unparsed.add(key)
                continue
            parsed.setdefault(key, fact)
        return parsed, unparsed

    def _derive_fields(self, record: FinancialRecord) -> None:
        """Fill derivable fields that were not reported directly."""
        if not record.has(F.TOTAL_DEBT) and record.has(F.SHORT_TERM_DEBT) \
                and record.has(F.LONG_TERM_DEBT):
            record.set(
                F.TOTAL_DEBT,
                record.value(F.SHORT_TERM_DEBT) + record.value(F.LONG_TERM_DEBT),
                Provenance.DERIVED,
            )

        if not record.has(F.GROSS_PROFIT) and record.has(F.REVENUE) \
                and record.has(F.COST_OF_REVENUE):
            record.set(
                F.GROSS_PROFIT,
                record.value(F.REVENUE) - record.value(F.COST_OF_REVENUE),
                Provenance.DERIVED,
            )

        # Capex is reported either as an outflow (negative) or as a magnitude
        if not record.has(F.FREE_CASH_FLOW) and record.has(F.OPERATING_CASH_FLOW) \
                and record.has(F.CAPITAL_EXPENDITURES):
            record.set(
                F.FREE_CASH_FLOW,
                record.value(F.OPERATING_CASH_FLOW) - abs(record.value(F.CAPITAL_EXPENDITURES)),
                Provenance.DERIVED,
            )


__all__ = [
    'ConceptMapper',
    'MappingResult',
    'coverage_confidence',
    'fiscal_labels',
    'concept_value',
    'unique_concepts',
]
