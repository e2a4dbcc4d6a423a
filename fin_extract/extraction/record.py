# Path: fin_extract/extraction/record.py
"""
Canonical Financial Record

FinancialRecord holds the fixed canonical field set. A field is either
UNSET (absent) or holds a FieldValue with its provenance, so "zero
because absent" and "zero because reported" never collapse into the
same thing.

MergedRecord wraps the record with everything downstream consumers
need: per-field confidence, the source tag, warnings, calibration
adjustments and scale diagnostics. to_dict() is the output contract.

Example:
    record = FinancialRecord(company_name='Acme Corp')
    record.set(CanonicalField.REVENUE, 1e9, Provenance.XBRL)
    record.value(CanonicalField.REVENUE)      # 1000000000.0
    record.get(CanonicalField.NET_INCOME)     # UNSET
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from constants import (
    CanonicalField,
    ExtractionSource,
    FilingType,
    Provenance,
    Severity,
    ALL_FIELDS,
    UNKNOWN_COMPANY,
    UNKNOWN_PERIOD,
)


class _Unset:
    """Marker for a canonical field that holds no value."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'UNSET'


UNSET = _Unset()


@dataclass(frozen=True)
class FieldValue:
    """One populated canonical field."""
    value: float
    provenance: Provenance
    concept: Optional[str] = None
    context_ref: Optional[str] = None


@dataclass
class ExtractionWarning:
    """Warning attached to the output record."""
    field: str
    message: str
    severity: Severity = Severity.LOW

    def to_dict(self) -> dict[str, str]:
        return {
            'field': self.field,
            'message': self.message,
            'severity': self.severity.value,
        }


class FinancialRecord:
    """
    Builder over the canonical field set.

    Identity attributes are plain; numeric fields go through set() /
    get() so every value carries its provenance.
    """

    def __init__(
        self,
        company_name: str = UNKNOWN_COMPANY,
        ticker: Optional[str] = None,
        filing_type: FilingType = FilingType.UNKNOWN,
        fiscal_year: int = 0,
        fiscal_period: str = UNKNOWN_PERIOD,
        cik: Optional[str] = None,
        extraction_notes: Optional[list[str]] = None,
    ):
        self.company_name = company_name
        self.ticker = ticker
        self.filing_type = FilingType.coerce(filing_type)
        self.fiscal_year = fiscal_year
        self.fiscal_period = fiscal_period
        self.cik = cik
        self.extraction_notes = list(extraction_notes or [])
        self._fields: dict[CanonicalField, FieldValue] = {}

    def set(
        self,
        field_name,
        value: float,
        provenance: Provenance,
        concept: Optional[str] = None,
        context_ref: Optional[str] = None,
    ) -> None:
        """Populate a field (replaces any previous value)."""
        self._fields[CanonicalField(field_name)] = FieldValue(
            float(value), Provenance(provenance), concept, context_ref,
        )

    def unset(self, field_name) -> None:
        self._fields.pop(CanonicalField(field_name), None)

    def get(self, field_name):
        """FieldValue for the field, or UNSET."""
        return self._fields.get(CanonicalField(field_name), UNSET)

    def value(self, field_name, default: Optional[float] = None) -> Optional[float]:
        """Numeric value of the field, or default when UNSET."""
        entry = self.get(field_name)
        return entry.value if entry else default

    def has(self, field_name) -> bool:
        return CanonicalField(field_name) in self._fields

    def __contains__(self, field_name) -> bool:
        return self.has(field_name)

    @property
    def fields_present(self) -> list[CanonicalField]:
        """Populated fields in canonical order."""
        return [f for f in ALL_FIELDS if f in self._fields]

    @property
    def fields_missing(self) -> list[CanonicalField]:
        return [f for f in ALL_FIELDS if f not in self._fields]

    def values(self) -> dict[CanonicalField, float]:
        """Populated fields and their values."""
        return {f: self._fields[f].value for f in self.fields_present}

    def provenance(self) -> dict[str, str]:
        """Provenance tag per populated field."""
        return {
            f.value: self._fields[f].provenance.value for f in self.fields_present
        }

    def has_placeholder_identity(self) -> bool:
        return not self.company_name or self.company_name == UNKNOWN_COMPANY

    def copy(self) -> 'FinancialRecord':
        clone = FinancialRecord(
            company_name=self.company_name,
            ticker=self.ticker,
            filing_type=self.filing_type,
            fiscal_year=self.fiscal_year,
            fiscal_period=self.fiscal_period,
            cik=self.cik,
            extraction_notes=self.extraction_notes,
        )
        clone._fields = dict(self._fields)
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Identity plus every canonical field (UNSET as None)."""
        data: dict[str, Any] = {
            'companyName': self.company_name,
            'ticker': self.ticker,
            'filingType': self.filing_type.value,
            'fiscalYear': self.fiscal_year,
            'fiscalPeriod': self.fiscal_period,
            'cik': self.cik,
            'extractionNotes': list(self.extraction_notes),
        }
        for f in ALL_FIELDS:
            data[f.value] = self.value(f)
        return data

    def __repr__(self) -> str:
        return (
            f"FinancialRecord(company={self.company_name!r}, "
            f"period={self.fiscal_period!r}, fields={len(self._fields)})"
        )


@dataclass
class MergedRecord:
    """The record handed downstream, with confidence and diagnostics."""
    financials: FinancialRecord
    field_confidence: dict[str, float] = field(default_factory=dict)
    overall_confidence: float = 0.0
    source: ExtractionSource = ExtractionSource.NONE
    warnings: list[ExtractionWarning] = field(default_factory=list)
    xbrl_fields_used: list[str] = field(default_factory=list)
    ai_fields_used: list[str] = field(default_factory=list)
    adjustments: list = field(default_factory=list)
    scale_errors: list = field(default_factory=list)
    xbrl_fact_count: int = 0
    xbrl_context_count: int = 0
    parse_errors: list = field(default_factory=list)

    @property
    def provenance(self) -> dict[str, str]:
        return self.financials.provenance()

    def add_warning(
        self,
        field_name: str,
        message: str,
        severity: Severity = Severity.LOW
    ) -> None:
        self.warnings.append(ExtractionWarning(field_name, message, severity))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the output contract."""
        return {
            'financials': self.financials.to_dict(),
            'confidence': {
                'overall': self.overall_confidence,
                'fields': dict(self.field_confidence),
            },
            'warnings': [w.to_dict() for w in self.warnings],
            'source': self.source.value,
            'provenance': self.provenance,
            'xbrlFieldsUsed': list(self.xbrl_fields_used),
            'aiFieldsUsed': list(self.ai_fields_used),
            'adjustments': [a.to_dict() for a in self.adjustments],
            'scaleErrors': [e.to_dict() for e in self.scale_errors],
            'xbrlFactCount': self.xbrl_fact_count,
            'xbrlContextCount': self.xbrl_context_count,
            'parseErrors': [str(e) for e in self.parse_errors],
        }


__all__ = [
    'UNSET',
    'FieldValue',
    'ExtractionWarning',
    'FinancialRecord',
    'MergedRecord',
]
