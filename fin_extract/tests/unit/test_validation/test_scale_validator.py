# Path: fin_extract/tests/unit/test_validation/test_scale_validator.py
"""
Unit tests for ScaleValidator.
"""

import pytest

from constants import CanonicalField as F, ExtractionSource, Provenance, Severity
from extraction.record import FinancialRecord, MergedRecord
from validation.scale_validator import ScaleValidator, validate_record


def validate(values, is_public_company=True):
    return ScaleValidator().validate(values, is_public_company)


def by_check(errors, check):
    return next(e for e in errors if e.check == check)


class TestRevenueScale:
    """Revenue below the public floor or above the ceiling."""

    def test_revenue_in_thousands(self):
        error = by_check(validate({'revenue': 500_000.0}), 'revenue_too_small')

        assert error.current_value == 500_000.0
        assert error.suggested_value == 500_000_000.0
        assert error.suggested_multiplier == 1000
        assert error.severity == Severity.HIGH

    def test_no_suggestion_when_correction_implausible(self):
        error = by_check(validate({'revenue': 500.0}), 'revenue_too_small')
        assert error.suggested_value is None
        assert error.suggested_multiplier is None

    def test_private_company_skips_floor(self):
        assert validate({'revenue': 500_000.0}, is_public_company=False) == []

    def test_revenue_too_large(self):
        error = by_check(validate({'revenue': 5e12}), 'revenue_too_large')
        assert error.suggested_value == pytest.approx(5e9)
        assert error.suggested_multiplier == pytest.approx(0.001)

    def test_plausible_revenue(self):
        assert validate({'revenue': 5e9}) == []

    def test_configured_floor(self, monkeypatch):
        monkeypatch.setenv('FIN_EXTRACT_MIN_PUBLIC_REVENUE', '100000')
        assert validate({'revenue': 500_000.0}) == []


class TestCrossFieldScale:
    def test_net_income_exceeds_revenue(self):
        error = by_check(validate({'revenue': 5e9, 'netIncome': 8e9}), 'net_income_exceeds_revenue')
        assert error.severity == Severity.CRITICAL
        assert error.field == 'netIncome'

    def test_loss_not_flagged(self):
        assert validate({'revenue': 5e9, 'netIncome': -8e9}) == []

    def test_debt_exceeds_assets(self):
        errors = validate({'totalDebt': 5e9, 'totalAssets': 2e9})
        assert [e.check for e in errors] == ['debt_exceeds_assets']

    def test_receivable_days(self):
        error = by_check(
            validate({'revenue': 5e9, 'accountsReceivable': 6e9}), 'receivable_days',
        )
        assert error.severity == Severity.MEDIUM

    def test_balance_sheet_scale_mismatch(self):
        errors = validate({
            'totalAssets': 2e9, 'totalLiabilities': 1.2e6, 'totalEquity': 8e5,
        })
        assert [e.check for e in errors] == ['balance_sheet_scale_mismatch']


class TestShareScale:
    def test_shares_in_millions(self):
        error = by_check(validate({F.SHARES_OUTSTANDING_BASIC: 150.0}), 'shares_too_small')

        assert error.field == 'sharesOutstandingBasic'
        assert error.suggested_value == 150_000_000.0
        assert error.suggested_multiplier == 1_000_000

    def test_both_share_fields_checked(self):
        errors = validate({'sharesOutstandingBasic': 150.0, 'sharesOutstandingDiluted': 155.0})
        assert len(errors) == 2

    def test_plausible_shares(self):
        assert validate({'sharesOutstandingBasic': 1.5e8}) == []


class TestValidateRecord:
    def test_errors_attached_as_warnings(self):
        record = FinancialRecord()
        record.set(F.REVENUE, 500_000.0, Provenance.XBRL)
        merged = MergedRecord(financials=record, source=ExtractionSource.XBRL)

        errors = validate_record(merged)

        assert merged.scale_errors == errors
        assert merged.warnings[0].field == 'revenue'
        assert merged.to_dict()['scaleErrors'][0]['suggestedValue'] == 500_000_000.0

    def test_values_never_rewritten(self):
        record = FinancialRecord()
        record.set(F.REVENUE, 500_000.0, Provenance.XBRL)
        merged = MergedRecord(financials=record, source=ExtractionSource.XBRL)

        validate_record(merged)
        assert merged.financials.value(F.REVENUE) == 500_000.0
