# Path: fin_extract/tests/unit/test_extraction/test_ai_response.py
"""
Unit tests for AI payload validation.
"""

import pytest

from constants import CanonicalField as F, FilingType, Provenance, Severity
from core.exceptions import AIResponseError, FinExtractError
from extraction.ai_response import AIExtraction, parse_ai_response, normalize_confidence


def ai_payload(**overrides):
    financials = {
        'companyName': 'Acme Corp',
        'ticker': 'ACME',
        'fiscalYear': 2023,
        'fiscalPeriod': 'FY2023',
        'revenue': 1e9,
        'costOfRevenue': 6e8,
        'netIncome': None,
        'totalAssets': 2e9,
        'totalLiabilities': 1.2e9,
        'sharesOutstandingBasic': 1.5e8,
    }
    financials.update(overrides)
    return {
        'financials': financials,
        'confidence': {'revenue': 80, 'sharesOutstanding': 70, 'overall': 60},
        'warnings': [{'field': 'netIncome', 'message': 'Not found', 'severity': 'medium'}],
    }


class TestParseAiResponse:
    """Tests for parse_ai_response."""

    def test_valid_payload(self):
        ai = parse_ai_response(ai_payload())

        assert ai.company_name == 'Acme Corp'
        assert ai.value(F.REVENUE) == 1e9
        assert ai.value(F.NET_INCOME) is None
        assert ai.warnings[0].severity == Severity.MEDIUM

    def test_extraction_passes_through(self):
        ai = AIExtraction(financials={})
        assert parse_ai_response(ai) is ai

    def test_not_a_dict(self):
        with pytest.raises(AIResponseError):
            parse_ai_response('revenue was 5')

    def test_missing_financials(self):
        with pytest.raises(AIResponseError):
            parse_ai_response({'confidence': {}})

    def test_missing_required_key(self):
        payload = ai_payload()
        del payload['financials']['totalLiabilities']

        with pytest.raises(AIResponseError, match='totalLiabilities'):
            parse_ai_response(payload)

    def test_non_numeric_field(self):
        with pytest.raises(AIResponseError):
            parse_ai_response(ai_payload(revenue='1 billion'))

    def test_non_finite_field_rejected(self):
        for bad in (float('nan'), float('inf'), float('-inf')):
            with pytest.raises(AIResponseError, match='revenue'):
                parse_ai_response(ai_payload(revenue=bad))

    def test_is_library_error(self):
        assert issubclass(AIResponseError, FinExtractError)

    def test_unknown_warning_severity_defaults_low(self):
        payload = ai_payload()
        payload['warnings'] = [{'field': 'x', 'message': 'y', 'severity': 'urgent'}]
        assert parse_ai_response(payload).warnings[0].severity == Severity.LOW


class TestConfidence:
    """Per-field confidence on a 0-1 scale."""

    def test_normalize(self):
        assert normalize_confidence(80) == 0.8
        assert normalize_confidence(0.8) == 0.8
        assert normalize_confidence(None) is None
        assert normalize_confidence(True) is None
        assert normalize_confidence(float('nan')) is None

    def test_field_score(self):
        ai = parse_ai_response(ai_payload())
        assert ai.field_confidence(F.REVENUE) == 0.8

    def test_shares_key_covers_both_share_fields(self):
        ai = parse_ai_response(ai_payload())
        assert ai.field_confidence(F.SHARES_OUTSTANDING_BASIC) == 0.7
        assert ai.field_confidence(F.SHARES_OUTSTANDING_DILUTED) == 0.7

    def test_falls_back_to_overall(self):
        ai = parse_ai_response(ai_payload())
        assert ai.field_confidence(F.TOTAL_ASSETS) == 0.6

    def test_no_scores(self):
        ai = AIExtraction(financials={'revenue': 1.0})
        assert ai.field_confidence(F.REVENUE) is None


class TestToRecord:
    def test_ai_only_record(self):
        record = parse_ai_response(ai_payload()).to_record('10-K')

        assert record.company_name == 'Acme Corp'
        assert record.fiscal_year == 2023
        assert record.value(F.REVENUE) == 1e9
        assert record.get(F.REVENUE).provenance == Provenance.AI
        assert not record.has(F.NET_INCOME)

    def test_non_integral_fiscal_year_is_absent(self):
        for year in (float('nan'), float('inf'), 2023.5, '2023'):
            record = parse_ai_response(ai_payload(fiscalYear=year)).to_record('10-K')
            assert record.fiscal_year == 0

    def test_caller_filing_type_kept(self):
        record = parse_ai_response(ai_payload(filingType='10-K/A')).to_record('10-Q')
        assert record.filing_type == FilingType.QUARTERLY

    def test_ai_filing_type_used_when_caller_unknown(self):
        record = parse_ai_response(ai_payload(filingType='10-K')).to_record()
        assert record.filing_type == FilingType.ANNUAL

    def test_malformed_notes_ignored(self):
        record = parse_ai_response(ai_payload(extractionNotes=5)).to_record('10-K')
        assert record.extraction_notes == []
