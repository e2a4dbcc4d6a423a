# Path: fin_extract/tests/unit/test_ixbrl/test_detector.py
"""
Unit tests for iXBRL detection and filing-type detection.
"""

import pytest

from constants import FilingType
from ixbrl.detector import detect_ixbrl, detect_filing_type


class TestDetectIxbrl:
    """Tests for detect_ixbrl."""

    def test_namespace_declaration(self):
        """Namespace declaration alone is enough."""
        html = '<html xmlns:ix="http://www.xbrl.org/2013/inlineXBRL"><body></body></html>'
        assert detect_ixbrl(html) is True

    @pytest.mark.parametrize('tag', [
        '<ix:nonFraction name="us-gaap:Revenues">1</ix:nonFraction>',
        '<ix:nonNumeric name="dei:DocumentType">10-K</ix:nonNumeric>',
        '<ix:continuation id="c1">text</ix:continuation>',
        '<ix:footnote id="f1">note</ix:footnote>',
        '<xbrli:context id="c1"></xbrli:context>',
    ])
    def test_inline_tags(self, tag):
        """Any of the inline tags marks the document as iXBRL."""
        assert detect_ixbrl(f'<html><body>{tag}</body></html>') is True

    def test_case_insensitive(self):
        """Tag matching ignores case."""
        assert detect_ixbrl('<IX:NONFRACTION name="x">1</IX:NONFRACTION>') is True

    def test_plain_html(self):
        """Plain HTML is not iXBRL."""
        assert detect_ixbrl('<html><body><p>Revenue was $1,000</p></body></html>') is False

    def test_empty(self):
        assert detect_ixbrl('') is False
        assert detect_ixbrl(None) is False

    def test_sample_filing(self, sample_annual_filing):
        assert detect_ixbrl(sample_annual_filing) is True


class TestDetectFilingType:
    """Tests for detect_filing_type."""

    def test_annual(self):
        assert detect_filing_type('<p>FORM 10-K</p>') == FilingType.ANNUAL

    def test_quarterly(self):
        assert detect_filing_type('<p>Quarterly Report pursuant to ...</p>') == FilingType.QUARTERLY

    def test_annual_wins_over_quarterly_mentions(self):
        """A 10-K that mentions quarterly results is still annual."""
        text = 'ANNUAL REPORT ... see our quarterly report on Form 10-Q'
        assert detect_filing_type(text) == FilingType.ANNUAL

    def test_unknown(self):
        assert detect_filing_type('<p>Proxy statement</p>') == FilingType.UNKNOWN
