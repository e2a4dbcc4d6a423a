# Path: fin_extract/tests/unit/test_ixbrl/test_context_parser.py
"""
Unit tests for ContextParser.

Tests instant/duration parsing, dimensional detection and the
error log for malformed context blocks.
"""

from datetime import date

from ixbrl.context_parser import ContextParser, Context
from ixbrl.parse_errors import ErrorCategory, ErrorSeverity
from sample_filings import duration_context, instant_context


def _parse(*blocks):
    parser = ContextParser()
    contexts = parser.parse(''.join(blocks))
    return parser, contexts


class TestContextParsing:
    """Tests for well-formed contexts."""

    def test_duration_context(self):
        """Start/end pair becomes a duration."""
        _, contexts = _parse(duration_context('FY2023', '2023-01-01', '2023-12-31'))

        ctx = contexts['FY2023']
        assert ctx.is_duration
        assert not ctx.is_instant
        assert ctx.start_date == date(2023, 1, 1)
        assert ctx.end_date == date(2023, 12, 31)
        assert ctx.duration_days == 364
        assert ctx.entity == '0000123456'

    def test_instant_context(self):
        _, contexts = _parse(instant_context('I2023', '2023-12-31'))

        ctx = contexts['I2023']
        assert ctx.is_instant
        assert ctx.instant == date(2023, 12, 31)
        assert ctx.duration_days is None

    def test_dimensional_context(self):
        """Segment members mark a context as dimensional."""
        _, contexts = _parse(
            duration_context('Seg', '2023-01-01', '2023-12-31', dimension='srt:ProductOrServiceAxis'),
            duration_context('Total', '2023-01-01', '2023-12-31'),
        )

        assert contexts['Seg'].has_dimensions is True
        assert contexts['Total'].has_dimensions is False

    def test_document_order_preserved(self):
        _, contexts = _parse(
            instant_context('B', '2023-12-31'),
            instant_context('A', '2022-12-31'),
        )
        assert list(contexts) == ['B', 'A']

    def test_datetime_suffix_accepted(self):
        """Dates with a time part keep the calendar day."""
        _, contexts = _parse(instant_context('I', '2023-12-31T00:00:00'))
        assert contexts['I'].instant == date(2023, 12, 31)

    def test_id_not_taken_from_prefixed_attributes(self):
        """data-id / xml:id ahead of id do not become the context id."""
        block = (
            '<xbrli:context data-id="wrong" xml:id="alsoWrong" id="FY2023">'
            '<xbrli:period><xbrli:instant>2023-12-31</xbrli:instant></xbrli:period>'
            '</xbrli:context>'
        )
        _, contexts = _parse(block)
        assert list(contexts) == ['FY2023']

    def test_prefixed_id_only_is_missing_id(self):
        parser, contexts = _parse(
            '<xbrli:context data-id="wrong"><xbrli:period><xbrli:instant>2023-12-31'
            '</xbrli:instant></xbrli:period></xbrli:context>'
        )
        assert contexts == {}
        assert parser.errors[0].category == ErrorCategory.MALFORMED_CONTEXT

    def test_empty_content(self):
        parser, contexts = _parse('')
        assert contexts == {}
        assert parser.error_count == 0


class TestMalformedContexts:
    """Malformed blocks are logged and skipped or degraded."""

    def test_missing_id(self):
        parser, contexts = _parse(
            '<xbrli:context><xbrli:period><xbrli:instant>2023-12-31'
            '</xbrli:instant></xbrli:period></xbrli:context>',
            instant_context('Good', '2023-12-31'),
        )

        assert list(contexts) == ['Good']
        assert parser.error_count == 1
        assert parser.errors[0].category == ErrorCategory.MALFORMED_CONTEXT

    def test_unparseable_date_leaves_context_undated(self):
        parser, contexts = _parse(instant_context('Bad', 'not-a-date'))

        assert 'Bad' in contexts
        assert contexts['Bad'].is_dated is False
        assert parser.errors[0].category == ErrorCategory.INVALID_PERIOD

    def test_half_duration(self):
        """A startDate without an endDate is an error."""
        block = (
            '<xbrli:context id="Half"><xbrli:period>'
            '<xbrli:startDate>2023-01-01</xbrli:startDate>'
            '</xbrli:period></xbrli:context>'
        )
        parser, contexts = _parse(block)

        assert contexts['Half'].is_dated is False
        assert parser.error_count == 1
        assert parser.errors[0].element_id == 'Half'

    def test_end_before_start(self):
        parser, contexts = _parse(duration_context('Rev', '2023-12-31', '2023-01-01'))

        assert contexts['Rev'].is_duration is False
        assert parser.errors[0].category == ErrorCategory.INVALID_PERIOD

    def test_duplicate_id_keeps_first(self):
        parser, contexts = _parse(
            instant_context('Dup', '2023-12-31'),
            instant_context('Dup', '2022-12-31'),
        )

        assert contexts['Dup'].instant == date(2023, 12, 31)
        assert parser.errors[0].severity == ErrorSeverity.WARNING

    def test_errors_reset_between_parses(self):
        parser = ContextParser()
        parser.parse(instant_context('Bad', 'garbage'))
        assert parser.error_count == 1

        parser.parse(instant_context('Good', '2023-12-31'))
        assert parser.error_count == 0


class TestContextModel:
    """Tests for the Context dataclass itself."""

    def test_undated(self):
        ctx = Context('X')
        assert not ctx.is_instant
        assert not ctx.is_duration
        assert not ctx.is_dated

    def test_instant_takes_precedence(self):
        """A block with both instant and start/end reads as an instant."""
        block = (
            '<xbrli:context id="Both"><xbrli:period>'
            '<xbrli:instant>2023-12-31</xbrli:instant>'
            '<xbrli:startDate>2023-01-01</xbrli:startDate>'
            '<xbrli:endDate>2023-12-31</xbrli:endDate>'
            '</xbrli:period></xbrli:context>'
        )
        _, contexts = _parse(block)
        assert contexts['Both'].is_instant
        assert contexts['Both'].start_date is None
