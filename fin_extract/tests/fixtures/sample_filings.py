# Path: fin_extract/tests/fixtures/sample_filings.py
"""
Synthetic iXBRL Filings for Testing

Small builders for contexts, facts and complete documents, plus two
ready-made filings:
- annual_filing(): FY2023 10-K with prior year, quarter, segment and
  cover-page contexts
- minimal_filing(): revenue and total assets only
"""

from typing import Iterable, Optional


DEFAULT_CIK = '0000123456'

NAMESPACES = (
    'xmlns="http://www.w3.org/1999/xhtml" '
    'xmlns:ix="http://www.xbrl.org/2013/inlineXBRL" '
    'xmlns:ixt="http://www.xbrl.org/inlineXBRL/transformation/2020-02-12" '
    'xmlns:xbrli="http://www.xbrl.org/2003/instance" '
    'xmlns:xbrldi="http://xbrl.org/2006/xbrldi" '
    'xmlns:us-gaap="http://fasb.org/us-gaap/2023" '
    'xmlns:dei="http://xbrl.sec.gov/dei/2023"'
)


def _entity(entity: str, dimension: Optional[str]) -> str:
    segment = ''
    if dimension:
        segment = (
            '<xbrli:segment>'
            f'<xbrldi:explicitMember dimension="{dimension}">'
            'acme:ProductMember</xbrldi:explicitMember>'
            '</xbrli:segment>'
        )
    return (
        '<xbrli:entity>'
        f'<xbrli:identifier scheme="http://www.sec.gov/CIK">{entity}</xbrli:identifier>'
        f'{segment}'
        '</xbrli:entity>'
    )


def duration_context(
    ctx_id: str,
    start: str,
    end: str,
    entity: str = DEFAULT_CIK,
    dimension: Optional[str] = None,
) -> str:
    """xbrli:context with a start/end period."""
    return (
        f'<xbrli:context id="{ctx_id}">'
        f'{_entity(entity, dimension)}'
        '<xbrli:period>'
        f'<xbrli:startDate>{start}</xbrli:startDate>'
        f'<xbrli:endDate>{end}</xbrli:endDate>'
        '</xbrli:period>'
        '</xbrli:context>'
    )


def instant_context(
    ctx_id: str,
    instant: str,
    entity: str = DEFAULT_CIK,
    dimension: Optional[str] = None,
) -> str:
    """xbrli:context with an instant period."""
    return (
        f'<xbrli:context id="{ctx_id}">'
        f'{_entity(entity, dimension)}'
        f'<xbrli:period><xbrli:instant>{instant}</xbrli:instant></xbrli:period>'
        '</xbrli:context>'
    )


def numeric_fact(
    concept: str,
    context_ref: str,
    text: str,
    scale: Optional[str] = None,
    sign: Optional[str] = None,
    decimals: Optional[str] = '-3',
    unit_ref: Optional[str] = 'USD',
    number_format: Optional[str] = 'ixt:num-dot-decimal',
    fact_id: Optional[str] = None,
) -> str:
    """ix:nonFraction element; None leaves an attribute out."""
    attrs = [f'name="{concept}"', f'contextRef="{context_ref}"']
    if unit_ref is not None:
        attrs.append(f'unitRef="{unit_ref}"')
    if decimals is not None:
        attrs.append(f'decimals="{decimals}"')
    if scale is not None:
        attrs.append(f'scale="{scale}"')
    if sign is not None:
        attrs.append(f'sign="{sign}"')
    if number_format is not None:
        attrs.append(f'format="{number_format}"')
    if fact_id is not None:
        attrs.append(f'id="{fact_id}"')
    return f'<ix:nonFraction {" ".join(attrs)}>{text}</ix:nonFraction>'


def text_fact(name: str, context_ref: str, text: str) -> str:
    """ix:nonNumeric element."""
    return f'<ix:nonNumeric name="{name}" contextRef="{context_ref}">{text}</ix:nonNumeric>'


def build_filing(
    contexts: Iterable[str],
    facts: Iterable[str],
    cover_facts: Iterable[str] = (),
    title: str = 'Acme Corp - Annual Report',
    form_line: str = 'FORM 10-K',
) -> str:
    """Assemble a complete iXBRL document."""
    rows = ''.join(f'<tr><td>{fact}</td></tr>' for fact in facts)
    return (
        f'<html {NAMESPACES}>'
        f'<head><title>{title}</title></head>'
        '<body>'
        '<div style="display:none"><ix:header>'
        f'<ix:hidden>{"".join(cover_facts)}</ix:hidden>'
        f'<ix:resources>{"".join(contexts)}'
        '<xbrli:unit id="USD"><xbrli:measure>iso4217:USD</xbrli:measure></xbrli:unit>'
        '</ix:resources>'
        '</ix:header></div>'
        f'<p>{form_line}</p>'
        f'<table>{rows}</table>'
        '</body></html>'
    )


def annual_filing() -> str:
    """
    FY2023 10-K, amounts in millions (scale 6).

    Current FY2023, prior FY2022, a Q4 quarter, a product segment, the
    balance sheet at 2023-12-31 and a cover-page instant in 2024.
    """
    contexts = [
        duration_context('FY2023', '2023-01-01', '2023-12-31'),
        duration_context('FY2022', '2022-01-01', '2022-12-31'),
        duration_context('Q4_2023', '2023-10-01', '2023-12-31'),
        duration_context('FY2023_Product', '2023-01-01', '2023-12-31',
                         dimension='srt:ProductOrServiceAxis'),
        instant_context('I2023', '2023-12-31'),
        instant_context('I2022', '2022-12-31'),
        instant_context('Cover', '2024-02-15'),
    ]
    cover = [
        text_fact('dei:EntityRegistrantName', 'FY2023', 'Acme <span>Corp</span>'),
        text_fact('dei:TradingSymbol', 'FY2023', 'acme'),
        text_fact('dei:DocumentType', 'FY2023', '10-K'),
        text_fact('dei:EntityCentralIndexKey', 'FY2023', DEFAULT_CIK),
        numeric_fact('dei:EntityCommonStockSharesOutstanding', 'Cover', '151,234,567',
                     decimals='INF', unit_ref='shares'),
    ]
    facts = [
        # Income statement
        numeric_fact('us-gaap:Revenues', 'FY2023', '1,000', scale='6'),
        numeric_fact('us-gaap:Revenues', 'FY2023_Product', '700', scale='6'),
        numeric_fact('us-gaap:Revenues', 'FY2022', '900', scale='6'),
        numeric_fact('us-gaap:Revenues', 'Q4_2023', '260', scale='6'),
        numeric_fact('us-gaap:CostOfRevenue', 'FY2023', '600', scale='6'),
        numeric_fact('us-gaap:GrossProfit', 'FY2023', '400', scale='6'),
        numeric_fact('us-gaap:OperatingIncomeLoss', 'FY2023', '150', scale='6'),
        numeric_fact('us-gaap:NetIncomeLoss', 'FY2023', '100', scale='6'),

        # Cash flow
        numeric_fact('us-gaap:NetCashProvidedByUsedInOperatingActivities', 'FY2023',
                     '200', scale='6'),
        numeric_fact('us-gaap:PaymentsToAcquirePropertyPlantAndEquipment', 'FY2023',
                     '(50)', scale='6', sign='-'),

        # Balance sheet
        numeric_fact('us-gaap:Assets', 'I2023', '2,000', scale='6'),
        numeric_fact('us-gaap:Assets', 'I2022', '1,800', scale='6'),
        numeric_fact('us-gaap:Liabilities', 'I2023', '1,200', scale='6'),
        numeric_fact('us-gaap:StockholdersEquity', 'I2023', '800', scale='6'),
        numeric_fact('us-gaap:ShortTermBorrowings', 'I2023', '100', scale='6'),
        numeric_fact('us-gaap:LongTermDebtNoncurrent', 'I2023', '400', scale='6'),
        numeric_fact('us-gaap:CashAndCashEquivalentsAtCarryingValue', 'I2023',
                     '300', scale='6'),
        numeric_fact('us-gaap:CommonStockSharesOutstanding', 'I2023', '150,000,000',
                     decimals='INF', unit_ref='shares'),
    ]
    return build_filing(contexts, facts, cover)


def minimal_filing() -> str:
    """Revenue 1,000,000 and total assets 2,000,000, both in thousands."""
    contexts = [
        duration_context('FY2023', '2023-01-01', '2023-12-31'),
        instant_context('I2023', '2023-12-31'),
    ]
    facts = [
        numeric_fact('us-gaap:Revenues', 'FY2023', '1,000,000', scale='3'),
        numeric_fact('us-gaap:Assets', 'I2023', '2,000,000', scale='3'),
    ]
    return build_filing(contexts, facts)
