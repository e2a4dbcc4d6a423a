# Path: fin_extract/constants.py
"""
System-Wide Constants for fin_extract

Central repository for all constant values used across the system.
NO HARDCODED VALUES in module code - all constants defined here.

Constants are organized by category:
- Filing Types
- Sources and Provenance
- Severity Levels
- Canonical Fields and Field Groups
- Period Resolution Tolerances
- Confidence Calibration
- Scale Validation
"""

from enum import Enum
from typing import Final


# ==============================================================================
# FILING TYPES
# ==============================================================================

class FilingType(str, Enum):
    """
    Filing type discriminator.

    ANNUAL covers 10-K (and 20-F/40-F style annual reports),
    QUARTERLY covers 10-Q.
    """
    ANNUAL = '10-K'
    QUARTERLY = '10-Q'
    UNKNOWN = 'unknown'

    @classmethod
    def coerce(cls, value) -> 'FilingType':
        """Accept enum members, form names or plain words."""
        if isinstance(value, cls):
            return value
        text = str(value or '').strip().upper()
        if text in ('10-K', '10K', 'ANNUAL', '20-F', '40-F'):
            return cls.ANNUAL
        if text in ('10-Q', '10Q', 'QUARTERLY'):
            return cls.QUARTERLY
        return cls.UNKNOWN


# ==============================================================================
# SOURCES AND PROVENANCE
# ==============================================================================

class ExtractionSource(str, Enum):
    """Where the final record came from as a whole."""
    XBRL = 'xbrl'
    AI = 'ai'
    HYBRID = 'hybrid'
    NONE = 'none'


class Provenance(str, Enum):
    """Where a single field value came from."""
    XBRL = 'xbrl'
    AI = 'ai'
    DERIVED = 'derived'


# ==============================================================================
# SEVERITY LEVELS
# ==============================================================================

class Severity(str, Enum):
    """Warning severity attached to the output record."""
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'


# ==============================================================================
# PERIOD KINDS
# ==============================================================================

class PeriodKind(str, Enum):
    """Which resolved context a canonical field is read from."""
    DURATION = 'duration'
    INSTANT = 'instant'
    PRIOR = 'prior'


# ==============================================================================
# CANONICAL FIELDS
# ==============================================================================

class CanonicalField(str, Enum):
    """
    Canonical financial fields.

    Values are the wire keys shared with the AI extraction contract
    and the downstream valuation mapper.
    """
    # Income statement
    REVENUE = 'revenue'
    COST_OF_REVENUE = 'costOfRevenue'
    GROSS_PROFIT = 'grossProfit'
    OPERATING_EXPENSES = 'operatingExpenses'
    SGA_EXPENSE = 'sgaExpense'
    RD_EXPENSE = 'rdExpense'
    DEPRECIATION_AMORTIZATION = 'depreciationAmortization'
    OPERATING_INCOME = 'operatingIncome'
    INTEREST_EXPENSE = 'interestExpense'
    INCOME_BEFORE_TAX = 'incomeBeforeTax'
    INCOME_TAX_EXPENSE = 'incomeTaxExpense'
    NET_INCOME = 'netIncome'

    # Balance sheet
    TOTAL_CURRENT_ASSETS = 'totalCurrentAssets'
    ACCOUNTS_RECEIVABLE = 'accountsReceivable'
    INVENTORY = 'inventory'
    TOTAL_ASSETS = 'totalAssets'
    PROPERTY_PLANT_EQUIPMENT = 'propertyPlantEquipment'
    TOTAL_CURRENT_LIABILITIES = 'totalCurrentLiabilities'
    ACCOUNTS_PAYABLE = 'accountsPayable'
    TOTAL_DEBT = 'totalDebt'
    SHORT_TERM_DEBT = 'shortTermDebt'
    LONG_TERM_DEBT = 'longTermDebt'
    TOTAL_LIABILITIES = 'totalLiabilities'
    TOTAL_EQUITY = 'totalEquity'
    RETAINED_EARNINGS = 'retainedEarnings'
    CASH_AND_EQUIVALENTS = 'cashAndEquivalents'

    # Shares
    SHARES_OUTSTANDING_BASIC = 'sharesOutstandingBasic'
    SHARES_OUTSTANDING_DILUTED = 'sharesOutstandingDiluted'

    # Cash flow
    CAPITAL_EXPENDITURES = 'capitalExpenditures'
    OPERATING_CASH_FLOW = 'operatingCashFlow'
    FREE_CASH_FLOW = 'freeCashFlow'

    # Year over year
    PRIOR_YEAR_REVENUE = 'priorYearRevenue'

    def __str__(self) -> str:
        return self.value


ALL_FIELDS: Final[tuple] = tuple(CanonicalField)

# Must have these for a reasonable coverage score
CRITICAL_FIELDS: Final[tuple] = (
    CanonicalField.REVENUE,
    CanonicalField.NET_INCOME,
    CanonicalField.TOTAL_ASSETS,
    CanonicalField.TOTAL_LIABILITIES,
    CanonicalField.TOTAL_EQUITY,
)

# Fields whose calibrated confidence feeds the overall score
HEADLINE_FIELDS: Final[tuple] = (
    CanonicalField.REVENUE,
    CanonicalField.COST_OF_REVENUE,
    CanonicalField.OPERATING_INCOME,
    CanonicalField.NET_INCOME,
    CanonicalField.TOTAL_ASSETS,
    CanonicalField.TOTAL_LIABILITIES,
    CanonicalField.TOTAL_EQUITY,
    CanonicalField.TOTAL_DEBT,
    CanonicalField.SHARES_OUTSTANDING_BASIC,
)

SHARE_FIELDS: Final[tuple] = (
    CanonicalField.SHARES_OUTSTANDING_BASIC,
    CanonicalField.SHARES_OUTSTANDING_DILUTED,
)

# Fields required before XBRL output may stand alone
REQUIRED_XBRL_FIELDS: Final[tuple] = (CanonicalField.REVENUE,)

# Keys an AI payload must carry (values may be null)
REQUIRED_AI_FIELDS: Final[tuple] = (
    'companyName',
    CanonicalField.REVENUE.value,
    CanonicalField.COST_OF_REVENUE.value,
    CanonicalField.NET_INCOME.value,
    CanonicalField.TOTAL_ASSETS.value,
    CanonicalField.TOTAL_LIABILITIES.value,
)

# AI confidence key covering both share-count fields
AI_SHARES_CONFIDENCE_KEY: Final[str] = 'sharesOutstanding'

COVERAGE_WEIGHT: Final[float] = 0.7
CRITICAL_WEIGHT: Final[float] = 0.3


# ==============================================================================
# IDENTITY FIELDS
# ==============================================================================

UNKNOWN_COMPANY: Final[str] = 'Unknown Company'
UNKNOWN_PERIOD: Final[str] = ''
DEFAULT_UNIT: Final[str] = 'USD'


# ==============================================================================
# PERIOD RESOLUTION
# ==============================================================================

ANNUAL_DURATION_DAYS: Final[int] = 365
ANNUAL_TOLERANCE_DAYS: Final[int] = 30
QUARTERLY_DURATION_DAYS: Final[int] = 90
QUARTERLY_TOLERANCE_DAYS: Final[int] = 15

PRIOR_DURATION_TOLERANCE: Final[float] = 0.10
PRIOR_END_TOLERANCE_DAYS: Final[int] = 30


# ==============================================================================
# BASE CONFIDENCE
# ==============================================================================

XBRL_FIELD_CONFIDENCE: Final[float] = 0.95
DERIVED_FIELD_CONFIDENCE: Final[float] = 0.90
AI_DEFAULT_CONFIDENCE: Final[float] = 0.5
XBRL_MIN_CONFIDENCE: Final[float] = 0.4
AI_TIMEOUT_SECONDS: Final[float] = 60.0

# Coverage warning escalates above this many missing fields
MISSING_FIELDS_MEDIUM: Final[int] = 10


# ==============================================================================
# CONFIDENCE CALIBRATION
# ==============================================================================

BALANCE_SHEET_TOLERANCE: Final[float] = 0.05
BALANCE_SHEET_MAX_PENALTY: Final[float] = 0.3

GROSS_PROFIT_TOLERANCE: Final[float] = 0.02
GROSS_PROFIT_MAX_PENALTY: Final[float] = 0.2

OPERATING_INCOME_PENALTY: Final[float] = 0.3

DEBT_SUM_TOLERANCE: Final[float] = 0.10
DEBT_SUM_PENALTY: Final[float] = 0.2

ROUND_NUMBER_UNIT: Final[int] = 10 ** 7
ROUND_NUMBER_PENALTY: Final[float] = 0.1

SOURCE_MULTIPLIERS: Final[dict] = {
    'xbrl': 1.0,
    'derived': 1.0,
    'hybrid': 0.9,
    'ai': 0.8,
    'none': 0.8,
}

ADJUSTMENT_PENALTY_STEP: Final[float] = 0.05
ADJUSTMENT_PENALTY_CAP: Final[float] = 0.2
OVERALL_CONFIDENCE_FLOOR: Final[float] = 0.1


# ==============================================================================
# SCALE VALIDATION
# ==============================================================================

MIN_PUBLIC_REVENUE: Final[float] = 1_000_000.0
MAX_PLAUSIBLE_REVENUE: Final[float] = 1_000_000_000_000.0
MIN_PLAUSIBLE_SHARES: Final[float] = 100_000.0
THOUSANDS_MULTIPLIER: Final[float] = 1_000.0
MILLIONS_MULTIPLIER: Final[float] = 1_000_000.0
DEBT_TO_ASSETS_LIMIT: Final[float] = 2.0
MAX_COLLECTION_DAYS: Final[float] = 365.0
DAYS_PER_YEAR: Final[int] = 365
GROSS_IMBALANCE_LIMIT: Final[float] = 0.5
