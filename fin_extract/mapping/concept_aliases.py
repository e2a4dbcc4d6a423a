# Path: fin_extract/mapping/concept_aliases.py
"""
Concept Alias Table

Ordered (concept, field, period) entries. Order is priority: for each
canonical field the mapper walks the entries in table order and takes
the first concept that has a parsed fact on the right context.

period is the context the concept is read from:
    DURATION -> current reporting period
    INSTANT  -> balance-sheet date
    PRIOR    -> prior-year comparable period

US-GAAP concepts come first; IFRS (ifrs-full:) aliases follow at
lower priority.
"""

from typing import Final

from constants import CanonicalField as F, PeriodKind


D = PeriodKind.DURATION
I = PeriodKind.INSTANT


US_GAAP_ALIASES: Final[tuple] = (
    # Revenue
    ('us-gaap:Revenues', F.REVENUE, D),
    ('us-gaap:RevenueFromContractWithCustomerExcludingAssessedTax', F.REVENUE, D),
    ('us-gaap:SalesRevenueNet', F.REVENUE, D),
    ('us-gaap:SalesRevenueGoodsNet', F.REVENUE, D),
    ('us-gaap:SalesRevenueServicesNet', F.REVENUE, D),
    ('us-gaap:RevenueFromContractWithCustomerIncludingAssessedTax', F.REVENUE, D),

    # Cost of revenue
    ('us-gaap:CostOfRevenue', F.COST_OF_REVENUE, D),
    ('us-gaap:CostOfGoodsAndServicesSold', F.COST_OF_REVENUE, D),
    ('us-gaap:CostOfGoodsSold', F.COST_OF_REVENUE, D),
    ('us-gaap:CostOfServices', F.COST_OF_REVENUE, D),

    ('us-gaap:GrossProfit', F.GROSS_PROFIT, D),

    # Operating expenses
    ('us-gaap:OperatingExpenses', F.OPERATING_EXPENSES, D),
    ('us-gaap:CostsAndExpenses', F.OPERATING_EXPENSES, D),
    ('us-gaap:SellingGeneralAndAdministrativeExpense', F.SGA_EXPENSE, D),
    ('us-gaap:GeneralAndAdministrativeExpense', F.SGA_EXPENSE, D),
    ('us-gaap:SellingAndMarketingExpense', F.SGA_EXPENSE, D),
    ('us-gaap:ResearchAndDevelopmentExpense', F.RD_EXPENSE, D),
    ('us-gaap:ResearchAndDevelopmentExpenseExcludingAcquiredInProcessCost', F.RD_EXPENSE, D),
    ('us-gaap:DepreciationDepletionAndAmortization', F.DEPRECIATION_AMORTIZATION, D),
    ('us-gaap:DepreciationAndAmortization', F.DEPRECIATION_AMORTIZATION, D),
    ('us-gaap:Depreciation', F.DEPRECIATION_AMORTIZATION, D),
    ('us-gaap:DepreciationAmortizationAndAccretionNet', F.DEPRECIATION_AMORTIZATION, D),

    # Operating income and below
    ('us-gaap:OperatingIncomeLoss', F.OPERATING_INCOME, D),
    ('us-gaap:IncomeLossFromOperations', F.OPERATING_INCOME, D),
    ('us-gaap:InterestExpense', F.INTEREST_EXPENSE, D),
    ('us-gaap:InterestExpenseDebt', F.INTEREST_EXPENSE, D),
    ('us-gaap:InterestAndDebtExpense', F.INTEREST_EXPENSE, D),
    ('us-gaap:IncomeLossFromContinuingOperationsBeforeIncomeTaxesExtraordinaryItemsNoncontrollingInterest',
     F.INCOME_BEFORE_TAX, D),
    ('us-gaap:IncomeLossFromContinuingOperationsBeforeIncomeTaxesMinorityInterestAndIncomeLossFromEquityMethodInvestments',
     F.INCOME_BEFORE_TAX, D),
    ('us-gaap:IncomeLossFromContinuingOperationsBeforeIncomeTaxesDomestic', F.INCOME_BEFORE_TAX, D),
    ('us-gaap:IncomeTaxExpenseBenefit', F.INCOME_TAX_EXPENSE, D),
    ('us-gaap:IncomeTaxesPaidNet', F.INCOME_TAX_EXPENSE, D),
    ('us-gaap:NetIncomeLoss', F.NET_INCOME, D),
    ('us-gaap:ProfitLoss', F.NET_INCOME, D),
    ('us-gaap:NetIncomeLossAttributableToParent', F.NET_INCOME, D),
    ('us-gaap:NetIncomeLossAvailableToCommonStockholdersBasic', F.NET_INCOME, D),

    # Assets
    ('us-gaap:AssetsCurrent', F.TOTAL_CURRENT_ASSETS, I),
    ('us-gaap:CashAndCashEquivalentsAtCarryingValue', F.CASH_AND_EQUIVALENTS, I),
    ('us-gaap:CashCashEquivalentsAndShortTermInvestments', F.CASH_AND_EQUIVALENTS, I),
    ('us-gaap:Cash', F.CASH_AND_EQUIVALENTS, I),
    ('us-gaap:AccountsReceivableNetCurrent', F.ACCOUNTS_RECEIVABLE, I),
    ('us-gaap:ReceivablesNetCurrent', F.ACCOUNTS_RECEIVABLE, I),
    ('us-gaap:AccountsReceivableNet', F.ACCOUNTS_RECEIVABLE, I),
    ('us-gaap:InventoryNet', F.INVENTORY, I),
    ('us-gaap:InventoryFinishedGoodsNetOfReserves', F.INVENTORY, I),
    ('us-gaap:Assets', F.TOTAL_ASSETS, I),
    ('us-gaap:PropertyPlantAndEquipmentNet', F.PROPERTY_PLANT_EQUIPMENT, I),
    ('us-gaap:PropertyPlantAndEquipmentGross', F.PROPERTY_PLANT_EQUIPMENT, I),

    # Liabilities and debt
    ('us-gaap:LiabilitiesCurrent', F.TOTAL_CURRENT_LIABILITIES, I),
    ('us-gaap:AccountsPayableCurrent', F.ACCOUNTS_PAYABLE, I),
    ('us-gaap:AccountsPayableAndAccruedLiabilitiesCurrent', F.ACCOUNTS_PAYABLE, I),
    ('us-gaap:Liabilities', F.TOTAL_LIABILITIES, I),
    ('us-gaap:DebtLongtermAndShorttermCombinedAmount', F.TOTAL_DEBT, I),
    ('us-gaap:ShortTermBorrowings', F.SHORT_TERM_DEBT, I),
    ('us-gaap:DebtCurrent', F.SHORT_TERM_DEBT, I),
    ('us-gaap:LongTermDebtNoncurrent', F.LONG_TERM_DEBT, I),
    ('us-gaap:LongTermDebt', F.LONG_TERM_DEBT, I),
    ('us-gaap:LongTermDebtAndCapitalLeaseObligations', F.LONG_TERM_DEBT, I),

    # Equity
    ('us-gaap:StockholdersEquity', F.TOTAL_EQUITY, I),
    ('us-gaap:StockholdersEquityIncludingPortionAttributableToNoncontrollingInterest',
     F.TOTAL_EQUITY, I),
    ('us-gaap:RetainedEarningsAccumulatedDeficit', F.RETAINED_EARNINGS, I),

    # Shares: point-in-time counts first, weighted averages are durations
    ('us-gaap:CommonStockSharesOutstanding', F.SHARES_OUTSTANDING_BASIC, I),
    ('us-gaap:WeightedAverageNumberOfSharesOutstandingBasic', F.SHARES_OUTSTANDING_BASIC, D),
    ('us-gaap:CommonStockSharesIssued', F.SHARES_OUTSTANDING_BASIC, I),
    ('us-gaap:WeightedAverageNumberOfDilutedSharesOutstanding', F.SHARES_OUTSTANDING_DILUTED, D),

    # Cash flow
    ('us-gaap:NetCashProvidedByUsedInOperatingActivities', F.OPERATING_CASH_FLOW, D),
    ('us-gaap:NetCashProvidedByUsedInOperatingActivitiesContinuingOperations',
     F.OPERATING_CASH_FLOW, D),
    ('us-gaap:PaymentsToAcquirePropertyPlantAndEquipment', F.CAPITAL_EXPENDITURES, D),
    ('us-gaap:PaymentsToAcquireProductiveAssets', F.CAPITAL_EXPENDITURES, D),
    ('us-gaap:PaymentsForCapitalImprovements', F.CAPITAL_EXPENDITURES, D),
    ('us-gaap:PaymentsToAcquireOtherPropertyPlantAndEquipment', F.CAPITAL_EXPENDITURES, D),
)


IFRS_ALIASES: Final[tuple] = (
    ('ifrs-full:Revenue', F.REVENUE, D),
    ('ifrs-full:RevenueFromContractsWithCustomers', F.REVENUE, D),
    ('ifrs-full:CostOfSales', F.COST_OF_REVENUE, D),
    ('ifrs-full:GrossProfit', F.GROSS_PROFIT, D),
    ('ifrs-full:SellingGeneralAndAdministrativeExpense', F.SGA_EXPENSE, D),
    ('ifrs-full:ResearchAndDevelopmentExpense', F.RD_EXPENSE, D),
    ('ifrs-full:DepreciationAndAmortisationExpense', F.DEPRECIATION_AMORTIZATION, D),
    ('ifrs-full:ProfitLossFromOperatingActivities', F.OPERATING_INCOME, D),
    ('ifrs-full:FinanceCosts', F.INTEREST_EXPENSE, D),
    ('ifrs-full:ProfitLossBeforeTax', F.INCOME_BEFORE_TAX, D),
    ('ifrs-full:IncomeTaxExpenseContinuingOperations', F.INCOME_TAX_EXPENSE, D),
    ('ifrs-full:ProfitLoss', F.NET_INCOME, D),
    ('ifrs-full:ProfitLossAttributableToOwnersOfParent', F.NET_INCOME, D),
    ('ifrs-full:CurrentAssets', F.TOTAL_CURRENT_ASSETS, I),
    ('ifrs-full:CashAndCashEquivalents', F.CASH_AND_EQUIVALENTS, I),
    ('ifrs-full:TradeAndOtherCurrentReceivables', F.ACCOUNTS_RECEIVABLE, I),
    ('ifrs-full:Inventories', F.INVENTORY, I),
    ('ifrs-full:Assets', F.TOTAL_ASSETS, I),
    ('ifrs-full:PropertyPlantAndEquipment', F.PROPERTY_PLANT_EQUIPMENT, I),
    ('ifrs-full:CurrentLiabilities', F.TOTAL_CURRENT_LIABILITIES, I),
    ('ifrs-full:TradeAndOtherCurrentPayables', F.ACCOUNTS_PAYABLE, I),
    ('ifrs-full:Liabilities', F.TOTAL_LIABILITIES, I),
    ('ifrs-full:ShorttermBorrowings', F.SHORT_TERM_DEBT, I),
    ('ifrs-full:LongtermBorrowings', F.LONG_TERM_DEBT, I),
    ('ifrs-full:Equity', F.TOTAL_EQUITY, I),
    ('ifrs-full:EquityAttributableToOwnersOfParent', F.TOTAL_EQUITY, I),
    ('ifrs-full:RetainedEarnings', F.RETAINED_EARNINGS, I),
    ('ifrs-full:CashFlowsFromUsedInOperatingActivities', F.OPERATING_CASH_FLOW, D),
    ('ifrs-full:PurchaseOfPropertyPlantAndEquipmentClassifiedAsInvestingActivities',
     F.CAPITAL_EXPENDITURES, D),
)


def _prior_year_revenue(aliases: tuple) -> tuple:
    """Revenue concepts re-read on the prior-period context."""
    return tuple(
        (concept, F.PRIOR_YEAR_REVENUE, PeriodKind.PRIOR)
        for concept, field, _ in aliases
        if field == F.REVENUE
    )


CONCEPT_ALIASES: Final[tuple] = (
    US_GAAP_ALIASES
    + IFRS_ALIASES
    + _prior_year_revenue(US_GAAP_ALIASES + IFRS_ALIASES)
)


def aliases_for(field: F) -> list[tuple]:
    """(concept, period) pairs for one field, in priority order."""
    return [
        (concept, period)
        for concept, alias_field, period in CONCEPT_ALIASES
        if alias_field == field
    ]


def field_for_concept(concept: str):
    """First canonical field a concept maps to (None if unmapped)."""
    for alias_concept, field, period in CONCEPT_ALIASES:
        if alias_concept == concept and period != PeriodKind.PRIOR:
            return field
    return None


__all__ = [
    'CONCEPT_ALIASES',
    'US_GAAP_ALIASES',
    'IFRS_ALIASES',
    'aliases_for',
    'field_for_concept',
]
