# Path: fin_extract/ixbrl/period_resolver.py
"""
Period Resolver

Chooses, among the non-dimensional contexts of one filing:
- CURRENT: the reporting-period duration (income statement, cash flow)
- BALANCE SHEET: the instant the balance sheet is stated at
- PRIOR: the comparable duration one year earlier

Current period:
    Durations within the tolerance band of the expected length
    (annual 365 +/- 30 days, quarterly 90 +/- 15 days). Latest end
    date wins; ties go to the duration closest to the expected one,
    then to document order. Nothing in band -> longest duration.

Balance-sheet instant:
    Latest instant on or before the current period end. Cover pages
    carry later instants (shares outstanding "as of" the filing date)
    that are passed over. With no current period, or nothing on or
    before its end, the latest instant overall.

Prior period:
    Duration within 10% of the current length whose end date is within
    30 days of (current end - 1 year). Closest end date wins.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from constants import (
    FilingType,
    ANNUAL_DURATION_DAYS,
    ANNUAL_TOLERANCE_DAYS,
    QUARTERLY_DURATION_DAYS,
    QUARTERLY_TOLERANCE_DAYS,
    PRIOR_DURATION_TOLERANCE,
    PRIOR_END_TOLERANCE_DAYS,
)
from core.logger.ipo_logging import get_process_logger
from .context_parser import Context


@dataclass(frozen=True)
class ResolvedPeriods:
    """The three contexts that canonical fields are read from."""
    current: Optional[Context] = None
    balance_sheet: Optional[Context] = None
    prior: Optional[Context] = None

    @property
    def current_id(self) -> Optional[str]:
        return self.current.context_id if self.current else None

    @property
    def balance_sheet_id(self) -> Optional[str]:
        return self.balance_sheet.context_id if self.balance_sheet else None

    @property
    def prior_id(self) -> Optional[str]:
        return self.prior.context_id if self.prior else None


def one_year_before(day: date) -> date:
    """Same calendar day one year earlier (Feb 29 -> Feb 28)."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


class PeriodResolver:
    """Resolves current, balance-sheet and prior contexts for a filing."""

    def __init__(self):
        self.logger = get_process_logger('period_resolver')

    def resolve(
        self,
        contexts: dict[str, Context],
        filing_type: FilingType = FilingType.ANNUAL
    ) -> ResolvedPeriods:
        """
        Resolve the reporting periods of a filing.

        Args:
            contexts: Parsed contexts in document order
            filing_type: Annual or quarterly (UNKNOWN resolves as annual)

        Returns:
            ResolvedPeriods (members None when nothing qualifies)
        """
        filing_type = FilingType.coerce(filing_type)
        consolidated = [c for c in contexts.values() if not c.has_dimensions]
        durations = [c for c in consolidated if c.is_duration]
        instants = [c for c in consolidated if c.is_instant]

        current = self.find_current(durations, filing_type)
        balance_sheet = self.find_balance_sheet(instants, current)
        prior = self.find_prior(durations, current)

        periods = ResolvedPeriods(current, balance_sheet, prior)
        self.logger.info(
            f"Resolved periods ({filing_type.value}): current={periods.current_id}, "
            f"balance_sheet={periods.balance_sheet_id}, prior={periods.prior_id}"
        )
        return periods

    def find_current(
        self,
        durations: list[Context],
        filing_type: FilingType
    ) -> Optional[Context]:
        """Pick the current-period duration context."""
        if not durations:
            return None

        if filing_type == FilingType.QUARTERLY:
            expected, tolerance = QUARTERLY_DURATION_DAYS, QUARTERLY_TOLERANCE_DAYS
        else:
            expected, tolerance = ANNUAL_DURATION_DAYS, ANNUAL_TOLERANCE_DAYS

        in_band = [
            (index, ctx) for index, ctx in enumerate(durations)
            if abs(ctx.duration_days - expected) <= tolerance
        ]
        if not in_band:
            longest = max(durations, key=lambda ctx: ctx.duration_days)
            self.logger.warning(
                f"No duration within {expected}+/-{tolerance} days, "
                f"falling back to longest ({longest.context_id}, "
                f"{longest.duration_days} days)"
            )
            return longest

        # Latest end, then closest to expected length, then document order
        _, best = min(
            in_band,
            key=lambda item: (
                -item[1].end_date.toordinal(),
                abs(item[1].duration_days - expected),
                item[0],
            ),
        )
        return best

    def find_balance_sheet(
        self,
        instants: list[Context],
        current: Optional[Context] = None
    ) -> Optional[Context]:
        """Pick the balance-sheet instant context."""
        if not instants:
            return None

        candidates = instants
        if current is not None:
            on_or_before = [c for c in instants if c.instant <= current.end_date]
            if on_or_before:
                candidates = on_or_before
            else:
                self.logger.debug(
                    f"No instant on or before {current.end_date}, using latest"
                )

        # max() keeps the first of equal dates
        return max(candidates, key=lambda ctx: ctx.instant)

    def find_prior(
        self,
        durations: list[Context],
        current: Optional[Context]
    ) -> Optional[Context]:
        """Pick the prior-year comparable duration context."""
        if current is None or not current.is_duration:
            return None

        current_days = current.duration_days
        target_end = one_year_before(current.end_date)

        best = None
        best_distance = None
        for ctx in durations:
            if ctx.context_id == current.context_id:
                continue
            if current_days:
                drift = abs(ctx.duration_days - current_days) / current_days
            else:
                drift = 0.0 if ctx.duration_days == 0 else 1.0
            if drift > PRIOR_DURATION_TOLERANCE:
                continue
            distance = abs((ctx.end_date - target_end).days)
            if distance > PRIOR_END_TOLERANCE_DAYS:
                continue
            if best_distance is None or distance < best_distance:
                best, best_distance = ctx, distance

        return best


__all__ = ['PeriodResolver', 'ResolvedPeriods', 'one_year_before']
