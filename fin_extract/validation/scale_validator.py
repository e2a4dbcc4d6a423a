# Path: fin_extract/validation/scale_validator.py
"""
Scale Validator

Catches unit-scale mistakes (values reported in thousands or millions
but read as units, or the reverse) before they reach valuation.

All checks are independent and advisory: values are never rewritten.
A suggested correction is attached where one is plausible.

Checks:
- revenue below 1,000,000 for a public filer -> likely thousands
  (x1000 suggested when the corrected value lands in [1e6, 1e12])
- revenue above 1e12 -> over-scaled (/1000 suggested)
- net income above revenue, both positive -> critical
- total debt above 2x total assets
- share counts below 100,000 -> likely millions (x1,000,000 suggested)
- receivables above 365 days of revenue
- assets vs liabilities + equity off by more than 50% -> cross-scale mismatch
"""

from dataclasses import dataclass
from typing import Optional

from config_loader import ConfigLoader
from constants import (
    CanonicalField as F,
    Severity,
    SHARE_FIELDS,
    THOUSANDS_MULTIPLIER,
    MILLIONS_MULTIPLIER,
    DEBT_TO_ASSETS_LIMIT,
    MAX_COLLECTION_DAYS,
    DAYS_PER_YEAR,
    GROSS_IMBALANCE_LIMIT,
)
from core.logger.ipo_logging import get_process_logger
from extraction.record import ExtractionWarning, MergedRecord


@dataclass
class ScaleError:
    """One scale diagnostic."""
    field: str
    check: str
    message: str
    severity: Severity
    current_value: float
    suggested_value: Optional[float] = None
    suggested_multiplier: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'field': self.field,
            'check': self.check,
            'message': self.message,
            'severity': self.severity.value,
            'currentValue': self.current_value,
            'suggestedValue': self.suggested_value,
            'suggestedMultiplier': self.suggested_multiplier,
        }


class ScaleValidator:
    """Runs the scale checks; thresholds come from configuration."""

    def __init__(self, config: Optional[ConfigLoader] = None):
        self.config = config or ConfigLoader()
        self.logger = get_process_logger('scale_validator')
        self.min_public_revenue = self.config.get('min_public_revenue')
        self.max_plausible_revenue = self.config.get('max_plausible_revenue')
        self.min_plausible_shares = self.config.get('min_plausible_shares')

    def validate(self, values: dict, is_public_company: bool = True) -> list[ScaleError]:
        """
        Check values for scale problems.

        Args:
            values: Field -> value (CanonicalField or wire-name keys)
            is_public_company: Enables the minimum-revenue check

        Returns:
            List of ScaleError (empty when nothing looks wrong)
        """
        values = {
            (k.value if isinstance(k, F) else str(k)): v
            for k, v in values.items() if v is not None
        }
        errors: list[ScaleError] = []

        self._check_revenue(values, is_public_company, errors)
        self._check_net_income(values, errors)
        self._check_debt(values, errors)
        self._check_shares(values, errors)
        self._check_receivables(values, errors)
        self._check_balance_scale(values, errors)

        for error in errors:
            self.logger.warning(f"Scale check '{error.check}' on {error.field}: {error.message}")
        self.logger.info(f"Scale validation: {len(errors)} issues")
        return errors

    def _check_revenue(self, values: dict, is_public: bool, errors: list) -> None:
        revenue = values.get(F.REVENUE.value)
        if revenue is None or revenue <= 0:
            return

        if is_public and revenue < self.min_public_revenue:
            corrected = revenue * THOUSANDS_MULTIPLIER
            plausible = self.min_public_revenue <= corrected <= self.max_plausible_revenue
            errors.append(ScaleError(
                field=F.REVENUE.value,
                check='revenue_too_small',
                message=(
                    f"Revenue {revenue:,.0f} is below {self.min_public_revenue:,.0f} "
                    f"for a public company; likely reported in thousands"
                ),
                severity=Severity.HIGH,
                current_value=revenue,
                suggested_value=corrected if plausible else None,
                suggested_multiplier=THOUSANDS_MULTIPLIER if plausible else None,
            ))
        elif revenue > self.max_plausible_revenue:
            errors.append(ScaleError(
                field=F.REVENUE.value,
                check='revenue_too_large',
                message=(
                    f"Revenue {revenue:,.0f} exceeds {self.max_plausible_revenue:,.0f}; "
                    f"likely over-scaled"
                ),
                severity=Severity.HIGH,
                current_value=revenue,
                suggested_value=revenue / THOUSANDS_MULTIPLIER,
                suggested_multiplier=1 / THOUSANDS_MULTIPLIER,
            ))

    def _check_net_income(self, values: dict, errors: list) -> None:
        revenue = values.get(F.REVENUE.value)
        net_income = values.get(F.NET_INCOME.value)
        if revenue is None or net_income is None:
            return
        if revenue > 0 and net_income > 0 and net_income > revenue:
            errors.append(ScaleError(
                field=F.NET_INCOME.value,
                check='net_income_exceeds_revenue',
                message=(
                    f"Net income {net_income:,.0f} exceeds revenue {revenue:,.0f}; "
                    f"fields are likely on different scales"
                ),
                severity=Severity.CRITICAL,
                current_value=net_income,
            ))

    def _check_debt(self, values: dict, errors: list) -> None:
        debt = values.get(F.TOTAL_DEBT.value)
        assets = values.get(F.TOTAL_ASSETS.value)
        if debt is None or assets is None or assets <= 0:
            return
        if debt > DEBT_TO_ASSETS_LIMIT * assets:
            errors.append(ScaleError(
                field=F.TOTAL_DEBT.value,
                check='debt_exceeds_assets',
                message=(
                    f"Total debt {debt:,.0f} is more than {DEBT_TO_ASSETS_LIMIT:g}x "
                    f"total assets {assets:,.0f}"
                ),
                severity=Severity.HIGH,
                current_value=debt,
            ))

    def _check_shares(self, values: dict, errors: list) -> None:
        for share_field in SHARE_FIELDS:
            shares = values.get(share_field.value)
            if shares is None or shares <= 0 or shares >= self.min_plausible_shares:
                continue
            errors.append(ScaleError(
                field=share_field.value,
                check='shares_too_small',
                message=(
                    f"Share count {shares:,.0f} is below {self.min_plausible_shares:,.0f}; "
                    f"likely reported in millions"
                ),
                severity=Severity.HIGH,
                current_value=shares,
                suggested_value=shares * MILLIONS_MULTIPLIER,
                suggested_multiplier=MILLIONS_MULTIPLIER,
            ))

    def _check_receivables(self, values: dict, errors: list) -> None:
        receivables = values.get(F.ACCOUNTS_RECEIVABLE.value)
        revenue = values.get(F.REVENUE.value)
        if receivables is None or revenue is None or revenue <= 0:
            return
        days = receivables / revenue * DAYS_PER_YEAR
        if days > MAX_COLLECTION_DAYS:
            errors.append(ScaleError(
                field=F.ACCOUNTS_RECEIVABLE.value,
                check='receivable_days',
                message=f"Receivables equal {days:,.0f} days of revenue",
                severity=Severity.MEDIUM,
                current_value=receivables,
            ))

    def _check_balance_scale(self, values: dict, errors: list) -> None:
        assets = values.get(F.TOTAL_ASSETS.value)
        liabilities = values.get(F.TOTAL_LIABILITIES.value)
        equity = values.get(F.TOTAL_EQUITY.value)
        if assets is None or liabilities is None or equity is None or assets <= 0:
            return
        gap = abs(assets - (liabilities + equity))
        if gap > GROSS_IMBALANCE_LIMIT * assets:
            errors.append(ScaleError(
                field=F.TOTAL_ASSETS.value,
                check='balance_sheet_scale_mismatch',
                message=(
                    f"Assets {assets:,.0f} vs liabilities + equity "
                    f"{liabilities + equity:,.0f}; probable cross-scale mismatch"
                ),
                severity=Severity.HIGH,
                current_value=assets,
            ))


def validate_record(
    merged: MergedRecord,
    is_public_company: bool = True,
    validator: Optional[ScaleValidator] = None,
) -> list[ScaleError]:
    """Validate a MergedRecord, attaching errors and warnings to it."""
    validator = validator or ScaleValidator()
    errors = validator.validate(merged.financials.values(), is_public_company)
    merged.scale_errors = errors
    for error in errors:
        merged.warnings.append(ExtractionWarning(error.field, error.message, error.severity))
    return errors


__all__ = ['ScaleValidator', 'ScaleError', 'validate_record']
