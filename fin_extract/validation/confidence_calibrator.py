# Path: fin_extract/validation/confidence_calibrator.py
"""
Confidence Calibrator

Adjusts per-field confidence from accounting relationships between
the extracted values. Every adjustment is bounded and recorded with
its reason.

Checks:
1. Balance sheet: A = L + E within 5%
   penalty min(0.3, deviation) on totalAssets, totalLiabilities, totalEquity
2. Gross profit: GP = R - C within 2% of revenue
   penalty min(0.2, deviation) on revenue, costOfRevenue
3. Operating income above gross profit
   -0.3 on operatingIncome and a high-severity warning
4. Debt sum: TD = ST + LT within 10% of total debt
   -0.2 on totalDebt
5. Round numbers: exact multiples of 10^7
   -0.1 on the field
6. Source multiplier: per-field provenance when known, else the
   record's source tag (xbrl 1.0, hybrid 0.9, ai 0.8)

Overall = mean of the headline fields present
          - min(0.2, 0.05 * consistency adjustments), floored at 0.1
          (0.0 only when no field carries a confidence)
"""

from dataclasses import dataclass, field
from typing import Optional

from constants import (
    CanonicalField as F,
    ExtractionSource,
    Severity,
    HEADLINE_FIELDS,
    BALANCE_SHEET_TOLERANCE,
    BALANCE_SHEET_MAX_PENALTY,
    GROSS_PROFIT_TOLERANCE,
    GROSS_PROFIT_MAX_PENALTY,
    OPERATING_INCOME_PENALTY,
    DEBT_SUM_TOLERANCE,
    DEBT_SUM_PENALTY,
    ROUND_NUMBER_UNIT,
    ROUND_NUMBER_PENALTY,
    SOURCE_MULTIPLIERS,
    ADJUSTMENT_PENALTY_STEP,
    ADJUSTMENT_PENALTY_CAP,
    OVERALL_CONFIDENCE_FLOOR,
)
from core.logger.ipo_logging import get_process_logger
from extraction.record import ExtractionWarning, MergedRecord


SOURCE_CHECK = 'source'


@dataclass
class ConfidenceAdjustment:
    """One recorded change to a field's confidence."""
    field: str
    check: str
    reason: str
    original: float
    adjusted: float

    @property
    def delta(self) -> float:
        return self.adjusted - self.original

    def to_dict(self) -> dict:
        return {
            'field': self.field,
            'check': self.check,
            'reason': self.reason,
            'original': self.original,
            'adjusted': self.adjusted,
        }


@dataclass
class CalibrationResult:
    """Calibrated confidences plus the adjustment log."""
    field_confidence: dict[str, float] = field(default_factory=dict)
    overall: float = 0.0
    adjustments: list[ConfidenceAdjustment] = field(default_factory=list)
    warnings: list[ExtractionWarning] = field(default_factory=list)

    @property
    def consistency_adjustments(self) -> list[ConfidenceAdjustment]:
        """Adjustments made by the accounting checks (not the source multiplier)."""
        return [a for a in self.adjustments if a.check != SOURCE_CHECK]


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _key(name) -> str:
    return name.value if isinstance(name, F) else str(name)


class ConfidenceCalibrator:
    """
    Applies the accounting checks to a set of values and confidences.

    Stateless; one instance can calibrate any number of records.
    """

    def __init__(self):
        self.logger = get_process_logger('confidence_calibrator')

    def calibrate(
        self,
        values: dict,
        confidence: dict,
        source=ExtractionSource.XBRL,
        provenance: Optional[dict] = None,
    ) -> CalibrationResult:
        """
        Calibrate confidences.

        Args:
            values: Field -> value (CanonicalField or wire-name keys)
            confidence: Field -> starting confidence (0-1)
            source: Record source tag, used when provenance is unknown
            provenance: Field -> provenance tag, optional

        Returns:
            CalibrationResult
        """
        values = {_key(k): v for k, v in values.items() if v is not None}
        provenance = {_key(k): str(getattr(v, 'value', v)) for k, v in (provenance or {}).items()}
        result = CalibrationResult(
            field_confidence={_key(k): _clamp(float(v)) for k, v in confidence.items()},
        )

        self._check_balance_sheet(values, result)
        self._check_gross_profit(values, result)
        self._check_operating_income(values, result)
        self._check_debt_sum(values, result)
        self._check_round_numbers(values, result)
        self._apply_source_multiplier(source, provenance, result)

        result.overall = self._overall(result)
        self.logger.info(
            f"Calibrated {len(result.field_confidence)} fields: "
            f"{len(result.consistency_adjustments)} consistency adjustments, "
            f"overall {result.overall:.2f}"
        )
        return result

    def _penalize(
        self,
        result: CalibrationResult,
        fields: tuple,
        penalty: float,
        check: str,
        reason: str,
    ) -> None:
        for name in fields:
            key = _key(name)
            if key not in result.field_confidence:
                continue
            original = result.field_confidence[key]
            adjusted = _clamp(original - penalty)
            result.field_confidence[key] = adjusted
            result.adjustments.append(
                ConfidenceAdjustment(key, check, reason, original, adjusted)
            )
            self.logger.debug(f"{check}: {key} {original:.2f} -> {adjusted:.2f} ({reason})")

    def _check_balance_sheet(self, values: dict, result: CalibrationResult) -> None:
        assets = values.get(F.TOTAL_ASSETS.value)
        liabilities = values.get(F.TOTAL_LIABILITIES.value)
        equity = values.get(F.TOTAL_EQUITY.value)
        if assets is None or liabilities is None or equity is None or assets == 0:
            return

        deviation = abs(assets - (liabilities + equity)) / abs(assets)
        if deviation > BALANCE_SHEET_TOLERANCE:
            self._penalize(
                result,
                (F.TOTAL_ASSETS, F.TOTAL_LIABILITIES, F.TOTAL_EQUITY),
                min(BALANCE_SHEET_MAX_PENALTY, deviation),
                'balance_sheet',
                f"Assets differ from liabilities + equity by {deviation:.1%}",
            )

    def _check_gross_profit(self, values: dict, result: CalibrationResult) -> None:
        revenue = values.get(F.REVENUE.value)
        cost = values.get(F.COST_OF_REVENUE.value)
        gross = values.get(F.GROSS_PROFIT.value)
        if revenue is None or cost is None or gross is None or revenue == 0:
            return

        deviation = abs(gross - (revenue - cost)) / abs(revenue)
        if deviation > GROSS_PROFIT_TOLERANCE:
            self._penalize(
                result,
                (F.REVENUE, F.COST_OF_REVENUE),
                min(GROSS_PROFIT_MAX_PENALTY, deviation),
                'gross_profit',
                f"Gross profit differs from revenue - cost by {deviation:.1%} of revenue",
            )

    def _check_operating_income(self, values: dict, result: CalibrationResult) -> None:
        operating = values.get(F.OPERATING_INCOME.value)
        gross = values.get(F.GROSS_PROFIT.value)
        if operating is None or gross is None or operating <= gross:
            return

        message = f"Operating income {operating:,.0f} exceeds gross profit {gross:,.0f}"
        self._penalize(
            result, (F.OPERATING_INCOME,), OPERATING_INCOME_PENALTY,
            'operating_income', message,
        )
        result.warnings.append(
            ExtractionWarning(F.OPERATING_INCOME.value, message, Severity.HIGH)
        )

    def _check_debt_sum(self, values: dict, result: CalibrationResult) -> None:
        total = values.get(F.TOTAL_DEBT.value)
        short = values.get(F.SHORT_TERM_DEBT.value)
        long = values.get(F.LONG_TERM_DEBT.value)
        if total is None or short is None or long is None:
            return

        if abs(total - (short + long)) > DEBT_SUM_TOLERANCE * abs(total):
            self._penalize(
                result, (F.TOTAL_DEBT,), DEBT_SUM_PENALTY, 'debt_sum',
                f"Total debt {total:,.0f} differs from short + long term "
                f"{short + long:,.0f}",
            )

    def _check_round_numbers(self, values: dict, result: CalibrationResult) -> None:
        for key, value in values.items():
            if value != 0 and value % ROUND_NUMBER_UNIT == 0:
                self._penalize(
                    result, (key,), ROUND_NUMBER_PENALTY, 'round_number',
                    f"Exact multiple of {ROUND_NUMBER_UNIT:,}, possibly estimated",
                )

    def _apply_source_multiplier(
        self,
        source,
        provenance: dict[str, str],
        result: CalibrationResult,
    ) -> None:
        record_tag = str(getattr(source, 'value', source))
        for key in list(result.field_confidence):
            tag = provenance.get(key, record_tag)
            multiplier = SOURCE_MULTIPLIERS.get(tag, SOURCE_MULTIPLIERS[ExtractionSource.AI.value])
            if multiplier == 1.0:
                continue
            original = result.field_confidence[key]
            adjusted = _clamp(original * multiplier)
            result.field_confidence[key] = adjusted
            result.adjustments.append(ConfidenceAdjustment(
                key, SOURCE_CHECK, f"Source '{tag}' multiplier {multiplier}",
                original, adjusted,
            ))

    def _overall(self, result: CalibrationResult) -> float:
        headline = [
            result.field_confidence[f.value] for f in HEADLINE_FIELDS
            if f.value in result.field_confidence
        ]
        if not result.field_confidence:
            return 0.0
        if not headline:
            return OVERALL_CONFIDENCE_FLOOR
        mean = sum(headline) / len(headline)
        penalty = min(
            ADJUSTMENT_PENALTY_CAP,
            ADJUSTMENT_PENALTY_STEP * len(result.consistency_adjustments),
        )
        return max(OVERALL_CONFIDENCE_FLOOR, _clamp(mean - penalty))


def calibrate_record(
    merged: MergedRecord,
    calibrator: Optional[ConfidenceCalibrator] = None,
) -> CalibrationResult:
    """Calibrate a MergedRecord in place and return the result."""
    calibrator = calibrator or ConfidenceCalibrator()
    result = calibrator.calibrate(
        merged.financials.values(),
        merged.field_confidence,
        merged.source,
        merged.provenance,
    )
    merged.field_confidence = result.field_confidence
    merged.overall_confidence = result.overall
    merged.adjustments = result.adjustments
    merged.warnings.extend(result.warnings)
    return result


__all__ = [
    'ConfidenceCalibrator',
    'CalibrationResult',
    'ConfidenceAdjustment',
    'calibrate_record',
]
