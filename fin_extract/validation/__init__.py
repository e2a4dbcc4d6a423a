# Path: fin_extract/validation/__init__.py
"""
Validation Layer

Post-extraction checks on the merged record:
- ConfidenceCalibrator: accounting-relationship confidence adjustments
- ScaleValidator: unit-scale sanity checks with suggested corrections
"""

from .confidence_calibrator import (
    ConfidenceCalibrator,
    CalibrationResult,
    ConfidenceAdjustment,
    calibrate_record,
)
from .scale_validator import ScaleValidator, ScaleError, validate_record

__all__ = [
    'ConfidenceCalibrator',
    'CalibrationResult',
    'ConfidenceAdjustment',
    'calibrate_record',
    'ScaleValidator',
    'ScaleError',
    'validate_record',
]
