# validation.py
"""
AdsorbLab Sim - Input Validation Module
=======================================

Validation of prediction and optimization inputs.

Two strengths of check are provided:
- Soft checks (``validate_prediction_inputs``): the response model is total,
  so out-of-domain inputs are reported as warnings and never rejected.
- Hard checks (``validate_optimization_request``): malformed optimizer
  requests (non-positive iteration count, inverted or non-finite ranges)
  produce errors; ``require_valid`` turns them into ``ValueError``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from .config import PH_MAX, PH_MIN, PRACTICAL_DOMAINS
from .registry import CONTAMINANTS, MATERIALS

logger = logging.getLogger(__name__)

__all__ = [
    # Classes
    "ValidationLevel",
    "ValidationResult",
    "ValidationReport",
    # Basic validators
    "validate_bounds",
    "validate_iteration_count",
    # Domain validators
    "validate_identifiers",
    "validate_prediction_inputs",
    "validate_optimization_request",
    # Utilities
    "require_valid",
    "format_validation_errors",
]

# =============================================================================
# VALIDATION RESULT CLASSES
# =============================================================================


class ValidationLevel(Enum):
    """Validation severity levels."""

    ERROR = "error"  # Critical - blocks the request
    WARNING = "warning"  # Potential issue - allows continuation
    INFO = "info"  # Informational only


@dataclass
class ValidationResult:
    """
    Result of a validation check.

    Attributes
    ----------
    is_valid : bool
        Whether the validation passed
    level : ValidationLevel
        Severity level of any issues
    message : str
        Human-readable description
    field : str
        Name of the field/parameter being validated
    value : Any
        The actual value that was validated
    suggestion : str, optional
        Suggested fix for the issue
    """

    is_valid: bool
    level: ValidationLevel
    message: str
    field: str
    value: Any = None
    suggestion: str | None = None

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass
class ValidationReport:
    """
    Aggregated validation results.

    Attributes
    ----------
    is_valid : bool
        True if no errors (warnings allowed)
    errors : list[ValidationResult]
        Critical validation failures
    warnings : list[ValidationResult]
        Non-critical issues
    info : list[ValidationResult]
        Informational messages
    """

    is_valid: bool
    errors: list[ValidationResult]
    warnings: list[ValidationResult]
    info: list[ValidationResult]

    def __bool__(self) -> bool:
        return self.is_valid

    @property
    def error_count(self) -> int:
        """Number of critical validation errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Number of non-critical warnings."""
        return len(self.warnings)

    @property
    def has_warnings(self) -> bool:
        """Check if report contains any warnings."""
        return self.warning_count > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": [{"message": e.message, "field": e.field} for e in self.errors],
            "warnings": [{"message": w.message, "field": w.field} for w in self.warnings],
            "info": [{"message": i.message, "field": i.field} for i in self.info],
        }


def _warning(message: str, field: str, value: Any = None, suggestion: str | None = None) -> ValidationResult:
    return ValidationResult(
        is_valid=True,
        level=ValidationLevel.WARNING,
        message=message,
        field=field,
        value=value,
        suggestion=suggestion,
    )


# =============================================================================
# BASIC VALIDATORS
# =============================================================================


def _as_finite_float(value: Any, field: str) -> tuple[float | None, ValidationResult | None]:
    if isinstance(value, bool):
        value = int(value)
    try:
        val = float(value)
    except (TypeError, ValueError):
        return None, ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=f"{field} must be a number",
            field=field,
            value=value,
        )
    if np.isnan(val) or np.isinf(val):
        return None, ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=f"{field} cannot be NaN or infinite",
            field=field,
            value=value,
        )
    return val, None


def validate_bounds(bounds: Any, field: str) -> ValidationResult:
    """
    Validate a (min, max) sampling range.

    Both bounds must be finite numbers with min ≤ max. A degenerate range
    (min == max) is accepted and pins the variable.
    """
    try:
        low, high = bounds
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=f"{field} must be a (min, max) pair",
            field=field,
            value=bounds,
        )

    low_val, failure = _as_finite_float(low, f"{field} minimum")
    if failure is not None:
        return failure
    high_val, failure = _as_finite_float(high, f"{field} maximum")
    if failure is not None:
        return failure

    if low_val > high_val:
        return ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=f"{field} minimum ({low_val}) exceeds maximum ({high_val})",
            field=field,
            value=bounds,
            suggestion="Swap the bounds",
        )

    return ValidationResult(
        is_valid=True,
        level=ValidationLevel.INFO,
        message=f"{field} is a valid range",
        field=field,
        value=(low_val, high_val),
    )


def validate_iteration_count(n_iter: Any, field: str = "Iteration count") -> ValidationResult:
    """Validate that the optimizer budget is a positive integer."""
    if isinstance(n_iter, bool) or not isinstance(n_iter, int | np.integer):
        return ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=f"{field} must be an integer (got {n_iter!r})",
            field=field,
            value=n_iter,
        )
    if n_iter < 1:
        return ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message=f"{field} must be at least 1 (got {n_iter})",
            field=field,
            value=n_iter,
        )
    return ValidationResult(
        is_valid=True,
        level=ValidationLevel.INFO,
        message=f"{field} is valid",
        field=field,
        value=int(n_iter),
    )


# =============================================================================
# DOMAIN VALIDATORS
# =============================================================================


def validate_identifiers(material_id: Any, contaminant_id: Any) -> list[ValidationResult]:
    """Warn about identifiers missing from the registries (fallback prediction)."""
    results = []
    if material_id not in MATERIALS:
        results.append(
            _warning(
                f"Unknown adsorbent {material_id!r}; prediction falls back to 0% removal",
                "Adsorbent",
                material_id,
                suggestion=f"Use one of: {', '.join(MATERIALS)}",
            )
        )
    if contaminant_id not in CONTAMINANTS:
        results.append(
            _warning(
                f"Unknown contaminant {contaminant_id!r}; prediction falls back to 0% removal",
                "Contaminant",
                contaminant_id,
                suggestion=f"Use one of: {', '.join(CONTAMINANTS)}",
            )
        )
    return results


def validate_prediction_inputs(
    material_id: Any,
    contaminant_id: Any,
    pH: float | None = None,
    concentration: float | None = None,
    contact_time: float | None = None,
) -> ValidationReport:
    """
    Check prediction inputs against their practical domains.

    The response model evaluates any numeric input, so out-of-domain values
    are warnings; only non-numeric values are errors.

    Returns
    -------
    ValidationReport
    """
    errors: list[ValidationResult] = []
    warnings: list[ValidationResult] = validate_identifiers(material_id, contaminant_id)
    info: list[ValidationResult] = []

    if pH is not None:
        val, failure = _as_finite_float(pH, "pH")
        if failure is not None:
            errors.append(failure)
        elif not PH_MIN <= val <= PH_MAX:
            warnings.append(_warning(f"pH {val} is outside {PH_MIN}-{PH_MAX}", "pH", val))
        else:
            low, high = PRACTICAL_DOMAINS["pH"]
            if not low <= val <= high:
                info.append(
                    ValidationResult(
                        True,
                        ValidationLevel.INFO,
                        f"pH {val} is outside the calibrated range {low}-{high}",
                        "pH",
                        val,
                    )
                )

    if contact_time is not None:
        val, failure = _as_finite_float(contact_time, "Contact time")
        if failure is not None:
            errors.append(failure)
        elif val < 0:
            warnings.append(
                _warning(f"Contact time must be non-negative (got {val})", "Contact time", val)
            )
        elif val > PRACTICAL_DOMAINS["contact_time"][1]:
            info.append(
                ValidationResult(
                    True,
                    ValidationLevel.INFO,
                    "Contact time beyond the calibrated range; kinetics are saturated",
                    "Contact time",
                    val,
                )
            )

    if concentration is not None:
        val, failure = _as_finite_float(concentration, "Concentration")
        if failure is not None:
            errors.append(failure)
        else:
            contaminant = CONTAMINANTS.get(contaminant_id)
            domain_key = (
                "concentration_organic"
                if contaminant is not None and contaminant.category == "organic"
                else "concentration"
            )
            low, high = PRACTICAL_DOMAINS[domain_key]
            if not low <= val <= high:
                warnings.append(
                    _warning(
                        f"Concentration {val} mg/L is outside the practical range {low}-{high} mg/L",
                        "Concentration",
                        val,
                    )
                )

    for w in warnings:
        logger.debug(f"Prediction input warning: {w.message}")

    return ValidationReport(is_valid=len(errors) == 0, errors=errors, warnings=warnings, info=info)


def validate_optimization_request(
    target_removal: Any,
    ph_range: Any,
    time_range: Any,
    concentration_range: Any,
    n_iter: Any,
    material_id: Any = None,
    contaminant_id: Any = None,
) -> ValidationReport:
    """
    Validate an inverse-design request.

    Errors: non-numeric target, malformed or inverted ranges, non-positive
    iteration count. Warnings: target outside 0-100, unknown identifiers.

    Returns
    -------
    ValidationReport
    """
    errors: list[ValidationResult] = []
    warnings: list[ValidationResult] = []
    info: list[ValidationResult] = []

    target, failure = _as_finite_float(target_removal, "Target removal")
    if failure is not None:
        errors.append(failure)
    elif not 0 <= target <= 100:
        warnings.append(
            _warning(
                f"Target removal {target}% is unreachable",
                "Target removal",
                target,
                suggestion="Removal never leaves 0-100%",
            )
        )

    for bounds, field in (
        (ph_range, "pH range"),
        (time_range, "Time range"),
        (concentration_range, "Concentration range"),
    ):
        result = validate_bounds(bounds, field)
        if not result.is_valid:
            errors.append(result)

    count_result = validate_iteration_count(n_iter)
    if not count_result.is_valid:
        errors.append(count_result)

    if material_id is not None or contaminant_id is not None:
        warnings.extend(validate_identifiers(material_id, contaminant_id))

    return ValidationReport(is_valid=len(errors) == 0, errors=errors, warnings=warnings, info=info)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def require_valid(report: ValidationReport) -> ValidationReport:
    """
    Raise ``ValueError`` if the report contains errors.

    Returns the report unchanged otherwise so warnings can still be inspected.
    """
    if not report.is_valid:
        raise ValueError(format_validation_errors(report))
    return report


def format_validation_errors(report: ValidationReport) -> str:
    """
    Format validation errors for display.

    Parameters
    ----------
    report : ValidationReport
        Validation results

    Returns
    -------
    str
        Formatted error message
    """
    lines = []

    if report.errors:
        lines.append("Errors:")
        for e in report.errors:
            lines.append(f"- {e.message}")
            if e.suggestion:
                lines.append(f"  hint: {e.suggestion}")

    if report.warnings:
        lines.append("Warnings:")
        for w in report.warnings:
            lines.append(f"- {w.message}")
            if w.suggestion:
                lines.append(f"  hint: {w.suggestion}")

    return "\n".join(lines) if lines else "All validations passed"
