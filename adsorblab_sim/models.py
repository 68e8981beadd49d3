# models.py
"""
AdsorbLab Sim - Removal Response Model
======================================

Closed-form surrogate of % removal combining four multiplicative effects:

- Kinetic factor (pseudo-first-order saturation)   1 − e^{−k t}
- pH factor (direction set per contaminant)
    * favored at high pH:  1 / (1 + e^{−1.5 (pH − 4.5)})
    * favored at low pH:   1 / (1 + e^{1.2 (pH − 6.5)})
    * pH-insensitive:      0.85 + 0.15 e^{−0.3 (pH − 6)²}
- Concentration factor                             e^{−kc (C0 − C_ref)}
- Competition penalty                              0.92 when competitors present

    removal = base × kinetic × pH × conc × multiplier × penalty + synergy

The mean is clamped to [0, 100]. Uncertainty is heteroscedastic:

    std = 2.0 + 3.0 (1 − kinetic) + 1.5 |pH − pH_opt| / 3

All coefficients are fixed constants (see ``config``); nothing is fitted.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike
from scipy.special import expit

from .config import (
    CI_Z_SCORE,
    COMPETITION_PENALTY,
    FALLBACK_MEAN,
    FALLBACK_STD,
    OUTPUT_DECIMALS,
    PH_HIGH_MIDPOINT,
    PH_HIGH_SLOPE,
    PH_LOW_MIDPOINT,
    PH_LOW_SLOPE,
    PH_NEUTRAL_AMPLITUDE,
    PH_NEUTRAL_CENTER,
    PH_NEUTRAL_FLOOR,
    PH_NEUTRAL_WIDTH,
    REMOVAL_MAX,
    REMOVAL_MIN,
    STD_FLOOR,
    STD_KINETIC_WEIGHT,
    STD_PH_SCALE,
    STD_PH_WEIGHT,
)
from .registry import PHDirection, get_contaminant, get_material

logger = logging.getLogger(__name__)

__all__ = [
    "PredictionResult",
    "RemovalBreakdown",
    "FALLBACK_RESULT",
    "round_half_away",
    "kinetic_factor",
    "ph_factor",
    "concentration_factor",
    "competition_penalty",
    "removal_uncertainty",
    "get_ph_model",
    "predict_removal_raw",
    "predict_removal",
]


# =============================================================================
# ROUNDING
# =============================================================================


def round_half_away(value: float, decimals: int = OUTPUT_DECIMALS) -> float:
    """
    Round to ``decimals`` places with exact halves going away from zero.

    Built-in ``round`` sends exact binary halves to even (5.125 -> 5.12);
    reported removals and contributions round them up (5.125 -> 5.13).
    """
    scale = 10.0**decimals
    magnitude = float(np.floor(abs(float(value)) * scale + 0.5) / scale)
    if value < 0 and magnitude:
        return -magnitude
    return magnitude


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class PredictionResult:
    """
    Predicted removal with its uncertainty.

    Attributes
    ----------
    mean : float
        Mean removal (%), always within [0, 100]
    std : float
        Standard deviation (%), always > 0
    """

    mean: float
    std: float

    def interval(self, z: float = CI_Z_SCORE) -> tuple[float, float]:
        """Band of ``mean ± z·std`` clipped to the removal scale."""
        lower = max(REMOVAL_MIN, self.mean - z * self.std)
        upper = min(REMOVAL_MAX, self.mean + z * self.std)
        return lower, upper

    @property
    def lower(self) -> float:
        """Lower bound of the 95% band."""
        return self.interval()[0]

    @property
    def upper(self) -> float:
        """Upper bound of the 95% band."""
        return self.interval()[1]

    def to_dict(self) -> dict[str, float]:
        return {"mean": self.mean, "std": self.std}


@dataclass(frozen=True)
class RemovalBreakdown:
    """Full-precision intermediate terms of a single prediction."""

    kinetic: float
    ph: float
    concentration: float
    competition: float
    raw_removal: float
    mean: float
    std: float

    def to_result(self, decimals: int = OUTPUT_DECIMALS) -> PredictionResult:
        """Round to the presentation precision."""
        return PredictionResult(
            mean=round_half_away(self.mean, decimals),
            std=round_half_away(self.std, decimals),
        )


FALLBACK_RESULT = PredictionResult(mean=FALLBACK_MEAN, std=FALLBACK_STD)


# =============================================================================
# FACTOR FUNCTIONS
# =============================================================================


def kinetic_factor(contact_time: ArrayLike, rate_constant: float) -> Any:
    """
    Pseudo-first-order approach to equilibrium: 1 − exp(−k·t).

    Zero at t = 0, increases monotonically and saturates at 1.
    """
    return 1.0 - np.exp(-rate_constant * np.asarray(contact_time, dtype=float))


_PH_MODELS: dict[PHDirection, Callable[[Any], Any]] = {}


def register_ph_model(direction: PHDirection) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to register a pH response curve for a contaminant direction."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        _PH_MODELS[direction] = func
        return func

    return decorator


def get_ph_model(direction: PHDirection) -> Callable[[Any], Any]:
    """Retrieve the pH response curve registered for ``direction``."""
    return _PH_MODELS[direction]


@register_ph_model(PHDirection.HIGH)
def ph_factor_high(pH: ArrayLike) -> Any:
    """Increasing logistic, midpoint pH 4.5 (deprotonated surface favors cations)."""
    return expit(PH_HIGH_SLOPE * (np.asarray(pH, dtype=float) - PH_HIGH_MIDPOINT))


@register_ph_model(PHDirection.LOW)
def ph_factor_low(pH: ArrayLike) -> Any:
    """Decreasing logistic, midpoint pH 6.5."""
    return expit(-PH_LOW_SLOPE * (np.asarray(pH, dtype=float) - PH_LOW_MIDPOINT))


@register_ph_model(PHDirection.NEUTRAL)
def ph_factor_neutral(pH: ArrayLike) -> Any:
    """Near-flat response with a mild peak at pH 6."""
    dev = np.asarray(pH, dtype=float) - PH_NEUTRAL_CENTER
    return PH_NEUTRAL_FLOOR + PH_NEUTRAL_AMPLITUDE * np.exp(-PH_NEUTRAL_WIDTH * dev**2)


def ph_factor(pH: ArrayLike, direction: PHDirection) -> Any:
    """pH factor for a contaminant of the given response direction."""
    return get_ph_model(direction)(pH)


def concentration_factor(
    concentration: ArrayLike, decay_constant: float, reference_concentration: float
) -> Any:
    """
    Load dependence relative to a reference concentration: exp(−kc·(C − C_ref)).

    Not clamped: exceeds 1 below the reference concentration.
    """
    return np.exp(-decay_constant * (np.asarray(concentration, dtype=float) - reference_concentration))


def competition_penalty(competition: bool) -> float:
    """Fixed discount when competing species are present."""
    return COMPETITION_PENALTY if competition else 1.0


def removal_uncertainty(kinetic: ArrayLike, pH: ArrayLike, ph_optimum: float) -> Any:
    """
    Heteroscedastic standard deviation of the removal prediction.

    Larger before the kinetics have resolved and away from the material's
    pH optimum; never below ``STD_FLOOR``.
    """
    kinetic = np.asarray(kinetic, dtype=float)
    pH = np.asarray(pH, dtype=float)
    return (
        STD_FLOOR
        + STD_KINETIC_WEIGHT * (1.0 - kinetic)
        + STD_PH_WEIGHT * np.abs(pH - ph_optimum) / STD_PH_SCALE
    )


# =============================================================================
# PREDICTION
# =============================================================================


def predict_removal_raw(
    material_id: str,
    contaminant_id: str,
    pH: float,
    concentration: float,
    contact_time: float,
    competition: bool = False,
) -> RemovalBreakdown | None:
    """
    Evaluate the response surface at full precision.

    Returns None when either identifier is not in the registry.
    """
    material = get_material(material_id)
    contaminant = get_contaminant(contaminant_id)
    if material is None or contaminant is None:
        return None

    kinetic = float(kinetic_factor(contact_time, material.rate_constant))
    ph_effect = float(ph_factor(pH, contaminant.ph_direction))
    conc_effect = float(
        concentration_factor(
            concentration, material.conc_decay, contaminant.reference_concentration
        )
    )
    penalty = competition_penalty(competition)

    raw = (
        material.base_capacity
        * kinetic
        * ph_effect
        * conc_effect
        * contaminant.optimum_multiplier
        * penalty
        + material.synergy_bonus
    )
    mean = float(np.clip(raw, REMOVAL_MIN, REMOVAL_MAX))
    std = float(removal_uncertainty(kinetic, pH, material.ph_optimum))

    return RemovalBreakdown(
        kinetic=kinetic,
        ph=ph_effect,
        concentration=conc_effect,
        competition=penalty,
        raw_removal=float(raw),
        mean=mean,
        std=std,
    )


def predict_removal(
    material_id: str,
    contaminant_id: str,
    pH: float,
    concentration: float,
    contact_time: float,
    competition: bool = False,
) -> PredictionResult:
    """
    Predict % removal and its uncertainty.

    Parameters
    ----------
    material_id : str
        Adsorbent identifier (e.g. "MNCJG")
    contaminant_id : str
        Contaminant identifier (e.g. "Cd(II)")
    pH : float
        Initial solution pH
    concentration : float
        Initial contaminant concentration (mg/L)
    contact_time : float
        Contact time (min)
    competition : bool
        Whether competing species are present

    Returns
    -------
    PredictionResult
        Mean and std rounded to 2 decimals. Unknown identifiers give the
        fallback result (mean 0, std 5) rather than an error.

    Examples
    --------
    >>> predict_removal("MNCJG", "Cd(II)", 6.0, 5.0, 30.0)
    PredictionResult(mean=91.99, std=2.01)
    """
    breakdown = predict_removal_raw(
        material_id, contaminant_id, pH, concentration, contact_time, competition
    )
    if breakdown is None:
        logger.debug(
            f"Unknown material/contaminant ({material_id!r}, {contaminant_id!r}); "
            f"returning fallback prediction"
        )
        return FALLBACK_RESULT
    return breakdown.to_result()
