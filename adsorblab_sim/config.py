# config.py
"""
AdsorbLab Sim - Configuration Module
====================================

Centralized configuration for all model coefficients, constants, and defaults.
Every other module imports its numbers from here.
"""

from typing import Any, TypedDict

from . import __version__ as VERSION


class MaterialParams(TypedDict):
    """Type definition for adsorbent coefficients."""

    base: float
    time_k: float
    ph_opt: float
    ph_sens: float
    conc_decay: float
    synergy: float


class ContaminantParams(TypedDict):
    """Type definition for contaminant coefficients."""

    name: str
    category: str
    ph_dir: int
    opt_mul: float
    conc_base: float
    default_conc: float


__all__ = [
    # Version
    "VERSION",
    # Registry data
    "MATERIAL_PARAMS",
    "CONTAMINANT_PARAMS",
    "REFERENCE_MATERIAL",
    "REFERENCE_CONTAMINANT",
    # Response model
    "FALLBACK_MEAN",
    "FALLBACK_STD",
    "COMPETITION_PENALTY",
    "PH_HIGH_SLOPE",
    "PH_HIGH_MIDPOINT",
    "PH_LOW_SLOPE",
    "PH_LOW_MIDPOINT",
    "PH_NEUTRAL_FLOOR",
    "PH_NEUTRAL_AMPLITUDE",
    "PH_NEUTRAL_WIDTH",
    "PH_NEUTRAL_CENTER",
    "STD_FLOOR",
    "STD_KINETIC_WEIGHT",
    "STD_PH_WEIGHT",
    "STD_PH_SCALE",
    "REMOVAL_MIN",
    "REMOVAL_MAX",
    "OUTPUT_DECIMALS",
    "CI_Z_SCORE",
    # Optimizer
    "DEFAULT_OPTIMIZATION_ITERATIONS",
    "ACQUISITION_STD_PENALTY",
    "ACQUISITION_EXPLORATION_BONUS",
    "DEFAULT_OPTIMIZATION_BOUNDS",
    # Attribution
    "ATTRIBUTION_BASELINE",
    "ATTRIBUTION_FACTORS",
    "COMPETITION_CONTRIBUTION",
    # Sweeps
    "KINETIC_CURVE_DEFAULTS",
    "PH_RESPONSE_DEFAULTS",
    "OPERATING_WINDOW_STEP",
    "HEATMAP_CONDITIONS",
    # Validation
    "PH_MIN",
    "PH_MAX",
    "PRACTICAL_DOMAINS",
    "VALIDATION_SCENARIOS",
]

# =============================================================================
# ADSORBENT REGISTRY DATA
# =============================================================================
# base       : capacity on the 0-100 removal scale
# time_k     : pseudo-first-order rate constant (1/min)
# ph_opt     : pH of maximum removal, drives the uncertainty term
# ph_sens    : pH sensitivity (informational, not used by the response surface)
# conc_decay : load-dependence constant (L/mg)
# synergy    : additive bonus for composite materials (% removal)
# =============================================================================
MATERIAL_PARAMS: dict[str, MaterialParams] = {
    "MNCJG": {"base": 92, "time_k": 0.18, "ph_opt": 6.0, "ph_sens": 3.5, "conc_decay": 0.008, "synergy": 5},
    "MNC": {"base": 78, "time_k": 0.14, "ph_opt": 6.0, "ph_sens": 4.0, "conc_decay": 0.012, "synergy": 0},
    "NC": {"base": 55, "time_k": 0.10, "ph_opt": 5.5, "ph_sens": 5.0, "conc_decay": 0.018, "synergy": 0},
    "NCJG": {"base": 72, "time_k": 0.15, "ph_opt": 6.0, "ph_sens": 3.8, "conc_decay": 0.010, "synergy": 3},
    "MWM": {"base": 65, "time_k": 0.12, "ph_opt": 5.5, "ph_sens": 4.5, "conc_decay": 0.015, "synergy": 0},
}

# =============================================================================
# CONTAMINANT REGISTRY DATA
# =============================================================================
# ph_dir       : +1 favored at high pH, -1 favored at low pH, 0 pH-insensitive
# opt_mul      : optimum multiplier applied to the removal product
# conc_base    : reference concentration of the load term (mg/L)
# default_conc : concentration used when profiling the contaminant (mg/L)
# =============================================================================
CONTAMINANT_PARAMS: dict[str, ContaminantParams] = {
    "Cd(II)": {
        "name": "Cadmium(II)",
        "category": "heavy metal",
        "ph_dir": 1,
        "opt_mul": 1.05,
        "conc_base": 5,
        "default_conc": 5,
    },
    "Pb(II)": {
        "name": "Lead(II)",
        "category": "heavy metal",
        "ph_dir": 1,
        "opt_mul": 1.08,
        "conc_base": 5,
        "default_conc": 5,
    },
    "As(III)": {
        "name": "Arsenic(III)",
        "category": "metalloid",
        "ph_dir": -1,
        "opt_mul": 0.92,
        "conc_base": 5,
        "default_conc": 5,
    },
    "Nap": {
        "name": "Naphthalene",
        "category": "organic",
        "ph_dir": 0,
        "opt_mul": 0.88,
        "conc_base": 50,
        "default_conc": 50,
    },
}

REFERENCE_MATERIAL = "NC"  # Unmodified material used as attribution reference
REFERENCE_CONTAMINANT = "Cd(II)"

# =============================================================================
# RESPONSE MODEL CONSTANTS
# =============================================================================
FALLBACK_MEAN = 0.0  # Returned for unknown material/contaminant identifiers
FALLBACK_STD = 5.0
COMPETITION_PENALTY = 0.92  # Fixed discount when competing species are present

# Logistic pH curves
PH_HIGH_SLOPE = 1.5
PH_HIGH_MIDPOINT = 4.5
PH_LOW_SLOPE = 1.2
PH_LOW_MIDPOINT = 6.5

# Near-flat Gaussian bump for pH-insensitive contaminants
PH_NEUTRAL_FLOOR = 0.85
PH_NEUTRAL_AMPLITUDE = 0.15
PH_NEUTRAL_WIDTH = 0.3
PH_NEUTRAL_CENTER = 6.0

# Heteroscedastic uncertainty: std = floor + kw*(1 - kinetic) + pw*|pH - pH_opt|/scale
STD_FLOOR = 2.0
STD_KINETIC_WEIGHT = 3.0
STD_PH_WEIGHT = 1.5
STD_PH_SCALE = 3.0

REMOVAL_MIN = 0.0
REMOVAL_MAX = 100.0
OUTPUT_DECIMALS = 2
CI_Z_SCORE = 1.96  # 95% band

# =============================================================================
# OPTIMIZER CONFIGURATION
# =============================================================================
DEFAULT_OPTIMIZATION_ITERATIONS = 60
ACQUISITION_STD_PENALTY = 0.1  # Applied when the target is already met
ACQUISITION_EXPLORATION_BONUS = 0.5  # Applied below target

DEFAULT_OPTIMIZATION_BOUNDS: dict[str, Any] = {
    "target_removal": 95.0,
    "ph_range": (4.0, 8.0),
    "time_range": (5.0, 30.0),
    "concentration_range": (1.0, 20.0),
    "n_iter": 80,
}

# =============================================================================
# ATTRIBUTION CONFIGURATION
# =============================================================================
ATTRIBUTION_BASELINE: dict[str, float] = {
    "pH": 6.0,
    "concentration": 10.0,
    "contact_time": 15.0,
}

# Declaration order breaks ties when sorting by magnitude
ATTRIBUTION_FACTORS: tuple[str, ...] = (
    "Contact Time",
    "Initial pH",
    "Concentration",
    "Adsorbent Type",
    "Pollutant Type",
    "Competition",
)

COMPETITION_CONTRIBUTION = -3.2  # Fixed placeholder, not derived from the model

# =============================================================================
# RESPONSE SWEEPS
# =============================================================================
KINETIC_CURVE_DEFAULTS: dict[str, float] = {"t_max": 30.0, "step": 1.0}
PH_RESPONSE_DEFAULTS: dict[str, float] = {"ph_min": 2.0, "ph_max": 8.0, "step": 0.5}
OPERATING_WINDOW_STEP = 0.2
HEATMAP_CONDITIONS: dict[str, float] = {"pH": 6.0, "contact_time": 30.0}

# =============================================================================
# INPUT DOMAINS (soft validation only)
# =============================================================================
PH_MIN = 0.0
PH_MAX = 14.0

PRACTICAL_DOMAINS: dict[str, tuple[float, float]] = {
    "pH": (2.0, 8.0),
    "contact_time": (0.0, 30.0),
    "concentration": (1.0, 40.0),
    "concentration_organic": (1.0, 100.0),
}

# =============================================================================
# INDEPENDENT VALIDATION EXPERIMENTS
# =============================================================================
# Reported model predictions against batch experiments (mean ± std, n = 3).
VALIDATION_SCENARIOS: tuple[dict[str, Any], ...] = (
    {
        "scenario": "VS1",
        "material": "MNCJG",
        "contaminant": "Cd(II)",
        "pH": 6.2,
        "concentration": 18.5,
        "contact_time": 30.0,
        "predicted": 96.5,
        "experimental": 95.1,
        "exp_std": 0.8,
    },
    {
        "scenario": "VS2-a",
        "material": "MNCJG",
        "contaminant": "Pb(II)",
        "pH": 5.8,
        "concentration": 22.0,
        "contact_time": 30.0,
        "predicted": 92.8,
        "experimental": 91.3,
        "exp_std": 1.1,
    },
    {
        "scenario": "VS2-b",
        "material": "MNCJG",
        "contaminant": "Nap",
        "pH": 5.8,
        "concentration": 35.0,
        "contact_time": 30.0,
        "predicted": 89.5,
        "experimental": 87.2,
        "exp_std": 1.5,
    },
    {
        "scenario": "VS3",
        "material": "NCJG",
        "contaminant": "As(III)",
        "pH": 5.0,
        "concentration": 8.0,
        "contact_time": 30.0,
        "predicted": 78.3,
        "experimental": 75.9,
        "exp_std": 1.3,
    },
)
