# utils.py
"""
AdsorbLab Sim - Response Sweeps and Comparison Tables
=====================================================

Tabular views of the response model for display or export:
- Kinetic curve with 95% band
- pH response of every contaminant on one adsorbent
- Operating-window sensitivity around an optimized point
- Multi-contaminant profile of one adsorbent
- Adsorbent × contaminant removal heatmap
- Comparison against independent validation experiments
"""

import logging
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd
from scipy import stats

from .config import (
    HEATMAP_CONDITIONS,
    KINETIC_CURVE_DEFAULTS,
    OPERATING_WINDOW_STEP,
    PH_RESPONSE_DEFAULTS,
    VALIDATION_SCENARIOS,
)
from .models import predict_removal
from .registry import CONTAMINANTS, MATERIALS

logger = logging.getLogger(__name__)

__all__ = [
    "inclusive_grid",
    "kinetic_curve",
    "ph_response",
    "operating_window",
    "pollutant_profile",
    "material_heatmap",
    "compare_validation_scenarios",
    "validation_summary",
    "convert_df_to_csv",
]


def inclusive_grid(start: float, stop: float, step: float) -> np.ndarray:
    """
    Evenly spaced points from ``start`` to ``stop`` inclusive.

    Uses a point count rather than repeated addition so the end point is not
    lost to floating-point drift.
    """
    if step <= 0:
        raise ValueError(f"step must be positive (got {step})")
    if stop < start:
        return np.array([], dtype=float)
    n = int(np.floor((stop - start) / step + 1e-9)) + 1
    return start + step * np.arange(n)


# =============================================================================
# SWEEPS
# =============================================================================


def kinetic_curve(
    material_id: str,
    contaminant_id: str,
    pH: float,
    concentration: float,
    competition: bool = False,
    t_max: float = KINETIC_CURVE_DEFAULTS["t_max"],
    step: float = KINETIC_CURVE_DEFAULTS["step"],
) -> pd.DataFrame:
    """
    Removal versus contact time with a 95% band.

    Returns
    -------
    pd.DataFrame
        Columns: time, removal, std, lower, upper
    """
    rows = []
    for t in inclusive_grid(0.0, t_max, step):
        pred = predict_removal(material_id, contaminant_id, pH, concentration, float(t), competition)
        lower, upper = pred.interval()
        rows.append(
            {"time": float(t), "removal": pred.mean, "std": pred.std, "lower": lower, "upper": upper}
        )
    return pd.DataFrame(rows, columns=["time", "removal", "std", "lower", "upper"])


def ph_response(
    material_id: str,
    concentration: float,
    contact_time: float,
    ph_min: float = PH_RESPONSE_DEFAULTS["ph_min"],
    ph_max: float = PH_RESPONSE_DEFAULTS["ph_max"],
    step: float = PH_RESPONSE_DEFAULTS["step"],
    contaminants: Iterable[str] | None = None,
) -> pd.DataFrame:
    """
    Removal versus pH for several contaminants on one adsorbent.

    Returns
    -------
    pd.DataFrame
        One row per pH; a ``pH`` column plus one removal column per contaminant.
    """
    contaminant_ids = list(CONTAMINANTS) if contaminants is None else list(contaminants)
    rows = []
    for p in inclusive_grid(ph_min, ph_max, step):
        row: dict[str, Any] = {"pH": float(p)}
        for contaminant_id in contaminant_ids:
            row[contaminant_id] = predict_removal(
                material_id, contaminant_id, float(p), concentration, contact_time
            ).mean
        rows.append(row)
    return pd.DataFrame(rows, columns=["pH", *contaminant_ids])


def operating_window(
    material_id: str,
    contaminant_id: str,
    concentration: float,
    contact_time: float,
    ph_range: tuple[float, float],
    step: float = OPERATING_WINDOW_STEP,
) -> pd.DataFrame:
    """
    pH sensitivity at fixed concentration and time, typically around the
    optimizer's best point.

    Returns
    -------
    pd.DataFrame
        Columns: pH (1 decimal), removal, lower, upper
    """
    rows = []
    for p in inclusive_grid(ph_range[0], ph_range[1], step):
        pred = predict_removal(material_id, contaminant_id, float(p), concentration, contact_time)
        lower, upper = pred.interval()
        rows.append({"pH": round(float(p), 1), "removal": pred.mean, "lower": lower, "upper": upper})
    return pd.DataFrame(rows, columns=["pH", "removal", "lower", "upper"])


def pollutant_profile(
    material_id: str,
    pH: float,
    concentration: float,
    contact_time: float,
) -> pd.DataFrame:
    """
    Removal of every contaminant by one adsorbent.

    Organic contaminants are dosed on a different scale from the metals and
    are evaluated at their own profiling concentration instead of
    ``concentration``.
    """
    rows = []
    for contaminant_id, contaminant in CONTAMINANTS.items():
        conc = contaminant.profiling_concentration if contaminant.category == "organic" else concentration
        rows.append(
            {
                "contaminant": contaminant_id,
                "concentration": conc,
                "removal": predict_removal(material_id, contaminant_id, pH, conc, contact_time).mean,
            }
        )
    return pd.DataFrame(rows, columns=["contaminant", "concentration", "removal"])


def material_heatmap(
    pH: float = HEATMAP_CONDITIONS["pH"],
    contact_time: float = HEATMAP_CONDITIONS["contact_time"],
    pivot: bool = False,
) -> pd.DataFrame:
    """
    Removal for every adsorbent × contaminant pair at each contaminant's
    profiling concentration.

    Parameters
    ----------
    pH : float
        Solution pH
    contact_time : float
        Contact time (min)
    pivot : bool
        If True return the adsorbent × contaminant matrix instead of the
        long table

    Returns
    -------
    pd.DataFrame
        Long format with columns adsorbent, pollutant, removal, or the pivoted
        matrix (index adsorbent, columns pollutant)
    """
    rows = [
        {
            "adsorbent": material_id,
            "pollutant": contaminant_id,
            "removal": predict_removal(
                material_id, contaminant_id, pH, contaminant.profiling_concentration, contact_time
            ).mean,
        }
        for material_id in MATERIALS
        for contaminant_id, contaminant in CONTAMINANTS.items()
    ]
    df = pd.DataFrame(rows, columns=["adsorbent", "pollutant", "removal"])
    if pivot:
        matrix = df.pivot(index="adsorbent", columns="pollutant", values="removal")
        return matrix.reindex(index=list(MATERIALS), columns=list(CONTAMINANTS))
    return df


# =============================================================================
# VALIDATION EXPERIMENTS
# =============================================================================


def compare_validation_scenarios(
    scenarios: Iterable[dict[str, Any]] = VALIDATION_SCENARIOS,
) -> pd.DataFrame:
    """
    Reported predictions against experimental removal.

    Adds absolute error, absolute percentage error (relative to the
    experimental value) and the surrogate's own prediction at the scenario
    conditions.
    """
    rows = []
    for s in scenarios:
        surrogate = predict_removal(
            s["material"], s["contaminant"], s["pH"], s["concentration"], s["contact_time"]
        )
        abs_error = abs(s["predicted"] - s["experimental"])
        rows.append(
            {
                "scenario": s["scenario"],
                "material": s["material"],
                "contaminant": s["contaminant"],
                "pH": s["pH"],
                "concentration": s["concentration"],
                "contact_time": s["contact_time"],
                "predicted": s["predicted"],
                "experimental": s["experimental"],
                "exp_std": s["exp_std"],
                "abs_error": round(abs_error, 2),
                "ape": round(abs_error / s["experimental"] * 100, 2) if s["experimental"] else np.nan,
                "surrogate": surrogate.mean,
                "surrogate_std": surrogate.std,
            }
        )
    return pd.DataFrame(rows)


def validation_summary(comparison: pd.DataFrame | None = None) -> dict[str, Any]:
    """
    Aggregate agreement statistics of the validation experiments.

    Returns
    -------
    dict
        n_points, mean_ape, max_abs_error, max_error_scenario, t_statistic,
        p_value, significant (paired t-test at α = 0.05)
    """
    if comparison is None:
        comparison = compare_validation_scenarios()

    n_points = len(comparison)
    summary: dict[str, Any] = {
        "n_points": n_points,
        "mean_ape": float(comparison["ape"].mean()) if n_points else np.nan,
        "max_abs_error": float(comparison["abs_error"].max()) if n_points else np.nan,
        "max_error_scenario": (
            comparison.loc[comparison["abs_error"].idxmax(), "scenario"] if n_points else None
        ),
        "t_statistic": np.nan,
        "p_value": np.nan,
        "significant": False,
    }

    if n_points >= 2:
        result = stats.ttest_rel(comparison["predicted"], comparison["experimental"])
        summary["t_statistic"] = float(result.statistic)
        summary["p_value"] = float(result.pvalue)
        summary["significant"] = bool(result.pvalue < 0.05)
    else:
        logger.debug("Paired t-test skipped: fewer than 2 validation points")

    return summary


def convert_df_to_csv(df: pd.DataFrame) -> bytes:
    """Convert DataFrame to CSV bytes for download."""
    return df.to_csv(index=False).encode("utf-8")
