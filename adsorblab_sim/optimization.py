# optimization.py
"""
AdsorbLab Sim - Inverse Design of Operating Conditions
======================================================

Fixed-budget stochastic search for operating conditions (pH, contact time,
initial concentration) that reach a target removal.

Each trial draws pH, time and concentration independently and uniformly from
their ranges, predicts removal without competing species, and scores the
prediction with an expected-improvement-like acquisition heuristic:

    mean ≥ target:  score = mean − 0.1·std          (confident over-target)
    mean < target:  score = (mean − target) + 0.5·std  (gap plus exploration)

The best sample is replaced only on a strictly greater score, so the first
of several tied samples is kept. There is no surrogate posterior, no adaptive
sampling and no early stopping.

Randomness comes from an explicit ``numpy.random.Generator``; passing the same
seed (or an identically-seeded generator) reproduces the result exactly.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from .config import (
    ACQUISITION_EXPLORATION_BONUS,
    ACQUISITION_STD_PENALTY,
    DEFAULT_OPTIMIZATION_ITERATIONS,
)
from .models import predict_removal
from .validation import require_valid, validate_optimization_request

logger = logging.getLogger(__name__)

__all__ = [
    "OptimizationSample",
    "OptimizationResult",
    "acquisition_score",
    "sample_conditions",
    "optimize_conditions",
]

# Presentation precision of history tables
_HISTORY_DECIMALS = {"pH": 2, "time": 1, "concentration": 1, "score": 2}


@dataclass(frozen=True)
class OptimizationSample:
    """
    One trial of the search.

    Attributes
    ----------
    iteration : int
        1-based trial index
    pH, time, concentration : float
        Sampled operating conditions (full precision)
    mean, std : float
        Predicted removal (%) and its uncertainty
    score : float
        Acquisition score
    """

    iteration: int
    pH: float
    time: float
    concentration: float
    mean: float
    std: float
    score: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class OptimizationResult:
    """Best-scoring sample plus the full trial history in iteration order."""

    best: OptimizationSample
    history: list[OptimizationSample] = field(default_factory=list)
    target_removal: float | None = None
    material_id: str | None = None
    contaminant_id: str | None = None

    @property
    def n_iter(self) -> int:
        return len(self.history)

    @property
    def target_met(self) -> bool:
        """True if the best sample reaches the target removal."""
        if self.target_removal is None:
            return False
        return self.best.mean >= self.target_removal

    def to_dataframe(self, rounded: bool = True) -> pd.DataFrame:
        """
        History as a table, one row per trial.

        Two convergence columns are added: ``best_score`` (running maximum of
        the acquisition score) and ``best_removal`` (running maximum of the
        predicted removal). With ``rounded`` the conditions and score are
        rounded the way the history is displayed (pH 2 decimals, time and
        concentration 1, score 2); the convergence columns are not rounded.
        """
        df = pd.DataFrame([s.to_dict() for s in self.history])
        df["best_score"] = df["score"].cummax()
        df["best_removal"] = df["mean"].cummax()
        if rounded:
            df = df.round(_HISTORY_DECIMALS)
        return df.set_index("iteration")

    def summary(self) -> dict[str, Any]:
        best = self.best
        return {
            "material": self.material_id,
            "contaminant": self.contaminant_id,
            "target_removal": self.target_removal,
            "target_met": self.target_met,
            "best_iteration": best.iteration,
            "pH": round(best.pH, 2),
            "time": round(best.time, 1),
            "concentration": round(best.concentration, 1),
            "predicted": best.mean,
            "std": best.std,
            "score": round(best.score, 2),
        }


def acquisition_score(mean: float, std: float, target_removal: float) -> float:
    """
    Score a prediction against the target removal.

    Over target, uncertainty is penalized lightly; under target, the gap is
    offset by an exploration bonus proportional to the uncertainty.
    """
    if mean >= target_removal:
        return mean - ACQUISITION_STD_PENALTY * std
    return (mean - target_removal) + ACQUISITION_EXPLORATION_BONUS * std


def sample_conditions(
    rng: np.random.Generator,
    ph_range: tuple[float, float],
    time_range: tuple[float, float],
    concentration_range: tuple[float, float],
) -> tuple[float, float, float]:
    """Draw (pH, time, concentration) independently and uniformly, in that order."""
    pH = float(rng.uniform(ph_range[0], ph_range[1]))
    time = float(rng.uniform(time_range[0], time_range[1]))
    concentration = float(rng.uniform(concentration_range[0], concentration_range[1]))
    return pH, time, concentration


def optimize_conditions(
    contaminant_id: str,
    material_id: str,
    target_removal: float,
    ph_range: tuple[float, float],
    time_range: tuple[float, float],
    concentration_range: tuple[float, float],
    n_iter: int = DEFAULT_OPTIMIZATION_ITERATIONS,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> OptimizationResult:
    """
    Search operating conditions for a target removal.

    Parameters
    ----------
    contaminant_id : str
        Contaminant identifier
    material_id : str
        Adsorbent identifier
    target_removal : float
        Target removal (%)
    ph_range, time_range, concentration_range : tuple of float
        (min, max) sampling ranges; min == max pins the variable
    n_iter : int
        Number of trials; the history has exactly this many entries
    rng : numpy.random.Generator, optional
        Random source. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a fresh ``numpy.random.default_rng`` when no ``rng`` is given

    Returns
    -------
    OptimizationResult

    Raises
    ------
    ValueError
        If ``n_iter`` is not a positive integer or a range is malformed.
    """
    report = require_valid(
        validate_optimization_request(
            target_removal,
            ph_range,
            time_range,
            concentration_range,
            n_iter,
            material_id=material_id,
            contaminant_id=contaminant_id,
        )
    )
    for w in report.warnings:
        logger.warning(w.message)

    generator = rng if rng is not None else np.random.default_rng(seed)

    def trial(iteration: int) -> OptimizationSample:
        pH, time, concentration = sample_conditions(generator, ph_range, time_range, concentration_range)
        pred = predict_removal(material_id, contaminant_id, pH, concentration, time, competition=False)
        return OptimizationSample(
            iteration=iteration,
            pH=pH,
            time=time,
            concentration=concentration,
            mean=pred.mean,
            std=pred.std,
            score=acquisition_score(pred.mean, pred.std, target_removal),
        )

    # n_iter >= 1 is validated above, so the first trial seeds the best
    best = trial(1)
    history = [best]

    for iteration in range(2, n_iter + 1):
        sample = trial(iteration)
        history.append(sample)

        if sample.score > best.score:
            best = sample
            logger.debug(
                f"Iteration {sample.iteration}: new best score {sample.score:.2f} "
                f"(pH={sample.pH:.2f}, t={sample.time:.1f} min, C0={sample.concentration:.1f} mg/L)"
            )

    logger.debug(
        f"Optimization of {material_id}/{contaminant_id} finished: best removal "
        f"{best.mean:.2f}% at iteration {best.iteration} of {n_iter}"
    )

    return OptimizationResult(
        best=best,
        history=history,
        target_removal=float(target_removal),
        material_id=material_id,
        contaminant_id=contaminant_id,
    )
