# attribution.py
"""
AdsorbLab Sim - Factor Attribution
==================================

One-factor-at-a-time decomposition of a removal prediction.

Each operating factor is moved from a fixed baseline (pH 6, 10 mg/L, 15 min,
reference adsorbent and contaminant) to its actual value while the others
stay at the baseline; the change in predicted mean is that factor's
contribution. Material and contaminant identity are measured against the
reference adsorbent and contaminant at the baseline conditions.

This is not a Shapley decomposition: contributions need not sum to
``predict(actual) − baseline`` and interaction effects may be double-counted
or missed. The competition contribution is a fixed constant.
"""

from dataclasses import asdict, dataclass

import pandas as pd

from .config import (
    ATTRIBUTION_BASELINE,
    ATTRIBUTION_FACTORS,
    COMPETITION_CONTRIBUTION,
    REFERENCE_CONTAMINANT,
    REFERENCE_MATERIAL,
)
from .models import predict_removal, round_half_away

__all__ = [
    "AttributionItem",
    "baseline_removal",
    "explain_prediction",
    "attribution_to_dataframe",
]


@dataclass(frozen=True)
class AttributionItem:
    """Signed contribution of one factor (percentage points of removal)."""

    name: str
    value: float
    abs_value: float

    def to_dict(self) -> dict[str, float | str]:
        return asdict(self)


def baseline_removal() -> float:
    """Predicted mean at the baseline point with the reference materials."""
    return predict_removal(
        REFERENCE_MATERIAL,
        REFERENCE_CONTAMINANT,
        ATTRIBUTION_BASELINE["pH"],
        ATTRIBUTION_BASELINE["concentration"],
        ATTRIBUTION_BASELINE["contact_time"],
    ).mean


def explain_prediction(
    material_id: str,
    contaminant_id: str,
    pH: float,
    concentration: float,
    contact_time: float,
) -> list[AttributionItem]:
    """
    Rank the contributions of six factors to a prediction.

    Parameters
    ----------
    material_id : str
        Adsorbent identifier
    contaminant_id : str
        Contaminant identifier
    pH : float
        Initial pH
    concentration : float
        Initial concentration (mg/L)
    contact_time : float
        Contact time (min)

    Returns
    -------
    list of AttributionItem
        Exactly six items sorted by descending absolute contribution;
        ties keep the declaration order of ``ATTRIBUTION_FACTORS``.
    """
    base_pH = ATTRIBUTION_BASELINE["pH"]
    base_conc = ATTRIBUTION_BASELINE["concentration"]
    base_time = ATTRIBUTION_BASELINE["contact_time"]

    baseline = baseline_removal()
    at_baseline = predict_removal(material_id, contaminant_id, base_pH, base_conc, base_time).mean

    contributions = {
        "Contact Time": predict_removal(
            material_id, contaminant_id, base_pH, base_conc, contact_time
        ).mean
        - baseline,
        "Initial pH": predict_removal(material_id, contaminant_id, pH, base_conc, base_time).mean
        - baseline,
        "Concentration": predict_removal(
            material_id, contaminant_id, base_pH, concentration, base_time
        ).mean
        - baseline,
        "Adsorbent Type": at_baseline
        - predict_removal(REFERENCE_MATERIAL, contaminant_id, base_pH, base_conc, base_time).mean,
        "Pollutant Type": at_baseline
        - predict_removal(material_id, REFERENCE_CONTAMINANT, base_pH, base_conc, base_time).mean,
        "Competition": COMPETITION_CONTRIBUTION,
    }

    items = [
        AttributionItem(
            name=name,
            value=round_half_away(contributions[name]),
            abs_value=round_half_away(abs(contributions[name])),
        )
        for name in ATTRIBUTION_FACTORS
    ]
    # sorted() is stable, so equal magnitudes keep declaration order
    return sorted(items, key=lambda item: item.abs_value, reverse=True)


def attribution_to_dataframe(items: list[AttributionItem]) -> pd.DataFrame:
    """Attribution items as a table with a rank column starting at 1."""
    df = pd.DataFrame([item.to_dict() for item in items])
    df.insert(0, "rank", range(1, len(df) + 1))
    return df
