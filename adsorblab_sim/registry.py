# registry.py
"""
AdsorbLab Sim - Material and Contaminant Registries
===================================================

Read-only lookup tables mapping adsorbent and contaminant identifiers to their
fixed coefficients. Both registries are built once at import time from
``config`` and exposed as ``MappingProxyType`` views, so no write path exists
after construction.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .config import CONTAMINANT_PARAMS, MATERIAL_PARAMS

__all__ = [
    "PHDirection",
    "MaterialProfile",
    "ContaminantProfile",
    "MATERIALS",
    "CONTAMINANTS",
    "get_material",
    "get_contaminant",
    "list_materials",
    "list_contaminants",
]


class PHDirection(Enum):
    """pH response direction of a contaminant."""

    HIGH = 1  # Removal favored at high pH (cationic metals)
    LOW = -1  # Removal favored at low pH (oxyanion-forming species)
    NEUTRAL = 0  # pH-insensitive (hydrophobic organics)


@dataclass(frozen=True)
class MaterialProfile:
    """
    Fixed coefficients of an adsorbent.

    Attributes
    ----------
    material_id : str
        Registry identifier
    base_capacity : float
        Capacity on the 0-100 removal scale
    rate_constant : float
        Kinetic rate constant (1/min), > 0
    ph_optimum : float
        pH of maximum removal
    ph_sensitivity : float
        pH sensitivity
    conc_decay : float
        Concentration-decay constant (L/mg), > 0
    synergy_bonus : float
        Additive composite bonus, may be 0
    """

    material_id: str
    base_capacity: float
    rate_constant: float
    ph_optimum: float
    ph_sensitivity: float
    conc_decay: float
    synergy_bonus: float = 0.0


@dataclass(frozen=True)
class ContaminantProfile:
    """Fixed coefficients of a contaminant."""

    contaminant_id: str
    ph_direction: PHDirection
    optimum_multiplier: float
    reference_concentration: float
    name: str = ""
    category: str = ""
    default_concentration: float | None = None

    @property
    def profiling_concentration(self) -> float:
        """Concentration at which the contaminant is compared against others."""
        if self.default_concentration is None:
            return self.reference_concentration
        return self.default_concentration


def _build_materials() -> Mapping[str, MaterialProfile]:
    materials = {
        material_id: MaterialProfile(
            material_id=material_id,
            base_capacity=float(p["base"]),
            rate_constant=float(p["time_k"]),
            ph_optimum=float(p["ph_opt"]),
            ph_sensitivity=float(p["ph_sens"]),
            conc_decay=float(p["conc_decay"]),
            synergy_bonus=float(p["synergy"]),
        )
        for material_id, p in MATERIAL_PARAMS.items()
    }
    return MappingProxyType(materials)


def _build_contaminants() -> Mapping[str, ContaminantProfile]:
    contaminants = {
        contaminant_id: ContaminantProfile(
            contaminant_id=contaminant_id,
            ph_direction=PHDirection(p["ph_dir"]),
            optimum_multiplier=float(p["opt_mul"]),
            reference_concentration=float(p["conc_base"]),
            name=p["name"],
            category=p["category"],
            default_concentration=float(p["default_conc"]),
        )
        for contaminant_id, p in CONTAMINANT_PARAMS.items()
    }
    return MappingProxyType(contaminants)


MATERIALS: Mapping[str, MaterialProfile] = _build_materials()
CONTAMINANTS: Mapping[str, ContaminantProfile] = _build_contaminants()


def get_material(material_id: str) -> MaterialProfile | None:
    """Look up an adsorbent by identifier; None if unknown."""
    return MATERIALS.get(material_id)


def get_contaminant(contaminant_id: str) -> ContaminantProfile | None:
    """Look up a contaminant by identifier; None if unknown."""
    return CONTAMINANTS.get(contaminant_id)


def list_materials() -> list[str]:
    """Adsorbent identifiers in registry order."""
    return list(MATERIALS)


def list_contaminants() -> list[str]:
    """Contaminant identifiers in registry order."""
    return list(CONTAMINANTS)
