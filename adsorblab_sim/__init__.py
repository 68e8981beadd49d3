# adsorblab_sim/__init__.py
"""
AdsorbLab Sim - Adsorbent Removal Surrogate and Inverse Design
==============================================================

A closed-form surrogate of contaminant removal by adsorbent composites with:
- Removal prediction with heteroscedastic uncertainty
- Stochastic inverse design of operating conditions
- One-factor-at-a-time attribution of a prediction
- Response sweeps (kinetics, pH, material comparison) as tables

Usage:
    # Command line
    adsorblab-sim predict --material MNCJG --contaminant "Cd(II)"

    # Or via Python
    python -m adsorblab_sim optimize --seed 42

    # Or programmatic access
    from adsorblab_sim import models, optimization, attribution

Example:
    >>> from adsorblab_sim.models import predict_removal
    >>> predict_removal("MNCJG", "Cd(II)", pH=6.0, concentration=5.0, contact_time=30.0)
    PredictionResult(mean=91.99, std=2.01)
"""

try:
    from importlib.metadata import version
    __version__ = version("adsorblab-sim")
except Exception:
    __version__ = "dev"
__license__ = "MIT"

# Public API - lazy imports for fast startup
__all__ = [
    "__version__",
    "main",
    "attribution",
    "config",
    "models",
    "optimization",
    "registry",
    "utils",
    "validation",
]


def main() -> None:
    """
    Run the AdsorbLab Sim command line interface.

    This is the entry point for the `adsorblab-sim` console script.
    """
    import sys

    from .cli import run

    sys.exit(run(sys.argv[1:]))


import types as types_module


def _lazy_import(name: str) -> types_module.ModuleType:
    """Lazy import submodules for faster startup."""
    import importlib

    return importlib.import_module(f".{name}", __package__)


def __getattr__(name: str) -> types_module.ModuleType:
    """Enable lazy loading of submodules."""
    if name in ("attribution", "config", "models", "optimization", "registry", "utils", "validation"):
        return _lazy_import(name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
