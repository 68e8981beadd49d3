# tests/test_integration.py
"""
Integration and Logic Tests
===========================

Test suite covering:
1. Integration tests - Cross-module workflow testing
2. Logic error tests - Edge cases and property-based checks

Author: AdsorbLab Team
"""

import os
import sys

import numpy as np
import pandas as pd
import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import adsorblab_sim
from adsorblab_sim.attribution import attribution_to_dataframe, explain_prediction
from adsorblab_sim.config import DEFAULT_OPTIMIZATION_BOUNDS
from adsorblab_sim.models import predict_removal
from adsorblab_sim.optimization import optimize_conditions
from adsorblab_sim.registry import list_contaminants, list_materials
from adsorblab_sim.utils import convert_df_to_csv, kinetic_curve, operating_window, pollutant_profile

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def panel_request():
    """Default inverse-design request."""
    bounds = DEFAULT_OPTIMIZATION_BOUNDS
    return {
        "target_removal": bounds["target_removal"],
        "ph_range": bounds["ph_range"],
        "time_range": bounds["time_range"],
        "concentration_range": bounds["concentration_range"],
        "n_iter": bounds["n_iter"],
    }


# =============================================================================
# INTEGRATION TESTS
# =============================================================================


class TestDesignWorkflow:
    """Optimize, then inspect the best point with sweeps and attribution."""

    def test_optimize_then_inspect(self, panel_request):
        result = optimize_conditions("Pb(II)", "MNCJG", seed=2024, **panel_request)
        best = result.best

        # Best point reproduces through the public prediction
        pred = predict_removal("MNCJG", "Pb(II)", best.pH, best.concentration, best.time)
        assert (pred.mean, pred.std) == (best.mean, best.std)

        window = operating_window("MNCJG", "Pb(II)", best.concentration, best.time, panel_request["ph_range"])
        assert window["removal"].max() >= window["removal"].min()
        assert len(window) == 21

        items = explain_prediction("MNCJG", "Pb(II)", best.pH, best.concentration, best.time)
        table = attribution_to_dataframe(items)
        assert len(table) == 6

    def test_history_export(self, panel_request):
        result = optimize_conditions("Cd(II)", "MNC", seed=1, **panel_request)
        data = convert_df_to_csv(result.to_dataframe().reset_index())
        assert data.decode("utf-8").startswith("iteration,")

    def test_lazy_submodules(self):
        assert adsorblab_sim.models.predict_removal is predict_removal
        with pytest.raises(AttributeError):
            adsorblab_sim.not_a_module


class TestEveryPair:
    """Every registered pair flows through the full toolchain."""

    @pytest.mark.parametrize("material_id", list_materials())
    @pytest.mark.parametrize("contaminant_id", list_contaminants())
    def test_pair(self, material_id, contaminant_id):
        curve = kinetic_curve(material_id, contaminant_id, pH=6.0, concentration=10.0)
        assert curve["removal"].between(0, 100).all()

        result = optimize_conditions(contaminant_id, material_id, 90.0, (4.0, 8.0), (5.0, 30.0), (1.0, 20.0), 10, seed=0)
        assert result.best in result.history

        assert len(explain_prediction(material_id, contaminant_id, 6.0, 10.0, 15.0)) == 6


# =============================================================================
# LOGIC ERROR TESTS
# =============================================================================


class TestLogicErrors:
    def test_profile_matches_prediction(self):
        df = pollutant_profile("NCJG", pH=5.5, concentration=8.0, contact_time=20.0)
        assert isinstance(df, pd.DataFrame)
        for _, row in df.iterrows():
            expected = predict_removal("NCJG", row["contaminant"], 5.5, row["concentration"], 20.0).mean
            assert row["removal"] == expected

    def test_longer_contact_never_hurts(self):
        rng = np.random.default_rng(0)
        for _ in range(50):
            pH, conc = rng.uniform(2, 8), rng.uniform(1, 40)
            t1, t2 = sorted(rng.uniform(0, 30, size=2))
            for material_id in list_materials():
                a = predict_removal(material_id, "Cd(II)", pH, conc, t1).mean
                b = predict_removal(material_id, "Cd(II)", pH, conc, t2).mean
                assert b >= a

    def test_higher_load_never_helps(self):
        for material_id in list_materials():
            low = predict_removal(material_id, "As(III)", 5.0, 5.0, 20.0).mean
            high = predict_removal(material_id, "As(III)", 5.0, 35.0, 20.0).mean
            assert high <= low


# =============================================================================
# PACKAGING
# =============================================================================


class TestPackaging:
    def test_project_metadata(self):
        path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "pyproject.toml")
        with open(path, encoding="utf-8") as f:
            lines = [line.strip() for line in f]
        assert 'name = "adsorblab-sim"' in lines
        assert 'adsorblab-sim = "adsorblab_sim:main"' in lines
        # Package metadata carries no long description file
        assert not any(line.startswith("readme") for line in lines)
