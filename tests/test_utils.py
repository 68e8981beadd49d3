# tests/test_utils.py
"""
Unit Tests for Response Sweeps and Comparison Tables
====================================================

Author: AdsorbLab Team
"""

import io
import os
import sys

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from adsorblab_sim.config import VALIDATION_SCENARIOS
from adsorblab_sim.models import predict_removal
from adsorblab_sim.utils import (
    compare_validation_scenarios,
    convert_df_to_csv,
    inclusive_grid,
    kinetic_curve,
    material_heatmap,
    operating_window,
    ph_response,
    pollutant_profile,
    validation_summary,
)


class TestInclusiveGrid:
    def test_includes_end_point(self):
        grid = inclusive_grid(4.0, 8.0, 0.2)
        assert len(grid) == 21
        assert grid[0] == pytest.approx(4.0)
        assert grid[-1] == pytest.approx(8.0)

    def test_half_steps(self):
        assert_allclose(inclusive_grid(2.0, 8.0, 0.5), np.arange(2.0, 8.01, 0.5))

    def test_single_point(self):
        assert list(inclusive_grid(6.0, 6.0, 0.5)) == [6.0]

    def test_empty_when_reversed(self):
        assert len(inclusive_grid(8.0, 4.0, 0.5)) == 0

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            inclusive_grid(0.0, 1.0, 0.0)


class TestKineticCurve:
    @pytest.fixture
    def curve(self):
        return kinetic_curve("MNCJG", "Cd(II)", pH=6.0, concentration=5.0)

    def test_columns_and_length(self, curve):
        assert list(curve.columns) == ["time", "removal", "std", "lower", "upper"]
        assert len(curve) == 31
        assert curve["time"].iloc[0] == 0.0
        assert curve["time"].iloc[-1] == 30.0

    def test_starts_at_synergy_bonus(self, curve):
        assert curve["removal"].iloc[0] == pytest.approx(5.0)

    def test_ends_at_reference_value(self, curve):
        assert curve["removal"].iloc[-1] == pytest.approx(91.99, abs=0.005)

    def test_monotonic(self, curve):
        assert curve["removal"].is_monotonic_increasing
        assert curve["std"].is_monotonic_decreasing

    def test_band_clipped(self, curve):
        assert (curve["lower"] >= 0).all()
        assert (curve["upper"] <= 100).all()
        assert (curve["lower"] <= curve["removal"]).all()
        assert (curve["upper"] >= curve["removal"]).all()

    def test_competition_shifts_curve_down(self, curve):
        comp = kinetic_curve("MNCJG", "Cd(II)", pH=6.0, concentration=5.0, competition=True)
        assert (comp["removal"].iloc[1:].values < curve["removal"].iloc[1:].values).all()


class TestPhResponse:
    def test_shape(self):
        df = ph_response("MNCJG", concentration=5.0, contact_time=30.0)
        assert len(df) == 13
        assert list(df.columns) == ["pH", "Cd(II)", "Pb(II)", "As(III)", "Nap"]

    def test_direction_shapes(self):
        df = ph_response("MNC", concentration=5.0, contact_time=30.0)
        assert df["Cd(II)"].is_monotonic_increasing
        assert df["As(III)"].is_monotonic_decreasing

    def test_neutral_contaminant_peaks_at_six(self):
        df = ph_response("MNC", concentration=50.0, contact_time=30.0, contaminants=["Nap"])
        assert df.loc[df["Nap"].idxmax(), "pH"] == pytest.approx(6.0)

    def test_subset_of_contaminants(self):
        df = ph_response("NC", 10.0, 15.0, contaminants=["Pb(II)"])
        assert list(df.columns) == ["pH", "Pb(II)"]

    def test_values_match_model(self):
        df = ph_response("NCJG", 10.0, 20.0, ph_min=3.0, ph_max=7.0, step=1.0)
        for _, row in df.iterrows():
            assert row["Pb(II)"] == predict_removal("NCJG", "Pb(II)", row["pH"], 10.0, 20.0).mean


class TestOperatingWindow:
    def test_grid(self):
        df = operating_window("MNCJG", "Cd(II)", 5.0, 30.0, (4.0, 8.0))
        assert len(df) == 21
        assert list(df["pH"])[:3] == [4.0, 4.2, 4.4]
        assert df["pH"].iloc[-1] == 8.0

    def test_band(self):
        df = operating_window("NC", "As(III)", 8.0, 20.0, (3.0, 7.0), step=0.5)
        assert (df["lower"] <= df["removal"]).all()
        assert (df["removal"] <= df["upper"]).all()


class TestPollutantProfile:
    def test_naphthalene_at_own_concentration(self):
        df = pollutant_profile("MNCJG", pH=6.0, concentration=12.0, contact_time=30.0)
        conc = dict(zip(df["contaminant"], df["concentration"]))
        assert conc == {"Cd(II)": 12.0, "Pb(II)": 12.0, "As(III)": 12.0, "Nap": 50.0}

    def test_values(self):
        df = pollutant_profile("MNCJG", pH=6.0, concentration=5.0, contact_time=30.0)
        cd = df.loc[df["contaminant"] == "Cd(II)", "removal"].item()
        assert cd == pytest.approx(91.99, abs=0.005)


class TestMaterialHeatmap:
    def test_long_format(self):
        df = material_heatmap()
        assert len(df) == 20
        assert list(df.columns) == ["adsorbent", "pollutant", "removal"]
        assert df["removal"].between(0, 100).all()

    def test_pivot(self):
        matrix = material_heatmap(pivot=True)
        assert matrix.shape == (5, 4)
        assert list(matrix.index) == ["MNCJG", "MNC", "NC", "NCJG", "MWM"]
        assert list(matrix.columns) == ["Cd(II)", "Pb(II)", "As(III)", "Nap"]
        assert matrix.loc["MNCJG", "Cd(II)"] == pytest.approx(91.99, abs=0.005)

    def test_composite_outperforms_base_material(self):
        matrix = material_heatmap(pivot=True)
        assert (matrix.loc["MNCJG"] > matrix.loc["NC"]).all()

    def test_naphthalene_at_reference_concentration(self):
        matrix = material_heatmap(pivot=True)
        assert matrix.loc["NC", "Nap"] == predict_removal("NC", "Nap", 6.0, 50.0, 30.0).mean


class TestValidationScenarios:
    @pytest.fixture
    def comparison(self):
        return compare_validation_scenarios()

    def test_rows(self, comparison):
        assert list(comparison["scenario"]) == ["VS1", "VS2-a", "VS2-b", "VS3"]

    def test_errors(self, comparison):
        vs1 = comparison.iloc[0]
        assert vs1["abs_error"] == pytest.approx(1.4)
        assert vs1["ape"] == pytest.approx(1.4 / 95.1 * 100, abs=0.01)

    def test_surrogate_column(self, comparison):
        for s, (_, row) in zip(VALIDATION_SCENARIOS, comparison.iterrows()):
            pred = predict_removal(s["material"], s["contaminant"], s["pH"], s["concentration"], s["contact_time"])
            assert row["surrogate"] == pred.mean
            assert row["surrogate_std"] == pred.std

    def test_summary(self, comparison):
        summary = validation_summary(comparison)
        assert summary["n_points"] == 4
        assert summary["max_error_scenario"] == "VS3"
        assert summary["max_abs_error"] == pytest.approx(2.4)
        assert summary["mean_ape"] == pytest.approx(comparison["ape"].mean())
        assert 0.0 <= summary["p_value"] <= 1.0
        assert summary["t_statistic"] > 0  # predictions sit above the experiments

    def test_summary_single_point_skips_test(self):
        single = compare_validation_scenarios(VALIDATION_SCENARIOS[:1])
        summary = validation_summary(single)
        assert np.isnan(summary["p_value"])
        assert summary["significant"] is False

    def test_csv_export(self, comparison):
        data = convert_df_to_csv(comparison)
        assert isinstance(data, bytes)
        assert data.decode("utf-8").startswith("scenario,")
        assert len(pd.read_csv(io.BytesIO(data))) == 4
