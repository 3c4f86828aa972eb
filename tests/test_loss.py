"""Tests for the RGB + HSL filter loss."""

import numpy as np
import pytest

from cssfilter.color.space import TargetColor
from cssfilter.config.operations import max_vector
from cssfilter.config.values import FilterValues
from cssfilter.solver.loss import FilterLoss

NEUTRAL = FilterValues()


class TestFilterLoss:
    """Test FilterLoss values."""

    def test_exact_black(self):
        """Test the identity chain matches black exactly."""
        loss = FilterLoss(TargetColor.from_string("#000000"))
        assert loss.evaluate(NEUTRAL) == 0.0

    def test_exact_white(self):
        """Test full inversion matches white."""
        loss = FilterLoss(TargetColor.from_string("#FFF"))
        assert loss.evaluate(FilterValues(invert=100)) == pytest.approx(0.0, abs=1e-6)

    def test_white_vs_black(self):
        """Test RGB and lightness terms add up unnormalized."""
        loss = FilterLoss(TargetColor.from_string("#000000"))
        # 3 * 255 (RGB) + 100 (lightness)
        assert loss.evaluate(FilterValues(invert=100)) == pytest.approx(865.0, abs=1e-6)

    def test_hue_in_degrees(self):
        """Test hue contributes on the degree scale."""
        loss = FilterLoss(TargetColor.from_string("#00FF00"))
        # 255 (G) + 120 (hue) + 100 (saturation) + 50 (lightness)
        assert loss.evaluate(NEUTRAL) == pytest.approx(525.0)

    def test_red_from_black(self):
        """Test red target against black output."""
        loss = FilterLoss(TargetColor.from_string("#FF0000"))
        assert loss.evaluate(NEUTRAL) == pytest.approx(255.0 + 100.0 + 50.0)

    def test_matches_reference(self):
        """Test the compiled loss matches the NumPy pipeline."""
        rng = np.random.default_rng(3)
        for hex_color in ("#FF5733", "#00A3FF", "#777777", "#102030"):
            loss = FilterLoss(TargetColor.from_string(hex_color))
            for params in rng.random((50, 6)) * max_vector():
                values = FilterValues.from_vector(params)
                assert loss(params) == pytest.approx(loss.reference(values), abs=1e-7)

    def test_unclamped_probes(self):
        """Test out-of-domain vectors (SPSA probes) still evaluate."""
        loss = FilterLoss(TargetColor.from_string("#FF5733"))
        value = loss(np.array([-5.0, 120.0, -10.0, 130.0, 250.0, -1.0]))
        assert np.isfinite(value)
        assert value >= 0.0

    def test_call_count(self):
        """Test evaluations are counted."""
        loss = FilterLoss(TargetColor.from_string("#FF5733"))
        for _ in range(4):
            loss.evaluate(NEUTRAL)
        assert loss.calls == 4

    def test_shape(self):
        """Test wrong-length vectors are rejected."""
        loss = FilterLoss(TargetColor.from_string("#FF5733"))
        with pytest.raises(ValueError):
            loss(np.zeros(4))

    def test_accepts_lists(self):
        """Test plain Python sequences are accepted."""
        loss = FilterLoss(TargetColor.from_string("#000000"))
        assert loss([0, 0, 100, 0, 100, 100]) == 0.0
