"""Tests for the two-phase filter solver."""

import re

import numpy as np
import pytest

from cssfilter import solve
from cssfilter.color.space import TargetColor
from cssfilter.config.solver import NarrowSearchConfig, SolverConfig, WideSearchConfig
from cssfilter.exceptions import InvalidColorFormat
from cssfilter.filter.apply import apply_filter_chain
from cssfilter.solver.solve import FilterSolver, classify_loss

CSS_RE = re.compile(
    r"^invert\(\d+%\) sepia\(\d+%\) saturate\(\d+%\) hue-rotate\(\d+deg\) "
    r"brightness\(\d+%\) contrast\(\d+%\)$"
)

SMALL = SolverConfig(
    wide=WideSearchConfig(iterations=60),
    narrow=NarrowSearchConfig(iterations=30),
)


class TestClassifyLoss:
    """Test quality labels."""

    @pytest.mark.parametrize(
        "loss,label",
        [
            (0.0, "perfect"),
            (0.99, "perfect"),
            (1.0, "excellent"),
            (4.99, "excellent"),
            (5.0, "good"),
            (14.9, "good"),
            (15.0, "poor"),
            (400.0, "poor"),
        ],
    )
    def test_thresholds(self, loss, label):
        assert classify_loss(loss) == label


class TestSolverMechanics:
    """Test phase scheduling with small iteration budgets."""

    def test_early_exit(self):
        """Test the wide phase stops after one restart when it is good enough."""
        config = SolverConfig(
            wide=WideSearchConfig(iterations=60, early_exit_loss=1e9),
            narrow=NarrowSearchConfig(iterations=30),
        )
        result = FilterSolver(config, seed=0).solve_detailed("#FF5733")
        assert result.restarts == 1

    def test_all_restarts(self):
        """Test every restart runs when the threshold is never met."""
        config = SolverConfig(
            wide=WideSearchConfig(iterations=60, restarts=3, early_exit_loss=-1.0),
            narrow=NarrowSearchConfig(iterations=30),
        )
        result = FilterSolver(config, seed=0).solve_detailed("#FF5733")
        assert result.restarts == 3

    def test_narrow_never_worse(self):
        """Test the final loss is at most the wide-phase loss."""
        result = FilterSolver(SMALL, seed=1).solve_detailed("#00A3FF")
        assert result.loss <= result.wide.loss
        assert result.narrow.iterations == 30

    def test_target_forms(self):
        """Test hex, r,g,b, tuple and TargetColor give the same result."""
        expected = FilterSolver(SMALL, seed=3).solve("#FF5733")
        assert FilterSolver(SMALL, seed=3).solve("255,87,51") == expected
        assert FilterSolver(SMALL, seed=3).solve((255, 87, 51)) == expected
        target = TargetColor.from_rgb(255, 87, 51)
        assert FilterSolver(SMALL, seed=3).solve(target) == expected

    def test_seed_sequence(self):
        """Test a SeedSequence is accepted as seed."""
        css, loss = FilterSolver(SMALL, seed=np.random.SeedSequence(5)).solve("#123456")
        assert CSS_RE.match(css)
        assert loss >= 0.0

    def test_invalid_color(self):
        """Test invalid input fails before solving."""
        with pytest.raises(InvalidColorFormat):
            solve("#12345", config=SMALL)

    def test_rounded_loss(self):
        """Test the loss of the emitted integer values is reported."""
        result = FilterSolver(SMALL, seed=4).solve_detailed("#FF5733")
        assert np.isfinite(result.rounded_loss)
        assert result.declaration == f"filter: {result.filter};"


@pytest.mark.slow
class TestSolverConvergence:
    """Test full-budget solves."""

    def test_black(self):
        """Test black converges to a near-identity match."""
        _, loss = solve("#000000", seed=0)
        assert loss < 5

    def test_white(self):
        """Test white converges and the chain output is close to white."""
        result = FilterSolver(seed=0).solve_detailed("#FFFFFF")
        assert result.loss < 15
        rgb = apply_filter_chain(result.values)
        assert np.sum(np.abs(rgb - 255.0)) < 15

    def test_format(self):
        """Test #FF5733 yields a valid six-function declaration in chain order."""
        css, loss = solve("#FF5733", seed=42)
        assert CSS_RE.match(css), css
        assert loss >= 0.0

    def test_reproducible(self):
        """Test identical seeds give byte-identical output."""
        first = solve("#FF5733", seed=42)
        second = solve("#FF5733", seed=42)
        assert first == second

    def test_solver_reusable(self):
        """Test a seeded solver reproduces its output on every call."""
        solver = FilterSolver(seed=11)
        assert solver.solve("#FF5733") == solver.solve("#FF5733")
