"""
Tests for the regularized incomplete beta relation and its inversion.
"""

import numpy as np
import pytest

from ordim.dimensionality import ConvergenceError, PreconditionError, invert_ir_beta, ir_beta
from ordim.dimensionality.utils import MIN_RTOL


class TestIRBeta:
    """Test I_0.75((d+1)/2, 1/2)."""

    def test_closed_forms(self):
        # I_x(1/2, 1/2) = (2/pi) arcsin(sqrt(x))
        assert ir_beta(0.0) == pytest.approx(2.0 / 3.0)
        # I_x(1, b) = 1 - (1-x)^b
        assert ir_beta(1.0) == pytest.approx(0.5)
        # I_x(2, 1/2) = I_x(1, 1/2) - x sqrt(1-x) / 2
        assert ir_beta(3.0) == pytest.approx(0.3125)

    def test_strictly_decreasing(self):
        values = ir_beta(np.linspace(0, 10, 101))
        assert np.all(np.diff(values) < 0)

    def test_vectorized(self):
        values = ir_beta([0.0, 1.0, 3.0])
        np.testing.assert_allclose(values, [2.0 / 3.0, 0.5, 0.3125])

    def test_other_limit(self):
        # I_x(1, 1/2) at x=0.84 is 1 - sqrt(0.16)
        assert ir_beta(1.0, x=0.84) == pytest.approx(0.6)


class TestInvertIRBeta:
    """Test the bracketed root finding."""

    @pytest.mark.parametrize("d", [0.5, 2.0, 4.7])
    def test_recovers_dimension(self, d):
        assert invert_ir_beta(float(ir_beta(d))) == pytest.approx(d, rel=1e-5)

    def test_known_value(self):
        assert invert_ir_beta(0.5) == pytest.approx(1.0, rel=1e-5)

    def test_bracket_endpoint(self):
        assert invert_ir_beta(float(ir_beta(0.0))) == 0.0

    @pytest.mark.parametrize("target", [0.9, 0.001])
    def test_out_of_range(self, target):
        with pytest.raises(ConvergenceError, match="No sign change") as excinfo:
            invert_ir_beta(target)
        assert excinfo.value.target == target
        assert excinfo.value.bracket == (0.0, 10.0)

    def test_custom_bracket(self):
        # d=3 is outside [0, 2]
        with pytest.raises(ConvergenceError):
            invert_ir_beta(0.3125, bracket=(0.0, 2.0))
        assert invert_ir_beta(0.3125, bracket=(2.0, 5.0)) == pytest.approx(3.0, rel=1e-5)

    def test_non_finite_target(self):
        with pytest.raises(ConvergenceError):
            invert_ir_beta(np.nan)

    def test_iteration_cap(self):
        with pytest.raises(ConvergenceError, match="did not converge"):
            invert_ir_beta(0.4, xtol=1e-15, rtol=1e-12, maxiter=1)

    def test_convergence_error_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            invert_ir_beta(0.9)

    def test_invalid_bracket(self):
        with pytest.raises(PreconditionError):
            invert_ir_beta(0.5, bracket=(5.0, 1.0))

    def test_invalid_tolerances(self):
        with pytest.raises(ValueError, match="rtol must be positive"):
            invert_ir_beta(0.5, rtol=-1.0)
        with pytest.raises(ValueError, match="maxiter must be positive"):
            invert_ir_beta(0.5, maxiter=0)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"rtol": -1.0}, "rtol must be positive"),
            ({"rtol": 1e-20}, "rtol must be at least"),
            ({"xtol": np.nan}, "xtol cannot be NaN"),
            ({"maxiter": 0}, "maxiter must be positive"),
            ({"maxiter": 10.0}, "maxiter must be an integer"),
            ({"bracket": (0.0, np.inf)}, "must be finite"),
            ({"bracket": (1.0,)}, "pair of numbers"),
        ],
    )
    def test_invalid_solver_settings(self, kwargs, message):
        with pytest.raises(PreconditionError, match=message):
            invert_ir_beta(0.5, **kwargs)

    def test_smallest_accepted_rtol(self):
        assert invert_ir_beta(0.5, rtol=MIN_RTOL) == pytest.approx(1.0, rel=1e-6)
