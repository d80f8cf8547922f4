import numpy as np
import pytest

from descent_app.core.expression import ExpressionFunction
from descent_app.core.functions import (
    DEFAULT_PRESET,
    PRESET_FUNCTIONS,
    EvaluationError,
    forward_difference_gradient,
)


@pytest.mark.unit
class TestForwardDifferenceGradient:
    """Tests for the forward-difference gradient estimate."""

    def test_square_at_three(self):
        g = forward_difference_gradient(lambda x: float(x[0] ** 2), np.array([3.0]))
        assert g.shape == (1,)
        assert g[0] == pytest.approx(6.0, abs=1e-4)

    def test_sphere_gradient(self, sphere):
        g = forward_difference_gradient(sphere, np.array([1.0, -2.0, 0.5]))
        np.testing.assert_allclose(g, [2.0, -4.0, 1.0], atol=1e-4)

    def test_uses_n_plus_one_evaluations(self, sphere, counting):
        func = counting(sphere)
        forward_difference_gradient(func, np.zeros(4))
        assert func.calls == 5

    def test_custom_eps(self):
        g = forward_difference_gradient(lambda x: float(x[0] ** 2), np.array([0.0]), eps=0.5)
        # (0.25 - 0) / 0.5
        assert g[0] == pytest.approx(0.5)

    def test_non_positive_eps_rejected(self, sphere):
        with pytest.raises(ValueError):
            forward_difference_gradient(sphere, np.zeros(2), eps=0.0)

    def test_does_not_modify_point(self, sphere):
        x = np.array([1.0, 2.0])
        forward_difference_gradient(sphere, x)
        np.testing.assert_array_equal(x, [1.0, 2.0])

    def test_evaluation_error_propagates(self, positive_only):
        with pytest.raises(EvaluationError):
            forward_difference_gradient(positive_only, np.array([-1.0]))

    def test_failure_on_shifted_point_propagates(self):
        def func(x):
            if x[1] > 0.0:
                raise EvaluationError("поза областю")
            return float(x[0])

        with pytest.raises(EvaluationError):
            forward_difference_gradient(func, np.array([0.0, 0.0]))


@pytest.mark.unit
class TestPresetFunctions:
    """Tests for the preset registry used by the control panel."""

    def test_default_preset_exists(self):
        assert DEFAULT_PRESET in PRESET_FUNCTIONS

    def test_keys_match(self):
        for key, preset in PRESET_FUNCTIONS.items():
            assert preset.key == key

    def test_start_point_matches_dimension(self):
        for preset in PRESET_FUNCTIONS.values():
            assert len(preset.x0) == preset.n_vars

    def test_formulas_evaluate_at_start(self):
        for preset in PRESET_FUNCTIONS.values():
            func = ExpressionFunction(preset.formula, preset.n_vars)
            assert np.isfinite(func(np.array(preset.x0)))

    def test_x0_text(self):
        assert PRESET_FUNCTIONS["sphere"].x0_text == "2, 2"
        assert PRESET_FUNCTIONS["rosenbrock"].x0_text == "-1.2, 1"
