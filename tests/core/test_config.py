import numpy as np
import pytest

from descent_app.core.config import ConfigurationError, DescentParameters, parse_point


@pytest.mark.unit
class TestParsePoint:
    """Tests for parsing the start point text."""

    def test_two_coordinates(self):
        np.testing.assert_array_equal(parse_point("2, 2", 2), [2.0, 2.0])

    def test_whitespace_and_signs(self):
        np.testing.assert_array_equal(parse_point(" -1.2 ,1e-1 ", 2), [-1.2, 0.1])

    def test_single_coordinate(self):
        np.testing.assert_array_equal(parse_point("3", 1), [3.0])

    def test_wrong_count(self):
        with pytest.raises(ConfigurationError):
            parse_point("1, 2, 3", 2)

    def test_not_a_number(self):
        with pytest.raises(ConfigurationError, match="abc"):
            parse_point("1, abc", 2)

    def test_empty(self):
        with pytest.raises(ConfigurationError):
            parse_point("", 2)


@pytest.mark.unit
class TestDescentParameters:
    """Tests for run parameter validation."""

    def test_defaults(self):
        params = DescentParameters(n_vars=2, x0=[2.0, 2.0])
        assert params.initial_step == 1.0
        assert params.step_decay == 0.5
        assert params.step_increase == 1.2
        assert params.tolerance == 1e-6
        assert params.max_iterations == 1000
        assert params.gradient_eps == 1e-6
        assert params.max_backtracking == 20

    def test_x0_is_copied(self):
        source = np.array([1.0, 2.0])
        params = DescentParameters(n_vars=2, x0=source)
        source[0] = 100.0
        assert params.x0[0] == 1.0

    def test_from_text(self):
        params = DescentParameters.from_text(3, "1, -1, 2", tolerance=1e-8)
        np.testing.assert_array_equal(params.x0, [1.0, -1.0, 2.0])
        assert params.tolerance == 1e-8

    def test_for_point(self):
        params = DescentParameters.for_point([0.0, 1.0, 2.0, 3.0])
        assert params.n_vars == 4

    def test_dimension_mismatch(self):
        with pytest.raises(ConfigurationError):
            DescentParameters(n_vars=3, x0=[1.0, 2.0])

    def test_zero_iterations_allowed(self):
        assert DescentParameters(n_vars=1, x0=[0.0], max_iterations=0).max_iterations == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"n_vars": 0},
            {"n_vars": True},
            {"initial_step": 0.0},
            {"initial_step": -1.0},
            {"step_decay": 0.0},
            {"step_decay": 1.0},
            {"step_increase": 0.9},
            {"tolerance": 0.0},
            {"max_iterations": -1},
            {"max_iterations": 2.5},
            {"gradient_eps": 0.0},
            {"max_backtracking": 0},
            {"initial_step": float("inf")},
        ],
    )
    def test_invalid_values(self, kwargs):
        base = {"n_vars": 1, "x0": [0.0]}
        if "n_vars" in kwargs:
            base["x0"] = []
        base.update(kwargs)
        with pytest.raises(ConfigurationError):
            DescentParameters(**base)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_iterations": float("inf")},
            {"max_iterations": float("nan")},
            {"max_iterations": None},
            {"max_iterations": "10"},
            {"max_backtracking": float("inf")},
            {"max_backtracking": None},
            {"initial_step": None},
            {"step_decay": "0.5"},
            {"tolerance": float("nan")},
            {"gradient_eps": None},
        ],
    )
    def test_non_numeric_values_are_configuration_errors(self, kwargs):
        with pytest.raises(ConfigurationError):
            DescentParameters.for_point([1.0], **kwargs)

    def test_non_numeric_dimension(self):
        with pytest.raises(ConfigurationError):
            DescentParameters(n_vars=None, x0=[1.0])

    def test_non_numeric_start(self):
        with pytest.raises(ConfigurationError):
            DescentParameters(n_vars=2, x0=["a", "b"])

    def test_whole_float_iterations_accepted(self):
        params = DescentParameters.for_point([1.0], max_iterations=50.0)
        assert params.max_iterations == 50
        assert isinstance(params.max_iterations, int)

    def test_non_finite_start(self):
        with pytest.raises(ConfigurationError):
            DescentParameters(n_vars=2, x0=[float("nan"), 0.0])

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
