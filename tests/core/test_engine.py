import numpy as np
import pytest

from descent_app.core.cancellation import CancellationSignal
from descent_app.core.config import ConfigurationError, DescentParameters
from descent_app.core.engine import GradientDescent, OptimizationResult, Outcome
from descent_app.core.expression import ExpressionFunction
from descent_app.core.functions import EvaluationError


def _linear(x):
    return float(x[0])


def _run(func, x0, **kwargs):
    cancel = kwargs.pop("cancel", None)
    callback = kwargs.pop("callback", None)
    params = DescentParameters.for_point(x0, **kwargs)
    return GradientDescent().run(func, params, cancel=cancel, callback=callback)


@pytest.mark.unit
class TestConvergence:
    """Tests for the converged outcome."""

    def test_sphere_converges(self, sphere):
        result = _run(sphere, [2.0, 2.0])
        assert result.outcome is Outcome.CONVERGED
        assert result.iterations == 1
        np.testing.assert_allclose(result.x, [0.0, 0.0], atol=1e-3)
        assert result.f < 1e-6
        assert not result.terminated_early
        assert not result.failed

    def test_converged_at_start(self, sphere):
        result = _run(sphere, [0.0, 0.0], tolerance=1e-5)
        assert result.outcome is Outcome.CONVERGED
        assert result.iterations == 0
        assert len(result.trajectory) == 1

    def test_forward_difference_bias_at_minimum(self, sphere):
        # У мінімумі права різниця дає ‖g‖ = √2·eps, що не менше tol = eps
        result = _run(sphere, [0.0, 0.0], tolerance=1e-6)
        assert result.iterations == 0
        assert len(result.trajectory) == 1
        assert result.outcome is Outcome.STAGNATED

    def test_shifted_quadratic_from_formula(self):
        func = ExpressionFunction("(x1 - 4)^2 + (x2 - 4)^2", 2)
        result = _run(func, [0.0, 0.0], tolerance=1e-4)
        assert result.outcome is Outcome.CONVERGED
        np.testing.assert_allclose(result.x, [4.0, 4.0], atol=1e-3)

    def test_one_dimension(self):
        func = ExpressionFunction("(x1 - 3)^2", 1)
        result = _run(func, [0.0], tolerance=1e-4)
        assert result.outcome is Outcome.CONVERGED
        assert result.x[0] == pytest.approx(3.0, abs=1e-3)


@pytest.mark.unit
class TestStoppingReasons:
    """Tests for the remaining terminal states."""

    def test_stagnation_at_kink(self, absolute, counting):
        func = counting(absolute)
        result = _run(func, [0.0])
        assert result.outcome is Outcome.STAGNATED
        assert result.iterations == 0
        assert not result.terminated_early
        # f(x0) + градієнт (2) + 20 пробних кроків
        assert func.calls == 23
        assert result.func_evals == 23

    def test_stagnation_after_progress(self, absolute):
        result = _run(absolute, [5.0])
        assert result.outcome is Outcome.STAGNATED
        assert result.iterations == 5
        assert abs(result.x[0]) < 1e-6

    def test_budget_exhausted(self):
        result = _run(_linear, [0.0], max_iterations=5)
        assert result.outcome is Outcome.BUDGET_EXHAUSTED
        assert result.iterations == 5
        assert len(result.trajectory) == 6
        assert result.grad_evals == 5
        assert result.func_evals == 1 + 5 * 3

    def test_zero_budget(self, sphere):
        result = _run(sphere, [2.0, 2.0], max_iterations=0)
        assert result.outcome is Outcome.BUDGET_EXHAUSTED
        assert result.iterations == 0
        assert len(result.trajectory) == 1
        assert result.func_evals == 1

    def test_evaluation_failure_keeps_partial_trajectory(self, positive_only):
        result = _run(positive_only, [2.5])
        assert result.outcome is Outcome.EVALUATION_FAILED
        assert result.failed
        assert not result.terminated_early
        assert result.iterations == 2
        assert len(result.trajectory) == 3
        assert result.error
        assert result.x[0] >= 0.0

    def test_evaluation_failure_inside_gradient(self):
        def nonpositive_only(x):
            if x[0] > 0.0:
                raise EvaluationError(f"f не визначена при x1 = {x[0]}")
            return float(x[0])

        result = _run(nonpositive_only, [0.0])
        assert result.outcome is Outcome.EVALUATION_FAILED
        assert result.iterations == 0
        assert len(result.trajectory) == 1
        assert result.grad_evals == 0
        assert "x1" in result.error
        np.testing.assert_array_equal(result.x, [0.0])

    def test_failure_at_start_is_configuration_error(self, positive_only, counting):
        func = counting(positive_only)
        with pytest.raises(ConfigurationError):
            _run(func, [-1.0])
        assert func.calls == 1


@pytest.mark.unit
class TestCancellation:
    """Tests for cooperative cancellation."""

    def test_cancelled_before_start(self, sphere):
        signal = CancellationSignal()
        signal.cancel()
        result = _run(sphere, [2.0, 2.0], cancel=signal)
        assert result.outcome is Outcome.CANCELLED
        assert result.terminated_early
        assert result.iterations == 0
        assert len(result.trajectory) == 1

    def test_cancelled_from_callback(self):
        signal = CancellationSignal()

        def callback(sample):
            if sample.index == 3:
                signal.cancel()

        result = _run(_linear, [0.0], cancel=signal, callback=callback)
        assert result.outcome is Outcome.CANCELLED
        assert result.terminated_early
        assert result.iterations == 3
        assert len(result.trajectory) == 4


@pytest.mark.unit
class TestTrajectoryInvariants:
    """Tests for properties that hold on every run."""

    def test_values_strictly_decrease(self):
        func = ExpressionFunction("100*(x2 - x1^2)^2 + (1 - x1)^2", 2)
        result = _run(func, [-1.2, 1.0], max_iterations=200)
        fs = [s.f for s in result.trajectory]
        assert all(b < a for a, b in zip(fs, fs[1:]))
        assert result.f == fs[-1]

    def test_indices_and_length(self):
        result = _run(_linear, [0.0], max_iterations=7)
        assert [s.index for s in result.trajectory] == list(range(8))
        assert len(result.trajectory) == result.iterations + 1

    def test_seed_sample(self, sphere):
        result = _run(sphere, [2.0, 2.0], initial_step=0.3)
        seed = result.trajectory[0]
        np.testing.assert_array_equal(seed.x, [2.0, 2.0])
        assert seed.f == pytest.approx(8.0)
        assert seed.step_size == 0.3
        assert seed.meta.get("initial") is True

    def test_next_step_bounded(self):
        func = ExpressionFunction("x1^2 + 2*x2^2 + 3*x3^2", 3)
        result = _run(func, [1.0, -1.0, 2.0], initial_step=5.0, step_increase=2.0)
        for sample in result.trajectory[1:]:
            assert 0.0 < sample.meta["next_step"] <= 1.0
            assert sample.meta["grad_norm"] > 0.0
            assert 1 <= sample.meta["attempts"] <= 20

    def test_sample_meta_records_accepted_trial(self):
        result = _run(_linear, [0.0], max_iterations=3, initial_step=0.25)
        for sample in result.trajectory[1:]:
            assert sample.meta["trial_step"] == sample.step_size
            assert set(sample.meta) == {"grad_norm", "attempts", "trial_step", "next_step"}
        assert result.trajectory[1].meta["trial_step"] == 0.25
        assert result.trajectory[1].meta["next_step"] == pytest.approx(0.3)

    def test_callback_sees_every_sample(self, sphere):
        seen = []
        result = _run(sphere, [2.0, 2.0], callback=seen.append)
        assert [s.index for s in seen] == [s.index for s in result.trajectory]

    def test_replay_is_deterministic(self):
        func = ExpressionFunction("(x1 - x2)^2 + (x1 + x2 - 10)^2 / 9", 2)
        first = _run(func, [0.0, 1.0], max_iterations=50)
        second = _run(func, [0.0, 1.0], max_iterations=50)
        assert first.outcome is second.outcome
        assert first.iterations == second.iterations
        for a, b in zip(first.trajectory, second.trajectory):
            np.testing.assert_array_equal(a.x, b.x)
            assert a.f == b.f

    def test_start_point_not_modified(self, sphere):
        params = DescentParameters.for_point([2.0, 2.0])
        GradientDescent().run(sphere, params)
        np.testing.assert_array_equal(params.x0, [2.0, 2.0])

    def test_history_legacy_format(self, sphere):
        result = _run(sphere, [2.0, 2.0])
        assert result.history[0] == (2.0, 2.0, pytest.approx(8.0))
        assert len(result.history) == len(result.trajectory)

    def test_result_type(self, sphere):
        assert isinstance(_run(sphere, [1.0, 1.0]), OptimizationResult)
