import numpy as np
import pytest

from descent_app.core.functions import EvaluationError
from descent_app.core.line_search import MAX_BACKTRACKING, MAX_STEP, backtracking_step


def _square(x):
    return float(x[0] ** 2)


@pytest.mark.unit
class TestBacktrackingStep:
    """Tests for the adaptive step search."""

    def test_first_trial_accepted(self):
        res = backtracking_step(_square, np.array([2.0]), 4.0, np.array([-1.0]), 1.0, 0.5, 1.2)
        assert res.accepted
        assert res.attempts == 1
        assert res.trial_step == 1.0
        np.testing.assert_allclose(res.x_new, [1.0])
        assert res.f_new == pytest.approx(1.0)

    def test_backtracks_until_decrease(self):
        # x = 2, d = -4: крок 1 дає x = -2 (f не зменшилась), крок 0.5 дає x = 0
        res = backtracking_step(_square, np.array([2.0]), 4.0, np.array([-4.0]), 1.0, 0.5, 1.2)
        assert res.accepted
        assert res.attempts == 2
        assert res.trial_step == pytest.approx(0.5)
        assert res.f_new == pytest.approx(0.0)
        assert res.next_step == pytest.approx(0.6)

    def test_next_step_capped(self):
        res = backtracking_step(_square, np.array([10.0]), 100.0, np.array([-1.0]), 1.0, 0.5, 2.0)
        assert res.accepted
        assert res.next_step == MAX_STEP

    def test_large_initial_step_tried_as_is(self):
        res = backtracking_step(_square, np.array([10.0]), 100.0, np.array([-1.0]), 5.0, 0.5, 1.2)
        assert res.trial_step == 5.0
        assert res.next_step == MAX_STEP

    def test_equal_value_is_not_a_decrease(self):
        res = backtracking_step(lambda x: 1.0, np.array([0.0]), 1.0, np.array([-1.0]), 1.0, 0.5, 1.2)
        assert not res.accepted

    def test_rejection_after_max_attempts(self, absolute, counting):
        func = counting(absolute)
        x = np.array([0.0])
        res = backtracking_step(func, x, 0.0, np.array([-1.0]), 1.0, 0.5, 1.2)
        assert not res.accepted
        assert res.attempts == MAX_BACKTRACKING
        assert func.calls == MAX_BACKTRACKING
        np.testing.assert_array_equal(res.x_new, x)
        assert res.f_new == 0.0
        assert res.next_step == 1.0
        assert res.trial_step == pytest.approx(0.5 ** (MAX_BACKTRACKING - 1))

    def test_custom_attempt_limit(self, absolute, counting):
        func = counting(absolute)
        res = backtracking_step(func, np.array([0.0]), 0.0, np.array([-1.0]), 1.0, 0.5, 1.2, max_attempts=3)
        assert not res.accepted
        assert func.calls == 3

    def test_does_not_modify_point(self):
        x = np.array([2.0])
        backtracking_step(_square, x, 4.0, np.array([-1.0]), 1.0, 0.5, 1.2)
        np.testing.assert_array_equal(x, [2.0])

    def test_evaluation_error_propagates(self, positive_only):
        with pytest.raises(EvaluationError):
            backtracking_step(positive_only, np.array([0.5]), 0.5, np.array([-1.0]), 1.0, 0.5, 1.2)
