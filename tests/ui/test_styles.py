import numpy as np
import pytest

pytest.importorskip("PyQt6.QtWidgets")

from descent_app.core.engine import OptimizationResult, Outcome
from descent_app.ui.dialogs import outcome_status
from descent_app.ui.styles import STATUS_COLORS, THEME, Theme, build_app_stylesheet


def _result(outcome, error=None):
    return OptimizationResult(
        x=np.zeros(1), f=0.0, iterations=0, trajectory=(), outcome=outcome, error=error,
    )


@pytest.mark.unit
class TestStylesheet:
    """Tests for the generated application stylesheet."""

    def test_every_status_has_a_rule(self):
        qss = build_app_stylesheet()
        for status, color in STATUS_COLORS.items():
            assert f'QLabel[status="{status}"] {{ color: {color}; }}' in qss

    def test_run_and_stop_disabled_states(self):
        qss = build_app_stylesheet()
        assert 'QPushButton[role="primary"]:disabled' in qss
        assert 'QPushButton[role="stop"]:enabled' in qss

    def test_carousel_controls(self):
        qss = build_app_stylesheet()
        assert 'QPushButton[role="nav"]' in qss
        assert 'QComboBox[role="axis"]' in qss
        assert "QWidget#plotView" in qss

    def test_custom_theme_colors_used(self):
        qss = build_app_stylesheet(Theme(accent="#123456"))
        assert "#123456" in qss
        assert THEME.accent not in qss


@pytest.mark.unit
class TestOutcomeStatus:
    """Tests for mapping a stopping reason onto the result line state."""

    @pytest.mark.parametrize(
        "outcome, status",
        [
            (Outcome.CONVERGED, "ok"),
            (Outcome.STAGNATED, "warning"),
            (Outcome.BUDGET_EXHAUSTED, "warning"),
            (Outcome.CANCELLED, "warning"),
            (Outcome.EVALUATION_FAILED, "error"),
        ],
    )
    def test_mapping(self, outcome, status):
        assert outcome_status(_result(outcome, error="x")) == status
        assert status in STATUS_COLORS
