"""
Головне вікно в темній темі:
    - зліва: панель керування;
    - справа: карусель графіків над таблицею ітерацій, рядок результату
      та статистика запуску.
"""

from __future__ import annotations
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QStatusBar,
    QLabel,
    QSplitter,
)

from descent_app.core.engine import OptimizationResult
from descent_app.core.functions import ScalarFunction
from .control_panel import ControlPanelWidget, OptimizationConfig
from .table_view import IterationsTableWidget, format_point
from .plot_view import PlotView
from .dialogs import describe_outcome, outcome_status, show_about
from .styles import MARGIN, SPACING, set_role, set_status


class MainWindow(QMainWindow):
    """
    Головне вікно GUI.

    Сигнали:
        optimizationRequested(OptimizationConfig)
        stopRequested()
    """

    optimizationRequested = pyqtSignal(OptimizationConfig)
    stopRequested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowTitle("Градієнтний спуск з адаптивним кроком")
        self.resize(1400, 880)

        self._create_actions()
        self._create_menu()
        self._create_status_bar()
        self._create_content()
        self._connect_signals()

    # ----------------------------------------------------------------------
    # Menu + actions
    # ----------------------------------------------------------------------
    def _create_actions(self) -> None:
        self.action_exit = QAction("Вихід", self, shortcut="Ctrl+Q")
        self.action_about = QAction("Про програму", self)

    def _create_menu(self) -> None:
        menu = self.menuBar()
        menu.addMenu("Файл").addAction(self.action_exit)
        menu.addMenu("Довідка").addAction(self.action_about)

    def _create_status_bar(self) -> None:
        status = QStatusBar(self)
        self.setStatusBar(status)
        status.showMessage("Готово")

    # ----------------------------------------------------------------------
    # CONTENT LAYOUT
    # ----------------------------------------------------------------------
    def _create_content(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        root.addWidget(self._build_left_panel(), stretch=2)
        root.addWidget(self._build_right_panel(), stretch=5)

        self.update_run_stats(None)

    def _build_left_panel(self) -> QWidget:
        widget = QWidget(self)
        widget.setMinimumWidth(360)

        layout = QVBoxLayout(widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(SPACING)

        self.control_panel = ControlPanelWidget(widget)
        layout.addWidget(self.control_panel)
        layout.addStretch()

        return widget

    def _build_right_panel(self) -> QWidget:
        widget = QWidget(self)
        widget.setMinimumWidth(760)

        layout = QVBoxLayout(widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(SPACING)

        splitter = QSplitter(Qt.Orientation.Vertical, widget)
        splitter.setHandleWidth(6)

        self.plot_view = PlotView(widget)
        splitter.addWidget(self.plot_view)

        bottom = QWidget(widget)
        bottom_layout = QVBoxLayout(bottom)
        bottom_layout.setContentsMargins(0, 0, 0, 0)
        bottom_layout.setSpacing(SPACING)

        self.iterations_table = IterationsTableWidget(bottom)
        bottom_layout.addWidget(self.iterations_table)

        self.label_result = QLabel("", bottom)
        self.label_result.setWordWrap(True)
        set_status(self.label_result, "idle")
        bottom_layout.addWidget(self.label_result)
        bottom_layout.addLayout(self._build_stats_row())

        splitter.addWidget(bottom)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        layout.addWidget(splitter)

        return widget

    def _build_stats_row(self) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(SPACING)

        self.label_iterations = QLabel()
        self.label_func_evals = QLabel()
        self.label_grad_evals = QLabel()
        self.label_last_step = QLabel()

        for lbl in (
            self.label_iterations,
            self.label_func_evals,
            self.label_grad_evals,
            self.label_last_step,
        ):
            set_role(lbl, "muted")
            row.addWidget(lbl)

        row.addStretch()
        return row

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------
    def _connect_signals(self) -> None:
        self.action_exit.triggered.connect(self.close)
        self.action_about.triggered.connect(lambda: show_about(self))

        self.control_panel.exitRequested.connect(self.close)
        self.control_panel.clearRequested.connect(self._on_clear_requested)
        self.control_panel.runRequested.connect(self._on_run_requested)
        self.control_panel.stopRequested.connect(self.stopRequested.emit)

    def _on_run_requested(self, cfg: OptimizationConfig) -> None:
        self.clear_results()
        self.statusBar().showMessage(f"Запуск: f = {cfg.formula}, x0 = ({cfg.x0_text})")
        self.optimizationRequested.emit(cfg)

    def _on_clear_requested(self) -> None:
        self.clear_results()
        self.statusBar().showMessage("Очищено")

    # ------------------------------------------------------------------
    # PUBLIC API (для app.py)
    # ------------------------------------------------------------------
    def set_running(self, running: bool) -> None:
        self.control_panel.set_running(running)
        if running:
            set_status(self.label_result, "running")
            self.label_result.setText("Обчислення…")

    def set_stopping(self) -> None:
        self.control_panel.set_stopping()
        self.statusBar().showMessage("Зупинка…")

    def clear_results(self) -> None:
        """Очистити таблицю, графіки, рядок результату і статистику."""
        self.iterations_table.clear_table()
        self.plot_view.show_placeholder()
        self.label_result.setText("")
        set_status(self.label_result, "idle")
        self.update_run_stats(None)

    def show_result(self, func: ScalarFunction, result: OptimizationResult, n_vars: int) -> None:
        """Показати трасу, графіки, причину зупинки та статистику."""
        samples = list(result.trajectory)
        self.iterations_table.populate(samples)
        self.plot_view.plot_result(func, samples, n_vars)

        reason = describe_outcome(result)
        set_status(self.label_result, outcome_status(result))
        self.label_result.setText(
            f"{reason}.  x* = {format_point(result.x)},  f* = {result.f:.6e}"
        )

        self.update_run_stats(result)
        self.statusBar().showMessage(f"Завершено: {reason}")

    def update_run_stats(self, result: Optional[OptimizationResult]) -> None:
        if result is None:
            self.label_iterations.setText("ітерацій: –")
            self.label_func_evals.setText("f evals: –")
            self.label_grad_evals.setText("grad evals: –")
            self.label_last_step.setText("крок: –")
            return

        self.label_iterations.setText(f"ітерацій: {result.iterations}")
        self.label_func_evals.setText(f"f evals: {result.func_evals}")
        self.label_grad_evals.setText(f"grad evals: {result.grad_evals}")
        self.label_last_step.setText(f"крок: {result.final_step:.3e}")
