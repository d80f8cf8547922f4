"""
control_panel.py

Панель керування для GUI:
    - вибір готового прикладу (заповнює формулу, n та x0);
    - формула f(x1, ..., xn);
    - розмірність n;
    - початкова точка x0 у форматі "x1, x2, ...";
    - початковий крок, коефіцієнти дроблення та збільшення кроку;
    - точність (поріг норми градієнта) та max_iter;
    - кнопки: Запустити, Стоп, Очистити, Вихід.

Видає назовні:
    - сигнал runRequested(OptimizationConfig)
    - сигнал stopRequested()
    - сигнал clearRequested()
    - сигнал exitRequested()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QGroupBox,
    QComboBox,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QDoubleSpinBox,
)

from descent_app.core.functions import DEFAULT_PRESET, PRESET_FUNCTIONS
from .styles import MARGIN, SPACING, set_role


# ---------------------------------------------------------------------------
# Конфігурація запуску (сирі значення з форми, ще не перевірені)
# ---------------------------------------------------------------------------

@dataclass
class OptimizationConfig:
    formula: str
    n_vars: int
    x0_text: str
    initial_step: float
    step_decay: float
    step_increase: float
    tolerance: float
    max_iter: int


# ---------------------------------------------------------------------------
# Віджет панелі керування
# ---------------------------------------------------------------------------

class ControlPanelWidget(QWidget):
    """
    Ліва панель керування оптимізацією.

    Сигнали:
        runRequested(OptimizationConfig)  – натиснуто "Запустити"
        stopRequested()                   – натиснуто "Стоп"
        clearRequested()                  – натиснуто "Очистити"
        exitRequested()                   – натиснуто "Вихід"
    """

    runRequested = pyqtSignal(OptimizationConfig)
    stopRequested = pyqtSignal()
    clearRequested = pyqtSignal()
    exitRequested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._preset_keys = list(PRESET_FUNCTIONS)
        self._build_ui()
        self._connect_signals()
        self._apply_preset(self._preset_keys.index(DEFAULT_PRESET))
        self.set_running(False)

    # ------------------------------------------------------------------
    # Побудова UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setObjectName("controlPanel")

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        main_layout.setSpacing(SPACING)

        # ------------------------------------------------------------------
        # Блок 1. Цільова функція та стартова точка
        # ------------------------------------------------------------------
        self.problem_group = QGroupBox("Цільова функція та старт", self)
        problem_layout = QFormLayout(self.problem_group)
        problem_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        problem_layout.setSpacing(SPACING)

        self.combo_preset = QComboBox(self.problem_group)
        self.combo_preset.addItems([PRESET_FUNCTIONS[k].title for k in self._preset_keys])

        self.input_formula = QLineEdit(self.problem_group)
        self.input_formula.setPlaceholderText("наприклад: x1^2 + x2^2")

        self.input_n = QSpinBox(self.problem_group)
        self.input_n.setRange(1, 10)

        self.input_x0 = QLineEdit(self.problem_group)
        self.input_x0.setPlaceholderText("x1, x2, ...")

        hint = QLabel("Змінні: x1 … xn, степінь: ^, функції: sqrt, exp, ln, sin, …", self.problem_group)
        hint.setWordWrap(True)
        set_role(hint, "muted")

        problem_layout.addRow("Приклад:", self.combo_preset)
        problem_layout.addRow("f(x):", self.input_formula)
        problem_layout.addRow("Розмірність n:", self.input_n)
        problem_layout.addRow("x₀:", self.input_x0)
        problem_layout.addRow(hint)

        main_layout.addWidget(self.problem_group)

        # ------------------------------------------------------------------
        # Блок 2. Адаптивний крок
        # ------------------------------------------------------------------
        self.step_group = QGroupBox("Адаптивний крок", self)
        step_layout = QFormLayout(self.step_group)
        step_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        step_layout.setSpacing(SPACING)

        self.input_step = QDoubleSpinBox(self.step_group)
        self.input_step.setRange(1e-4, 10.0)
        self.input_step.setDecimals(4)
        self.input_step.setSingleStep(0.1)
        self.input_step.setValue(1.0)

        self.input_decay = QDoubleSpinBox(self.step_group)
        self.input_decay.setRange(0.1, 0.9)
        self.input_decay.setDecimals(2)
        self.input_decay.setSingleStep(0.05)
        self.input_decay.setValue(0.5)

        self.input_increase = QDoubleSpinBox(self.step_group)
        self.input_increase.setRange(1.0, 2.0)
        self.input_increase.setDecimals(2)
        self.input_increase.setSingleStep(0.1)
        self.input_increase.setValue(1.2)

        step_layout.addRow("Початковий крок:", self.input_step)
        step_layout.addRow("Коеф. дроблення:", self.input_decay)
        step_layout.addRow("Коеф. збільшення:", self.input_increase)

        main_layout.addWidget(self.step_group)

        # ------------------------------------------------------------------
        # Блок 3. Точність та ітерації
        # ------------------------------------------------------------------
        self.params_group = QGroupBox("Точність та ітерації", self)
        params_layout = QFormLayout(self.params_group)
        params_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        params_layout.setSpacing(SPACING)

        self.input_tol = QDoubleSpinBox(self.params_group)
        self.input_tol.setRange(1e-12, 1.0)
        self.input_tol.setDecimals(12)
        self.input_tol.setValue(1e-6)

        self.input_max_iter = QSpinBox(self.params_group)
        self.input_max_iter.setRange(0, 100000)
        self.input_max_iter.setValue(1000)

        params_layout.addRow("Точність ‖∇f‖:", self.input_tol)
        params_layout.addRow("max_iter:", self.input_max_iter)

        main_layout.addWidget(self.params_group)

        # ------------------------------------------------------------------
        # Нижній ряд кнопок
        # ------------------------------------------------------------------
        buttons_row = QHBoxLayout()
        buttons_row.setContentsMargins(0, SPACING, 0, 0)
        buttons_row.setSpacing(SPACING)

        self.button_run = QPushButton("▶ Запустити", self)
        self.button_stop = QPushButton("⏹ Стоп", self)
        self.button_clear = QPushButton("Очистити", self)
        self.button_exit = QPushButton("Вихід", self)

        set_role(self.button_run, "primary")
        set_role(self.button_stop, "stop")
        set_role(self.button_clear, "ghost")
        set_role(self.button_exit, "ghost")

        buttons_row.addWidget(self.button_run)
        buttons_row.addWidget(self.button_stop)
        buttons_row.addWidget(self.button_clear)
        buttons_row.addStretch(1)
        buttons_row.addWidget(self.button_exit)

        main_layout.addLayout(buttons_row)
        main_layout.addStretch(1)

    # ------------------------------------------------------------------
    # Сигнали
    # ------------------------------------------------------------------

    def _connect_signals(self) -> None:
        self.combo_preset.currentIndexChanged.connect(self._apply_preset)
        self.button_run.clicked.connect(self._on_run_clicked)
        self.button_stop.clicked.connect(self.stopRequested.emit)
        self.button_clear.clicked.connect(self.clearRequested.emit)
        self.button_exit.clicked.connect(self.exitRequested.emit)

    # ------------------------------------------------------------------
    # Публічне API
    # ------------------------------------------------------------------

    def set_running(self, running: bool) -> None:
        """Під час запуску доступна лише кнопка "Стоп"."""
        self.button_run.setEnabled(not running)
        self.button_clear.setEnabled(not running)
        self.button_stop.setEnabled(running)
        self.button_stop.setText("⏹ Стоп")
        for group in (self.problem_group, self.step_group, self.params_group):
            group.setEnabled(not running)

    def set_stopping(self) -> None:
        self.button_stop.setEnabled(False)
        self.button_stop.setText("Зупинка…")

    def build_config(self) -> OptimizationConfig:
        """
        Зібрати OptimizationConfig з поточного стану контролів.
        """
        return OptimizationConfig(
            formula=self.input_formula.text(),
            n_vars=int(self.input_n.value()),
            x0_text=self.input_x0.text(),
            initial_step=float(self.input_step.value()),
            step_decay=float(self.input_decay.value()),
            step_increase=float(self.input_increase.value()),
            tolerance=float(self.input_tol.value()),
            max_iter=int(self.input_max_iter.value()),
        )

    # ------------------------------------------------------------------
    # Обробники
    # ------------------------------------------------------------------

    def _apply_preset(self, index: int) -> None:
        if index < 0:
            return
        preset = PRESET_FUNCTIONS[self._preset_keys[index]]
        self.input_formula.setText(preset.formula)
        self.input_n.setValue(preset.n_vars)
        self.input_x0.setText(preset.x0_text)
        if self.combo_preset.currentIndex() != index:
            self.combo_preset.setCurrentIndex(index)

    def _on_run_clicked(self) -> None:
        self.runRequested.emit(self.build_config())
