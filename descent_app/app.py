"""
app.py

Контролер для GUI-застосунку градієнтного спуску.

Зв'язує:
    - ui.MainWindow (PyQt6)
    - core.expression.ExpressionFunction (формула -> цільова функція)
    - core.config.DescentParameters (перевірка параметрів)
    - core.runner.BackgroundRun (спуск у фоновому потоці)

Функціонал:
    - реагує на сигнал MainWindow.optimizationRequested(OptimizationConfig);
    - перевіряє формулу та параметри до запуску, показує одну помилку;
    - запускає BackgroundRun і опитує його канал таймером;
    - "Стоп" передає запит на зупинку фоновому циклу;
    - після завершення показує трасу, графіки та причину зупинки.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QApplication

from descent_app.core.config import ConfigurationError, DescentParameters
from descent_app.core.expression import ExpressionError, ExpressionFunction
from descent_app.core.runner import BackgroundRun
from descent_app.ui.control_panel import OptimizationConfig
from descent_app.ui.dialogs import show_error
from descent_app.ui.main_window import MainWindow
from descent_app.ui.styles import apply_app_style

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 50
LOG_LEVEL_ENV = "DESCENT_APP_LOG_LEVEL"


# ---------------------------------------------------------------------------
# Контролер
# ---------------------------------------------------------------------------

class OptimizationController:
    """
    Контролер між MainWindow і фоновим запуском.

    В кожен момент активний не більше ніж один BackgroundRun.
    """

    def __init__(self, window: MainWindow) -> None:
        self.window = window
        self._run: Optional[BackgroundRun] = None
        self._objective: Optional[ExpressionFunction] = None
        self._n_vars = 0

        self._timer = QTimer(window)
        self._timer.setInterval(POLL_INTERVAL_MS)
        self._timer.timeout.connect(self._poll)

        self.window.optimizationRequested.connect(self.on_optimization_requested)
        self.window.stopRequested.connect(self.on_stop_requested)

    # ---------------------------------------------------------------------
    # Перевірка введення
    # ---------------------------------------------------------------------

    def _report(self, title: str, exc: Exception) -> None:
        show_error(self.window, str(exc), title=title)
        self.window.statusBar().showMessage(f"Помилка: {exc}")

    def build_run(self, cfg: OptimizationConfig) -> Optional[BackgroundRun]:
        """
        Зібрати цільову функцію та параметри; None, якщо введення некоректне
        (користувач уже бачив діалог помилки).
        """
        try:
            objective = ExpressionFunction(cfg.formula, cfg.n_vars)
        except ExpressionError as exc:
            self._report("Некоректна формула", exc)
            return None

        try:
            params = DescentParameters.from_text(
                cfg.n_vars,
                cfg.x0_text,
                initial_step=cfg.initial_step,
                step_decay=cfg.step_decay,
                step_increase=cfg.step_increase,
                tolerance=cfg.tolerance,
                max_iterations=cfg.max_iter,
            )
        except ConfigurationError as exc:
            self._report("Некоректні параметри", exc)
            return None

        self._objective = objective
        self._n_vars = cfg.n_vars
        return BackgroundRun(objective, params)

    # ---------------------------------------------------------------------
    # Обробники сигналів вікна
    # ---------------------------------------------------------------------

    def on_optimization_requested(self, cfg: OptimizationConfig) -> None:
        if self._run is not None:
            logger.warning("Запит на запуск проігноровано: попередній ще триває")
            return

        run = self.build_run(cfg)
        if run is None:
            return

        logger.info("Запуск: f = %s, x0 = (%s)", cfg.formula, cfg.x0_text)
        self._run = run.start()
        self.window.set_running(True)
        self._timer.start()

    def on_stop_requested(self) -> None:
        if self._run is None:
            return
        self._run.cancel()
        self.window.set_stopping()

    def shutdown(self) -> None:
        """Зупинити активний запуск при закритті застосунку."""
        if self._run is not None:
            self._run.cancel()
            self._run.join(timeout=1.0)

    # ---------------------------------------------------------------------
    # Опитування каналу результату
    # ---------------------------------------------------------------------

    def _poll(self) -> None:
        run = self._run
        if run is None or not run.channel.done():
            return

        self._timer.stop()
        self._run = None
        self.window.set_running(False)

        try:
            result = run.channel.poll()
        except ConfigurationError as exc:
            self._report("Некоректна початкова точка", exc)
            return
        except Exception as exc:
            self._report("Помилка під час оптимізації", exc)
            return

        self.window.show_result(self._objective, result, self._n_vars)


# ---------------------------------------------------------------------------
# Точка входу
# ---------------------------------------------------------------------------

def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()
    app = QApplication(sys.argv)

    # Глобальний стиль застосунку
    apply_app_style(app)

    window = MainWindow()
    controller = OptimizationController(window)
    app.aboutToQuit.connect(controller.shutdown)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
