"""
runner.py

Запуск GradientDescent у фоновому потоці, щоб GUI не блокувався.

Схема:
    GUI -- BackgroundRun.start() --> потік з GradientDescent.run(...)
    GUI -- BackgroundRun.cancel() --> CancellationSignal (опитується циклом)
    потік -- ResultChannel.send(result) / fail(exc) --> GUI (poll з таймера)
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .cancellation import CancellationSignal, ResultChannel
from .config import ConfigurationError, DescentParameters
from .engine import GradientDescent, IterationCallback, OptimizationResult
from .functions import ScalarFunction

logger = logging.getLogger(__name__)


class BackgroundRun:
    """
    Один фоновий запуск оптимізації.

    Кожен запуск має власні CancellationSignal та ResultChannel;
    для нового запуску створюється новий BackgroundRun.
    """

    def __init__(
        self,
        objective: ScalarFunction,
        params: DescentParameters,
        engine: Optional[GradientDescent] = None,
        callback: Optional[IterationCallback] = None,
    ) -> None:
        self.objective = objective
        self.params = params
        self.engine = engine or GradientDescent()
        self.callback = callback

        self.signal = CancellationSignal()
        self.channel: ResultChannel[OptimizationResult] = ResultChannel()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "BackgroundRun":
        if self._thread is not None:
            raise RuntimeError("BackgroundRun вже запущено; створіть новий запуск.")

        self._thread = threading.Thread(
            target=self._worker,
            name="gradient-descent",
            daemon=True,
        )
        self._thread.start()
        logger.info("Фоновий запуск стартував (n=%d)", self.params.n_vars)
        return self

    def cancel(self) -> None:
        """Попросити цикл зупинитися на найближчій межі ітерації."""
        self.signal.cancel()
        logger.info("Запит на зупинку фонового запуску")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    # ------------------------------------------------------------------
    # Тіло потоку
    # ------------------------------------------------------------------

    def _worker(self) -> None:
        try:
            result = self.engine.run(
                self.objective,
                self.params,
                cancel=self.signal,
                callback=self.callback,
            )
        except ConfigurationError as exc:
            logger.warning("Запуск відхилено: %s", exc)
            self.channel.fail(exc)
        except Exception as exc:
            logger.exception("Фоновий запуск завершився помилкою")
            self.channel.fail(exc)
        else:
            self.channel.send(result)
        finally:
            # Канал закривається за будь-якого виходу з потоку, зокрема через BaseException
            if not self.channel.done():
                logger.error("Фоновий запуск перервано без результату")
                self.channel.fail(RuntimeError("Фоновий запуск перервано без результату."))


__all__ = ["BackgroundRun"]
