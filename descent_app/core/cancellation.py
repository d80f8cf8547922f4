"""
cancellation.py

Примітиви взаємодії між потоком GUI та фоновим запуском:

    - CancellationSignal – прапорець кооперативної зупинки; цикл спуску
      опитує його на початку кожної ітерації;
    - ResultChannel      – одноразова передача результату з фонового потоку.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class CancellationSignal:
    """
    Прапорець зупинки.

    Запис і читання йдуть через threading.Event, тож встановлений прапорець
    гарантовано видно циклу на наступній перевірці. Скидання немає:
    зупинка остаточна для запуску, новий запуск отримує новий сигнал.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationSignal(cancelled={self.is_cancelled()})"


class ResultChannel(Generic[T]):
    """
    Одноразовий канал результату (один відправник, один отримувач).

    Фоновий потік викликає send(result) або fail(exc) рівно один раз;
    GUI опитує poll() з таймера або блокується в receive().
    """

    def __init__(self) -> None:
        self._future: Future = Future()
        self._lock = threading.Lock()
        self._sent = False

    def send(self, result: T) -> None:
        self._mark_sent()
        self._future.set_result(result)

    def fail(self, exc: BaseException) -> None:
        self._mark_sent()
        self._future.set_exception(exc)

    def _mark_sent(self) -> None:
        with self._lock:
            if self._sent:
                raise RuntimeError("ResultChannel: результат вже передано.")
            self._sent = True

    def done(self) -> bool:
        return self._future.done()

    def poll(self) -> Optional[T]:
        """
        Неблокуюча перевірка: None, поки результату немає.
        Якщо відправник передав виняток — він кидається тут.
        """
        if not self._future.done():
            return None
        return self._future.result()

    def receive(self, timeout: Optional[float] = None) -> T:
        """Дочекатися результату; TimeoutError, якщо не встигли."""
        try:
            return self._future.result(timeout=timeout)
        except FutureTimeoutError:
            raise TimeoutError("ResultChannel: результат не надійшов вчасно.") from None


__all__ = [
    "CancellationSignal",
    "ResultChannel",
]
