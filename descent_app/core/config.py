"""
config.py

Параметри запуску градієнтного спуску.

DescentParameters перевіряється один раз при створенні, тому цикл спуску
отримує вже коректну конфігурацію і нічого не перевіряє повторно.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np


class ConfigurationError(ValueError):
    """Некоректні параметри запуску; виявляються до старту оптимізації."""


def parse_point(text: str, n_vars: int) -> np.ndarray:
    """
    Розібрати початкову точку з рядка виду "2, 2".

    Кількість координат повинна дорівнювати n_vars.
    """
    parts = [p.strip() for p in (text or "").split(",")]
    if len(parts) != n_vars:
        raise ConfigurationError(
            f"Початкова точка повинна мати {n_vars} координат(и) "
            f"у форматі 'x1, x2, ...', отримано {len(parts)}."
        )

    values = []
    for part in parts:
        try:
            values.append(float(part))
        except ValueError:
            raise ConfigurationError(
                f"Некоректна координата початкової точки: '{part}'."
            ) from None

    return np.array(values, dtype=float)


@dataclass(frozen=True, eq=False)
class DescentParameters:
    """
    Параметри одного запуску.

    Атрибути:
        n_vars           - розмірність задачі n >= 1
        x0               - початкова точка довжини n
        initial_step     - початковий крок (> 0)
        step_decay       - коефіцієнт дроблення кроку, 0 < decay < 1
        step_increase    - коефіцієнт збільшення кроку, >= 1
        tolerance        - поріг норми градієнта (> 0)
        max_iterations   - максимальна кількість ітерацій (>= 0)
        gradient_eps     - крок правої різниці для градієнта (> 0)
        max_backtracking - кількість спроб дроблення кроку за ітерацію
    """
    n_vars: int
    x0: np.ndarray
    initial_step: float = 1.0
    step_decay: float = 0.5
    step_increase: float = 1.2
    tolerance: float = 1e-6
    max_iterations: int = 1000
    gradient_eps: float = 1e-6
    max_backtracking: int = 20

    def __post_init__(self) -> None:
        _require(
            _is_whole(self.n_vars) and self.n_vars >= 1,
            "Розмірність n повинна бути цілим числом >= 1.",
        )

        try:
            x0 = np.array(self.x0, dtype=float).ravel()
        except (TypeError, ValueError):
            raise ConfigurationError("Координати початкової точки повинні бути числами.") from None
        if x0.size != self.n_vars:
            raise ConfigurationError(
                f"Розмірність початкової точки ({x0.size}) не збігається з n = {int(self.n_vars)}."
            )
        if not np.all(np.isfinite(x0)):
            raise ConfigurationError("Координати початкової точки повинні бути скінченними.")
        # frozen dataclass: зберігаємо власну копію точки
        object.__setattr__(self, "x0", x0)
        object.__setattr__(self, "n_vars", int(self.n_vars))

        for name in ("initial_step", "step_decay", "step_increase", "tolerance", "gradient_eps"):
            value = getattr(self, name)
            _require(
                _is_real(value) and math.isfinite(value),
                f"Параметр {name} повинен бути скінченним числом.",
            )

        _require(self.initial_step > 0.0, "Початковий крок повинен бути > 0.")
        _require(0.0 < self.step_decay < 1.0, "Коефіцієнт дроблення повинен бути в (0, 1).")
        _require(self.step_increase >= 1.0, "Коефіцієнт збільшення повинен бути >= 1.")
        _require(self.tolerance > 0.0, "Точність повинна бути > 0.")
        _require(self.gradient_eps > 0.0, "Крок різницевої схеми повинен бути > 0.")
        _require(
            _is_whole(self.max_iterations) and self.max_iterations >= 0,
            "Максимальна кількість ітерацій повинна бути цілим числом >= 0.",
        )
        _require(
            _is_whole(self.max_backtracking) and self.max_backtracking >= 1,
            "Кількість спроб дроблення кроку повинна бути цілим числом >= 1.",
        )

        object.__setattr__(self, "max_iterations", int(self.max_iterations))
        object.__setattr__(self, "max_backtracking", int(self.max_backtracking))

    @classmethod
    def from_text(cls, n_vars: int, point_text: str, **kwargs: Any) -> "DescentParameters":
        """Зібрати параметри з рядка початкової точки (як у полі вводу GUI)."""
        return cls(n_vars=n_vars, x0=parse_point(point_text, n_vars), **kwargs)

    @classmethod
    def for_point(cls, x0: Sequence[float], **kwargs: Any) -> "DescentParameters":
        """Розмірність береться з самої точки."""
        x0_arr = np.array(x0, dtype=float).ravel()
        return cls(n_vars=x0_arr.size, x0=x0_arr, **kwargs)


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_whole(value: Any) -> bool:
    return _is_real(value) and math.isfinite(value) and float(value).is_integer()


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigurationError(message)


__all__ = [
    "ConfigurationError",
    "DescentParameters",
    "parse_point",
]
