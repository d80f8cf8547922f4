"""
trajectory.py

Траса процесу мінімізації: одна точка на кожну прийняту ітерацію
плюс початкова (k = 0). Використовується як у движку, так і в GUI.

Кожен запис зберігає повну точку x_k; які координати показувати
на графіку, вирішує вже візуалізація (див. project()).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence, Tuple

import numpy as np


@dataclass
class TrajectorySample:
    """
    Опис однієї точки траси.

    Атрибути:
        index      - номер ітерації (0 — стартова точка)
        x          - повна точка x_k
        f          - значення f(x_k)
        step_size  - прийнятий пробний крок (для k = 0 — початковий крок)
        meta       - службова інформація (grad_norm, attempts, next_step, ...)
    """
    index: int
    x: np.ndarray
    f: float
    step_size: float
    meta: Dict[str, Any] = field(default_factory=dict)


def project(
    samples: Sequence[TrajectorySample],
    i: int = 0,
    j: int = 1,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Повернути (x_i, x_j, f) по всій трасі — проєкцію на площину координат i, j.
    """
    xs = np.array([s.x for s in samples], dtype=float)
    fs = np.array([s.f for s in samples], dtype=float)
    if xs.size == 0:
        empty = np.zeros(0, dtype=float)
        return empty, empty, empty
    return xs[:, i], xs[:, j], fs


def legacy_xyz(sample: TrajectorySample) -> Tuple[float, float, float]:
    """Старий формат запису: (x[0], x[1], f); для n = 1 друга координата — nan."""
    x = sample.x
    second = float(x[1]) if x.size > 1 else float("nan")
    return float(x[0]), second, float(sample.f)


__all__ = [
    "TrajectorySample",
    "project",
    "legacy_xyz",
]
