"""
functions.py

Базові типи цільової функції та чисельний градієнт.

Формат:
    - цільова функція (Objective Evaluator) працює з вектором x: numpy.ndarray
      форми (n,) і повертає float або кидає EvaluationError;
    - forward_difference_gradient(...) – оцінка градієнта правими різницями;
    - реєстр PRESET_FUNCTIONS – готові приклади формул для GUI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np

ArrayLike = np.ndarray
ScalarFunction = Callable[[ArrayLike], float]


class EvaluationError(ArithmeticError):
    """
    Явна відмова цільової функції: неправильна розмірність точки,
    ділення на нуль, вихід за область визначення, нескінченне значення.
    """


# ---------------------------------------------------------------------------
# Чисельний градієнт (праві різниці)
# ---------------------------------------------------------------------------

def forward_difference_gradient(
    func: ScalarFunction,
    x: ArrayLike,
    eps: float = 1e-6,
) -> ArrayLike:
    """
    Чисельний градієнт за правою різницею.

    ∂f/∂x_i ≈ (f(x + eps e_i) - f(x)) / eps

    f(x) обчислюється один раз, тобто всього n + 1 викликів func.
    Будь-яка помилка func передається далі без часткового результату.
    """
    if eps <= 0.0:
        raise ValueError("forward_difference_gradient: eps повинен бути > 0.")

    x = np.array(x, dtype=float)
    f0 = float(func(x))
    grad = np.zeros_like(x, dtype=float)

    for i in range(len(x)):
        x_fwd = x.copy()
        x_fwd[i] += eps
        grad[i] = (float(func(x_fwd)) - f0) / eps

    return grad


# ---------------------------------------------------------------------------
# Реєстр прикладів для вибору в GUI
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PresetFunction:
    key: str
    title: str
    formula: str
    n_vars: int
    x0: Tuple[float, ...]

    @property
    def x0_text(self) -> str:
        return ", ".join(f"{v:g}" for v in self.x0)


DEFAULT_PRESET = "sphere"

PRESET_FUNCTIONS: Dict[str, PresetFunction] = {
    "sphere": PresetFunction(
        key="sphere",
        title="Сфера: x1² + x2²",
        formula="x1^2 + x2^2",
        n_vars=2,
        x0=(2.0, 2.0),
    ),
    "shifted": PresetFunction(
        key="shifted",
        title="Зсунута квадратична: (x1 - 4)² + (x2 - 4)²",
        formula="(x1 - 4)^2 + (x2 - 4)^2",
        n_vars=2,
        x0=(0.0, 0.0),
    ),
    "ravine": PresetFunction(
        key="ravine",
        title="Яр: (x1 - x2)² + (x1 + x2 - 10)² / 9",
        formula="(x1 - x2)^2 + (x1 + x2 - 10)^2 / 9",
        n_vars=2,
        x0=(0.0, 1.0),
    ),
    "rosenbrock": PresetFunction(
        key="rosenbrock",
        title="Розенброк: 100(x2 - x1²)² + (1 - x1)²",
        formula="100*(x2 - x1^2)^2 + (1 - x1)^2",
        n_vars=2,
        x0=(-1.2, 1.0),
    ),
    "parabola": PresetFunction(
        key="parabola",
        title="Парабола: (x1 - 3)²",
        formula="(x1 - 3)^2",
        n_vars=1,
        x0=(0.0,),
    ),
    "sphere3": PresetFunction(
        key="sphere3",
        title="Сфера в R³: x1² + 2x2² + 3x3²",
        formula="x1^2 + 2*x2^2 + 3*x3^2",
        n_vars=3,
        x0=(1.0, -1.0, 2.0),
    ),
}

__all__ = [
    "ArrayLike",
    "ScalarFunction",
    "EvaluationError",
    "forward_difference_gradient",
    "PresetFunction",
    "DEFAULT_PRESET",
    "PRESET_FUNCTIONS",
]
