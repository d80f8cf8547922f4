"""
line_search.py

Пошук кроку вздовж напрямку спуску з адаптивним базовим кроком
(backtracking з розширенням / дробленням).

Ідея:
    - стартуємо з поточного базового кроку step;
    - пробуємо x + trial * d; якщо f зменшилась строго — приймаємо точку,
      а новий базовий крок = min(growth * trial, MAX_STEP);
    - інакше дробимо trial *= decay і пробуємо знову;
    - після max_attempts невдалих спроб повертаємо "відхилено" (застій).

Обмеження кількості спроб гарантує, що одна ітерація робить не більше
max_attempts обчислень f і цикл спуску не може зависнути в пошуку кроку.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .functions import ArrayLike, ScalarFunction

MAX_BACKTRACKING = 20
MAX_STEP = 1.0


# ---------------------------------------------------------------------------
# Результат пошуку кроку
# ---------------------------------------------------------------------------

@dataclass
class StepSearchResult:
    """
    Результат однієї процедури пошуку кроку.

    Атрибути:
        accepted    - чи знайдено точку зі строго меншим значенням f
        x_new       - нова точка (або незмінна x, якщо accepted = False)
        f_new       - f(x_new)
        trial_step  - прийнятий пробний крок (останній спробуваний, якщо відхилено)
        next_step   - базовий крок для наступної ітерації
        attempts    - кількість спроб
    """
    accepted: bool
    x_new: np.ndarray
    f_new: float
    trial_step: float
    next_step: float
    attempts: int


def backtracking_step(
    func: ScalarFunction,
    x: ArrayLike,
    f_x: float,
    direction: ArrayLike,
    step: float,
    decay: float,
    growth: float,
    max_attempts: int = MAX_BACKTRACKING,
) -> StepSearchResult:
    """
    Знайти крок, що строго зменшує f вздовж direction.

    Parameters
    ----------
    func : ScalarFunction
        Цільова функція; її помилки не перехоплюються.
    x, f_x :
        Поточна точка та f(x).
    direction :
        Напрямок спуску d (для градієнтного спуску d = -∇f(x)).
    step :
        Поточний базовий крок.
    decay : float
        Коефіцієнт дроблення, 0 < decay < 1.
    growth : float
        Коефіцієнт збільшення після успішного кроку, growth >= 1.
    max_attempts : int
        Максимальна кількість пробних кроків.
    """
    x = np.asarray(x, dtype=float)
    direction = np.asarray(direction, dtype=float)

    trial = float(step)
    attempts = 0

    for _ in range(max_attempts):
        attempts += 1
        x_trial = x + trial * direction
        f_trial = float(func(x_trial))

        if f_trial < f_x:
            return StepSearchResult(
                accepted=True,
                x_new=x_trial,
                f_new=f_trial,
                trial_step=trial,
                next_step=min(growth * trial, MAX_STEP),
                attempts=attempts,
            )

        trial *= decay

    # Жодна спроба не покращила значення: застій
    return StepSearchResult(
        accepted=False,
        x_new=x.copy(),
        f_new=float(f_x),
        trial_step=trial / decay,
        next_step=float(step),
        attempts=attempts,
    )


__all__ = [
    "MAX_BACKTRACKING",
    "MAX_STEP",
    "StepSearchResult",
    "backtracking_step",
]
