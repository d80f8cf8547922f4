"""
engine.py

Ітераційний двигун градієнтного спуску з адаптивним кроком.

Функціонал:
    - виконує цикл x_{k+1} = x_k + α_k * (-∇f(x_k)), де α_k підбирає
      backtracking_step з core.line_search;
    - градієнт оцінюється правими різницями (forward_difference_gradient);
    - формує трасу ітерацій (для таблиць і графіків);
    - рахує кількість викликів цільової функції та градієнта;
    - фіксує результат зупинки (Outcome): збіжність, застій, вичерпання
      ліміту ітерацій, зупинка користувачем, помилка обчислення f;
    - на початку кожної ітерації перевіряє CancellationSignal;
    - підтримує callback для оновлення GUI / логів на кожній ітерації.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .cancellation import CancellationSignal
from .config import ConfigurationError, DescentParameters
from .functions import ArrayLike, EvaluationError, ScalarFunction, forward_difference_gradient
from .line_search import backtracking_step
from .trajectory import TrajectorySample, legacy_xyz

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """Кінцевий стан запуску."""

    CONVERGED = "converged"
    STAGNATED = "stagnated"
    BUDGET_EXHAUSTED = "budget_exhausted"
    CANCELLED = "cancelled"
    EVALUATION_FAILED = "evaluation_failed"


@dataclass(frozen=True, eq=False)
class OptimizationResult:
    """
    Підсумок одного запуску.

    Атрибути:
        x           - остання прийнята точка
        f           - f(x)
        iterations  - кількість виконаних (прийнятих) ітерацій
        trajectory  - траса: стартова точка + по одній на ітерацію
        outcome     - причина зупинки
        func_evals  - кількість викликів цільової функції
        grad_evals  - кількість обчислень градієнта
        final_step  - базовий крок на момент зупинки
        error       - текст помилки для Outcome.EVALUATION_FAILED
    """
    x: np.ndarray
    f: float
    iterations: int
    trajectory: Tuple[TrajectorySample, ...]
    outcome: Outcome
    func_evals: int = 0
    grad_evals: int = 0
    final_step: float = 0.0
    error: Optional[str] = None

    @property
    def terminated_early(self) -> bool:
        """True лише тоді, коли запуск зупинив користувач."""
        return self.outcome is Outcome.CANCELLED

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.EVALUATION_FAILED

    @property
    def history(self) -> List[Tuple[float, float, float]]:
        """Траса у старому форматі (x[0], x[1], f)."""
        return [legacy_xyz(s) for s in self.trajectory]


# Тип callback'а для GUI/логів
IterationCallback = Callable[[TrajectorySample], None]


class _CountingObjective:
    """Обгортка, що рахує виклики цільової функції."""

    def __init__(self, func: ScalarFunction) -> None:
        self.func = func
        self.calls = 0

    def __call__(self, x: ArrayLike) -> float:
        self.calls += 1
        return float(self.func(x))


class GradientDescent:
    """
    Цикл спуску. Стани: Running -> {Converged, Stagnated,
    BudgetExhausted, Cancelled, EvaluationFailed}.

    Використання:
        params = DescentParameters.from_text(2, "2, 2")
        result = GradientDescent().run(f, params)
    """

    def run(
        self,
        objective: ScalarFunction,
        params: DescentParameters,
        cancel: Optional[CancellationSignal] = None,
        callback: Optional[IterationCallback] = None,
    ) -> OptimizationResult:
        """
        Запустити процес оптимізації.

        Кидає ConfigurationError, якщо f не визначена в початковій точці.
        Помилки обчислення f під час ітерацій не кидаються, а повертаються
        як Outcome.EVALUATION_FAILED разом з частковою трасою.
        """
        func = _CountingObjective(objective)
        grad_evals = 0

        x = params.x0.copy()
        try:
            f_x = func(x)
        except EvaluationError as exc:
            raise ConfigurationError(
                f"Цільова функція не визначена в початковій точці: {exc}"
            ) from exc

        step = params.initial_step
        iteration = 0

        trajectory: List[TrajectorySample] = [
            TrajectorySample(index=0, x=x.copy(), f=f_x, step_size=step, meta={"initial": True})
        ]
        if callback is not None:
            callback(trajectory[0])

        error: Optional[str] = None
        outcome = Outcome.BUDGET_EXHAUSTED

        logger.debug("Старт: x0=%s, f(x0)=%.6e, n=%d", x.tolist(), f_x, params.n_vars)

        while iteration < params.max_iterations:
            # 1) Кооперативна зупинка
            if cancel is not None and cancel.is_cancelled():
                outcome = Outcome.CANCELLED
                break

            # 2) Градієнт
            try:
                g = forward_difference_gradient(func, x, params.gradient_eps)
            except EvaluationError as exc:
                outcome, error = Outcome.EVALUATION_FAILED, str(exc)
                break
            grad_evals += 1
            grad_norm = float(np.linalg.norm(g, ord=2))

            # 3) Збіжність
            if grad_norm < params.tolerance:
                outcome = Outcome.CONVERGED
                break

            # 4) Пошук кроку
            try:
                search = backtracking_step(
                    func,
                    x,
                    f_x,
                    -g,
                    step,
                    params.step_decay,
                    params.step_increase,
                    params.max_backtracking,
                )
            except EvaluationError as exc:
                outcome, error = Outcome.EVALUATION_FAILED, str(exc)
                break

            if not search.accepted:
                outcome = Outcome.STAGNATED
                break

            x, f_x, step = search.x_new, search.f_new, search.next_step
            iteration += 1

            sample = TrajectorySample(
                index=iteration,
                x=x.copy(),
                f=f_x,
                step_size=search.trial_step,
                meta={
                    "grad_norm": grad_norm,
                    "attempts": search.attempts,
                    "trial_step": search.trial_step,
                    "next_step": step,
                },
            )
            trajectory.append(sample)
            logger.debug(
                "k=%d: f=%.6e, |g|=%.3e, крок=%.3e, спроб=%d",
                iteration, f_x, grad_norm, search.trial_step, search.attempts,
            )
            if callback is not None:
                callback(sample)

        # 5) Цикл завершився сам: вичерпано max_iterations

        if outcome is Outcome.EVALUATION_FAILED:
            logger.warning("Помилка обчислення на ітерації %d: %s", iteration + 1, error)
        else:
            logger.info(
                "Завершено (%s): ітерацій %d, f* = %.6e, викликів f: %d",
                outcome.value, iteration, f_x, func.calls,
            )

        return OptimizationResult(
            x=x.copy(),
            f=f_x,
            iterations=iteration,
            trajectory=tuple(trajectory),
            outcome=outcome,
            func_evals=func.calls,
            grad_evals=grad_evals,
            final_step=step,
            error=error,
        )


__all__ = [
    "Outcome",
    "OptimizationResult",
    "IterationCallback",
    "GradientDescent",
]
