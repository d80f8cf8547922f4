"""
expression.py

Цільова функція, задана текстовою формулою користувача.

Ідея:
    - формула на кшталт "x1^2 + x2^2" розбирається через SymPy
      (parse_expr, символ ^ означає степінь);
    - змінні називаються x1, ..., xn; будь-яке інше ім'я — помилка;
    - вираз компілюється lambdify(..., modules="math") в звичайну
      Python-функцію, тож окремі виклики дешеві;
    - обчислення або повертає float, або явно кидає EvaluationError.
"""

from __future__ import annotations

import math
from tokenize import TokenError
from typing import Dict, List

import numpy as np
import sympy
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from .functions import ArrayLike, EvaluationError

_TRANSFORMATIONS = standard_transformations + (convert_xor,)

# Глобальний простір parse_expr: лише те, що генерують перетворення.
# Решта імен стає Symbol/Function і відсіюється перевірками нижче.
_PARSER_GLOBALS: Dict[str, object] = {
    "Integer": sympy.Integer,
    "Float": sympy.Float,
    "Rational": sympy.Rational,
    "Symbol": sympy.Symbol,
    "Function": sympy.Function,
}

# Імена, дозволені у формулі крім змінних x1..xn
_NAMESPACE: Dict[str, object] = {
    "pi": sympy.pi,
    "e": sympy.E,
    "sqrt": sympy.sqrt,
    "exp": sympy.exp,
    "ln": sympy.log,
    "log": sympy.log,
    "abs": sympy.Abs,
    "sin": sympy.sin,
    "cos": sympy.cos,
    "tan": sympy.tan,
    "asin": sympy.asin,
    "acos": sympy.acos,
    "atan": sympy.atan,
    "sinh": sympy.sinh,
    "cosh": sympy.cosh,
    "tanh": sympy.tanh,
    "floor": sympy.floor,
    "ceil": sympy.ceiling,
    "min": sympy.Min,
    "max": sympy.Max,
}


class ExpressionError(ValueError):
    """Формулу не вдалося розібрати або вона містить невідомі імена."""


def variable_names(n_vars: int) -> List[str]:
    return [f"x{i}" for i in range(1, n_vars + 1)]


class ExpressionFunction:
    """
    Цільова функція f(x1, ..., xn), побудована з текстової формули.

    Використання:
        f = ExpressionFunction("x1^2 + x2^2", n_vars=2)
        f(np.array([2.0, 2.0]))  # 8.0
    """

    def __init__(self, formula: str, n_vars: int) -> None:
        if n_vars < 1:
            raise ExpressionError("Кількість змінних повинна бути не менше 1.")

        text = (formula or "").strip()
        if not text:
            raise ExpressionError("Формула порожня.")

        self.formula = text
        self.n_vars = int(n_vars)
        self.symbols = list(sympy.symbols(variable_names(self.n_vars)))

        local_dict: Dict[str, object] = dict(_NAMESPACE)
        local_dict.update({str(s): s for s in self.symbols})

        try:
            expr = parse_expr(
                text,
                local_dict=local_dict,
                global_dict=dict(_PARSER_GLOBALS),
                transformations=_TRANSFORMATIONS,
            )
        except (SyntaxError, TokenError, TypeError, ValueError, AttributeError, NameError) as exc:
            raise ExpressionError(f"Помилка розбору формули: {exc}") from exc

        if not isinstance(expr, sympy.Expr):
            raise ExpressionError("Формула повинна задавати числовий вираз.")

        unknown_funcs = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
        if unknown_funcs:
            raise ExpressionError(
                f"Невідомі функції у формулі: {', '.join(unknown_funcs)}"
            )

        allowed = set(self.symbols)
        unknown_vars = sorted(str(s) for s in expr.free_symbols if s not in allowed)
        if unknown_vars:
            raise ExpressionError(
                f"Невідомі змінні: {', '.join(unknown_vars)}. "
                f"Допустимі: {', '.join(variable_names(self.n_vars))}."
            )

        self.expression = expr
        try:
            self._compiled = sympy.lambdify(self.symbols, expr, modules="math")
        except Exception as exc:
            raise ExpressionError(f"Формулу неможливо обчислити: {exc}") from exc

    # ------------------------------------------------------------------
    # Обчислення
    # ------------------------------------------------------------------

    def evaluate(self, point: ArrayLike) -> float:
        """
        Обчислити f(point).

        Кидає EvaluationError, якщо розмірність точки не збігається з n
        або арифметика не визначена (ділення на нуль, sqrt від'ємного, ...).
        """
        values = np.asarray(point, dtype=float).ravel()
        if values.size != self.n_vars:
            raise EvaluationError(
                f"Неправильна розмірність точки: очікувалось {self.n_vars}, "
                f"отримано {values.size}."
            )

        try:
            result = float(self._compiled(*(float(v) for v in values)))
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise EvaluationError(
                f"Помилка обчислення f у точці {values.tolist()}: {exc}"
            ) from exc

        if not math.isfinite(result):
            raise EvaluationError(
                f"f у точці {values.tolist()} не є скінченним числом ({result})."
            )

        return result

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"ExpressionFunction({self.formula!r}, n_vars={self.n_vars})"


__all__ = [
    "ExpressionError",
    "ExpressionFunction",
    "variable_names",
]
