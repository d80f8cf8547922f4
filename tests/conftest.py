"""
Pytest configuration and shared fixtures for descent_app tests.
"""

from __future__ import annotations

import numpy as np
import pytest

from descent_app.core.functions import EvaluationError


class CountingFunction:
    """Цільова функція, що рахує свої виклики."""

    def __init__(self, func):
        self.func = func
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return float(self.func(np.asarray(x, dtype=float)))


@pytest.fixture
def sphere():
    """f(x) = sum x_i^2."""
    return lambda x: float(np.dot(x, x))


@pytest.fixture
def counting():
    """Фабрика CountingFunction."""
    return CountingFunction


@pytest.fixture
def absolute():
    """f(x) = |x1|: градієнт справа в нулі дорівнює 1, спуск з нуля неможливий."""
    return lambda x: abs(float(x[0]))


@pytest.fixture
def positive_only():
    """f(x) = x1, визначена лише для x1 >= 0."""

    def func(x):
        if x[0] < 0.0:
            raise EvaluationError(f"f не визначена при x1 = {x[0]}")
        return float(x[0])

    return func
