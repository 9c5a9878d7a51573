"""
Numerical differentiation over sampled intervals.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict

from ..core.errors import DegenerateIntervalError, InsufficientSamplesError
from ..function.function import as_function
from ..interval import SampledInterval


class ForwardDifference(BaseModel):
    """
    Forward difference quotient ``(f(b) - f(a)) / |b - a|`` per adjacent sample pair.

    Works on any scalar function and never consults a symbolic derivative.
    """

    model_config = ConfigDict(frozen=True)

    def differentiate(self, interval: SampledInterval, function: Any) -> np.ndarray:
        """
        Difference quotients, one per adjacent sample pair.

        Raises:
            InsufficientSamplesError: If the interval has fewer than two samples.
            DegenerateIntervalError: If two adjacent samples coincide.
        """
        count = interval.count()
        if count < 2:
            raise InsufficientSamplesError(count)

        points = np.array([interval[i] for i in range(count)], dtype=float)
        spacing = np.abs(points[1:] - points[:-1])
        if np.any(spacing == 0.0):
            index = int(np.argmin(spacing))
            raise DegenerateIntervalError(float(points[index]), method="forward difference")

        f = as_function(function)
        values = np.array([f.evaluate(float(x)) for x in points], dtype=float)
        return (values[1:] - values[:-1]) / spacing

    def __call__(self, interval: SampledInterval, function: Any) -> np.ndarray:
        return self.differentiate(interval, function)
