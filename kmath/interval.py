"""
Sampled intervals.

A closed interval ``[min, max]`` discretized into ``count`` evenly spaced
sample points. The numeric methods in :mod:`kmath.numerics` only rely on the
:class:`SampledInterval` protocol, so any object exposing the same four
methods can be passed instead.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, runtime_checkable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator


@runtime_checkable
class SampledInterval(Protocol):
    """Ordered, finite, indexable discretization of a continuous span."""

    def min(self) -> float:
        ...

    def max(self) -> float:
        ...

    def count(self) -> int:
        ...

    def __getitem__(self, index: int) -> float:
        ...


class ClosedInterval(BaseModel):
    """
    Inclusive interval of floating point numbers between ``start`` and ``end``.

    Examples:
    - ClosedInterval(0, 4) - the two samples 0.0 and 4.0
    - ClosedInterval(0, 4, count=11) - samples 0.0, 0.4, ..., 4.0
    - ClosedInterval.from_accuracy(0, 4, 0.1) - same as above
    """

    model_config = ConfigDict(frozen=True)

    start: float
    end: float
    num: int = Field(default=2, ge=1)

    _samples: np.ndarray = PrivateAttr()

    def __init__(self, start: float | None = None, end: float | None = None, count: int = 2, **kwargs: Any) -> None:
        if start is not None:
            kwargs.setdefault("start", start)
        if end is not None:
            kwargs.setdefault("end", end)
        kwargs.setdefault("num", count)
        super().__init__(**kwargs)

    @field_validator("start", "end", mode="before")
    @classmethod
    def _validate_endpoint(cls, value: Any) -> float:
        value = float(value)
        if not np.isfinite(value):
            raise ValueError("ClosedInterval endpoints must be finite")
        return value

    @model_validator(mode="after")
    def _validate_order(self) -> ClosedInterval:
        if self.start > self.end:
            raise ValueError(f"ClosedInterval requires start <= end, got [{self.start}, {self.end}]")
        return self

    def model_post_init(self, __context: Any) -> None:
        samples = np.linspace(self.start, self.end, self.num, dtype=float)
        samples.setflags(write=False)
        self._samples = samples

    @classmethod
    def from_accuracy(cls, start: float, end: float, accuracy: float = 1.0) -> ClosedInterval:
        """
        Build an interval whose spacing is ``accuracy`` times its length.

        An accuracy of 1.0 keeps only the endpoints, 0.1 yields 11 samples.
        """
        if accuracy <= 0.0:
            raise ValueError("accuracy must be strictly positive")
        # tolerate 1/0.1 style representation error before truncating
        count = int(1.0 / accuracy + 1e-9) + 1
        return cls(start, end, count=count)

    # Interval contract

    def min(self) -> float:
        return self.start

    def max(self) -> float:
        return self.end

    def count(self) -> int:
        return self.num

    def __getitem__(self, index: int) -> float:
        return float(self._samples[index])

    def __len__(self) -> int:
        return self.num

    def __iter__(self) -> Iterator[float]:  # type: ignore[override]
        return (float(value) for value in self._samples)

    # Helpers

    def samples(self) -> np.ndarray:
        """Read-only array of the sample points."""
        return self._samples

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    def length(self) -> float:
        return self.end - self.start

    def median(self) -> float:
        return float(self._samples[self.num // 2])

    def avg(self) -> float:
        return float(np.mean(self._samples))

    def sum(self) -> float:
        return float(np.sum(self._samples))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClosedInterval):
            return NotImplemented
        return (self.start, self.end, self.num) == (other.start, other.end, other.num)

    def __hash__(self) -> int:
        return hash((self.start, self.end, self.num))

    def to_string(self) -> str:
        return f"[{self.start}, {self.end}]"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ClosedInterval({self.start}, {self.end}, count={self.num})"
