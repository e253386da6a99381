from __future__ import annotations

import math
import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from numbers import Real

from .exceptions import InvalidInputError


def _coerce_values(values: Iterable[object], name: str) -> list[float]:
    coerced: list[float] = []
    for idx, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidInputError(f"{name}[{idx}] is not a number: {value!r}")
        number = float(value)
        if not math.isfinite(number):
            raise InvalidInputError(f"{name}[{idx}] must be finite, got {number}")
        coerced.append(number)
    return coerced


@dataclass(frozen=True, init=False)
class Dataset:
    """An ordered, validated sequence of ``(x, y)`` pairs."""

    x_values: tuple[float, ...]
    y_values: tuple[float, ...]

    def __init__(self, x_values: Iterable[object], y_values: Iterable[object]) -> None:
        xs = _coerce_values(x_values, "x_values")
        ys = _coerce_values(y_values, "y_values")
        if not xs or not ys:
            raise InvalidInputError("x_values and y_values must not be empty")
        if len(xs) != len(ys):
            raise InvalidInputError(
                f"x_values and y_values must have the same length ({len(xs)} != {len(ys)})"
            )
        object.__setattr__(self, "x_values", tuple(xs))
        object.__setattr__(self, "y_values", tuple(ys))

    def __len__(self) -> int:
        return len(self.x_values)

    def batches(self, batch_size: int) -> Iterator[tuple[tuple[float, ...], tuple[float, ...]]]:
        """Iterate over the dataset once in consecutive slices of ``batch_size``.

        The final slice is shorter when ``batch_size`` does not divide the
        dataset length.
        """

        if batch_size <= 0:
            raise InvalidInputError("batch_size must be positive")
        for start in range(0, len(self), batch_size):
            end = min(start + batch_size, len(self))
            yield self.x_values[start:end], self.y_values[start:end]

    def cyclic_batches(
        self, batch_size: int
    ) -> Iterator[tuple[tuple[float, ...], tuple[float, ...]]]:
        """Yield the slices of :meth:`batches` in order, forever.

        Iteration ``k`` receives slice ``k mod n_slices``. A ``batch_size`` at
        least as large as the dataset produces the full dataset every time.
        """

        slices = list(self.batches(min(batch_size, len(self))))
        while True:
            yield from slices


def parse_values(text: str, name: str = "values") -> list[float]:
    """Parse a comma-separated list such as ``"1, 2.5,3"`` into floats."""

    items = [item.strip() for item in text.split(",")] if text.strip() else []
    values: list[float] = []
    for item in items:
        try:
            values.append(float(item))
        except ValueError as exc:
            raise InvalidInputError(f"Invalid number in {name}: {item!r}") from exc
    return values


def generate_synthetic_linear(
    n_samples: int,
    slope: float = 2.0,
    intercept: float = 0.0,
    noise: float = 0.1,
    seed: int | None = None,
) -> Dataset:
    """Generate ``y = slope * x + intercept + N(0, noise)`` on evenly spaced x."""

    if n_samples <= 0:
        raise InvalidInputError("n_samples must be positive")
    rng = random.Random(seed)
    step = 1.0 / max(n_samples - 1, 1)
    x_values = [idx * step for idx in range(n_samples)]
    y_values = [slope * x + intercept + rng.gauss(0.0, noise) for x in x_values]
    return Dataset(x_values, y_values)
