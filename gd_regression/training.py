from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral, Real

from .dataset import Dataset
from .exceptions import InvalidInputError, NumericDivergenceError
from .inference import LinearModel

LOGGER = logging.getLogger(__name__)

# Absolute MSE under which a constant-target dataset counts as perfectly fit.
ZERO_MSE_TOLERANCE = 1e-12


@dataclass
class Hyperparameters:
    """Configuration for the gradient descent loop.

    ``tolerance`` enables early stopping: training ends once the batch loss
    has not improved on the best loss by more than ``tolerance`` for
    ``patience`` consecutive iterations. ``None`` runs every iteration.
    """

    learning_rate: float = 0.01
    max_iterations: int = 1000
    batch_size: int = 32
    tolerance: float | None = None
    patience: int = 5

    def validate(self) -> None:
        lr = self.learning_rate
        if isinstance(lr, bool) or not isinstance(lr, Real) or not math.isfinite(lr) or lr <= 0:
            raise InvalidInputError(f"learning_rate must be a positive finite number, got {lr!r}")
        for name in ("max_iterations", "batch_size", "patience"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
                raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")
        tol = self.tolerance
        if tol is not None and (
            isinstance(tol, bool) or not isinstance(tol, Real) or not math.isfinite(tol) or tol < 0
        ):
            raise InvalidInputError(f"tolerance must be a non-negative number, got {tol!r}")


@dataclass(frozen=True)
class TrainingMetrics:
    """Statistics of a fit, computed over the full training dataset."""

    mse: float
    r_squared: float
    training_time: float
    iterations: int


@dataclass(frozen=True)
class TrainingResult:
    """Result of a training run."""

    model: LinearModel
    metrics: TrainingMetrics


def _batch_step(
    batch_x: Sequence[float],
    batch_y: Sequence[float],
    slope: float,
    intercept: float,
) -> tuple[float, float, float]:
    """Return ``(grad_slope, grad_intercept, batch_loss)`` for one batch."""

    grad_slope = 0.0
    grad_intercept = 0.0
    loss = 0.0
    for x, y in zip(batch_x, batch_y):
        error = slope * x + intercept - y
        grad_slope += error * x
        grad_intercept += error
        loss += error * error
    n_batch = len(batch_x)
    return 2.0 * grad_slope / n_batch, 2.0 * grad_intercept / n_batch, loss / n_batch


def evaluate_model(dataset: Dataset, model: LinearModel) -> dict[str, float]:
    """Compute MSE and R² of ``model`` over every sample of ``dataset``.

    When all targets are equal the total sum of squares is zero (up to the
    rounding of the mean) and R² is defined as 1.0 for a numerically perfect
    fit and 0.0 otherwise.
    """

    residual_ss = 0.0
    for x, y in zip(dataset.x_values, dataset.y_values):
        error = model.slope * x + model.intercept - y
        residual_ss += error * error
    mse = residual_ss / len(dataset)

    y_mean = sum(dataset.y_values) / len(dataset)
    total_ss = 0.0
    for y in dataset.y_values:
        diff = y - y_mean
        total_ss += diff * diff

    if min(dataset.y_values) == max(dataset.y_values):
        r_squared = 1.0 if mse <= ZERO_MSE_TOLERANCE else 0.0
    else:
        r_squared = 1.0 - residual_ss / total_ss
    return {"mse": mse, "r_squared": r_squared}


def fit(dataset: Dataset, hyperparameters: Hyperparameters | None = None) -> TrainingResult:
    """Fit ``y = slope * x + intercept`` by mini-batch gradient descent.

    Batches follow a sequential cyclic schedule (see
    :meth:`Dataset.cyclic_batches`), so identical inputs always produce
    identical parameters. Raises :class:`NumericDivergenceError` when the
    final parameters or loss are not finite.
    """

    config = hyperparameters or Hyperparameters()
    config.validate()
    LOGGER.info(
        "Training on %d samples (learning_rate=%s, max_iterations=%d, batch_size=%d)",
        len(dataset),
        config.learning_rate,
        config.max_iterations,
        config.batch_size,
    )

    started = time.perf_counter()
    slope = 0.0
    intercept = 0.0
    best_loss = math.inf
    stale = 0
    iterations = 0

    batches = dataset.cyclic_batches(config.batch_size)
    for iteration in range(1, config.max_iterations + 1):
        batch_x, batch_y = next(batches)
        grad_slope, grad_intercept, loss = _batch_step(batch_x, batch_y, slope, intercept)
        slope -= config.learning_rate * grad_slope
        intercept -= config.learning_rate * grad_intercept
        iterations = iteration

        if config.tolerance is None:
            continue
        if loss < best_loss - config.tolerance:
            best_loss = loss
            stale = 0
        else:
            stale += 1
            if stale >= config.patience:
                LOGGER.debug("Early stopping after %d iterations (loss=%s)", iteration, loss)
                break

    model = LinearModel(slope=slope, intercept=intercept)
    scores = evaluate_model(dataset, model)
    training_time = time.perf_counter() - started

    if not all(math.isfinite(value) for value in (slope, intercept, scores["mse"])):
        LOGGER.warning("Training diverged after %d iterations", iterations)
        raise NumericDivergenceError(slope, intercept, scores["mse"])

    metrics = TrainingMetrics(
        mse=scores["mse"],
        r_squared=scores["r_squared"],
        training_time=training_time,
        iterations=iterations,
    )
    LOGGER.info(
        "Finished in %.4fs: slope=%s intercept=%s mse=%s r_squared=%s",
        training_time,
        slope,
        intercept,
        metrics.mse,
        metrics.r_squared,
    )
    return TrainingResult(model=model, metrics=metrics)
