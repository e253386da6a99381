"""Request/response contract shared by the HTTP server and the CLI.

:class:`RegressionService` binds the pure engine functions to one
:class:`~gd_regression.registry.ModelRegistry`. A failed training call never
touches the registered model.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Dict, Optional

from .dataset import Dataset
from .inference import predict
from .registry import ModelRegistry
from .training import Hyperparameters, TrainingResult, fit


def training_response(result: TrainingResult) -> Dict[str, float]:
    """Serialise a training result into the public response shape."""

    metrics = result.metrics
    return {
        "slope": result.model.slope,
        "intercept": result.model.intercept,
        "training_time": metrics.training_time,
        "training_time_ms": metrics.training_time * 1000.0,
        "mse": metrics.mse,
        "r_squared": metrics.r_squared,
        "iterations": metrics.iterations,
    }


def resolve_hyperparameters(
    defaults: Hyperparameters,
    learning_rate: Optional[float] = None,
    max_iterations: Optional[int] = None,
    batch_size: Optional[int] = None,
) -> Hyperparameters:
    """Overlay the per-request values that were supplied on top of ``defaults``."""

    return Hyperparameters(
        learning_rate=defaults.learning_rate if learning_rate is None else learning_rate,
        max_iterations=defaults.max_iterations if max_iterations is None else max_iterations,
        batch_size=defaults.batch_size if batch_size is None else batch_size,
        tolerance=defaults.tolerance,
        patience=defaults.patience,
    )


class RegressionService:
    """Train and predict against a single session's current model."""

    def __init__(
        self,
        registry: Optional[ModelRegistry] = None,
        defaults: Optional[Hyperparameters] = None,
    ) -> None:
        self.registry = registry or ModelRegistry()
        self.defaults = defaults or Hyperparameters()

    def train(
        self,
        x_values: Sequence[float],
        y_values: Sequence[float],
        learning_rate: Optional[float] = None,
        max_iterations: Optional[int] = None,
        batch_size: Optional[int] = None,
    ) -> Dict[str, float]:
        dataset = Dataset(x_values, y_values)
        config = resolve_hyperparameters(self.defaults, learning_rate, max_iterations, batch_size)
        result = fit(dataset, config)
        self.registry.replace(result.model)
        return training_response(result)

    def predict(self, x_value: float) -> Dict[str, float]:
        model = self.registry.require()
        return {"prediction": predict(model, x_value)}
