from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .exceptions import ModelNotTrainedError


@dataclass(frozen=True)
class LinearModel:
    """Fitted parameters of ``y = slope * x + intercept``."""

    slope: float
    intercept: float
    trained: bool = True

    def to_dict(self) -> dict[str, float | bool]:
        return {"slope": self.slope, "intercept": self.intercept, "trained": self.trained}


def _require_trained(model: LinearModel | None) -> LinearModel:
    if model is None or not model.trained:
        raise ModelNotTrainedError("Model not trained yet. Train the model first.")
    return model


def predict(model: LinearModel | None, x: float) -> float:
    """Return ``slope * x + intercept`` for a trained ``model``.

    Non-finite ``x`` is accepted and simply yields a non-finite prediction.
    """

    model = _require_trained(model)
    return model.slope * float(x) + model.intercept


def predict_many(model: LinearModel | None, x_values: Sequence[float]) -> list[float]:
    """Generate predictions for every value in ``x_values``."""

    model = _require_trained(model)
    return [model.slope * float(x) + model.intercept for x in x_values]
