from __future__ import annotations

import json
import logging
import math
import threading
from pathlib import Path

from .exceptions import InvalidInputError, ModelNotTrainedError
from .inference import LinearModel

LOGGER = logging.getLogger(__name__)


class ModelRegistry:
    """Hold the current model of one session behind a single lock.

    Replacing the model is atomic: concurrent readers see either the previous
    model or the new one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._model: LinearModel | None = None

    def get(self) -> LinearModel | None:
        with self._lock:
            return self._model

    def require(self) -> LinearModel:
        model = self.get()
        if model is None:
            raise ModelNotTrainedError("Model not trained yet. Train the model first.")
        return model

    def replace(self, model: LinearModel) -> None:
        if not model.trained:
            raise InvalidInputError("Only trained models can be registered")
        with self._lock:
            self._model = model
        LOGGER.debug("Registered model slope=%s intercept=%s", model.slope, model.intercept)

    def clear(self) -> None:
        with self._lock:
            self._model = None


def save_model(model: LinearModel, path: str | Path) -> Path:
    """Write ``model`` to ``path`` as JSON and return the path."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(model.to_dict(), indent=2))
    return path


def load_model(path: str | Path) -> LinearModel:
    """Load a model previously written with :func:`save_model`."""

    path = Path(path)
    try:
        payload = json.loads(path.read_text())
        slope = float(payload["slope"])
        intercept = float(payload["intercept"])
        trained = payload.get("trained", False) is True
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
        raise InvalidInputError(f"Cannot read model from {path}: {exc}") from exc
    if not trained:
        raise ModelNotTrainedError(f"Model stored in {path} is not trained")
    if not (math.isfinite(slope) and math.isfinite(intercept)):
        raise InvalidInputError(f"Model stored in {path} has non-finite parameters")
    return LinearModel(slope=slope, intercept=intercept)
