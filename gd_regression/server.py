"""FastAPI application exposing the regression engine over HTTP."""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import EngineConfig, load_config
from .exceptions import InvalidInputError, ModelNotTrainedError, NumericDivergenceError
from .registry import ModelRegistry
from .service import RegressionService

LOGGER = logging.getLogger(__name__)


class TrainRequest(BaseModel):
    x_values: List[float]
    y_values: List[float]
    learning_rate: Optional[float] = None
    max_iterations: Optional[int] = None
    batch_size: Optional[int] = None


class PredictRequest(BaseModel):
    x_value: float


def _json_number(value: float) -> Union[float, str]:
    """JSON has no inf/nan, so non-finite values travel as "inf", "-inf" or "nan"."""

    if math.isfinite(value):
        return value
    return repr(value)


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def create_app(config: Optional[EngineConfig] = None) -> FastAPI:
    """Build an application whose routes share one model registry."""

    config = config or load_config()
    app = FastAPI(title="Gradient Descent Regression Service", version="1.0.0")
    app.state.service = RegressionService(registry=ModelRegistry(), defaults=config.training)

    @app.exception_handler(InvalidInputError)
    async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        LOGGER.info("Rejected %s: %s", request.url.path, exc)
        return _error_response(400, exc)

    @app.exception_handler(ModelNotTrainedError)
    async def _not_trained(request: Request, exc: ModelNotTrainedError) -> JSONResponse:
        LOGGER.info("Rejected %s: %s", request.url.path, exc)
        return _error_response(400, exc)

    @app.exception_handler(NumericDivergenceError)
    async def _diverged(request: Request, exc: NumericDivergenceError) -> JSONResponse:
        LOGGER.warning("Training diverged: %s", exc)
        return _error_response(422, exc)

    @app.get("/healthz")
    def healthz() -> Dict[str, str]:
        """Liveness probe."""

        return {"status": "ok"}

    @app.post("/api/train")
    def train(body: TrainRequest) -> Dict[str, Any]:
        LOGGER.info("Received training request with %d samples", len(body.x_values))
        return app.state.service.train(
            body.x_values,
            body.y_values,
            learning_rate=body.learning_rate,
            max_iterations=body.max_iterations,
            batch_size=body.batch_size,
        )

    @app.post("/api/predict")
    def predict(body: PredictRequest) -> Dict[str, Any]:
        response = app.state.service.predict(body.x_value)
        return {"prediction": _json_number(response["prediction"])}

    return app


__all__ = ["PredictRequest", "TrainRequest", "create_app"]
