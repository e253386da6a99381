"""Univariate linear regression fitted by deterministic mini-batch gradient descent."""

from . import dataset, inference, registry, training
from .dataset import Dataset
from .exceptions import (
    InvalidInputError,
    ModelNotTrainedError,
    NumericDivergenceError,
    RegressionError,
)
from .inference import LinearModel, predict
from .training import Hyperparameters, TrainingMetrics, TrainingResult, evaluate_model, fit

__all__ = [
    "Dataset",
    "Hyperparameters",
    "InvalidInputError",
    "LinearModel",
    "ModelNotTrainedError",
    "NumericDivergenceError",
    "RegressionError",
    "TrainingMetrics",
    "TrainingResult",
    "dataset",
    "evaluate_model",
    "fit",
    "inference",
    "predict",
    "registry",
    "training",
]
