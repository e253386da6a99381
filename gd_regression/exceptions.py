"""Project-specific exceptions."""


class RegressionError(Exception):
    """Base exception for the project."""


class InvalidInputError(RegressionError, ValueError):
    """Raised when a dataset or hyperparameter fails validation."""


class ModelNotTrainedError(RegressionError, RuntimeError):
    """Raised when a prediction is requested before any successful fit."""


class NumericDivergenceError(RegressionError, ArithmeticError):
    """Raised when training ends with non-finite parameters or loss."""

    def __init__(self, slope: float, intercept: float, mse: float) -> None:
        super().__init__(
            "Training diverged (slope={}, intercept={}, mse={}); "
            "try a smaller learning rate".format(slope, intercept, mse)
        )
        self.slope = slope
        self.intercept = intercept
        self.mse = mse
