import math

import pytest

from gd_regression.dataset import Dataset
from gd_regression.exceptions import ModelNotTrainedError
from gd_regression.inference import LinearModel, predict, predict_many
from gd_regression.training import Hyperparameters, fit


def test_predict_after_training():
    dataset = Dataset([1.0, 2.0, 3.0, 4.0], [3.0, 5.0, 7.0, 9.0])
    result = fit(dataset, Hyperparameters(learning_rate=0.05, max_iterations=5000))

    assert predict(result.model, 5.0) == pytest.approx(11.0, abs=1e-5)
    assert predict(result.model, 5.0) == predict(result.model, 5.0)


def test_predict_uses_linear_formula():
    model = LinearModel(slope=2.0, intercept=-1.0)
    assert predict(model, 3) == 5.0
    assert predict_many(model, [0.0, 1.0, 2.0]) == [-1.0, 1.0, 3.0]


def test_predict_non_finite_input_passes_through():
    model = LinearModel(slope=2.0, intercept=1.0)
    assert math.isnan(predict(model, float("nan")))
    assert predict(model, float("inf")) == float("inf")


@pytest.mark.parametrize("model", [None, LinearModel(1.0, 0.0, trained=False)])
def test_predict_requires_trained_model(model):
    with pytest.raises(ModelNotTrainedError):
        predict(model, 1.0)
    with pytest.raises(ModelNotTrainedError):
        predict_many(model, [1.0])
