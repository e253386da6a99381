import pytest
from fastapi.testclient import TestClient

from gd_regression.config import EngineConfig
from gd_regression.server import create_app

LINEAR_BODY = {
    "x_values": [1, 2, 3, 4],
    "y_values": [2, 4, 6, 8],
    "learning_rate": 0.05,
    "max_iterations": 5000,
}


@pytest.fixture
def client():
    return TestClient(create_app(EngineConfig()))


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_predict_before_train(client):
    response = client.post("/api/predict", json={"x_value": 1.0})
    assert response.status_code == 400
    assert "not trained" in response.json()["error"]


def test_train_then_predict(client):
    response = client.post("/api/train", json=LINEAR_BODY)
    assert response.status_code == 200
    body = response.json()
    assert body["slope"] == pytest.approx(2.0, abs=1e-6)
    assert body["r_squared"] == pytest.approx(1.0, abs=1e-9)
    assert body["iterations"] == 5000

    response = client.post("/api/predict", json={"x_value": 6})
    assert response.status_code == 200
    assert response.json()["prediction"] == pytest.approx(12.0, abs=1e-5)


def test_train_rejects_mismatched_lengths(client):
    response = client.post("/api/train", json={"x_values": [1, 2, 3], "y_values": [1, 2]})
    assert response.status_code == 400
    assert "same length" in response.json()["error"]
    assert client.post("/api/predict", json={"x_value": 1.0}).status_code == 400


def test_train_rejects_non_positive_hyperparameters(client):
    response = client.post("/api/train", json={**LINEAR_BODY, "batch_size": 0})
    assert response.status_code == 400


def test_train_reports_divergence(client):
    response = client.post("/api/train", json={**LINEAR_BODY, "learning_rate": 1.0})
    assert response.status_code == 422
    assert "diverged" in response.json()["error"]
    assert client.post("/api/predict", json={"x_value": 1.0}).status_code == 400


def test_malformed_body_is_rejected(client):
    response = client.post("/api/predict", json={"x_value": "abc"})
    assert response.status_code == 422


def test_apps_do_not_share_models(client):
    assert client.post("/api/train", json=LINEAR_BODY).status_code == 200
    other = TestClient(create_app(EngineConfig()))
    assert other.post("/api/predict", json={"x_value": 1.0}).status_code == 400


def test_non_finite_prediction_is_marked(client):
    assert client.post("/api/train", json=LINEAR_BODY).status_code == 200

    response = client.post("/api/predict", json={"x_value": 1e308})
    assert response.status_code == 200
    assert response.json() == {"prediction": "inf"}

    response = client.post("/api/predict", json={"x_value": -1e308})
    assert response.json() == {"prediction": "-inf"}
