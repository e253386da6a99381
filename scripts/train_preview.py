"""Fit a model on synthetic data to exercise the engine end-to-end."""

from __future__ import annotations

from gd_regression.dataset import generate_synthetic_linear
from gd_regression.inference import predict
from gd_regression.training import Hyperparameters, fit


def main() -> None:
    dataset = generate_synthetic_linear(n_samples=100, slope=3.0, intercept=1.5, noise=0.05, seed=7)
    config = Hyperparameters(learning_rate=0.1, max_iterations=2000, batch_size=20)

    result = fit(dataset, config)
    metrics = result.metrics
    print(
        f"slope={result.model.slope:.4f} intercept={result.model.intercept:.4f} "
        f"mse={metrics.mse:.6f} r_squared={metrics.r_squared:.4f} "
        f"time={metrics.training_time * 1000:.1f}ms"
    )
    print(f"prediction(x=2.0)={predict(result.model, 2.0):.4f}")


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
