"""Command-line entry point: ``gd-regression train|predict|serve``."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import EngineConfig, configure_logging, load_config
from .dataset import Dataset, parse_values
from .exceptions import RegressionError
from .inference import LinearModel, predict
from .registry import load_model, save_model
from .service import resolve_hyperparameters, training_response
from .training import Hyperparameters, fit

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fit and query a univariate linear regression model.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML configuration file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    train_parser = subparsers.add_parser("train", help="Fit a model with mini-batch gradient descent.")
    train_parser.add_argument("--x", required=True, help="Comma-separated x values.")
    train_parser.add_argument("--y", required=True, help="Comma-separated y values.")
    train_parser.add_argument("--learning-rate", type=float, default=None)
    train_parser.add_argument("--max-iterations", type=int, default=None)
    train_parser.add_argument("--batch-size", type=int, default=None)
    train_parser.add_argument("--output", type=Path, default=None, help="Write the fitted model as JSON.")

    predict_parser = subparsers.add_parser("predict", help="Predict y for a single x value.")
    predict_parser.add_argument("--model", type=Path, default=None, help="Model JSON written by 'train --output'.")
    predict_parser.add_argument("--slope", type=float, default=None)
    predict_parser.add_argument("--intercept", type=float, default=None)
    predict_parser.add_argument("--x", type=float, required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    return parser.parse_args(argv)


def _run_train(args: argparse.Namespace, defaults: Hyperparameters) -> None:
    dataset = Dataset(parse_values(args.x, "x"), parse_values(args.y, "y"))
    hyperparameters = resolve_hyperparameters(
        defaults, args.learning_rate, args.max_iterations, args.batch_size
    )
    result = fit(dataset, hyperparameters)
    for key, value in training_response(result).items():
        print(f"{key}={value!r}")
    if args.output is not None:
        LOGGER.info("Model written to %s", save_model(result.model, args.output))


def _run_predict(args: argparse.Namespace) -> None:
    if args.model is not None:
        model = load_model(args.model)
    elif args.slope is not None and args.intercept is not None:
        model = LinearModel(slope=args.slope, intercept=args.intercept)
    else:
        raise SystemExit("predict requires --model or both --slope and --intercept")
    print(f"prediction={predict(model, args.x)!r}")


def _run_serve(args: argparse.Namespace, config: EngineConfig) -> None:
    import uvicorn

    from .server import create_app

    uvicorn.run(
        create_app(config),
        host=args.host or config.host,
        port=args.port or config.port,
        log_level=config.log_level.lower(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        configure_logging(config.log_level)
        if args.command == "train":
            _run_train(args, config.training)
        elif args.command == "predict":
            _run_predict(args)
        else:
            _run_serve(args, config)
    except RegressionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
