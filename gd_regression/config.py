"""Configuration loading for the service and CLI."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

from yaml import YAMLError, safe_load

from .exceptions import InvalidInputError
from .training import Hyperparameters

CONFIG_ENV_VAR = "GD_REGRESSION_CONFIG"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


@dataclass
class EngineConfig:
    """Settings read from ``configs/engine.yaml`` or an equivalent file."""

    training: Hyperparameters = field(default_factory=Hyperparameters)
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001


def _build_hyperparameters(raw: Dict[str, object]) -> Hyperparameters:
    allowed = {item.name for item in fields(Hyperparameters)}
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise InvalidInputError(f"Unknown training settings: {', '.join(unknown)}")
    hyperparameters = Hyperparameters(**raw)
    hyperparameters.validate()
    return hyperparameters


def parse_config(raw: Optional[Dict[str, object]]) -> EngineConfig:
    """Build an :class:`EngineConfig` from a parsed YAML mapping."""

    raw = dict(raw or {})
    unknown = sorted(set(raw) - {"training", "logging", "server"})
    if unknown:
        raise InvalidInputError(f"Unknown configuration sections: {', '.join(unknown)}")

    training_cfg = raw.get("training") or {}
    logging_cfg = raw.get("logging") or {}
    server_cfg = raw.get("server") or {}
    for name, section in (("training", training_cfg), ("logging", logging_cfg), ("server", server_cfg)):
        if not isinstance(section, dict):
            raise InvalidInputError(f"Configuration section '{name}' must be a mapping")

    port = server_cfg.get("port", 3001)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise InvalidInputError(f"server.port must be a valid TCP port, got {port!r}")

    return EngineConfig(
        training=_build_hyperparameters(training_cfg),
        log_level=str(logging_cfg.get("level", "INFO")).upper(),
        host=str(server_cfg.get("host", "127.0.0.1")),
        port=port,
    )


def load_config(path: Optional[Path] = None) -> EngineConfig:
    """Load configuration from ``path``, ``$GD_REGRESSION_CONFIG`` or defaults."""

    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return EngineConfig()
        path = Path(env_path)

    try:
        with Path(path).open("r", encoding="utf-8") as handle:
            raw = safe_load(handle)
    except (OSError, YAMLError) as exc:
        raise InvalidInputError(f"Cannot read configuration {path}: {exc}") from exc
    if raw is not None and not isinstance(raw, dict):
        raise InvalidInputError(f"Configuration {path} must contain a mapping")
    return parse_config(raw)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
