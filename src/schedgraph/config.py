"""schedgraph runtime configuration helpers."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

_LOG_LEVEL_ENV = "SCHEDGRAPH_LOG_LEVEL"
_DATA_DIR_ENV = "SCHEDGRAPH_DATA_DIR"
_SEED_ENV = "SCHEDGRAPH_SEED"
_DEFAULT_WEIGHT_ENV = "SCHEDGRAPH_DEFAULT_WEIGHT"

BATCH_KIND = "schedgraph.batch.v1"

LOGGER = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when environment or batch configuration is invalid."""


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if not value:
        return None
    return value.strip() or None


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def log_level() -> str:
    return (_env_str(_LOG_LEVEL_ENV) or "WARNING").upper()


def data_dir() -> Path:
    return Path(_env_str(_DATA_DIR_ENV) or "data")


def default_seed() -> int:
    return _env_int(_SEED_ENV, 42)


def default_edge_weight() -> int:
    return _env_int(_DEFAULT_WEIGHT_ENV, 1)


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root handler at ``level`` (falls back to the environment)."""

    name = (level or log_level()).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level {name!r}")
    logging.basicConfig(level=numeric, format="%(levelname)s %(name)s: %(message)s")
    LOGGER.debug("configure_logging level=%s", name)


ShortestSource = Union[str, int]


@dataclass(frozen=True)
class AnalysisOptions:
    shortest_source: ShortestSource = "first"
    graphml_dir: Optional[Path] = None


@dataclass(frozen=True)
class BatchConfig:
    name: str
    datasets: List[Path]
    analysis: AnalysisOptions = field(default_factory=AnalysisOptions)


def _resolve_path(base: Path, value: str) -> Path:
    path = Path(value.strip())
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _parse_shortest_source(value: Any) -> ShortestSource:
    if value is None or value == "first":
        return "first"
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError("analysis.shortest_source must be 'first' or a non-negative integer.")
    return value


def _parse_analysis(cfg_path: Path, data: Dict[str, Any]) -> AnalysisOptions:
    analysis = data.get("analysis") or {}
    if not isinstance(analysis, dict):
        raise ConfigError("'analysis' must be a mapping.")
    graphml = analysis.get("graphml_dir")
    return AnalysisOptions(
        shortest_source=_parse_shortest_source(analysis.get("shortest_source")),
        graphml_dir=_resolve_path(cfg_path.parent, str(graphml)) if graphml else None,
    )


def load_batch_config(path: Path) -> BatchConfig:
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Batch config '{cfg_path}' not found.")
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError("Batch config must be a YAML mapping.")
    kind = str(data.get("kind", "")).strip()
    if kind != BATCH_KIND:
        raise ConfigError(f"Unknown batch kind {kind!r}. Supported kind: '{BATCH_KIND}'.")
    datasets = data.get("datasets")
    if not isinstance(datasets, list) or not datasets:
        raise ConfigError("Batch config requires a non-empty 'datasets' list.")
    return BatchConfig(
        name=str(data.get("name") or cfg_path.stem),
        datasets=[_resolve_path(cfg_path.parent, str(entry)) for entry in datasets],
        analysis=_parse_analysis(cfg_path, data),
    )


__all__ = [
    "ConfigError",
    "AnalysisOptions",
    "BatchConfig",
    "BATCH_KIND",
    "configure_logging",
    "data_dir",
    "default_edge_weight",
    "default_seed",
    "load_batch_config",
    "log_level",
]
