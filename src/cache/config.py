"""Configuration loader for the matrix cache."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from linalg.invert import DEFAULT_TOL

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "tolerance": {"type": "number", "exclusiveMinimum": 0},
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
        "log_file": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(CONFIG_SCHEMA)


def validate_config(data: Dict[str, Any]) -> None:
    errors = sorted(_validator.iter_errors(data), key=lambda e: e.path)
    if errors:
        messages = ", ".join(error.message for error in errors)
        raise ValueError(f"cache config validation failed: {messages}")


@dataclass(frozen=True)
class CacheConfig:
    tolerance: float = DEFAULT_TOL
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        log_file = data.get("log_file")
        return cls(
            tolerance=float(data.get("tolerance", DEFAULT_TOL)),
            log_level=str(data.get("log_level", "INFO")).upper(),
            log_file=Path(log_file) if log_file else None,
        )

    def solve_kwargs(self) -> Dict[str, Any]:
        return {"tol": self.tolerance}


ENV_MAP = {
    "tolerance": "MATRIX_CACHE_TOL",
    "log_level": "MATRIX_CACHE_LOG_LEVEL",
    "log_file": "MATRIX_CACHE_LOG_FILE",
}


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = json.loads(json.dumps(config_data))  # deep copy via json

    for key, env_name in ENV_MAP.items():
        if env_name not in os.environ:
            continue
        value: Any = os.environ[env_name]
        if key == "tolerance":
            value = float(value)
        merged[key] = value

    # YAML 1.1 reads "1e-8" (no dot) as a string
    if isinstance(merged.get("tolerance"), str):
        merged["tolerance"] = float(merged["tolerance"])
    if isinstance(merged.get("log_level"), str):
        merged["log_level"] = merged["log_level"].upper()

    return merged


def load_config(config_path: str | Path = "config/cache.defaults.yml") -> CacheConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = load_yaml(path)
    data = merge_env_overrides(data)
    validate_config(data)
    return CacheConfig.from_dict(data)
