"""Local JSON config for solver invocation settings."""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_CONFIG_DIRNAME = ".lpbridge"
_CONFIG_FILENAME = "config.json"

_ENV_OVERRIDES = {
    "glpsol_command": "LPBRIDGE_GLPSOL",
    "timeout": "LPBRIDGE_TIMEOUT",
    "artifact_route": "LPBRIDGE_ARTIFACT_ROUTE",
}


class ArtifactRoute(str, Enum):
    STDERR = "stderr"
    FILE = "file"


class SolverSettings(BaseModel):
    glpsol_command: str = Field(default="glpsol", min_length=1)
    timeout: float | None = Field(default=None, gt=0)
    artifact_route: ArtifactRoute = ArtifactRoute.STDERR


def config_dir() -> Path:
    override = os.environ.get("LPBRIDGE_HOME")
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / _CONFIG_DIRNAME).resolve()


def config_path() -> Path:
    return config_dir() / _CONFIG_FILENAME


def _read_config() -> dict[str, Any]:
    path = config_path()
    if not path.exists():
        return {}
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _write_config(payload: dict[str, Any]) -> None:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def load_settings() -> SolverSettings:
    """Settings from ~/.lpbridge/config.json, with LPBRIDGE_* environment overrides."""
    data = {key: value for key, value in _read_config().items() if key in SolverSettings.model_fields}
    for key, env_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[key] = value.strip()
    return SolverSettings.model_validate(data)


def save_setting(key: str, value: str) -> None:
    if key not in SolverSettings.model_fields:
        raise ValueError(f"unknown setting '{key}'")
    data = _read_config()
    data[key] = value
    settings = SolverSettings.model_validate({k: v for k, v in data.items() if k in SolverSettings.model_fields})
    data[key] = settings.model_dump(mode="json")[key]
    _write_config(data)


def clear_setting(key: str) -> None:
    data = _read_config()
    if key in data:
        data.pop(key, None)
        _write_config(data)
