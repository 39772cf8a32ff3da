from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from weatherdash.config.models import DashboardConfig


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RuntimeError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise RuntimeError(
            f"Invalid YAML in {path}: expected a mapping at the top level, "
            f"got {type(raw).__name__}"
        )
    return raw


def load_config(path: str | Path | None = None) -> DashboardConfig:
    """
    Build the dashboard config, from a YAML file when one is given.

    An empty file yields the built-in defaults, as does no path at all.

    Raises:
        FileNotFoundError: if the file does not exist
        RuntimeError: for unreadable YAML or values that fail validation
    """
    if path is None:
        return DashboardConfig()

    config_path = Path(path).expanduser()
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = _read_mapping(config_path)
    try:
        return DashboardConfig.model_validate(raw)
    except ValidationError as e:
        raise RuntimeError(f"Invalid config values in {config_path}:\n{e}") from e
