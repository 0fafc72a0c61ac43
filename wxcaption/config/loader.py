"""YAML config loader and dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from wxcaption.config.schema import WxConfig


def load_config(path: str | Path | None = None) -> WxConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults.
    """
    if path is None:
        return WxConfig()
    path = Path(path)
    if not path.exists():
        return WxConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return WxConfig(**raw)


def get_config_value(config: WxConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'output.max_alerts'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
