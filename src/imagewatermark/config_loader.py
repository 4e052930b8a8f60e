"""Watermark configuration loader for YAML files."""

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .config import GeneralConfig, GridConfig, SingleConfig

_GENERAL_KEYS = set(GeneralConfig.model_fields)


def _read_yaml(config_path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Watermark config file not found: {config_path}")
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML in watermark config: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise yaml.YAMLError(f"Watermark config must be a mapping, got {type(data).__name__}")
    return data


def _nest_general(data: Dict[str, Any]) -> Dict[str, Any]:
    """Gather top-level general keys under ``general``."""
    nested = {k: v for k, v in data.items() if k not in _GENERAL_KEYS}
    general = dict(data.get("general") or {})
    for key in _GENERAL_KEYS & data.keys():
        general.setdefault(key, data[key])
    nested["general"] = general
    return nested


def load_single_config(config_path: Union[str, Path]) -> SingleConfig:
    """
    Load a single-placement configuration from YAML.

    Args:
        config_path: Path to the YAML file.

    Returns:
        SingleConfig parsed from the file. Ranges are not checked here.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValidationError: If a value has the wrong type.
    """
    return SingleConfig(**_nest_general(_read_yaml(config_path)))


def load_grid_config(config_path: Union[str, Path]) -> GridConfig:
    """Load a grid-placement configuration from YAML."""
    return GridConfig(**_nest_general(_read_yaml(config_path)))
