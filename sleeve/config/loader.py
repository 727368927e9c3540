# Sleeve Configuration Loader
# Reads ~/.config/sleeve/config.yaml (or $SLEEVE_CONFIG) on top of the built-in defaults

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from sleeve.config.defaults import DEFAULT_CONFIG, generate_default_config
from sleeve.config.schema import SleeveConfig
from sleeve.utils.paths import atomic_write

CONFIG_ENV_VAR = "SLEEVE_CONFIG"


def get_config_path() -> Path:
    """Config file location: $SLEEVE_CONFIG, else ~/.config/sleeve/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "sleeve" / "config.yaml"


def _read_yaml(config_path: Path) -> Any:
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _with_defaults(data: dict) -> dict:
    """Overlay data on DEFAULT_CONFIG one section at a time."""
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(section), dict):
            merged[section].update(value)
        else:
            # Malformed sections go through unchanged so the schema rejects them
            merged[section] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> SleeveConfig:
    """
    Load the sleeve configuration.

    Without config_path the default location is read and a missing file
    means the built-in defaults. An explicit config_path must exist.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        ValueError: If the file isn't valid YAML or doesn't hold a mapping.
        ValidationError: If a setting fails the schema.
    """
    explicit = config_path is not None
    config_path = config_path or get_config_path()

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\nRun 'sleeve config init' to create one."
            )
        return SleeveConfig.model_validate(DEFAULT_CONFIG)

    try:
        data = _read_yaml(config_path)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping: {config_path}")

    return SleeveConfig.model_validate(_with_defaults(data))


def save_config(config: SleeveConfig, config_path: Optional[Path] = None) -> Path:
    """Write config as YAML and return where it went."""
    config_path = config_path or get_config_path()
    data = config.model_dump(mode="json")
    atomic_write(config_path, yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    return config_path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Write the commented default config unless a file is already there.

    Returns:
        Tuple of (config_path, was_created).
    """
    config_path = config_path or get_config_path()
    if config_path.exists():
        return config_path, False

    atomic_write(config_path, generate_default_config())
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Check a config file and describe every problem found.

    Schema errors are reported as "section -> key: message".

    Returns:
        Tuple of (is_valid, error_messages).
    """
    config_path = config_path or get_config_path()
    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        data = _read_yaml(config_path)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]
    if not isinstance(data, dict):
        return False, ["Configuration must be a mapping"]

    try:
        SleeveConfig.model_validate(_with_defaults(data))
    except ValidationError as e:
        return False, [" -> ".join(str(part) for part in err["loc"]) + f": {err['msg']}" for err in e.errors()]

    return True, []
