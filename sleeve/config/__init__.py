# Sleeve Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from sleeve.config.defaults import DEFAULT_CONFIG, generate_default_config
from sleeve.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from sleeve.config.schema import (
    OutputConfig,
    PropertiesConfig,
    RunnerConfig,
    SleeveConfig,
)

__all__ = [
    # Schema
    "SleeveConfig",
    "RunnerConfig",
    "PropertiesConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
