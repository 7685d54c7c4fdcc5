"""
Config - Instrument Parameter Loading

Reads the YAML parameter file describing instrument update intervals,
ambient defaults and mode machines.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'params' / 'instrument_params.yaml'


def load_config(path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file (defaults to the bundled params/instrument_params.yaml)

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        ConfigError: File missing, unreadable or not a YAML mapping
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except OSError as e:
        logger.error(f"Failed to read config {config_path}: {e}")
        raise ConfigError(f"Cannot read config file {config_path}") from e
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse config {config_path}: {e}")
        raise ConfigError(f"Invalid YAML in {config_path}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.error(f"Config root in {config_path} is not a mapping")
        raise ConfigError(f"Config root must be a mapping, got {type(config).__name__}")

    logger.info(f"Loaded config from {config_path}")
    return config
