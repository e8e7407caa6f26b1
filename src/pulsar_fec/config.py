# file: src/pulsar_fec/config.py

"""
Configuration loading for the FEC codec.

Defaults live in default_config.yaml next to this module. A user YAML file
is deep-merged over the defaults, so it only needs the keys it changes.
"""

import copy
import functools
import logging
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ECCConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

_FALLBACK_CONFIG = {
    "ecc": {
        "reed_solomon": {
            "parity_ratio": 0.25,
            "min_parity": 4,
            "max_parity": 16,
        },
        "interleaving": {
            "min_rows": 4,
            "max_rows": 16,
        },
    }
}


def _deep_merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: str) -> dict:
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ECCConfigurationError(f"Cannot load config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ECCConfigurationError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


@functools.lru_cache(maxsize=1)
def _packaged_defaults() -> Dict[str, Any]:
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return _deep_merge(_FALLBACK_CONFIG, _read_yaml(DEFAULT_CONFIG_PATH))
    logger.debug("default_config.yaml not found, using built-in defaults")
    return _FALLBACK_CONFIG


def get_default_config() -> Dict[str, Any]:
    """
    Return a fresh copy of the default configuration.

    Falls back to hardcoded defaults if the packaged YAML is missing.
    """
    return copy.deepcopy(_packaged_defaults())


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file merged over the defaults.

    Args:
        config_path: Path to a YAML file, or None for defaults only

    Returns:
        Validated configuration dictionary

    Raises:
        ECCConfigurationError: If the file cannot be read or holds invalid values
    """
    config = get_default_config()
    if config_path is not None:
        config = _deep_merge(config, _read_yaml(config_path))
        logger.debug("Loaded FEC config from %s", config_path)
    validate_config(config)
    return config


def resolve_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge a caller-supplied (possibly partial) config dict over the defaults."""
    if config is None:
        return get_default_config()
    merged = _deep_merge(get_default_config(), config)
    validate_config(merged)
    return merged


def validate_config(config: Dict[str, Any]) -> None:
    """
    Check value ranges of the ECC section.

    Raises:
        ECCConfigurationError: On a missing section or out-of-range value
    """
    try:
        rs = config['ecc']['reed_solomon']
        il = config['ecc']['interleaving']
        ratio = float(rs['parity_ratio'])
        min_parity = int(rs['min_parity'])
        max_parity = int(rs['max_parity'])
        min_rows = int(il['min_rows'])
        max_rows = int(il['max_rows'])
    except (KeyError, TypeError, ValueError) as e:
        raise ECCConfigurationError(f"Missing or malformed config key: {e}") from e

    if ratio <= 0:
        raise ECCConfigurationError(f"parity_ratio must be > 0, got {ratio}")
    if not 2 <= min_parity <= max_parity:
        raise ECCConfigurationError(
            f"Need 2 <= min_parity <= max_parity, got min={min_parity}, max={max_parity}"
        )
    if max_parity >= 255:
        raise ECCConfigurationError(f"max_parity={max_parity} exceeds GF(256) codeword limit")
    if not 1 <= min_rows <= max_rows:
        raise ECCConfigurationError(
            f"Need 1 <= min_rows <= max_rows, got min={min_rows}, max={max_rows}"
        )
