"""Loading lookup options from YAML.

A file holds either a bare option mapping or a hiera-style hierarchy level
with the options nested under ``options:``.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HIERA_VAULT_CONFIG"
DEFAULT_CONFIG_NAME = "hiera-vault.yaml"


def find_config_path(config_path: Path | None = None) -> Path | None:
    """Determine which options file to load.

    Looks at, in order:
    1. The given path
    2. The HIERA_VAULT_CONFIG environment variable
    3. ./hiera-vault.yaml

    Returns:
        The path to load, or None if no candidate exists
    """
    if config_path is not None:
        return config_path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    candidate = Path.cwd() / DEFAULT_CONFIG_NAME
    if candidate.exists():
        return candidate
    return None


def load_lookup_options(config_path: Path | None = None) -> dict[str, Any]:
    """Load a raw option bag from a YAML file.

    The result is not validated; pass it to ``lookup_key`` (or
    ``validate_options``) as is.

    Args:
        config_path: Optional explicit path to the options file

    Returns:
        The option mapping, empty if no file was found

    Raises:
        FileNotFoundError: If an explicitly configured file doesn't exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    path = find_config_path(config_path)
    if path is None:
        logger.info("No options file found, using empty options")
        return {}

    if not path.exists():
        raise FileNotFoundError(f"Options file not found at {path}")

    logger.debug(f"Loading lookup options from: {path}")

    try:
        with open(path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML options file {path}: {e}") from e

    if not raw_config:
        logger.info("Empty options file, using empty options")
        return {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Options file {path} must contain a mapping")

    options = raw_config.get("options", raw_config)
    if not isinstance(options, dict):
        raise ValueError(f"The options section of {path} must be a mapping")
    return options
