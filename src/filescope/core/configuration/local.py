"""
Loading of the configuration file committed to the analyzed project.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from filescope.core.configuration.errors import ConfigurationError
from filescope.core.configuration.models import ConfigurationResult, LocalConfiguration

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_CONFIG_FILENAMES: tuple[str, ...] = (".codacy.yml", ".codacy.yaml")


def find_local_configuration(
    root: Path | str, filenames: Sequence[str] | None = None
) -> Path | None:
    """Return the first configuration file present at the project root."""
    root = Path(root)
    for name in filenames or DEFAULT_LOCAL_CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def read_local_configuration(config_path: Path | str) -> LocalConfiguration:
    """
    Parse a local configuration file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not valid YAML or has the wrong shape
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Invalid UTF-8 encoding in {config_path}: {e}") from e

    return LocalConfiguration.from_dict(data)


def load_local_configuration(
    root: Path | str, filenames: Sequence[str] | None = None
) -> ConfigurationResult[LocalConfiguration]:
    """
    Load the local configuration of a project, if it has a usable one.

    Never raises for a missing or broken file: the result is marked
    unavailable and the reason is logged.

    Args:
        root: Project root directory
        filenames: Candidate file names, first match wins

    Returns:
        ConfigurationResult holding the LocalConfiguration or the reason it is unavailable
    """
    config_path = find_local_configuration(root, filenames)
    if config_path is None:
        reason = f"No local configuration file found in {root}"
        logger.debug(reason)
        return ConfigurationResult.unavailable(reason)

    try:
        configuration = read_local_configuration(config_path)
    except ConfigurationError as e:
        logger.warning(f"Ignoring invalid configuration file {config_path}: {e}")
        return ConfigurationResult.unavailable(str(e))
    except OSError as e:
        logger.warning(f"Error reading configuration file {config_path}: {e}")
        return ConfigurationResult.unavailable(str(e))

    logger.debug(f"Loaded local configuration from {config_path}")
    return ConfigurationResult.loaded(configuration)
