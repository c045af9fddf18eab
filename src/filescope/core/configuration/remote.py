"""
Parsing of the project configuration served by the analysis platform.

Fetching the document is the caller's job; this module only turns the
payload into a RemoteConfiguration.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from filescope.core.configuration.errors import ConfigurationError
from filescope.core.configuration.models import ConfigurationResult, RemoteConfiguration

logger = logging.getLogger(__name__)


def parse_remote_configuration(
    payload: Mapping[str, Any] | str | bytes | None,
) -> ConfigurationResult[RemoteConfiguration]:
    """
    Parse a remote configuration payload.

    Args:
        payload: The decoded JSON mapping, the raw JSON text, or None when
            no remote configuration could be obtained.

    Returns:
        ConfigurationResult holding the RemoteConfiguration or the reason it is unavailable
    """
    if payload is None:
        return ConfigurationResult.unavailable("No remote configuration available")

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload) if payload.strip() else {}
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring remote configuration, invalid JSON: {e}")
            return ConfigurationResult.unavailable(f"Invalid JSON in remote configuration: {e}")

    try:
        configuration = RemoteConfiguration.from_payload(payload)
    except ConfigurationError as e:
        logger.warning(f"Ignoring invalid remote configuration: {e}")
        return ConfigurationResult.unavailable(str(e))

    return ConfigurationResult.loaded(configuration)
