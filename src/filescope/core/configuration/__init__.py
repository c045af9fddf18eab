"""
Configuration sources for file collection.

Local configuration comes from a file in the project, remote configuration
from the analysis platform. Each is optional and wrapped in a
ConfigurationResult.
"""

from .errors import ConfigurationError
from .local import (
    DEFAULT_LOCAL_CONFIG_FILENAMES,
    find_local_configuration,
    load_local_configuration,
    read_local_configuration,
)
from .models import (
    ConfigurationResult,
    EngineConfiguration,
    LanguageExtensions,
    LocalConfiguration,
    RemoteConfiguration,
    merge_custom_extensions,
)
from .remote import parse_remote_configuration

__all__ = [
    "ConfigurationError",
    "ConfigurationResult",
    # Local
    "LocalConfiguration",
    "EngineConfiguration",
    "DEFAULT_LOCAL_CONFIG_FILENAMES",
    "find_local_configuration",
    "read_local_configuration",
    "load_local_configuration",
    # Remote
    "RemoteConfiguration",
    "LanguageExtensions",
    "parse_remote_configuration",
    # Merging
    "merge_custom_extensions",
]
