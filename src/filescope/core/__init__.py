"""
Core Layer - Pattern matching, language resolution, configuration sources and file collection.
"""

from filescope.core.config import (
    CollectorConfig,
    FileScopeConfig,
    LoggingConfig,
    configure_logging,
    load_config,
)
from filescope.core.errors import EnumerationError, FileCollectionError, PatternError
from filescope.core.patterns import FilePath, Glob, PathRegex
from filescope.core.languages import Language, LanguageRegistry, get_default_registry
from filescope.core.tools import Tool, ToolRegistry, get_default_tool_registry
from filescope.core.configuration import (
    ConfigurationError,
    ConfigurationResult,
    EngineConfiguration,
    LanguageExtensions,
    LocalConfiguration,
    RemoteConfiguration,
    load_local_configuration,
    merge_custom_extensions,
    parse_remote_configuration,
)
from filescope.core.file_collector import (
    CheckedFiles,
    CollectionResult,
    FileCollectorInterface,
    FilesTarget,
    FileSystemFileCollector,
    UnreadableFile,
    check_permissions,
    enumerate_files,
)

__all__ = [
    # Config
    "FileScopeConfig",
    "CollectorConfig",
    "LoggingConfig",
    "load_config",
    "configure_logging",
    # Errors
    "FileCollectionError",
    "EnumerationError",
    "PatternError",
    "ConfigurationError",
    # Patterns
    "Glob",
    "PathRegex",
    "FilePath",
    # Languages and tools
    "Language",
    "LanguageRegistry",
    "get_default_registry",
    "Tool",
    "ToolRegistry",
    "get_default_tool_registry",
    # Configuration sources
    "ConfigurationResult",
    "LocalConfiguration",
    "EngineConfiguration",
    "RemoteConfiguration",
    "LanguageExtensions",
    "load_local_configuration",
    "parse_remote_configuration",
    "merge_custom_extensions",
    # FileCollector
    "FilesTarget",
    "CheckedFiles",
    "CollectionResult",
    "UnreadableFile",
    "FileCollectorInterface",
    "FileSystemFileCollector",
    "enumerate_files",
    "check_permissions",
]
