"""
Configuration values consumed by the file collector.

Both sources are optional: callers hand them over wrapped in a
ConfigurationResult, and an invalid result contributes no rules.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from filescope.core.configuration.errors import ConfigurationError
from filescope.core.languages import Language
from filescope.core.patterns import FilePath, Glob, PathRegex

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class ConfigurationResult(Generic[T]):
    """
    Outcome of loading an optional configuration source.

    Attributes:
        value: The loaded configuration, None when unavailable.
        error_message: Why the source is unavailable (missing or invalid).
    """

    value: Optional[T] = None
    error_message: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.value is not None and self.error_message is None

    @classmethod
    def loaded(cls, value: T) -> "ConfigurationResult[T]":
        return cls(value=value)

    @classmethod
    def unavailable(cls, reason: str) -> "ConfigurationResult[T]":
        return cls(error_message=reason)

    def map_or(self, fn: Callable[[T], R], default: R) -> R:
        """Apply `fn` to the loaded value, or return `default` when unavailable."""
        if self.valid:
            return fn(self.value)  # type: ignore[arg-type]
        return default


def _as_str_list(value: Any, where: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigurationError(f"{where} must be a list of strings, got {type(value).__name__}")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{where} entries must be strings, got {type(item).__name__}")
        items.append(item)
    return items


def _as_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _resolve_language(name: Any, where: str) -> Language:
    try:
        return Language.from_name(str(name))
    except ValueError as e:
        raise ConfigurationError(f"{where}: {e}") from e


@dataclass(frozen=True)
class EngineConfiguration:
    """Settings of one tool section in the local configuration."""

    exclude_paths: frozenset[Glob] = field(default_factory=frozenset)


@dataclass(frozen=True)
class LocalConfiguration:
    """
    Configuration file committed to the project.

    Attributes:
        exclude_paths: Globs excluded for every tool.
        engines: Per-tool sections keyed by tool name.
        language_custom_extensions: Extra extensions per language.
    """

    exclude_paths: frozenset[Glob] = field(default_factory=frozenset)
    engines: Mapping[str, EngineConfiguration] = field(default_factory=dict)
    language_custom_extensions: Mapping[Language, frozenset[str]] = field(default_factory=dict)

    def tool_exclude_paths(self, tool_name: str) -> frozenset[Glob]:
        engine = self.engines.get(tool_name)
        if engine is None:
            return frozenset()
        return engine.exclude_paths

    @classmethod
    def from_dict(cls, data: Any) -> "LocalConfiguration":
        """
        Build a LocalConfiguration from a parsed document.

        Raises:
            ConfigurationError: If the document does not have the expected shape
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(data).__name__}"
            )

        exclude_paths = frozenset(
            Glob(p) for p in _as_str_list(data.get("exclude_paths"), "exclude_paths")
        )

        engines: dict[str, EngineConfiguration] = {}
        for name, section in _as_mapping(data.get("engines"), "engines").items():
            section = _as_mapping(section, f"engines.{name}")
            engines[str(name)] = EngineConfiguration(
                exclude_paths=frozenset(
                    Glob(p)
                    for p in _as_str_list(
                        section.get("exclude_paths"), f"engines.{name}.exclude_paths"
                    )
                )
            )

        custom_extensions: dict[Language, frozenset[str]] = {}
        for name, section in _as_mapping(data.get("languages"), "languages").items():
            language = _resolve_language(name, "languages")
            section = _as_mapping(section, f"languages.{name}")
            extensions = _as_str_list(section.get("extensions"), f"languages.{name}.extensions")
            if extensions:
                custom_extensions[language] = frozenset(extensions)

        return cls(
            exclude_paths=exclude_paths,
            engines=engines,
            language_custom_extensions=custom_extensions,
        )


@dataclass(frozen=True)
class LanguageExtensions:
    """Extensions the project settings add to one language."""

    language: Language
    extensions: frozenset[str] = field(default_factory=frozenset)


def _pattern_values(value: Any, where: str) -> list[str]:
    """Accept both `["x"]` and `[{"value": "x"}]` entry forms."""
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{where} must be a list, got {type(value).__name__}")
    values = []
    for item in value:
        if isinstance(item, Mapping):
            item = item.get("value")
        if not isinstance(item, str):
            raise ConfigurationError(f"{where} entries must be strings, got {type(item).__name__}")
        values.append(item)
    return values


@dataclass(frozen=True)
class RemoteConfiguration:
    """
    Project settings held by the analysis platform.

    Attributes:
        ignored_paths: Path prefixes excluded from analysis.
        default_ignores: Platform default exclusions, as full-match regexes.
        project_extensions: Extra extensions per language.
    """

    ignored_paths: frozenset[FilePath] = field(default_factory=frozenset)
    default_ignores: frozenset[PathRegex] = field(default_factory=frozenset)
    project_extensions: tuple[LanguageExtensions, ...] = ()

    def custom_extensions(self) -> dict[Language, frozenset[str]]:
        """Project extensions as a map; later entries for a language win."""
        return {entry.language: entry.extensions for entry in self.project_extensions}

    @classmethod
    def from_payload(cls, payload: Any) -> "RemoteConfiguration":
        """
        Build a RemoteConfiguration from the platform's JSON document.

        Raises:
            ConfigurationError: If the document does not have the expected shape
        """
        if not isinstance(payload, Mapping):
            raise ConfigurationError(
                f"Remote configuration must be a mapping, got {type(payload).__name__}"
            )

        ignored_paths = frozenset(
            FilePath(p) for p in _pattern_values(payload.get("ignoredPaths"), "ignoredPaths")
        )
        default_ignores = frozenset(
            PathRegex(p) for p in _pattern_values(payload.get("defaultIgnores"), "defaultIgnores")
        )

        raw_extensions = payload.get("projectExtensions") or []
        if not isinstance(raw_extensions, (list, tuple)):
            raise ConfigurationError(
                f"projectExtensions must be a list, got {type(raw_extensions).__name__}"
            )
        project_extensions = []
        for entry in raw_extensions:
            entry = _as_mapping(entry, "projectExtensions entry")
            project_extensions.append(
                LanguageExtensions(
                    language=_resolve_language(entry.get("language"), "projectExtensions"),
                    extensions=frozenset(
                        _as_str_list(entry.get("extensions"), "projectExtensions.extensions")
                    ),
                )
            )

        return cls(
            ignored_paths=ignored_paths,
            default_ignores=default_ignores,
            project_extensions=tuple(project_extensions),
        )


def merge_custom_extensions(
    local: Mapping[Language, Iterable[str]],
    remote: Mapping[Language, Iterable[str]],
) -> dict[Language, frozenset[str]]:
    """
    Merge custom extension maps, remote entries replacing local ones per language.

    The local map is copied first, then every language present in the remote
    map is overwritten with the remote extensions. Languages only present
    locally keep their local extensions.
    """
    merged: dict[Language, frozenset[str]] = {
        language: frozenset(extensions) for language, extensions in local.items()
    }
    for language, extensions in remote.items():
        merged[language] = frozenset(extensions)
    return merged
