"""
Exclusion filters applied to collected file sets.

Every filter maps a file set to a subset of it, so folding a list of
filters over a set only ever removes files. Filters built from an
unavailable configuration source, or from an empty rule set, return their
input unchanged.
"""

import logging
from collections.abc import Callable, Iterable
from functools import partial, reduce
from pathlib import Path

from filescope.core.configuration import (
    ConfigurationResult,
    LocalConfiguration,
    RemoteConfiguration,
    merge_custom_extensions,
)
from filescope.core.languages import LanguageRegistry, get_default_registry
from filescope.core.patterns import FilePath, Glob, PathRegex, as_posix
from filescope.core.tools import Tool

from .models import FileSet

logger = logging.getLogger(__name__)

FileFilter = Callable[[FileSet], FileSet]


def filter_by_globs(files: FileSet, globs: Iterable[Glob]) -> FileSet:
    """Remove files matching any glob."""
    compiled = [glob.compile() for glob in globs]
    if not compiled:
        return files
    return frozenset(
        f for f in files if not any(pattern.match_file(as_posix(f)) for pattern in compiled)
    )


def filter_by_expressions(files: FileSet, expressions: Iterable[PathRegex]) -> FileSet:
    """Remove files whose whole path matches any regular expression."""
    compiled = [expression.compile() for expression in expressions]
    if not compiled:
        return files
    return frozenset(
        f for f in files if not any(regex.fullmatch(as_posix(f)) for regex in compiled)
    )


def filter_by_prefixes(files: FileSet, prefixes: Iterable[FilePath]) -> FileSet:
    """Remove files located under any of the path prefixes."""
    prefixes = list(prefixes)
    if not prefixes:
        return files
    return frozenset(f for f in files if not any(p.is_prefix_of(f) for p in prefixes))


def exclude_global(local_configuration: ConfigurationResult[LocalConfiguration]) -> FileFilter:
    globs = local_configuration.map_or(lambda config: config.exclude_paths, frozenset())
    return partial(filter_by_globs, globs=globs)


def exclude_prefixes(remote_configuration: ConfigurationResult[RemoteConfiguration]) -> FileFilter:
    prefixes = remote_configuration.map_or(lambda config: config.ignored_paths, frozenset())
    return partial(filter_by_prefixes, prefixes=prefixes)


def exclude_default_ignores(
    remote_configuration: ConfigurationResult[RemoteConfiguration],
) -> FileFilter:
    expressions = remote_configuration.map_or(lambda config: config.default_ignores, frozenset())
    return partial(filter_by_expressions, expressions=expressions)


def exclude_for_tool(
    tool: Tool, local_configuration: ConfigurationResult[LocalConfiguration]
) -> FileFilter:
    globs = local_configuration.map_or(
        lambda config: config.tool_exclude_paths(tool.name), frozenset()
    )
    return partial(filter_by_globs, globs=globs)


def filter_by_language(
    tool: Tool,
    local_configuration: ConfigurationResult[LocalConfiguration],
    remote_configuration: ConfigurationResult[RemoteConfiguration],
    language_registry: LanguageRegistry | None = None,
) -> FileFilter:
    """
    Build a filter keeping only files in one of the tool's languages.

    Custom extensions from both sources extend the canonical table; for a
    language configured in both, the remote extensions replace the local ones.
    """
    local_extensions = local_configuration.map_or(
        lambda config: config.language_custom_extensions, {}
    )
    remote_extensions = remote_configuration.map_or(lambda config: config.custom_extensions(), {})
    custom_extensions = merge_custom_extensions(local_extensions, remote_extensions)

    registry = (language_registry or get_default_registry()).with_custom_extensions(
        custom_extensions
    )

    def _filter(files: FileSet) -> FileSet:
        return frozenset(f for f in files if registry.detect_from_path(f) in tool.languages)

    return _filter


def build_exclusion_filters(
    local_configuration: ConfigurationResult[LocalConfiguration],
    remote_configuration: ConfigurationResult[RemoteConfiguration],
) -> list[FileFilter]:
    """
    Build the project-level filters applied when listing a root.

    Default ignores from the remote configuration only apply to projects
    without a usable local configuration. A local configuration states the
    complete exclusion intent of the project and is not supplemented.
    """
    filters = [
        exclude_global(local_configuration),
        exclude_prefixes(remote_configuration),
    ]

    if local_configuration.valid:
        logger.debug("Local configuration present, skipping remote default ignores")
    else:
        filters.append(exclude_default_ignores(remote_configuration))

    return filters


def build_tool_filters(
    tool: Tool,
    local_configuration: ConfigurationResult[LocalConfiguration],
    remote_configuration: ConfigurationResult[RemoteConfiguration],
    language_registry: LanguageRegistry | None = None,
) -> list[FileFilter]:
    """Build the filters narrowing readable files down to one tool."""
    return [
        exclude_for_tool(tool, local_configuration),
        filter_by_language(tool, local_configuration, remote_configuration, language_registry),
    ]


def apply_filters(files: Iterable[Path], filters: Iterable[FileFilter]) -> FileSet:
    """Fold filters over a file set, left to right."""
    return reduce(lambda current, file_filter: file_filter(current), filters, frozenset(files))
