"""
FileCollector module for filescope.

Lists the files of an analysis root, applies project and tool exclusions,
and separates files that analysis tools cannot read.
"""

from .collector import FileSystemFileCollector
from .enumerator import DEFAULT_VCS_DIRECTORY, enumerate_files
from .exclusions import (
    FileFilter,
    apply_filters,
    build_exclusion_filters,
    build_tool_filters,
    exclude_default_ignores,
    exclude_for_tool,
    exclude_global,
    exclude_prefixes,
    filter_by_expressions,
    filter_by_globs,
    filter_by_language,
    filter_by_prefixes,
)
from .interfaces import FileCollectorInterface
from .models import (
    CheckedFiles,
    CollectionResult,
    DiagnosticSink,
    FileSet,
    FilesTarget,
    UnreadableFile,
)
from .permissions import check_permissions, is_world_readable

__all__ = [
    # Main classes
    "FileCollectorInterface",
    "FileSystemFileCollector",
    # Models
    "FileSet",
    "FilesTarget",
    "CheckedFiles",
    "CollectionResult",
    "UnreadableFile",
    "DiagnosticSink",
    # Stages
    "DEFAULT_VCS_DIRECTORY",
    "enumerate_files",
    "check_permissions",
    "is_world_readable",
    "FileFilter",
    "apply_filters",
    "build_exclusion_filters",
    "build_tool_filters",
    "exclude_global",
    "exclude_prefixes",
    "exclude_default_ignores",
    "exclude_for_tool",
    "filter_by_globs",
    "filter_by_expressions",
    "filter_by_prefixes",
    "filter_by_language",
]
