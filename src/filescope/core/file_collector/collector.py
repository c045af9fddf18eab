"""
FileCollector implementation backed by the local filesystem.
"""

import logging
from pathlib import Path

from filescope.core.config import CollectorConfig
from filescope.core.configuration import (
    ConfigurationResult,
    LocalConfiguration,
    RemoteConfiguration,
)
from filescope.core.errors import FileCollectionError
from filescope.core.languages import LanguageRegistry
from filescope.core.patterns import ends_with_segments
from filescope.core.tools import Tool

from .enumerator import DEFAULT_VCS_DIRECTORY, enumerate_files
from .exclusions import apply_filters, build_exclusion_filters, build_tool_filters
from .interfaces import FileCollectorInterface
from .models import CheckedFiles, CollectionResult, DiagnosticSink, FilesTarget
from .permissions import check_permissions

logger = logging.getLogger(__name__)


class FileSystemFileCollector(FileCollectorInterface):
    """
    Concrete implementation of FileCollectorInterface.

    Listing a root:
    - Enumerates regular files, skipping the version-control directory
    - Applies global globs, remote ignored paths and (without local
      configuration) remote default ignores
    - Splits the survivors into world-readable and unreadable files

    Filtering for a tool applies the tool's own globs and keeps only files
    in the tool's languages.
    """

    name: str = "file-system"

    def __init__(
        self,
        vcs_directory: str = DEFAULT_VCS_DIRECTORY,
        language_registry: LanguageRegistry | None = None,
        diagnostics_sink: DiagnosticSink | None = None,
    ):
        """
        Initialize the collector.

        Args:
            vcs_directory: Top-level directory never collected (version-control metadata)
            language_registry: Canonical language table. If None, uses the default registry.
            diagnostics_sink: Receives an event for every unreadable file, in
                addition to the warning logged for it.
        """
        self._vcs_directory = vcs_directory
        self._language_registry = language_registry
        self._diagnostics_sink = diagnostics_sink

    @classmethod
    def from_config(
        cls, config: CollectorConfig, diagnostics_sink: DiagnosticSink | None = None
    ) -> "FileSystemFileCollector":
        return cls(vcs_directory=config.vcs_directory, diagnostics_sink=diagnostics_sink)

    def list_files(
        self,
        directory: Path,
        local_configuration: ConfigurationResult[LocalConfiguration],
        remote_configuration: ConfigurationResult[RemoteConfiguration],
        on_unreadable: DiagnosticSink | None = None,
    ) -> CollectionResult:
        directory = Path(directory)
        try:
            all_files = enumerate_files(directory, self._vcs_directory)
            filters = build_exclusion_filters(local_configuration, remote_configuration)
            filtered_files = apply_filters(all_files, filters)
        except FileCollectionError as e:
            logger.error(f"Failed to list files in {directory}: {e}")
            return CollectionResult.failure(e)

        logger.debug(
            f"Kept {len(filtered_files)} of {len(all_files)} files in {directory} after exclusions"
        )

        checked_files = check_permissions(directory, filtered_files)
        self._report_unreadable(checked_files, on_unreadable)

        return CollectionResult.success(
            FilesTarget(
                directory=directory,
                readable_files=checked_files.readable_files,
                unreadable_files=checked_files.unreadable_files,
            )
        )

    def filter_files(
        self,
        tool: Tool,
        target: FilesTarget,
        local_configuration: ConfigurationResult[LocalConfiguration],
        remote_configuration: ConfigurationResult[RemoteConfiguration],
    ) -> CollectionResult:
        try:
            filters = build_tool_filters(
                tool, local_configuration, remote_configuration, self._language_registry
            )
            filtered_files = apply_filters(target.readable_files, filters)
        except FileCollectionError as e:
            logger.error(f"Failed to filter files for {tool.name}: {e}")
            return CollectionResult.failure(e)

        logger.debug(
            f"Selected {len(filtered_files)} of {len(target.readable_files)} files for {tool.name}"
        )
        return CollectionResult.success(
            FilesTarget(
                directory=target.directory,
                readable_files=filtered_files,
                unreadable_files=target.unreadable_files,
            )
        )

    def has_configuration_files(self, tool: Tool, target: FilesTarget) -> bool:
        return any(
            ends_with_segments(path, config_filename)
            for path in target.readable_files
            for config_filename in tool.config_filenames
        )

    def _report_unreadable(
        self, checked_files: CheckedFiles, on_unreadable: DiagnosticSink | None
    ) -> None:
        sink = on_unreadable or self._diagnostics_sink
        for diagnostic in checked_files.diagnostics:
            logger.warning(diagnostic.message)
            if sink is not None:
                sink(diagnostic)
