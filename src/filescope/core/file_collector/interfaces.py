"""
Abstract interfaces for file collection.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from filescope.core.configuration import (
    ConfigurationResult,
    LocalConfiguration,
    RemoteConfiguration,
)
from filescope.core.tools import Tool

from .models import CollectionResult, DiagnosticSink, FilesTarget


class FileCollectorInterface(ABC):
    """
    Abstract interface for selecting the files an analysis run may inspect.

    Implementations list the candidate files of a root once, then narrow
    the readable files per tool on demand.
    """

    @abstractmethod
    def list_files(
        self,
        directory: Path,
        local_configuration: ConfigurationResult[LocalConfiguration],
        remote_configuration: ConfigurationResult[RemoteConfiguration],
        on_unreadable: DiagnosticSink | None = None,
    ) -> CollectionResult:
        """
        List the files of a directory that survive project-level exclusions.

        Args:
            directory: Analysis root
            local_configuration: Project configuration file, possibly unavailable
            remote_configuration: Platform project settings, possibly unavailable
            on_unreadable: Optional sink receiving one event per unreadable file

        Returns:
            CollectionResult with a FilesTarget, or the failure that prevented listing
        """
        pass

    @abstractmethod
    def filter_files(
        self,
        tool: Tool,
        target: FilesTarget,
        local_configuration: ConfigurationResult[LocalConfiguration],
        remote_configuration: ConfigurationResult[RemoteConfiguration],
    ) -> CollectionResult:
        """
        Narrow the readable files of a target to those a tool should see.

        Returns:
            CollectionResult with the narrowed FilesTarget; unreadable files are kept as-is
        """
        pass

    @abstractmethod
    def has_configuration_files(self, tool: Tool, target: FilesTarget) -> bool:
        """Check whether the readable files include one of the tool's configuration files."""
        pass
