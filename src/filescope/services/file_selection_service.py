"""
File Selection Service for filescope.

Coordinates a selection run: loads the project's local configuration,
lists the analysis root once, then narrows the readable files for each
requested tool and reports whether the project carries that tool's own
configuration file.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from filescope.core.config import FileScopeConfig, load_config
from filescope.core.configuration import (
    ConfigurationResult,
    LocalConfiguration,
    RemoteConfiguration,
    load_local_configuration,
)
from filescope.core.file_collector import (
    CollectionResult,
    DiagnosticSink,
    FileCollectorInterface,
    FilesTarget,
    FileSystemFileCollector,
)
from filescope.core.tools import Tool, ToolRegistry, get_default_tool_registry

logger = logging.getLogger(__name__)


@dataclass
class ToolSelection:
    """
    Files selected for one tool.

    Attributes:
        tool: The tool the selection was made for
        result: Filtered target, or the failure that prevented filtering
        has_configuration_files: True if the project ships one of the tool's configuration files
    """

    tool: Tool
    result: CollectionResult
    has_configuration_files: bool = False


@dataclass
class SelectionReport:
    """
    Outcome of a selection run over one analysis root.

    Attributes:
        target: Files of the root after project-level exclusions
        local_configuration: The local configuration used for the run
        selections: Per-tool selections keyed by tool name
    """

    target: FilesTarget
    local_configuration: ConfigurationResult[LocalConfiguration]
    selections: dict[str, ToolSelection] = field(default_factory=dict)

    @property
    def failed_tools(self) -> list[str]:
        return [name for name, selection in self.selections.items() if not selection.result.ok]


class FileSelectionService:
    """
    Service deciding which files reach which analysis tools.
    """

    def __init__(
        self,
        collector: Optional[FileCollectorInterface] = None,
        tool_registry: Optional[ToolRegistry] = None,
        config: Optional[FileScopeConfig] = None,
    ):
        """
        Initialize the file selection service.

        Args:
            collector: Collector for listing and filtering files (default: FileSystemFileCollector)
            tool_registry: Registry resolving tool names (default: bundled tools)
            config: Library configuration (default: load_config())
        """
        self._config = config or load_config()
        self._collector = collector or FileSystemFileCollector.from_config(self._config.collector)
        self._tool_registry = tool_registry or get_default_tool_registry()

    def _resolve_tools(self, tools: Iterable[Tool | str]) -> list[Tool]:
        resolved = []
        for tool in tools:
            if isinstance(tool, Tool):
                resolved.append(tool)
            else:
                resolved.append(self._tool_registry.require(tool))
        return resolved

    def select(
        self,
        root: Path | str,
        tools: Iterable[Tool | str],
        remote_configuration: Optional[ConfigurationResult[RemoteConfiguration]] = None,
        on_unreadable: Optional[DiagnosticSink] = None,
    ) -> SelectionReport:
        """
        Select the files each tool should analyze under `root`.

        Args:
            root: Analysis root directory
            tools: Tools or registered tool names
            remote_configuration: Platform project settings, if any were fetched
            on_unreadable: Optional sink receiving one event per unreadable file

        Returns:
            SelectionReport with one ToolSelection per tool

        Raises:
            KeyError: If a tool name is not registered
            FileCollectionError: If the root cannot be listed
        """
        root = Path(root)
        resolved_tools = self._resolve_tools(tools)
        remote_configuration = remote_configuration or ConfigurationResult.unavailable(
            "No remote configuration provided"
        )
        local_configuration = load_local_configuration(
            root, self._config.collector.local_config_filenames
        )

        target = self._collector.list_files(
            root, local_configuration, remote_configuration, on_unreadable
        ).unwrap()

        logger.info(
            f"Collected {len(target.readable_files)} readable and "
            f"{len(target.unreadable_files)} unreadable files in {root}"
        )

        report = SelectionReport(target=target, local_configuration=local_configuration)
        for tool in resolved_tools:
            result = self._collector.filter_files(
                tool, target, local_configuration, remote_configuration
            )
            # Configuration files rarely survive the language filter, check the listed target
            has_configuration = self._collector.has_configuration_files(tool, target)
            report.selections[tool.name] = ToolSelection(
                tool=tool,
                result=result,
                has_configuration_files=has_configuration,
            )
            if result.ok:
                logger.info(
                    f"{tool.name}: {len(result.unwrap().readable_files)} files selected"
                    + (", using project configuration" if has_configuration else "")
                )
            else:
                logger.warning(f"{tool.name}: file selection failed: {result.error}")

        return report
