"""
Tool descriptors and the registry that supplies them.

A Tool only carries what file selection needs: the languages it analyzes
and the names of configuration files it reads from the project.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from filescope.core.languages import Language

logger = logging.getLogger(__name__)

# Default path to the tools configuration file
_DEFAULT_TOOLS_CONFIG = Path(__file__).parent / "tools.yaml"


@dataclass(frozen=True)
class Tool:
    """
    An analysis tool as seen by file selection.

    Attributes:
        name: Tool identifier, also the key of its section in the local configuration
        languages: Languages the tool can analyze
        config_filenames: File names the tool recognizes as its own configuration
    """

    name: str
    languages: frozenset[Language] = field(default_factory=frozenset)
    config_filenames: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def create(
        cls,
        name: str,
        languages: Iterable[Language | str],
        config_filenames: Iterable[str] = (),
    ) -> "Tool":
        """Build a Tool, resolving language names where strings are given."""
        return cls(
            name=name,
            languages=frozenset(
                lang if isinstance(lang, Language) else Language.from_name(lang)
                for lang in languages
            ),
            config_filenames=frozenset(config_filenames),
        )


class ToolRegistry:
    """
    Registry of known tools, keyed by name.

    Example:
        >>> registry = ToolRegistry(load_defaults=False)
        >>> _ = registry.register(Tool.create("scalastyle", ["Scala"]))
        >>> "scalastyle" in registry
        True
    """

    def __init__(self, load_defaults: bool = True):
        self._tools: dict[str, Tool] = {}

        if load_defaults:
            self._load_from_yaml(_DEFAULT_TOOLS_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "ToolRegistry":
        """
        Create a ToolRegistry from a YAML configuration file.

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the config file format is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Tools config not found: {config_path}")
        registry = cls(load_defaults=False)
        registry._load_from_yaml(config_path)
        return registry

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load tool descriptors from a YAML file.

        Expected format:
            tool_name:
              languages: [Python]
              config_filenames: [.toolrc]
        """
        if not config_path.exists():
            logger.warning(f"Tools config not found: {config_path}, using empty registry")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in tools config: {e}") from e

        if data is None:
            return

        if not isinstance(data, dict):
            raise ValueError(f"Invalid tools config format: expected dict, got {type(data)}")

        for name, entry in data.items():
            if not isinstance(entry, dict):
                raise ValueError(f"Invalid entry for tool {name}: expected dict, got {type(entry)}")
            self.register(
                Tool.create(
                    str(name),
                    entry.get("languages") or [],
                    entry.get("config_filenames") or [],
                )
            )

    def register(self, tool: Tool) -> "ToolRegistry":
        """Register a tool, replacing any tool with the same name."""
        if tool.name in self._tools:
            logger.debug(f"Replacing registered tool: {tool.name}")
        self._tools[tool.name] = tool
        return self

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def require(self, name: str) -> Tool:
        """
        Get a tool by name.

        Raises:
            KeyError: If no tool with that name is registered
        """
        try:
            return self._tools[name]
        except KeyError:
            raise KeyError(f"Unknown tool: {name}") from None

    def names(self) -> set[str]:
        return set(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


_default_tool_registry: ToolRegistry | None = None


def get_default_tool_registry() -> ToolRegistry:
    """Get the global default tool registry, loading it on first use."""
    global _default_tool_registry

    if _default_tool_registry is None:
        _default_tool_registry = ToolRegistry()
    return _default_tool_registry
