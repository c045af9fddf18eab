"""
Language registry for mapping file names and extensions to languages.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent / "languages.yaml"


class Language(Enum):
    """Languages an analysis tool can declare support for."""

    APEX = "Apex"
    C = "C"
    CPP = "CPP"
    CSHARP = "CSharp"
    CSS = "CSS"
    COFFEESCRIPT = "CoffeeScript"
    CRYSTAL = "Crystal"
    DART = "Dart"
    DOCKERFILE = "Dockerfile"
    ELIXIR = "Elixir"
    ELM = "Elm"
    ERLANG = "Erlang"
    GO = "Go"
    GROOVY = "Groovy"
    HASKELL = "Haskell"
    HTML = "HTML"
    JAVA = "Java"
    JAVASCRIPT = "Javascript"
    JSON = "JSON"
    JSP = "JSP"
    JULIA = "Julia"
    KOTLIN = "Kotlin"
    LESS = "LESS"
    LUA = "Lua"
    MARKDOWN = "Markdown"
    OBJECTIVEC = "ObjectiveC"
    PHP = "PHP"
    PLSQL = "PLSQL"
    POWERSHELL = "PowerShell"
    PYTHON = "Python"
    R = "R"
    RUBY = "Ruby"
    RUST = "Rust"
    SASS = "SASS"
    SCALA = "Scala"
    SHELL = "Shell"
    SOLIDITY = "Solidity"
    SQL = "SQL"
    SWIFT = "Swift"
    TERRAFORM = "Terraform"
    TYPESCRIPT = "TypeScript"
    VISUALBASIC = "VisualBasic"
    XML = "XML"
    YAML = "YAML"

    @classmethod
    def from_name(cls, name: str) -> "Language":
        """
        Resolve a language from its name, ignoring case.

        Both the enum name (`JAVASCRIPT`) and the display value
        (`Javascript`) are accepted.

        Raises:
            ValueError: If no language has that name
        """
        key = str(name).strip().lower()
        for language in cls:
            if key in (language.name.lower(), language.value.lower()):
                return language
        raise ValueError(f"Unknown language: {name}")


def normalize_extension(entry: str) -> str:
    """Lowercase a registry entry. Entries starting with '.' are extensions, others file names."""
    return str(entry).strip().lower()


class LanguageRegistry:
    """
    Extensible registry for mapping file names to languages.

    An entry that starts with a dot is an extension (`.py`, `.d.ts`); any
    other entry is an exact file name (`Dockerfile`). Each entry belongs to
    exactly one language: registering an entry for a second language moves it.

    Example:
        >>> registry = LanguageRegistry()
        >>> _ = registry.register(Language.SCALA, [".sc"])
        >>> registry.detect_from_path(Path("build.sc"))
        <Language.SCALA: 'Scala'>
    """

    def __init__(self, load_defaults: bool = True):
        """
        Initialize the language registry.

        Args:
            load_defaults: If True, load default language mappings from languages.yaml.
        """
        self._entry_to_language: dict[str, Language] = {}
        self._language_to_entries: dict[Language, set[str]] = {}

        if load_defaults:
            self._load_from_yaml(_DEFAULT_LANGUAGES_CONFIG)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the config file format is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Languages config not found: {config_path}")
        registry = cls(load_defaults=False)
        registry._load_from_yaml(config_path)
        return registry

    def _load_from_yaml(self, config_path: Path) -> None:
        """
        Load language mappings from a YAML file.

        Expected format:
            LanguageName:
              - .ext1
              - FileName
        """
        if not config_path.exists():
            logger.warning(f"Languages config not found: {config_path}, using empty registry")
            return

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse languages config: {e}")
            raise ValueError(f"Invalid YAML in languages config: {e}") from e

        if data is None:
            return

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid languages config format: expected dict, got {type(data)}"
            )

        for name, entries in data.items():
            language = Language.from_name(name)
            if not isinstance(entries, list):
                logger.warning(
                    f"Invalid extensions for {name}: expected list, got {type(entries)}"
                )
                continue
            self.register(language, entries)

    def _add_mapping(self, entry: str, language: Language) -> None:
        key = normalize_extension(entry)
        if not key:
            return

        previous = self._entry_to_language.get(key)
        if previous is not None and previous is not language:
            self._language_to_entries[previous].discard(key)

        self._entry_to_language[key] = language
        self._language_to_entries.setdefault(language, set()).add(key)

    def register(self, language: Language, extensions: Iterable[str]) -> "LanguageRegistry":
        """
        Register file extensions (or file names) for a language.

        Returns:
            Self for method chaining
        """
        for ext in extensions:
            self._add_mapping(ext, language)
        return self

    def unregister(self, language: Language) -> "LanguageRegistry":
        """Remove a language and all its entries from the registry."""
        for entry in self._language_to_entries.pop(language, set()):
            self._entry_to_language.pop(entry, None)
        return self

    def copy(self) -> "LanguageRegistry":
        """Return an independent copy of this registry."""
        clone = LanguageRegistry(load_defaults=False)
        clone._entry_to_language = dict(self._entry_to_language)
        clone._language_to_entries = {
            language: set(entries) for language, entries in self._language_to_entries.items()
        }
        return clone

    def with_custom_extensions(
        self, custom_extensions: Mapping[Language, Iterable[str]]
    ) -> "LanguageRegistry":
        """
        Return a copy of this registry with custom extensions registered on top.

        The receiver is left untouched.
        """
        registry = self.copy()
        for language, extensions in custom_extensions.items():
            registry.register(language, extensions)
        return registry

    def detect(self, extension: str) -> Language | None:
        """Return the language registered for an extension or file name, if any."""
        return self._entry_to_language.get(normalize_extension(extension))

    def detect_from_path(self, file_path: Path | str) -> Language | None:
        """
        Detect the language of a file from its name.

        An exact file name entry wins, then the longest registered compound
        extension (`.d.ts` before `.ts`).
        """
        name = Path(file_path).name.lower()
        language = self._entry_to_language.get(name)
        if language is not None:
            return language

        suffixes = Path(name).suffixes
        for i in range(len(suffixes)):
            language = self._entry_to_language.get("".join(suffixes[i:]))
            if language is not None:
                return language
        return None

    def get_extensions(self, language: Language) -> set[str]:
        """Get all registered entries for a language (empty if none)."""
        return self._language_to_entries.get(language, set()).copy()

    def get_all_languages(self) -> set[Language]:
        """Get all languages with at least one registered entry."""
        return {language for language, entries in self._language_to_entries.items() if entries}

    def is_supported(self, file_path: Path | str) -> bool:
        return self.detect_from_path(file_path) is not None


_default_registry: LanguageRegistry | None = None


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry, loading it on first use."""
    global _default_registry

    if _default_registry is None:
        _default_registry = LanguageRegistry()
    return _default_registry
