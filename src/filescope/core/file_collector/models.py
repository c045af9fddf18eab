"""
Data models for the file collector module.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from filescope.core.errors import FileCollectionError

# Root-relative file paths
FileSet = frozenset[Path]


@dataclass(frozen=True)
class FilesTarget:
    """
    Files of one analysis root, split by readability.

    Attributes:
        directory: Analysis root; all file paths are relative to it
        readable_files: Files that can be handed to analysis tools
        unreadable_files: Files excluded because they are not world-readable
    """

    directory: Path
    readable_files: FileSet = field(default_factory=frozenset)
    unreadable_files: FileSet = field(default_factory=frozenset)


@dataclass(frozen=True)
class UnreadableFile:
    """Diagnostic for a file that failed the permission check."""

    path: Path
    absolute_path: Path
    message: str


# Receives one event per unreadable file
DiagnosticSink = Callable[[UnreadableFile], None]


@dataclass(frozen=True)
class CheckedFiles:
    """Partition of a file set produced by the permission check."""

    readable_files: FileSet = field(default_factory=frozenset)
    unreadable_files: FileSet = field(default_factory=frozenset)
    diagnostics: tuple[UnreadableFile, ...] = ()


@dataclass(frozen=True)
class CollectionResult:
    """
    Outcome of listing or filtering files.

    Attributes:
        target: The resulting FilesTarget when the operation succeeded
        error: The failure when it did not
    """

    target: Optional[FilesTarget] = None
    error: Optional[FileCollectionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.target is not None

    @classmethod
    def success(cls, target: FilesTarget) -> "CollectionResult":
        return cls(target=target)

    @classmethod
    def failure(cls, error: FileCollectionError) -> "CollectionResult":
        return cls(error=error)

    def unwrap(self) -> FilesTarget:
        """
        Return the target, re-raising the failure if there is one.

        Raises:
            FileCollectionError: If the operation failed
        """
        if self.error is not None:
            raise self.error
        if self.target is None:
            raise FileCollectionError("Collection result holds neither a target nor an error")
        return self.target
