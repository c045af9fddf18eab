"""
Readability check for collected files.

Analysis tools may run as a different user than the collector, so a file
only counts as readable when it is readable by everybody. The check never
logs by itself; it returns a diagnostic per unreadable file.
"""

import stat
from collections.abc import Iterable
from pathlib import Path

from .models import CheckedFiles, UnreadableFile

UNREADABLE_MESSAGE = "Could not read file {path}, make sure it is readable by everybody."


def is_world_readable(file_path: Path) -> bool:
    """Check that a path is a regular file (symlinks are not) readable by others."""
    try:
        mode = file_path.lstat().st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and bool(mode & stat.S_IROTH)


def check_permissions(root: Path | str, files: Iterable[Path]) -> CheckedFiles:
    """
    Split root-relative files into readable and unreadable sets.

    Args:
        root: Analysis root the paths are relative to
        files: Root-relative paths to check

    Returns:
        CheckedFiles partitioning `files`, with one diagnostic per unreadable file
    """
    root = Path(root)
    readable: set[Path] = set()
    unreadable: set[Path] = set()
    diagnostics: list[UnreadableFile] = []

    for path in sorted(files):
        absolute_path = root / path
        if is_world_readable(absolute_path):
            readable.add(path)
        else:
            unreadable.add(path)
            diagnostics.append(
                UnreadableFile(
                    path=path,
                    absolute_path=absolute_path,
                    message=UNREADABLE_MESSAGE.format(path=absolute_path),
                )
            )

    return CheckedFiles(
        readable_files=frozenset(readable),
        unreadable_files=frozenset(unreadable),
        diagnostics=tuple(diagnostics),
    )
