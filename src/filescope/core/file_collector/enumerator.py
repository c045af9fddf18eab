"""
Recursive listing of the regular files under an analysis root.
"""

import logging
import stat
from pathlib import Path

from filescope.core.errors import EnumerationError

logger = logging.getLogger(__name__)

DEFAULT_VCS_DIRECTORY = ".git"


def enumerate_files(root: Path | str, vcs_directory: str = DEFAULT_VCS_DIRECTORY) -> frozenset[Path]:
    """
    List every regular file under `root` as a root-relative path.

    Symlinks are neither returned nor followed, and the version-control
    directory at the top of the root is skipped entirely.

    Args:
        root: Analysis root directory
        vcs_directory: Name of the version-control metadata directory

    Returns:
        Frozen set of root-relative paths

    Raises:
        EnumerationError: If the root or any directory below it cannot be listed
    """
    root = Path(root)

    if not root.exists():
        raise EnumerationError(f"Root path does not exist: {root}")

    if not root.is_dir():
        raise EnumerationError(f"Root path is not a directory: {root}")

    files: set[Path] = set()
    _enumerate_directory(root, Path(), files, vcs_directory)
    logger.debug(f"Enumerated {len(files)} files under {root}")
    return frozenset(files)


def _enumerate_directory(
    current_path: Path, relative_path: Path, files: set[Path], vcs_directory: str
) -> None:
    try:
        entries = sorted(current_path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise EnumerationError(f"Cannot list directory {current_path}: {e}") from e

    at_root = not relative_path.parts

    for entry in entries:
        if at_root and entry.name == vcs_directory:
            continue

        try:
            mode = entry.lstat().st_mode
        except FileNotFoundError:
            logger.debug(f"Skipping file removed during enumeration: {entry}")
            continue
        except OSError as e:
            raise EnumerationError(f"Cannot stat {entry}: {e}") from e

        entry_relative = relative_path / entry.name

        if stat.S_ISLNK(mode):
            logger.debug(f"Skipping symlink: {entry}")
        elif stat.S_ISDIR(mode):
            _enumerate_directory(entry, entry_relative, files, vcs_directory)
        elif stat.S_ISREG(mode):
            files.add(entry_relative)
