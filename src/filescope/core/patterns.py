"""
Path matchers used by the exclusion pipeline.

Three kinds of rules reach the pipeline from configuration sources:
- Glob: filesystem glob matched against the whole root-relative path
- PathRegex: regular expression that must match the whole path
- FilePath: path prefix compared segment by segment

Patterns are compiled lazily and cached, so a malformed rule is reported
when a filter first uses it rather than when the configuration is parsed.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path, PurePosixPath

import pathspec

from filescope.core.errors import PatternError


def as_posix(path: Path | str) -> str:
    """Return the forward-slash form of a root-relative path."""
    if isinstance(path, str):
        return path.replace("\\", "/")
    return path.as_posix()


_GLOBSTAR = "**"


@dataclass(frozen=True)
class CompiledGlob:
    """
    Glob split into path segments.

    Each segment is a single-segment pathspec, so `*`, `?` and character
    classes never cross a `/`. A `None` segment is `**` and spans any
    number of segments, including none.
    """

    segments: tuple[pathspec.PathSpec | None, ...]

    def match_file(self, path: str) -> bool:
        parts = tuple(p for p in path.split("/") if p)
        return bool(parts) and _match_segments(self.segments, parts)


def _match_segments(
    segments: tuple[pathspec.PathSpec | None, ...], parts: tuple[str, ...]
) -> bool:
    if not segments:
        return not parts
    head, rest = segments[0], segments[1:]
    if head is None:
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    return bool(parts) and head.match_file(parts[0]) and _match_segments(rest, parts[1:])


@lru_cache(maxsize=1024)
def _compile_glob(value: str) -> CompiledGlob:
    segments: list[pathspec.PathSpec | None] = []
    for segment in value.split("/"):
        if not segment:
            continue
        if segment == _GLOBSTAR:
            if segments and segments[-1] is None:
                continue
            segments.append(None)
            continue
        # Anchored and matched against one segment, so the pattern can only match it whole
        try:
            segments.append(
                pathspec.PathSpec.from_lines(
                    pathspec.patterns.GitWildMatchPattern, [f"/{segment}"]
                )
            )
        except ValueError as e:
            raise PatternError(f"Invalid glob pattern '{value}': {e}") from e
    return CompiledGlob(tuple(segments))


@lru_cache(maxsize=1024)
def _compile_regex(value: str) -> re.Pattern[str]:
    try:
        return re.compile(value)
    except re.error as e:
        raise PatternError(f"Invalid regular expression '{value}': {e}") from e


@dataclass(frozen=True)
class Glob:
    """
    Filesystem glob matched against a root-relative path.

    Supports `*`, `**`, `?` and character classes. `*` and `?` stay within
    one path segment and `**` spans segments. The whole path must match: a
    pattern matching a directory does not match the files inside it.
    `target/**` excludes everything under `target/`, `*.md` only matches
    files at the root and `**/*.md` matches at any depth.
    """

    value: str

    def compile(self) -> CompiledGlob:
        """Compile the pattern, raising PatternError if it is malformed."""
        return _compile_glob(self.value)

    def matches(self, path: Path | str) -> bool:
        return self.compile().match_file(as_posix(path))


@dataclass(frozen=True)
class PathRegex:
    """Regular expression that must match the entire path string."""

    value: str

    def compile(self) -> re.Pattern[str]:
        """Compile the expression, raising PatternError if it is malformed."""
        return _compile_regex(self.value)

    def matches(self, path: Path | str) -> bool:
        return self.compile().fullmatch(as_posix(path)) is not None


@dataclass(frozen=True)
class FilePath:
    """
    Ignored path prefix.

    Comparison is per path segment: `src` is a prefix of `src/main.py` and of
    `src` itself, but not of `srcx/main.py`.
    """

    value: str

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(p for p in PurePosixPath(as_posix(self.value)).parts if p != "/")

    def is_prefix_of(self, path: Path | str) -> bool:
        prefix = self.parts
        if not prefix:
            return False
        candidate = PurePosixPath(as_posix(path)).parts
        return candidate[: len(prefix)] == prefix


def ends_with_segments(path: Path | str, name: str) -> bool:
    """
    Check whether the trailing segments of `path` equal the segments of `name`.

    `src/.pylintrc` ends with `.pylintrc`; `src/x.pylintrc` does not.
    """
    suffix = PurePosixPath(as_posix(name)).parts
    if not suffix:
        return False
    candidate = PurePosixPath(as_posix(path)).parts
    return candidate[-len(suffix):] == suffix
