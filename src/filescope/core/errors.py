"""Exception types for file collection."""


class FileCollectionError(Exception):
    """Base exception for file collection errors."""

    pass


class EnumerationError(FileCollectionError):
    """The analysis root (or a directory below it) could not be traversed."""

    pass


class PatternError(FileCollectionError):
    """A glob or regular expression from a configuration source is malformed.

    Raised when the pattern is compiled, which happens the first time a
    filter uses it. An unparseable exclusion rule must never be skipped
    silently, so this error aborts the stage that needed the pattern.
    """

    pass
