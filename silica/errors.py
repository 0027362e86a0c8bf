"""Exceptions raised while reading Procreate documents."""

from __future__ import annotations


class SilicaError(Exception):
    """Base class for every error raised by this package."""


class InvalidValueError(SilicaError):
    """A value in the document is outside of what the format allows."""

    def __init__(self, message: str = "Invalid values in file") -> None:
        super().__init__(message)


class CorruptedFormatError(SilicaError):
    """The document structure does not follow the expected layout."""

    def __init__(self, message: str = "Corrupted format") -> None:
        super().__init__(message)


class LzoError(SilicaError):
    """An LZO compressed tile could not be decompressed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"LZO error: {reason}")
        self.reason = reason


class NsArchiveError(SilicaError):
    """Base class for errors found while decoding a keyed archive."""


class TypeMismatchError(NsArchiveError):
    """A value had a different type than the one requested."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Type mismatch: key {key}")
        self.key = key


class MissingKeyError(NsArchiveError):
    """A required key was not present."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing key {key}")
        self.key = key


class BadValueError(NsArchiveError):
    """A value had the right type but an unsupported content."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"Bad value for key {key} = {value}")
        self.key = key
        self.value = value


class BadIndexError(NsArchiveError):
    """An object reference pointed outside of the object table."""

    def __init__(self) -> None:
        super().__init__("Bad index")