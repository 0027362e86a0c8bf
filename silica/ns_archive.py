"""Decoding of NSKeyedArchiver property lists."""

from __future__ import annotations

import io
import plistlib
import re
import xml.parsers.expat
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Optional

from silica.errors import (
    BadIndexError,
    MissingKeyError,
    NsArchiveError,
    TypeMismatchError,
)

Decoder = Callable[["NsKeyedArchive", str, Any], Any]

_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U32_MAX = 2**32 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Size:
    """A width and height pair."""

    width: int
    height: int


@dataclass(frozen=True)
class NsClass:
    """Class information attached to an archived object."""

    class_name: str
    classes: list[str]


@dataclass(frozen=True)
class NsString:
    """An archived NSString object."""

    ns_class: NsClass
    string: str


class NsKeyedArchive:
    """An NSKeyedArchiver document with its object table."""

    def __init__(self, version: int, archiver: str, top: dict, objects: list) -> None:
        self.version = version
        self.archiver = archiver
        self.top = top
        self.objects = objects

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> "NsKeyedArchive":
        """Read an archive from a binary file object."""
        try:
            value = plistlib.load(reader)
        except (ValueError, xml.parsers.expat.ExpatError) as exc:
            raise NsArchiveError("Plist decoding error") from exc
        if not isinstance(value, dict):
            raise TypeMismatchError("")

        def take(key: str, check: Callable[[Any], bool]) -> Any:
            if key not in value:
                raise MissingKeyError(key)
            item = value.pop(key)
            if not check(item):
                raise TypeMismatchError(key)
            return item

        return cls(
            version=take("$version", lambda v: _is_int(v) and 0 <= v <= _U64_MAX),
            archiver=take("$archiver", lambda v: isinstance(v, str)),
            top=take("$top", lambda v: isinstance(v, dict)),
            objects=take("$objects", lambda v: isinstance(v, list)),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "NsKeyedArchive":
        """Read an archive from raw property list bytes."""
        return cls.from_reader(io.BytesIO(data))

    def resolve_index(self, index: int) -> Any:
        """Return the object at ``index``; index 0 (null) is an error."""
        if index == 0:
            raise BadIndexError()
        return self._lookup(index)

    def resolve_index_nullable(self, index: int) -> Optional[Any]:
        """Return the object at ``index``, or None for the null reference."""
        if index == 0:
            return None
        return self._lookup(index)

    def _lookup(self, index: int) -> Any:
        if not 0 <= index < len(self.objects):
            raise BadIndexError()
        return self.objects[index]

    def fetch_value(self, world: dict, key: str) -> Any:
        """Return the value under ``key``, following an object reference."""
        if key not in world:
            raise MissingKeyError(key)
        value = world[key]
        if isinstance(value, plistlib.UID):
            return self.resolve_index(value.data)
        return value

    def fetch_value_nullable(self, world: dict, key: str) -> Optional[Any]:
        """Like fetch_value, but a missing key or null reference gives None."""
        value = world.get(key)
        if isinstance(value, plistlib.UID):
            return self.resolve_index_nullable(value.data)
        return value

    def fetch(self, world: dict, key: str, decoder: Decoder) -> Any:
        """Fetch the value under ``key`` and decode it."""
        return decoder(self, key, self.fetch_value(world, key))

    def fetch_optional(self, world: dict, key: str, decoder: Decoder) -> Optional[Any]:
        """Fetch and decode an optional value; absent values give None."""
        value = self.fetch_value_nullable(world, key)
        if value is None:
            return None
        return decoder(self, key, value)

    def root(self) -> dict:
        """Return the root object dictionary."""
        return self.fetch(self.top, "root", decode_dict)


def decode_bool(archive: NsKeyedArchive, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeMismatchError(key)
    return value


def decode_unsigned(archive: NsKeyedArchive, key: str, value: Any) -> int:
    if not (_is_int(value) and 0 <= value <= _U64_MAX):
        raise TypeMismatchError(key)
    return value


def decode_signed(archive: NsKeyedArchive, key: str, value: Any) -> int:
    if not (_is_int(value) and _I64_MIN <= value <= _I64_MAX):
        raise TypeMismatchError(key)
    return value


def decode_u32(archive: NsKeyedArchive, key: str, value: Any) -> int:
    number = decode_unsigned(archive, key, value)
    if number > _U32_MAX:
        raise TypeMismatchError(key)
    return number


def decode_i32(archive: NsKeyedArchive, key: str, value: Any) -> int:
    number = decode_signed(archive, key, value)
    if not _I32_MIN <= number <= _I32_MAX:
        raise TypeMismatchError(key)
    return number


def decode_float(archive: NsKeyedArchive, key: str, value: Any) -> float:
    if not isinstance(value, float):
        raise TypeMismatchError(key)
    return value


def decode_dict(archive: NsKeyedArchive, key: str, value: Any) -> dict:
    if not isinstance(value, dict):
        raise TypeMismatchError(key)
    return value


def decode_data(archive: NsKeyedArchive, key: str, value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeMismatchError(key)
    return bytes(value)


def decode_uid(archive: NsKeyedArchive, key: str, value: Any) -> plistlib.UID:
    if not isinstance(value, plistlib.UID):
        raise TypeMismatchError(key)
    return value


def decode_str(archive: NsKeyedArchive, key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(key)
    return value


def decode_string(archive: NsKeyedArchive, key: str, value: Any) -> str:
    """Decode either an archived NSString object or a plain string."""
    try:
        return decode_ns_string(archive, key, value).string
    except NsArchiveError:
        return decode_str(archive, key, value)


def decode_list(item_decoder: Decoder) -> Decoder:
    """Build a decoder for a plist array whose items use ``item_decoder``."""

    def decode(archive: NsKeyedArchive, key: str, value: Any) -> list:
        if not isinstance(value, list):
            raise TypeMismatchError(key)
        return [item_decoder(archive, key, item) for item in value]

    return decode


def decode_objects(item_decoder: Decoder) -> Decoder:
    """Build a decoder for an archived collection referencing its items."""

    def decode(archive: NsKeyedArchive, key: str, value: Any) -> list:
        world = decode_dict(archive, key, value)
        uids = archive.fetch(world, "NS.objects", decode_list(decode_uid))
        return [item_decoder(archive, key, archive.resolve_index(uid.data)) for uid in uids]

    return decode


def decode_class(archive: NsKeyedArchive, key: str, value: Any) -> NsClass:
    coder = decode_dict(archive, key, value)
    return NsClass(
        class_name=archive.fetch(coder, "$classname", decode_string),
        classes=archive.fetch(coder, "$classes", decode_list(decode_string)),
    )


def decode_ns_string(archive: NsKeyedArchive, key: str, value: Any) -> NsString:
    coder = decode_dict(archive, key, value)
    return NsString(
        ns_class=archive.fetch(coder, "$class", decode_class),
        string=archive.fetch(coder, "NS.string", decode_string),
    )


def _parse_unsigned(text: str, key: str) -> int:
    if not _UNSIGNED_RE.fullmatch(text):
        raise TypeMismatchError(key)
    number = int(text)
    if number > _U32_MAX:
        raise TypeMismatchError(key)
    return number


def parse_size_str(size_str: str, key: str) -> tuple[int, int]:
    """Parse a ``{width, height}`` string into two integers."""
    if not (size_str.startswith("{") and size_str.endswith("}")):
        raise TypeMismatchError(key)
    separator = size_str.find(",")
    if separator < 0:
        raise TypeMismatchError(key)
    width = _parse_unsigned(size_str[1:separator].strip(), key)
    height = _parse_unsigned(size_str[separator + 1 : -1].strip(), key)
    return width, height


def decode_size(archive: NsKeyedArchive, key: str, value: Any) -> Size:
    width, height = parse_size_str(decode_str(archive, key, value), key)
    return Size(width, height)