"""Small value types stored in a Procreate document."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from silica.errors import BadValueError
from silica.ns_archive import NsKeyedArchive, decode_unsigned


@dataclass
class Flipped:
    """Whether the canvas is mirrored along each axis."""

    horizontally: bool
    vertically: bool


class Orientation(enum.Enum):
    """Canvas rotation as stored in the document."""

    NO_ROTATION = 1
    CLOCKWISE_180 = 2
    CLOCKWISE_270 = 3
    CLOCKWISE_90 = 4
    UNKNOWN = 0


def decode_orientation(archive: NsKeyedArchive, key: str, value: Any) -> Orientation:
    """Decode the archived orientation code."""
    code = decode_unsigned(archive, key, value)
    if code in (1, 2, 3, 4):
        return Orientation(code)
    raise BadValueError(key, str(code))