"""Archived layer records and loading of their tile data."""

from __future__ import annotations

import itertools
import re
import zipfile
from dataclasses import dataclass, field
from typing import Any, Iterator, NamedTuple, Union

import lz4.frame

from silica import lzo
from silica.errors import CorruptedFormatError, SilicaError, TypeMismatchError
from silica.layers import CanvasTiling, SilicaChunk, SilicaGroup, SilicaLayer
from silica.ns_archive import (
    NsKeyedArchive,
    Size,
    decode_bool,
    decode_class,
    decode_dict,
    decode_float,
    decode_objects,
    decode_string,
    decode_u32,
    decode_unsigned,
)

_RGBA_CHANNEL_COUNT = 4
_U32_MAX = 2**32 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


class _AtlasTile(NamedTuple):
    origin: tuple[int, int, int]
    extent: tuple[int, int, int]
    data: bytes


class TileAtlas:
    """In-memory store of decoded RGBA tiles keyed by atlas index."""

    def __init__(self) -> None:
        self._tiles: dict[int, _AtlasTile] = {}

    def write(
        self,
        atlas_index: int,
        data: bytes,
        origin: tuple[int, int, int],
        extent: tuple[int, int, int],
    ) -> None:
        """Store the RGBA pixels of one tile."""
        width, height, depth = extent
        if len(data) != width * height * depth * _RGBA_CHANNEL_COUNT:
            raise CorruptedFormatError()
        self._tiles[atlas_index] = _AtlasTile(tuple(origin), tuple(extent), bytes(data))

    def get(self, atlas_index: int) -> _AtlasTile:
        """Return the tile stored at ``atlas_index``."""
        return self._tiles[atlas_index]

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, atlas_index: object) -> bool:
        return atlas_index in self._tiles


@dataclass
class LoadContext:
    """Shared state while loading the layers of one document."""

    archive: zipfile.ZipFile
    file_names: list[str]
    size: Size
    tiling: CanvasTiling
    _layer_ids: Iterator[int] = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )
    _chunk_ids: Iterator[int] = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )

    def next_layer_id(self) -> int:
        """Hand out the next layer identifier, starting at 1."""
        return next(self._layer_ids)

    def next_chunk_id(self) -> int:
        """Hand out the next atlas index, starting at 1."""
        return next(self._chunk_ids)


def parse_chunk_str(chunk_str: str) -> tuple[int, int]:
    """Parse a ``col~row`` tile name."""
    col_text, tilde, row_text = chunk_str.partition("~")
    if not tilde:
        raise CorruptedFormatError()
    return _parse_u32(col_text), _parse_u32(row_text)


def _parse_u32(text: str) -> int:
    if not _UNSIGNED_RE.fullmatch(text):
        raise CorruptedFormatError()
    number = int(text)
    if number > _U32_MAX:
        raise CorruptedFormatError()
    return number


def _decode_tile(path: str, raw: bytes, extent: tuple[int, int, int]) -> bytes:
    if path.endswith(".lz4"):
        try:
            return lz4.frame.decompress(raw)
        except RuntimeError as exc:
            raise SilicaError(f"I/O error: {exc}") from exc
    if not path.endswith(".chunk"):
        raise CorruptedFormatError()
    width, height, _ = extent
    return lzo.decompress(raw, width * height * _RGBA_CHANNEL_COUNT)


@dataclass
class LayerRecord:
    """An archived layer whose pixels are not yet loaded."""

    archive: NsKeyedArchive
    coder: dict

    def count_layer(self) -> int:
        return 1

    def load(self, atlas: TileAtlas, context: LoadContext) -> SilicaLayer:
        """Decode the layer's tiles into ``atlas`` and build the layer."""
        nka, world = self.archive, self.coder
        uuid = nka.fetch(world, "UUID", decode_string)

        chunks = []
        for path in context.file_names:
            if not path.startswith(uuid):
                continue
            dot = path.find(".")
            chunk_str = path[len(uuid) + 1 : dot if dot >= 0 else len(path)]
            col, row = parse_chunk_str(chunk_str)
            extent = context.tiling.tile_extent(col, row)
            data = _decode_tile(path, context.archive.read(path), extent)
            atlas_index = context.next_chunk_id()
            atlas.write(atlas_index, data, context.tiling.atlas_origin(atlas_index), extent)
            chunks.append(SilicaChunk(col=col, row=row, atlas_index=atlas_index))

        blend = nka.fetch_optional(world, "extendedBlend", decode_u32)
        if blend is None:
            blend = nka.fetch(world, "blend", decode_u32)

        return SilicaLayer(
            blend=blend,
            clipped=nka.fetch(world, "clipped", decode_bool),
            hidden=nka.fetch(world, "hidden", decode_bool),
            mask=None,
            name=nka.fetch_optional(world, "name", decode_string),
            opacity=nka.fetch(world, "opacity", decode_float),
            size=context.size,
            uuid=uuid,
            version=nka.fetch(world, "version", decode_unsigned),
            chunks=chunks,
            id=context.next_layer_id(),
        )


@dataclass
class GroupRecord:
    """An archived group with its archived children."""

    archive: NsKeyedArchive
    coder: dict
    children: list[Union[LayerRecord, "GroupRecord"]]

    def count_layer(self) -> int:
        return sum(child.count_layer() for child in self.children)

    def load(self, atlas: TileAtlas, context: LoadContext) -> SilicaGroup:
        """Load the group and every child below it."""
        nka, coder = self.archive, self.coder
        hidden = nka.fetch(coder, "isHidden", decode_bool)
        name = nka.fetch_optional(coder, "name", decode_string)
        children = [child.load(atlas, context) for child in self.children]
        return SilicaGroup(
            hidden=hidden, name=name, children=children, id=context.next_layer_id()
        )


def decode_layer_record(archive: NsKeyedArchive, key: str, value: Any) -> LayerRecord:
    return LayerRecord(archive=archive, coder=decode_dict(archive, key, value))


def decode_group_record(archive: NsKeyedArchive, key: str, value: Any) -> GroupRecord:
    coder = decode_dict(archive, key, value)
    children = archive.fetch(coder, "children", decode_objects(decode_hierarchy))
    return GroupRecord(archive=archive, coder=coder, children=children)


def decode_hierarchy(
    archive: NsKeyedArchive, key: str, value: Any
) -> Union[LayerRecord, GroupRecord]:
    """Decode a layer or group according to its archived class."""
    coder = decode_dict(archive, key, value)
    ns_class = archive.fetch(coder, "$class", decode_class)
    if ns_class.class_name == "SilicaGroup":
        return decode_group_record(archive, key, value)
    if ns_class.class_name == "SilicaLayer":
        return decode_layer_record(archive, key, value)
    raise TypeMismatchError("$class")