"""Opening Procreate documents and loading their layers and tiles."""

from __future__ import annotations

import os
import struct
import zipfile
from dataclasses import dataclass
from typing import Optional, Union

from silica.data import Flipped, Orientation, decode_orientation
from silica.errors import InvalidValueError, SilicaError, TypeMismatchError
from silica.hierarchy import (
    GroupRecord,
    LayerRecord,
    LoadContext,
    TileAtlas,
    decode_hierarchy,
    decode_layer_record,
)
from silica.layers import AtlasTextureTiling, CanvasTiling, SilicaGroup, SilicaLayer
from silica.ns_archive import (
    NsKeyedArchive,
    Size,
    decode_bool,
    decode_data,
    decode_objects,
    decode_size,
    decode_string,
    decode_u32,
    decode_unsigned,
)

_DOCUMENT_ENTRY = "Document.archive"
_ROOT_LAYER_NAME = "Root Layer"


def _div_ceil(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _decode_background_color(raw: bytes) -> tuple[float, float, float, float]:
    if len(raw) // 4 != 4:
        raise TypeMismatchError("backgroundColor")
    return struct.unpack_from("<4f", raw)


@dataclass
class ProcreateFileMetadata:
    """Tile storage and tiling layout produced while loading a document."""

    atlas: TileAtlas
    canvas_tiling: CanvasTiling


@dataclass
class ProcreateFile:
    """A fully loaded Procreate document."""

    author_name: Optional[str]
    background_hidden: bool
    background_color: tuple[float, float, float, float]
    flipped: Flipped
    name: Optional[str]
    orientation: Orientation
    stroke_count: int
    tile_size: int
    composite: Optional[SilicaLayer]
    layers: SilicaGroup
    size: Size

    @classmethod
    def open(
        cls, path: Union[str, os.PathLike]
    ) -> tuple["ProcreateFile", ProcreateFileMetadata]:
        """Open and load the document stored at ``path``."""
        try:
            with zipfile.ZipFile(path) as archive:
                return cls.from_zip(archive)
        except zipfile.BadZipFile as exc:
            raise SilicaError(f"Zip error: {exc}") from exc
        except OSError as exc:
            raise SilicaError(f"I/O error: {exc}") from exc

    @classmethod
    def from_zip(
        cls, archive: zipfile.ZipFile
    ) -> tuple["ProcreateFile", ProcreateFileMetadata]:
        """Load a document from an already opened zip archive."""
        try:
            document = archive.read(_DOCUMENT_ENTRY)
        except KeyError as exc:
            raise SilicaError(
                f"Zip error: {_DOCUMENT_ENTRY} not found in archive"
            ) from exc
        except zipfile.BadZipFile as exc:
            raise SilicaError(f"Zip error: {exc}") from exc
        nka = NsKeyedArchive.from_bytes(document)
        return UnloadedDocument.from_archive(archive, nka).load()

    def layer_count(self) -> int:
        """Number of raster layers in the layer tree."""
        return self.layers.layer_count()


@dataclass
class UnloadedDocument:
    """Document properties decoded from the archive, tiles not yet read."""

    author_name: Optional[str]
    background_hidden: bool
    background_color: tuple[float, float, float, float]
    flipped: Flipped
    name: Optional[str]
    orientation: Orientation
    stroke_count: int
    tile_size: int
    context: LoadContext
    layers: list[Union[LayerRecord, GroupRecord]]
    composite: LayerRecord

    @classmethod
    def from_archive(
        cls, archive: zipfile.ZipFile, nka: NsKeyedArchive
    ) -> "UnloadedDocument":
        """Decode the document properties and the archived layer records."""
        root = nka.root()

        size = nka.fetch(root, "size", decode_size)
        tile_size = nka.fetch(root, "tileSize", decode_u32)
        if tile_size == 0:
            raise InvalidValueError()
        cols = _div_ceil(size.width, tile_size)
        rows = _div_ceil(size.height, tile_size)

        file_names = archive.namelist()
        layers = nka.fetch(root, "unwrappedLayers", decode_objects(decode_hierarchy))

        tiling = CanvasTiling(
            cols=cols,
            rows=rows,
            diff=Size(cols * tile_size - size.width, rows * tile_size - size.height),
            size=tile_size,
            atlas=AtlasTextureTiling.compute_atlas_size(len(file_names), tile_size),
        )
        context = LoadContext(
            archive=archive, file_names=file_names, size=size, tiling=tiling
        )

        author_name = nka.fetch_optional(root, "authorName", decode_string)
        background_hidden = nka.fetch(root, "backgroundHidden", decode_bool)
        stroke_count = nka.fetch(root, "strokeCount", decode_unsigned)
        background_color = _decode_background_color(
            nka.fetch(root, "backgroundColor", decode_data)
        )
        name = nka.fetch_optional(root, "name", decode_string)
        orientation = nka.fetch(root, "orientation", decode_orientation)
        flipped = Flipped(
            horizontally=nka.fetch(root, "flippedHorizontally", decode_bool),
            vertically=nka.fetch(root, "flippedVertically", decode_bool),
        )
        composite = nka.fetch(root, "composite", decode_layer_record)

        return cls(
            author_name=author_name,
            background_hidden=background_hidden,
            background_color=background_color,
            flipped=flipped,
            name=name,
            orientation=orientation,
            stroke_count=stroke_count,
            tile_size=tile_size,
            context=context,
            layers=layers,
            composite=composite,
        )

    def load(self) -> tuple[ProcreateFile, ProcreateFileMetadata]:
        """Read every tile and build the loaded document."""
        atlas = TileAtlas()
        context = self.context
        try:
            composite: Optional[SilicaLayer] = self.composite.load(atlas, context)
        except SilicaError:
            composite = None
        children = [record.load(atlas, context) for record in self.layers]
        document = ProcreateFile(
            author_name=self.author_name,
            background_hidden=self.background_hidden,
            background_color=self.background_color,
            flipped=self.flipped,
            name=self.name,
            orientation=self.orientation,
            stroke_count=self.stroke_count,
            tile_size=self.tile_size,
            composite=composite,
            layers=SilicaGroup(
                hidden=False, children=children, name=_ROOT_LAYER_NAME, id=0
            ),
            size=context.size,
        )
        return document, ProcreateFileMetadata(atlas=atlas, canvas_tiling=context.tiling)