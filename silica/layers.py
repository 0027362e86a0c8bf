"""Layer tree and tiling geometry of a loaded document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from silica.ns_archive import Size

_TEX_MAX_DIM = 8192


def _div_ceil(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


@dataclass(frozen=True)
class AtlasTextureTiling:
    """How tiles are packed into a layered atlas texture."""

    cols: int
    rows: int
    layers: int

    @classmethod
    def compute_atlas_size(cls, chunk_count: int, tile_size: int) -> "AtlasTextureTiling":
        """Choose an atlas layout holding ``chunk_count`` square tiles."""
        if chunk_count * tile_size <= _TEX_MAX_DIM:
            return cls(cols=chunk_count, rows=1, layers=1)
        columns = _TEX_MAX_DIM // tile_size
        rows = _div_ceil(chunk_count, columns)
        if rows * tile_size <= _TEX_MAX_DIM:
            return cls(cols=columns, rows=rows, layers=1)
        rows = _TEX_MAX_DIM // tile_size
        return cls(cols=columns, rows=rows, layers=_div_ceil(chunk_count, columns * rows))

    def index(self, atlas_index: int) -> tuple[int, int, int]:
        """Return the (column, row, layer) slot of an atlas index."""
        return (
            atlas_index % self.cols,
            atlas_index // self.cols % self.rows,
            atlas_index // (self.cols * self.rows),
        )


@dataclass(frozen=True)
class CanvasTiling:
    """How the canvas is cut into tiles and where they live in the atlas."""

    cols: int
    rows: int
    diff: Size
    size: int
    atlas: AtlasTextureTiling

    def tile_extent(self, col: int, row: int) -> tuple[int, int, int]:
        """Return (width, height, depth) of the tile at ``col``, ``row``."""
        width = self.size if col != self.cols - 1 else self.size - self.diff.width
        height = self.size if row != self.rows - 1 else self.size - self.diff.height
        return (width, height, 1)

    def atlas_origin(self, index: int) -> tuple[int, int, int]:
        """Return the (x, y, layer) pixel origin of an atlas slot."""
        x, y, z = self.atlas.index(index)
        return (x * self.size, y * self.size, z)


@dataclass(frozen=True)
class SilicaChunk:
    """One tile of a layer and the atlas slot holding its pixels."""

    col: int
    row: int
    atlas_index: int


@dataclass
class SilicaLayer:
    """A raster layer."""

    blend: int
    clipped: bool
    hidden: bool
    name: Optional[str]
    opacity: float
    size: Size
    uuid: str
    version: int
    chunks: list[SilicaChunk] = field(default_factory=list)
    mask: Optional[int] = None
    id: int = 0

    def layer_count(self) -> int:
        """A layer counts as one."""
        return 1


@dataclass
class SilicaGroup:
    """A group of layers and other groups."""

    hidden: bool
    children: list[Union[SilicaLayer, "SilicaGroup"]] = field(default_factory=list)
    name: Optional[str] = None
    id: int = 0

    def layer_count(self) -> int:
        """Number of raster layers anywhere below this group."""
        return sum(child.layer_count() for child in self.children)