"""Flattening a layer tree into the lists the compositor consumes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

from silica.data import Orientation
from silica.layers import SilicaGroup, SilicaLayer


@dataclass(frozen=True)
class CompositeLayer:
    """Blend settings of one layer, in compositing order."""

    opacity: float
    blend: int
    clipped: bool
    hidden: bool


@dataclass(frozen=True)
class ChunkTile:
    """One tile to composite, with the tile of the layer it may clip to."""

    col: int
    row: int
    atlas_index: int
    clip_atlas_index: Optional[int]
    layer_index: int


def _walk_layers(
    group: SilicaGroup, override_hidden: bool = False
) -> Iterator[tuple[SilicaLayer, bool]]:
    """Yield layers bottom to top with the hidden state inherited from groups."""
    for child in reversed(group.children):
        if isinstance(child, SilicaGroup):
            yield from _walk_layers(child, child.hidden or override_hidden)
        else:
            yield child, override_hidden


def linearize_layers(root: SilicaGroup) -> list[CompositeLayer]:
    """Turn the layer tree into a flat list of blend settings."""
    return [
        CompositeLayer(
            opacity=layer.opacity,
            blend=layer.blend,
            clipped=layer.clipped,
            hidden=layer.hidden or inherited,
        )
        for layer, inherited in _walk_layers(root)
    ]


def linearize_chunks(root: SilicaGroup) -> list[ChunkTile]:
    """List every tile of every layer, paired with the tile below it to clip to."""
    tiles: list[ChunkTile] = []
    previous: Optional[SilicaLayer] = None
    for layer_index, (layer, _) in enumerate(_walk_layers(root)):
        clip = (
            {}
            if previous is None
            else {(chunk.col, chunk.row): chunk.atlas_index for chunk in previous.chunks}
        )
        tiles.extend(
            ChunkTile(
                col=chunk.col,
                row=chunk.row,
                atlas_index=chunk.atlas_index,
                clip_atlas_index=clip.get((chunk.col, chunk.row)),
                layer_index=layer_index,
            )
            for chunk in layer.chunks
        )
        previous = layer
    return tiles


def rotation_for_orientation(orientation: Orientation) -> float:
    """Initial view rotation, in radians, for a stored orientation."""
    degrees = {
        Orientation.NO_ROTATION: 0.0,
        Orientation.CLOCKWISE_180: 180.0,
        Orientation.CLOCKWISE_270: 270.0,
        Orientation.CLOCKWISE_90: 90.0,
    }.get(orientation, 0.0)
    return math.radians(degrees)


def is_upright(rotation: float) -> bool:
    """Whether a rotation keeps width and height in their usual places."""
    degrees = math.degrees(rotation)
    return not (45.0 <= degrees < 135.0) and not (225.0 <= degrees < 315.0)