# silica

Read Procreate documents in Python.

A `.procreate` file is a zip archive. It holds a keyed-archive property list,
`Document.archive`, and one compressed tile per layer chunk. `silica` decodes
the archive, rebuilds the layer hierarchy and unpacks every tile into an
in-memory atlas of raw RGBA bytes. Tiles ending in `.chunk` are LZO1X
compressed and are decompressed by `silica.lzo`; tiles ending in `.lz4` are
LZ4 frames.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Opening a document

```python
from silica.document import ProcreateFile

document, metadata = ProcreateFile.open("artwork.procreate")

print(document.name, document.author_name)
print(document.size.width, document.size.height)
print(document.layer_count(), "layers")
print(document.background_color, document.orientation, document.flipped)

tiling = metadata.canvas_tiling
print(tiling.cols, "x", tiling.rows, "tiles of", tiling.size, "pixels")
```

`ProcreateFile.from_zip(archive)` does the same for a `zipfile.ZipFile` that is
already open. Both return the document together with a
`ProcreateFileMetadata`.

`metadata.atlas` is a `silica.hierarchy.TileAtlas`. It holds the decoded RGBA
bytes of every chunk, keyed by atlas index. `TileAtlas.get(atlas_index)`
returns a tuple of `origin`, `extent` and `data` for that tile; `origin` is the
`(x, y, layer)` slot given by `CanvasTiling.atlas_origin`, and `extent` is the
`(width, height, depth)` from `CanvasTiling.tile_extent`. Edge tiles are
narrower or shorter when the canvas size is not a multiple of the tile size.

`document.composite` is the flattened composite layer, or `None` if it could
not be loaded. Errors while loading the other layers are raised.

## Layers

`document.layers` is a `silica.layers.SilicaGroup` named `"Root Layer"`. Its
children are `SilicaLayer` and `SilicaGroup` objects. Each layer carries its
blend mode (as the integer code stored in the document), opacity, clipping and
visibility, and the `SilicaChunk` tiles that make up its image.

`silica.render_plan` turns the tree into flat lists ready to composite:

```python
from silica.render_plan import linearize_layers, linearize_chunks

layers = linearize_layers(document.layers)   # CompositeLayer entries, bottom first
tiles = linearize_chunks(document.layers)    # ChunkTile entries with clipping info
```

A layer inside a hidden group is reported as hidden. Each tile also records, in
`clip_atlas_index`, the atlas index of the tile at the same column and row in
the layer directly below it, or `None` if there is none.

`rotation_for_orientation(document.orientation)` gives the initial canvas
rotation in radians. `is_upright(rotation)` tells whether width and height are
shown as they are (`True`) or swapped.

## Keyed archives

`silica.ns_archive.NsKeyedArchive` reads any keyed-archive property list, in
binary or XML form. Values are fetched with small decoder functions:

```python
from silica.ns_archive import NsKeyedArchive, decode_string, decode_size

archive = NsKeyedArchive.from_bytes(raw_plist_bytes)
root = archive.root()
size = archive.fetch(root, "size", decode_size)
name = archive.fetch_optional(root, "name", decode_string)
```

`decode_list` and `decode_objects` build decoders for arrays and archived
collections from an item decoder.

Decoding errors are subclasses of `silica.errors.NsArchiveError`:
`MissingKeyError`, `TypeMismatchError`, `BadValueError` and `BadIndexError`.
All errors derive from `silica.errors.SilicaError`, which also covers
`InvalidValueError`, `CorruptedFormatError` and `LzoError`.

## View geometry

`silica.bounds.CanvasViewBounds` and `silica.transform.ScreenTransform`
map between canvas values and screen positions. They support panning,
zooming around a point and keeping a fixed aspect ratio. They use the `Vec2`
and `Rect` types and the `remap` function from `silica.geometry`.

## What this package does not do

`silica` is a library only. It has no command, no window and no viewer. It does
not blend layers into a finished image and does not export to image files. It
reads documents; it never writes them.