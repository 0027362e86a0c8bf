import io
import zipfile
from plistlib import UID

import lz4.frame
import pytest

from silica.errors import CorruptedFormatError, LzoError, TypeMismatchError
from silica.hierarchy import (
    GroupRecord,
    LayerRecord,
    LoadContext,
    TileAtlas,
    decode_group_record,
    decode_hierarchy,
    decode_layer_record,
    parse_chunk_str,
)
from silica.layers import AtlasTextureTiling, CanvasTiling, SilicaChunk
from silica.ns_archive import NsKeyedArchive, Size

END = bytes([0x11, 0x00, 0x00])
TILE_A = bytes(range(16))
TILE_B = bytes([9, 8, 7, 6])
TILE_C = bytes(range(100, 108))


def _lzo_literal(payload):
    return bytes([17 + len(payload)]) + payload + END


def _archive():
    layer_class = {"$classname": "SilicaLayer", "$classes": ["SilicaLayer", "NSObject"]}
    group_class = {"$classname": "SilicaGroup", "$classes": ["SilicaGroup", "NSObject"]}
    array_class = {"$classname": "NSArray", "$classes": ["NSArray", "NSObject"]}
    layer_a = {
        "$class": UID(1),
        "UUID": "aaa",
        "blend": 1,
        "clipped": False,
        "hidden": False,
        "name": "First",
        "opacity": 0.5,
        "version": 3,
    }
    layer_b = {
        "$class": UID(1),
        "UUID": UID(8),
        "blend": 0,
        "extendedBlend": 5,
        "clipped": True,
        "hidden": True,
        "name": UID(0),
        "opacity": 1.0,
        "version": 1,
    }
    children = {"$class": UID(7), "NS.objects": [UID(3), UID(4)]}
    group = {"$class": UID(2), "children": UID(5), "isHidden": True, "name": "Group"}
    objects = [
        "$null",
        layer_class,
        group_class,
        layer_a,
        layer_b,
        children,
        group,
        array_class,
        "bbb",
    ]
    return NsKeyedArchive(100000, "NSKeyedArchiver", {"root": UID(6)}, objects)


def _tiling():
    return CanvasTiling(
        cols=2,
        rows=2,
        diff=Size(1, 1),
        size=2,
        atlas=AtlasTextureTiling.compute_atlas_size(3, 2),
    )


def _context(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries:
            zf.writestr(name, content)
    buffer.seek(0)
    zf = zipfile.ZipFile(buffer)
    return LoadContext(archive=zf, file_names=zf.namelist(), size=Size(3, 3), tiling=_tiling())


def _default_entries():
    return [
        ("aaa/0~0.chunk", _lzo_literal(TILE_A)),
        ("aaa/1~1.lz4", lz4.frame.compress(TILE_B)),
        ("bbb/1~0.chunk", _lzo_literal(TILE_C)),
    ]


def _group_record():
    archive = _archive()
    return decode_hierarchy(archive, "root", archive.root())


def test_parse_chunk_str():
    assert parse_chunk_str("3~7") == (3, 7)
    assert parse_chunk_str("0~0") == (0, 0)


@pytest.mark.parametrize("text", ["37", "a~1", "1~", "~1", "-1~2", "1~99999999999"])
def test_parse_chunk_str_rejects_bad_input(text):
    with pytest.raises(CorruptedFormatError):
        parse_chunk_str(text)


def test_decode_hierarchy_builds_records():
    record = _group_record()
    assert isinstance(record, GroupRecord)
    assert [type(child) for child in record.children] == [LayerRecord, LayerRecord]
    assert record.count_layer() == 2


def test_decode_layer_and_group_directly():
    archive = _archive()
    layer = decode_layer_record(archive, "layer", archive.objects[3])
    assert layer.count_layer() == 1
    group = decode_group_record(archive, "group", archive.objects[6])
    assert len(group.children) == 2


def test_decode_hierarchy_rejects_unknown_class():
    archive = _archive()
    archive.objects.append({"$classname": "Other", "$classes": ["Other"]})
    value = {"$class": UID(len(archive.objects) - 1)}
    with pytest.raises(TypeMismatchError):
        decode_hierarchy(archive, "x", value)


def test_load_group_reads_layers_and_tiles():
    atlas = TileAtlas()
    context = _context(_default_entries())
    group = _group_record().load(atlas, context)

    first, second = group.children
    assert first.uuid == "aaa"
    assert first.name == "First"
    assert first.opacity == 0.5
    assert first.blend == 1
    assert first.version == 3
    assert first.size == Size(3, 3)
    assert first.chunks == [SilicaChunk(0, 0, 1), SilicaChunk(1, 1, 2)]

    assert second.uuid == "bbb"
    assert second.name is None
    assert second.blend == 5
    assert second.clipped is True and second.hidden is True
    assert second.chunks == [SilicaChunk(1, 0, 3)]

    assert group.hidden is True
    assert group.name == "Group"
    assert group.layer_count() == 2
    assert len({first.id, second.id, group.id}) == 3
    assert group.id > max(first.id, second.id)


def test_load_writes_atlas_tiles():
    atlas = TileAtlas()
    context = _context(_default_entries())
    _group_record().load(atlas, context)
    assert len(atlas) == 3
    assert atlas.get(1).data == TILE_A
    assert atlas.get(2).data == TILE_B
    assert atlas.get(3).data == TILE_C
    tiling = _tiling()
    for atlas_index in (1, 2, 3):
        assert atlas.get(atlas_index).origin == tiling.atlas_origin(atlas_index)
    assert atlas.get(2).extent == tiling.tile_extent(1, 1)


def test_load_rejects_unknown_extension():
    context = _context([("aaa/0~0.png", b"x")])
    with pytest.raises(CorruptedFormatError):
        _group_record().load(TileAtlas(), context)


def test_load_rejects_bad_tile_name():
    context = _context([("aaa/x~0.chunk", _lzo_literal(TILE_A))])
    with pytest.raises(CorruptedFormatError):
        _group_record().load(TileAtlas(), context)


def test_load_propagates_lzo_errors():
    context = _context([("aaa/0~0.chunk", b"\x30abc")])
    with pytest.raises(LzoError):
        _group_record().load(TileAtlas(), context)


def test_atlas_rejects_wrong_tile_size():
    atlas = TileAtlas()
    with pytest.raises(CorruptedFormatError):
        atlas.write(1, b"\x00" * 15, (0, 0, 0), (2, 2, 1))
    assert 1 not in atlas


def test_context_counters_start_at_one_and_increase():
    context = _context([])
    assert [context.next_chunk_id() for _ in range(3)] == [1, 2, 3]
    assert [context.next_layer_id() for _ in range(2)] == [1, 2]