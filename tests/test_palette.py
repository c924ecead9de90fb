import pytest
import voxdecode

from voxbuild import chunk, rgba_chunk, size_chunk, vox_file, xyzi_chunk

CUSTOM_COLORS = [(i, 255 - i, i // 2, 255 - i // 3) for i in range(256)]


def test_default_palette_first_entries():
    palette = voxdecode.default_palette()

    assert len(palette) == 256
    assert palette[0] == voxdecode.Color(0, 0, 0, 0)
    assert palette[1] == voxdecode.Color(255, 255, 255, 255)
    # 0xffccffff, red in the lowest byte
    assert palette[2] == voxdecode.Color(255, 255, 204, 255)


def test_default_palette_channel_order():
    palette = voxdecode.default_palette()

    # 0xff0000ee and 0xffeeeeee
    assert palette[216] == voxdecode.Color(0xEE, 0, 0, 0xFF)
    assert palette[246] == voxdecode.Color(0xEE, 0xEE, 0xEE, 0xFF)
    assert palette[255] == voxdecode.Color(0x11, 0x11, 0x11, 0xFF)


def test_default_palette_is_fresh():
    palette = voxdecode.default_palette()
    palette[1] = voxdecode.Color(1, 2, 3, 4)

    assert voxdecode.default_palette()[1] == voxdecode.Color(255, 255, 255, 255)


def test_instance_palette():
    table = [0x11223344] * 256

    palette = voxdecode.instance_palette(table)

    assert palette == [voxdecode.Color(0x44, 0x33, 0x22, 0x11)] * 256


@pytest.mark.parametrize("length", [0, 255, 257])
def test_instance_palette_wrong_length(length):
    with pytest.raises(ValueError):
        voxdecode.instance_palette([0] * length)


def test_color_from_packed():
    assert voxdecode.Color.from_packed(0xFF8040C0) == voxdecode.Color(0xC0, 0x40, 0x80, 0xFF)


def test_decode_without_rgba_uses_default():
    scene = voxdecode.decode_bytes(vox_file(size_chunk(2, 2, 2), xyzi_chunk([(0, 0, 0, 1)])))

    assert not scene.has_custom_palette
    assert scene.palette == voxdecode.default_palette()


@pytest.mark.parametrize("position", ["first", "middle", "last", "nested"])
def test_custom_palette_overrides_default(position):
    size = size_chunk(2, 2, 2)
    xyzi = xyzi_chunk([(1, 1, 1, 3)])
    rgba = rgba_chunk(CUSTOM_COLORS)

    if position == "first":
        data = vox_file(rgba, size, xyzi)
    elif position == "middle":
        data = vox_file(size, rgba, xyzi)
    elif position == "last":
        data = vox_file(size, xyzi, rgba)
    else:
        data = vox_file(size, xyzi, chunk(b"nGRP", b"", chunk(b"nSHP", b"", rgba)))

    scene = voxdecode.decode_bytes(data)

    assert scene.has_custom_palette
    assert len(scene.palette) == 256
    assert [tuple(color) for color in scene.palette] == CUSTOM_COLORS


def test_custom_palette_not_shifted():
    scene = voxdecode.decode_bytes(vox_file(rgba_chunk(CUSTOM_COLORS)))

    assert scene.palette[0] == voxdecode.Color(*CUSTOM_COLORS[0])
    assert scene.palette[255] == voxdecode.Color(*CUSTOM_COLORS[255])


def test_color_of():
    scene = voxdecode.decode_bytes(vox_file(xyzi_chunk([(1, 1, 1, 3)]), rgba_chunk(CUSTOM_COLORS)))

    assert scene.color_of(scene.voxels[0]) == voxdecode.Color(*CUSTOM_COLORS[3])


def test_color_hashable():
    colors = {voxdecode.Color(1, 2, 3), voxdecode.Color(1, 2, 3, 255)}

    assert len(colors) == 1
