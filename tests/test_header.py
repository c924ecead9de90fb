import io

import pytest
import voxdecode

from voxbuild import header, size_chunk, uint32, vox_file


def test_read_valid_header():
    scene = voxdecode.decode_bytes(vox_file(size_chunk(1, 1, 1)))

    assert scene.version == 150


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"VO",
        b"VOX",
        b"vox " + uint32(150),
        b"VOX!" + uint32(150),
        b" XOV" + uint32(150),
    ],
)
def test_bad_magic(data):
    with pytest.raises(voxdecode.FormatError):
        voxdecode.decode_bytes(data)


@pytest.mark.parametrize("data", [b"VOX ", b"VOX \x96", b"VOX \x96\x00\x00"])
def test_truncated_version(data):
    with pytest.raises(voxdecode.FormatError, match="version"):
        voxdecode.decode_bytes(data)


@pytest.mark.parametrize("version", [0, 149, 151, 200, 0xFFFFFFFF])
def test_unsupported_version(version):
    with pytest.raises(voxdecode.UnsupportedVersionError) as exc_info:
        voxdecode.decode_bytes(vox_file(size_chunk(1, 1, 1), version=version))

    assert exc_info.value.found == version
    assert exc_info.value.expected == 150
    assert not isinstance(exc_info.value, voxdecode.FormatError)


def test_version_checked_before_chunks():
    # nothing follows the header, so reading a chunk would fail differently
    with pytest.raises(voxdecode.UnsupportedVersionError):
        voxdecode.decode_bytes(header(version=151))


def test_version_is_little_endian():
    with pytest.raises(voxdecode.UnsupportedVersionError) as exc_info:
        voxdecode.decode_bytes(b"VOX " + (150).to_bytes(4, "big"))

    assert exc_info.value.found == 150 << 24


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        voxdecode.decode_bytes(b"PNG ")


def test_header_consumes_eight_bytes():
    stream = io.BytesIO(header() + b"rest")
    reader = voxdecode.voxfile.ByteReader(stream)

    assert voxdecode.voxfile.read_header(reader) == 150
    assert stream.read() == b"rest"
