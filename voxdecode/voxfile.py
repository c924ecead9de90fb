"""VoxFile decoding and related functions.

The goal of this module is to read MagicaVoxel .vox files into a
DecodedScene. A .vox file is a short header followed by a tree of chunks:

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | char       | 'V' 'O' 'X' ' '
    4        | int        | version number : 150
    -------------------------------------------------------------------------------

    Chunk
    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    1x4      | char       | chunk id
    4        | int        | num bytes of chunk content (N)
    4        | int        | num bytes of children chunks (M)
    N        |            | chunk content
    M        |            | children chunks
    -------------------------------------------------------------------------------

Only the 'SIZE', 'XYZI' and 'RGBA' chunks are interpreted; the content of any
other chunk is skipped while its children are still read.
"""

import io
import logging
import os
from typing import BinaryIO, Optional, Union

from voxdecode.errors import FormatError, UnsupportedVersionError
from voxdecode.palette import PALETTE_SIZE, default_palette
from voxdecode.scene import Color, DecodedScene, Voxel

logger = logging.getLogger(__name__)

MAGIC = b"VOX "
SUPPORTED_VERSION = 150

# id, content size, children size
CHUNK_HEADER_SIZE = 12

SKIP_BLOCK_SIZE = 4096


class ByteReader:
    """Reads little-endian .vox values from a binary stream.

    Every read either returns exactly the requested bytes or raises a
    FormatError describing what was being read.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read_bytes(self, n: int, what: str) -> bytes:
        """Read exactly n bytes."""
        data = b""
        while len(data) < n:
            try:
                block = self.stream.read(n - len(data))
            except OSError as err:
                raise FormatError(f"Failed to read {what}. {err}") from err
            if not block:
                break
            data += block

        if len(data) != n:
            raise FormatError(
                f"Failed to read {what}. Expected {n} bytes, got {len(data)}."
            )
        return data

    def read_byte(self, what: str) -> int:
        """Read an unsigned 8-bit integer."""
        return self.read_bytes(1, what)[0]

    def read_uint32(self, what: str) -> int:
        """Read an unsigned little-endian 32-bit integer."""
        return int.from_bytes(self.read_bytes(4, what), "little", signed=False)

    def skip(self, n: int, what: str):
        """Discard exactly n bytes."""
        while n > 0:
            block = min(n, SKIP_BLOCK_SIZE)
            self.read_bytes(block, what)
            n -= block


class ChunkHeader:
    """ChunkHeader class."""

    def __init__(self, id: bytes, content_size: int, children_size: int):
        self.id = id
        self.content_size = content_size
        self.children_size = children_size

    @property
    def name(self) -> str:
        return self.id.decode("ascii", errors="replace")

    @classmethod
    def read(cls, reader: ByteReader) -> "ChunkHeader":
        """Read a chunk header from the given reader."""
        id = reader.read_bytes(4, "the chunk ID")
        name = id.decode("ascii", errors="replace")
        content_size = reader.read_uint32(f"the {name} chunk size")
        children_size = reader.read_uint32(f"the {name} chunk's children size")
        return ChunkHeader(id, content_size, children_size)


class Chunk:
    """Chunk class."""

    id = b""

    # required content size, if the chunk has a fixed layout
    content_size: Optional[int] = None

    @classmethod
    def name(cls) -> str:
        return cls.id.decode("ascii")

    @classmethod
    def check_content_size(cls, header: ChunkHeader):
        """Check the declared content size against the fixed layout, if any."""
        if cls.content_size is not None and header.content_size != cls.content_size:
            raise FormatError(
                f"Failed to read the {cls.name()} chunk. Size should have been "
                f"{cls.content_size} but is {header.content_size}."
            )

    @classmethod
    def read(cls, reader: ByteReader, header: ChunkHeader) -> "Chunk":
        raise NotImplementedError

    def apply(self, scene: DecodedScene):
        raise NotImplementedError


class SizeChunk(Chunk):
    """Size chunk class.

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | size x
    4        | int        | size y
    4        | int        | size z : gravity direction
    -------------------------------------------------------------------------------
    """

    id = b"SIZE"

    content_size = 12

    def __init__(self, size: tuple[int, int, int]):
        """SizeChunk constructor."""
        self.size = size

    @classmethod
    def read(cls, reader: ByteReader, header: ChunkHeader) -> "SizeChunk":
        x = reader.read_uint32("the SIZE chunk X-axis size")
        y = reader.read_uint32("the SIZE chunk Y-axis size")
        z = reader.read_uint32("the SIZE chunk Z-axis size")

        return SizeChunk((x, y, z))

    def apply(self, scene: DecodedScene):
        scene.set_size(self.size)


class XYZIChunk(Chunk):
    """XYZI chunk class.

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | numVoxels (N)
    4 x N    | int        | (x, y, z, colorIndex) : 1 byte for each component
    -------------------------------------------------------------------------------

    N is trusted as declared; it is not checked against the content size.
    """

    id = b"XYZI"

    def __init__(self, voxels: list[Voxel]):
        """XYZIChunk constructor."""
        self.voxels = voxels

    @classmethod
    def read(cls, reader: ByteReader, header: ChunkHeader) -> "XYZIChunk":
        num_voxels = reader.read_uint32("the XYZI chunk voxel count")

        voxels = []
        for i in range(num_voxels):
            x = reader.read_byte(f"the XYZI chunk voxel #{i} (x)")
            y = reader.read_byte(f"the XYZI chunk voxel #{i} (y)")
            z = reader.read_byte(f"the XYZI chunk voxel #{i} (z)")
            color_index = reader.read_byte(f"the XYZI chunk voxel #{i} (index)")
            voxels.append(Voxel(x, y, z, color_index))

        return XYZIChunk(voxels)

    def apply(self, scene: DecodedScene):
        scene.voxels = self.voxels


class PaletteChunk(Chunk):
    """Palette chunk class.

    -------------------------------------------------------------------------------
    # Bytes  | Type     | Value
    -------------------------------------------------------------------------------
    4 x 256  | int      | (R, G, B, A) : 1 byte for each component
    -------------------------------------------------------------------------------

    MagicaVoxel maps color [0-254] to palette index [1-255]. Colors are kept in
    on-disk order here, without that shift, to match existing decoders.
    """

    id = b"RGBA"

    def __init__(self, palette: list[Color]):
        """PaletteChunk constructor."""
        self.palette = palette

    @classmethod
    def read(cls, reader: ByteReader, header: ChunkHeader) -> "PaletteChunk":
        # always 256 colors, whatever the declared size
        palette = []
        for i in range(PALETTE_SIZE):
            r = reader.read_byte(f"the RGBA chunk color #{i} (r)")
            g = reader.read_byte(f"the RGBA chunk color #{i} (g)")
            b = reader.read_byte(f"the RGBA chunk color #{i} (b)")
            a = reader.read_byte(f"the RGBA chunk color #{i} (a)")
            palette.append(Color(r, g, b, a))

        return PaletteChunk(palette)

    def apply(self, scene: DecodedScene):
        scene.set_palette(self.palette, custom=True)


CHUNK_TYPES: dict[bytes, type[Chunk]] = {
    chunk_type.id: chunk_type for chunk_type in (SizeChunk, XYZIChunk, PaletteChunk)
}


def read_header(reader: ByteReader) -> int:
    """Check the file signature and return the format version."""
    magic = reader.read_bytes(4, "the file signature")
    if magic != MAGIC:
        raise FormatError(f"File doesn't appear to be a VOX file. (Magic: {magic!r})")

    version = reader.read_uint32("the version number")
    if version != SUPPORTED_VERSION:
        raise UnsupportedVersionError(version, SUPPORTED_VERSION)

    return version


def read_chunk(reader: ByteReader, scene: DecodedScene) -> int:
    """Read one chunk and its children into the scene.

    Returns the number of bytes the chunk occupies: the header, the declared
    content size and the sizes of all children.
    """
    header = ChunkHeader.read(reader)

    chunk_type = CHUNK_TYPES.get(header.id)
    if chunk_type is not None:
        chunk_type.check_content_size(header)

    if header.content_size > 0:
        if chunk_type is not None:
            chunk_type.read(reader, header).apply(scene)
        else:
            reader.skip(header.content_size, f"the {header.name} chunk contents")

    consumed = CHUNK_HEADER_SIZE + header.content_size

    remaining = header.children_size
    while remaining > 0:
        try:
            child_size = read_chunk(reader, scene)
        except FormatError as err:
            raise FormatError(
                f"Failed to read the children of the {header.name} chunk. {err}"
            ) from err

        if child_size > remaining:
            raise FormatError(
                f"Children of the {header.name} chunk overrun its declared "
                f"children size by {child_size - remaining} bytes."
            )

        remaining -= child_size
        consumed += child_size

    return consumed


def decode(stream: BinaryIO, require_size: bool = False) -> DecodedScene:
    """Decode a .vox file from a binary stream.

    The stream is read from its current position and is left open.
    """
    reader = ByteReader(stream)

    version = read_header(reader)
    scene = DecodedScene(version)

    try:
        read_chunk(reader, scene)
    except RecursionError as err:
        raise FormatError("The chunk tree is nested too deeply.") from err

    if require_size and not scene.has_size:
        raise FormatError("The file doesn't contain a SIZE chunk.")

    # no RGBA chunk anywhere in the tree
    if not scene.has_custom_palette:
        scene.set_palette(default_palette(), custom=False)

    return scene


def decode_bytes(data: bytes, require_size: bool = False) -> DecodedScene:
    """Decode a .vox file held in memory."""
    return decode(io.BytesIO(data), require_size=require_size)


def decode_file(
    path: Union[str, os.PathLike], require_size: bool = False
) -> DecodedScene:
    """Decode the .vox file at the given path."""
    logger.debug("Decoding %s", path)

    with open(path, "rb") as f:
        scene = decode(f, require_size=require_size)

    logger.debug(
        "Decoded %s: version %d, size %s, %d voxels, %s palette",
        path,
        scene.version,
        scene.size,
        len(scene.voxels),
        "custom" if scene.has_custom_palette else "default",
    )
    return scene
