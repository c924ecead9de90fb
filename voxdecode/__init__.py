"""VoxDecode: read MagicaVoxel .vox files."""

from voxdecode import voxfile
from voxdecode.errors import FormatError, UnsupportedVersionError, VoxError
from voxdecode.palette import DEFAULT_PALETTE, default_palette, instance_palette
from voxdecode.scene import Color, DecodedScene, Voxel
from voxdecode.voxfile import (
    MAGIC,
    SUPPORTED_VERSION,
    decode,
    decode_bytes,
    decode_file,
)

__all__ = [
    "voxfile",
    "VoxError",
    "FormatError",
    "UnsupportedVersionError",
    "DEFAULT_PALETTE",
    "default_palette",
    "instance_palette",
    "Color",
    "DecodedScene",
    "Voxel",
    "MAGIC",
    "SUPPORTED_VERSION",
    "decode",
    "decode_bytes",
    "decode_file",
]
