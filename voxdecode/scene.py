"""Scene classes for VoxDecode.

The goal of this module is to provide the result types of decoding a
MagicaVoxel .vox file: the grid extents, the populated voxels, and the 256
entry palette that the voxels index into.
"""


class Color:
    """Color class."""

    def __init__(self, r: int, g: int, b: int, a: int = 255):
        self.r = r
        self.g = g
        self.b = b
        self.a = a

    @classmethod
    def from_packed(cls, value: int) -> "Color":
        """Unpack a 32-bit value stored with red in the lowest byte."""
        return cls(
            value & 0xFF,
            (value >> 8) & 0xFF,
            (value >> 16) & 0xFF,
            (value >> 24) & 0xFF,
        )

    def __eq__(self, other):
        if not isinstance(other, Color):
            return False
        return (
            self.r == other.r
            and self.g == other.g
            and self.b == other.b
            and self.a == other.a
        )

    def __hash__(self):
        return hash((self.r, self.g, self.b, self.a))

    def __iter__(self):
        return iter((self.r, self.g, self.b, self.a))

    def __repr__(self):
        return f"Color({self.r}, {self.g}, {self.b}, {self.a})"


class Voxel:
    """Voxel class.

    Positions are raw bytes from the file and are not checked against the
    scene extents. Index 0 is conventionally empty.
    """

    def __init__(self, x: int, y: int, z: int, index: int):
        self.x = x
        self.y = y
        self.z = z
        self.index = index

    def __eq__(self, other):
        if not isinstance(other, Voxel):
            return False
        return (
            self.x == other.x
            and self.y == other.y
            and self.z == other.z
            and self.index == other.index
        )

    def __hash__(self):
        return hash((self.x, self.y, self.z, self.index))

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.index))

    def __repr__(self):
        return f"Voxel(x={self.x}, y={self.y}, z={self.z}, index={self.index})"


class DecodedScene:
    """DecodedScene class.

    Filled in chunk by chunk while a file is decoded and handed over to the
    caller once the whole chunk tree has been read.
    """

    def __init__(self, version: int):
        self.version = version
        self.size_x = 0
        self.size_y = 0
        self.size_z = 0
        self.voxels: list[Voxel] = []
        self.palette: list[Color] = []
        self.has_custom_palette = False
        self.has_size = False

    @property
    def size(self) -> tuple[int, int, int]:
        return (self.size_x, self.size_y, self.size_z)

    def set_size(self, size: tuple[int, int, int]):
        self.size_x, self.size_y, self.size_z = size
        self.has_size = True

    def set_palette(self, palette: list[Color], custom: bool):
        if len(palette) != 256:
            raise ValueError(f"Palette must have 256 colors, not {len(palette)}")
        self.palette = palette
        self.has_custom_palette = custom

    def color_of(self, voxel: Voxel) -> Color:
        """Look up the palette color of the given voxel."""
        return self.palette[voxel.index]

    def __repr__(self):
        return (
            f"DecodedScene(version={self.version}, size={self.size}, "
            f"voxels={len(self.voxels)}, custom_palette={self.has_custom_palette})"
        )
