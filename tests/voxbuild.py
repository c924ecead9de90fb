"""Helpers for building .vox bytes in tests."""


def uint32(value: int) -> bytes:
    return value.to_bytes(4, "little")


def chunk(id: bytes, content: bytes = b"", children: bytes = b"") -> bytes:
    return id + uint32(len(content)) + uint32(len(children)) + content + children


def header(version: int = 150, magic: bytes = b"VOX ") -> bytes:
    return magic + uint32(version)


def size_chunk(x: int, y: int, z: int) -> bytes:
    return chunk(b"SIZE", uint32(x) + uint32(y) + uint32(z))


def xyzi_chunk(voxels: list[tuple[int, int, int, int]]) -> bytes:
    content = uint32(len(voxels))
    for voxel in voxels:
        content += bytes(voxel)
    return chunk(b"XYZI", content)


def rgba_chunk(colors: list[tuple[int, int, int, int]]) -> bytes:
    content = b""
    for color in colors:
        content += bytes(color)
    return chunk(b"RGBA", content)


def vox_file(*children: bytes, version: int = 150) -> bytes:
    return header(version) + chunk(b"MAIN", b"", b"".join(children))
