"""Exceptions raised while decoding .vox files."""


class VoxError(ValueError):
    """Base class for .vox decoding errors."""


class FormatError(VoxError):
    """The byte stream is not a structurally valid .vox file."""


class UnsupportedVersionError(VoxError):
    """The file declares a format version this decoder does not read."""

    def __init__(self, found: int, expected: int):
        super().__init__(
            f"Version number from the file ({found}) doesn't match "
            f"the supported version ({expected})."
        )
        self.found = found
        self.expected = expected
