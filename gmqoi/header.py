"""Image header: dimensions and encoded data length."""

import struct
from dataclasses import dataclass

from gmqoi.consts import QOI_HEADER_SIZE, QOI_MAGIC, QOI_PADDING_SIZE, QOI_PIXELS_MAX
from gmqoi.errors import (
    DataLengthNotSetError,
    InvalidImageDimensionsError,
    InvalidMagicError,
    UnexpectedBufferEndError,
)

_HEADER = struct.Struct("<IHHI")
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF


def encode_max_len(width, height):
    """Return the largest number of bytes an encoded image of this size can take."""
    n_pixels = width * height
    return QOI_HEADER_SIZE + n_pixels * 4 + n_pixels + QOI_PADDING_SIZE


@dataclass(frozen=True)
class Header:
    """Image header.

    A valid header has non-zero width and height and at most 400 million pixels.
    """

    width: int
    height: int
    length: int | None = None

    @classmethod
    def try_new(cls, width, height, length):
        """Create a header, validating the image dimensions."""
        if not (0 <= width <= _U16_MAX and 0 <= height <= _U16_MAX):
            raise InvalidImageDimensionsError(width, height)
        n_pixels = width * height
        if n_pixels == 0 or n_pixels > QOI_PIXELS_MAX:
            raise InvalidImageDimensionsError(width, height)
        if length is not None and not 0 <= length <= _U32_MAX:
            raise ValueError(f"data length out of range: {length}")
        return cls(width, height, length)

    def encode(self):
        """Serialise the header into its 12 wire bytes."""
        if self.length is None:
            raise DataLengthNotSetError()
        return _HEADER.pack(QOI_MAGIC, self.width, self.height, self.length)

    @classmethod
    def decode(cls, data):
        """Parse a header from the start of ``data``."""
        if len(data) < QOI_HEADER_SIZE:
            raise UnexpectedBufferEndError()
        magic, width, height, length = _HEADER.unpack_from(data, 0)
        if magic != QOI_MAGIC:
            raise InvalidMagicError(magic)
        return cls.try_new(width, height, length)

    def n_pixels(self):
        """Return the number of pixels in the image."""
        return self.width * self.height

    def n_bytes(self):
        """Return the size of the raw RGBA pixel array in bytes."""
        return self.n_pixels() * 4

    def encode_max_len(self):
        """Return the largest number of bytes the encoded image can take."""
        return encode_max_len(self.width, self.height)