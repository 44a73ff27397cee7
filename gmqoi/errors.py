"""Exceptions raised while encoding or decoding images."""

from gmqoi.consts import QOI_MAGIC


class QoiError(Exception):
    """Base class for every error raised by this package."""


class InvalidMagicError(QoiError):
    """The leading four magic bytes do not match."""

    def __init__(self, magic):
        self.magic = magic
        got = list((magic & 0xFFFFFFFF).to_bytes(4, "little"))
        super().__init__(
            f"invalid magic: expected {QOI_MAGIC}, got [{', '.join(map(str, got))}]"
        )


class InvalidImageDimensionsError(QoiError):
    """The image is empty or has too many pixels."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        super().__init__(f"invalid image dimensions: {width}x{height}")


class InvalidImageLengthError(QoiError):
    """The pixel buffer length does not fit the image dimensions."""

    def __init__(self, size, width, height):
        self.size = size
        self.width = width
        self.height = height
        super().__init__(f"invalid image length: {size} bytes for {width}x{height}")


class DataLengthNotSetError(QoiError):
    """A header was serialised before its data length was known."""

    def __init__(self):
        super().__init__("Header data length not set (should not happen externally)")


class OutputBufferTooSmallError(QoiError):
    """The output buffer cannot hold the encoded or decoded image."""

    def __init__(self, size, required):
        self.size = size
        self.required = required
        super().__init__(f"output buffer size too small: {size} (required: {required})")


class UnexpectedBufferEndError(QoiError):
    """The input ended before decoding was finished."""

    def __init__(self):
        super().__init__("unexpected input buffer end while decoding")


class InvalidPaddingError(QoiError):
    """The stream end marker does not match."""

    def __init__(self):
        super().__init__("invalid padding (stream end marker mismatch)")


class QoiIOError(QoiError):
    """An I/O error from the wrapped reader or writer."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"i/o error: {cause}")
        self.__cause__ = cause