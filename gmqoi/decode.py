"""Decoding of images from byte strings or from binary streams."""

from gmqoi.consts import (
    QOI_HEADER_SIZE,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_OP_RUN,
    QOI_PADDING,
    QOI_PADDING_SIZE,
)
from gmqoi.errors import (
    InvalidPaddingError,
    OutputBufferTooSmallError,
    QoiIOError,
    UnexpectedBufferEndError,
)
from gmqoi.header import Header
from gmqoi.pixel import Pixel

_INDEX_END = QOI_OP_INDEX | 0x3F


def _decode_pixels(read_exact, n_pixels):
    """Decode ``n_pixels`` RGBA pixels, pulling chunk bytes through ``read_exact``."""
    out = bytearray(n_pixels * 4)
    end = len(out)
    index = [Pixel()] * 64
    px = Pixel(a=0xFF)
    pos = 0
    while pos < end:
        (b1,) = read_exact(1)
        if b1 <= _INDEX_END:
            px = index[b1]
            out[pos:pos + 4] = px.to_bytes()
            pos += 4
            continue
        if b1 == QOI_OP_RGB:
            r, g, b = read_exact(3)
            px = px.with_rgb(r, g, b)
        elif b1 == QOI_OP_RGBA:
            r, g, b, a = read_exact(4)
            px = px.with_rgba(r, g, b, a)
        elif b1 >= QOI_OP_RUN:
            remaining = (end - pos) // 4 - 1
            count = 1 + min(b1 & 0x3F, remaining)
            out[pos:pos + 4 * count] = px.to_bytes() * count
            pos += 4 * count
            continue
        elif b1 >= QOI_OP_LUMA:
            (b2,) = read_exact(1)
            px = px.with_luma(b1, b2)
        else:
            px = px.with_diff(b1)
        index[px.hash_index()] = px
        out[pos:pos + 4] = px.to_bytes()
        pos += 4
    return out


class _BytesSource:
    """Reads an image held entirely in memory."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    @property
    def tail(self):
        return self._data[self._pos:]

    def read_header(self):
        header = Header.decode(self._data)
        self._pos = QOI_HEADER_SIZE
        return header

    def read_exact(self, n):
        end = self._pos + n
        if end > len(self._data):
            raise UnexpectedBufferEndError()
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def decode_image(self, n_pixels):
        pixels = _decode_pixels(self.read_exact, n_pixels)
        padding = self._data[self._pos:self._pos + QOI_PADDING_SIZE]
        if len(padding) < QOI_PADDING_SIZE:
            raise UnexpectedBufferEndError()
        if padding != QOI_PADDING:
            raise InvalidPaddingError()
        return pixels


class _StreamSource:
    """Reads an image from a binary stream with a ``read`` method."""

    def __init__(self, reader):
        self.reader = reader

    def read_exact(self, n):
        parts = []
        missing = n
        while missing:
            try:
                chunk = self.reader.read(missing)
            except OSError as exc:
                raise QoiIOError(exc) from exc
            if not chunk:
                raise QoiIOError(EOFError("failed to fill whole buffer"))
            parts.append(chunk)
            missing -= len(chunk)
        return b"".join(parts)

    def read_header(self):
        return Header.decode(self.read_exact(QOI_HEADER_SIZE))

    def decode_image(self, n_pixels):
        pixels = _decode_pixels(self.read_exact, n_pixels)
        if self.read_exact(QOI_PADDING_SIZE) != QOI_PADDING:
            raise InvalidPaddingError()
        return pixels


class Decoder:
    """Decodes an image from bytes or from a stream; the header is read at once."""

    def __init__(self, data):
        self._start(_BytesSource(data))

    @classmethod
    def from_stream(cls, reader):
        """Create a decoder that reads from a binary stream."""
        decoder = cls.__new__(cls)
        decoder._start(_StreamSource(reader))
        return decoder

    def _start(self, source):
        self._source = source
        self._header = source.read_header()

    def header(self):
        """Return the decoded image header."""
        return self._header

    def data(self):
        """Return the undecoded tail of the input bytes."""
        if not isinstance(self._source, _BytesSource):
            raise TypeError("decoder reads from a stream, not from bytes")
        return self._source.tail

    def reader(self):
        """Return the underlying stream."""
        if not isinstance(self._source, _StreamSource):
            raise TypeError("decoder reads from bytes, not from a stream")
        return self._source.reader

    def required_buf_len(self):
        """Return the number of bytes the decoded RGBA image takes."""
        return self._header.n_pixels() * 4

    def decode_to_buf(self, buf):
        """Decode into a writable buffer and return the number of bytes written."""
        size = self.required_buf_len()
        if len(buf) < size:
            raise OutputBufferTooSmallError(len(buf), size)
        buf[:size] = self._source.decode_image(self._header.n_pixels())
        return size

    def decode_to_vec(self):
        """Decode the image and return its RGBA bytes."""
        buf = bytearray(self.required_buf_len())
        self.decode_to_buf(buf)
        return bytes(buf)


def decode_to_buf(buf, data):
    """Decode ``data`` into a writable buffer and return the header."""
    decoder = Decoder(data)
    decoder.decode_to_buf(buf)
    return decoder.header()


def decode_to_vec(data):
    """Decode ``data`` and return ``(header, rgba_bytes)``."""
    decoder = Decoder(data)
    pixels = decoder.decode_to_vec()
    return decoder.header(), pixels


def decode_header(data):
    """Decode only the image header."""
    return Header.decode(data)