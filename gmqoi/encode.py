"""Encoding of RGBA pixel data into images."""

import struct
from dataclasses import replace

from gmqoi.consts import QOI_HEADER_SIZE, QOI_OP_INDEX, QOI_OP_RUN, QOI_PADDING
from gmqoi.errors import InvalidImageLengthError, OutputBufferTooSmallError, QoiIOError
from gmqoi.header import Header
from gmqoi.pixel import Pixel

_RUN_MAX = 62
_U32_MASK = 0xFFFFFFFF


def _encode_body(data):
    """Encode the data as 4-byte pixels and return the chunks followed by padding."""
    out = bytearray()
    index = [Pixel()] * 64
    px_prev = Pixel(a=0xFF)
    hash_prev = px_prev.hash_index()
    run = 0
    index_allowed = False
    n_pixels = len(data) // 4
    last = n_pixels - 1

    for i, channels in enumerate(struct.iter_unpack("4B", data[:n_pixels * 4])):
        px = Pixel(*channels)
        if px == px_prev:
            run += 1
            if run == _RUN_MAX or i == last:
                out.append(QOI_OP_RUN | (run - 1))
                run = 0
            continue
        if run:
            if run == 1 and index_allowed:
                out.append(QOI_OP_INDEX | hash_prev)
            else:
                out.append(QOI_OP_RUN | (run - 1))
            run = 0
        index_allowed = True
        hash_prev = px.hash_index()
        if index[hash_prev] == px:
            out.append(QOI_OP_INDEX | hash_prev)
        else:
            index[hash_prev] = px
            out += px.encode_op(px_prev)
        px_prev = px

    out += QOI_PADDING
    return out


def _write_all(writer, data):
    view = memoryview(data)
    try:
        while view:
            written = writer.write(view)
            if written is None:
                written = len(view)
            if written == 0:
                raise QoiIOError(OSError("failed to write whole buffer"))
            view = view[written:]
    except OSError as exc:
        raise QoiIOError(exc) from exc


class Encoder:
    """Encodes RGBA pixel data of the given dimensions."""

    def __init__(self, data, width, height):
        header = Header.try_new(width, height, None)
        data = bytes(data)
        size = len(data)
        n_channels = size // header.n_pixels()
        if header.n_pixels() * n_channels != size:
            raise InvalidImageLengthError(size, width, height)
        self._data = data
        self._header = header

    def header(self):
        """Return the header that will be stored in the encoded image."""
        return self._header

    def required_buf_len(self):
        """Return the largest number of bytes the encoded image can take."""
        return self._header.encode_max_len()

    def encode_to_buf(self, buf):
        """Encode into a writable buffer and return the number of bytes written."""
        required = self.required_buf_len()
        if len(buf) < required:
            raise OutputBufferTooSmallError(len(buf), required)
        body = _encode_body(self._data)
        tail_len = len(buf) - QOI_HEADER_SIZE
        self._header = replace(self._header, length=tail_len & _U32_MASK)
        buf[QOI_HEADER_SIZE:QOI_HEADER_SIZE + len(body)] = body
        buf[:QOI_HEADER_SIZE] = self._header.encode()
        return QOI_HEADER_SIZE + len(body)

    def encode_to_vec(self):
        """Encode the image and return its bytes."""
        buf = bytearray(self.required_buf_len())
        size = self.encode_to_buf(buf)
        return bytes(buf[:size])

    def encode_to_stream(self, writer):
        """Write the encoded image to a binary stream and return the bytes written."""
        header_bytes = self._header.encode()
        _write_all(writer, header_bytes)
        body = _encode_body(self._data)
        _write_all(writer, body)
        return QOI_HEADER_SIZE + len(body)


def encode_to_buf(buf, data, width, height):
    """Encode pixel data into a writable buffer and return the bytes written."""
    return Encoder(data, width, height).encode_to_buf(buf)


def encode_to_vec(data, width, height):
    """Encode pixel data and return the encoded image bytes."""
    return Encoder(data, width, height).encode_to_vec()