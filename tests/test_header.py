import pytest
from hypothesis import given
from hypothesis import strategies as st

from gmqoi.consts import QOI_HEADER_SIZE, QOI_MAGIC, QOI_PIXELS_MAX
from gmqoi.errors import (
    DataLengthNotSetError,
    InvalidImageDimensionsError,
    InvalidMagicError,
    UnexpectedBufferEndError,
)
from gmqoi.header import Header, encode_max_len


def test_encode_wire_layout():
    data = Header.try_new(2, 3, 7).encode()
    assert len(data) == QOI_HEADER_SIZE
    assert data[:4] == QOI_MAGIC.to_bytes(4, "little")
    assert data[:4] == b"fioq"
    assert data[4:6] == (2).to_bytes(2, "little")
    assert data[6:8] == (3).to_bytes(2, "little")
    assert data[8:12] == (7).to_bytes(4, "little")


@given(
    st.integers(min_value=1, max_value=20000),
    st.integers(min_value=1, max_value=20000),
    st.integers(min_value=0, max_value=0xFFFFFFFF),
)
def test_round_trip(width, height, length):
    header = Header.try_new(width, height, length)
    assert Header.decode(header.encode()) == header


def test_decode_ignores_trailing_data():
    header = Header.try_new(4, 5, 100)
    assert Header.decode(bytearray(header.encode() + b"\x00" * 20)) == header


def test_decode_short_input():
    with pytest.raises(UnexpectedBufferEndError):
        Header.decode(Header.try_new(1, 1, 0).encode()[:-1])


def test_decode_bad_magic():
    data = b"qoif" + Header.try_new(1, 1, 0).encode()[4:]
    with pytest.raises(InvalidMagicError) as info:
        Header.decode(data)
    assert info.value.magic == int.from_bytes(b"qoif", "little")


@pytest.mark.parametrize(("width", "height"), [(0, 1), (1, 0), (0, 0), (65535, 65535)])
def test_invalid_dimensions(width, height):
    with pytest.raises(InvalidImageDimensionsError) as info:
        Header.try_new(width, height, None)
    assert (info.value.width, info.value.height) == (width, height)


def test_dimensions_outside_u16():
    with pytest.raises(InvalidImageDimensionsError):
        Header.try_new(70000, 1, None)


def test_decode_rejects_zero_width():
    data = bytearray(Header.try_new(1, 1, 0).encode())
    data[4:6] = b"\x00\x00"
    with pytest.raises(InvalidImageDimensionsError):
        Header.decode(bytes(data))


def test_pixel_limit_is_inclusive():
    header = Header.try_new(20000, 20000, None)
    assert header.n_pixels() == QOI_PIXELS_MAX
    with pytest.raises(InvalidImageDimensionsError):
        Header.try_new(20000, 20001, None)


def test_encode_without_length():
    with pytest.raises(DataLengthNotSetError):
        Header.try_new(1, 1, None).encode()


def test_length_out_of_range():
    with pytest.raises(ValueError):
        Header.try_new(1, 1, 1 << 32)


@given(st.integers(min_value=1, max_value=300), st.integers(min_value=1, max_value=300))
def test_sizes(width, height):
    header = Header.try_new(width, height, None)
    assert header.n_pixels() == width * height
    assert header.n_bytes() == header.n_pixels() * 4
    assert header.encode_max_len() == encode_max_len(width, height)
    assert header.encode_max_len() > header.n_bytes() + QOI_HEADER_SIZE
    assert encode_max_len(width + 1, height) > encode_max_len(width, height)


def test_encode_max_len_single_pixel():
    assert encode_max_len(1, 1) == 25