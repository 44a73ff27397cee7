# gmqoi

Encoder and decoder for the QOI ("Quite OK Image") variant used by GameMaker,
in pure Python with no runtime dependencies.

GameMaker stores QOI images with a smaller 12-byte header than the official
format:

| offset | size | field                               |
|--------|------|-------------------------------------|
| 0      | 4    | magic `fioq` (`qoif` little-endian) |
| 4      | 2    | width, little-endian `u16`          |
| 6      | 2    | height, little-endian `u16`         |
| 8      | 4    | data length, little-endian `u32`    |

Pixel data is RGBA, 4 bytes per pixel. The chunk encoding (INDEX, DIFF, LUMA,
RUN, RGB, RGBA) and the 8-byte end marker (seven zero bytes followed by `0x01`)
are the same as in standard QOI.

## Installation

```
pip install gmqoi
```

## Usage

```python
from gmqoi.encode import encode_to_vec
from gmqoi.decode import decode_to_vec

width, height = 2, 2
pixels = bytes([
    255, 0, 0, 255,    0, 255, 0, 255,
    0, 0, 255, 255,    255, 255, 255, 0,
])

encoded = encode_to_vec(pixels, width, height)
header, decoded = decode_to_vec(encoded)

assert header.width == width
assert header.height == height
assert decoded == pixels
```

### Pre-allocated buffers

`Encoder.required_buf_len()` gives the largest size an encoded image can take,
and `Decoder.required_buf_len()` the size of the decoded RGBA data. Both
`encode_to_buf` and `decode_to_buf` raise `OutputBufferTooSmallError` if the
buffer is shorter than that.

```python
from gmqoi.encode import Encoder
from gmqoi.decode import Decoder

encoder = Encoder(pixels, width, height)
out = bytearray(encoder.required_buf_len())
n_written = encoder.encode_to_buf(out)

decoder = Decoder(bytes(out[:n_written]))
image = bytearray(decoder.required_buf_len())
decoder.decode_to_buf(image)
```

The data length written into the header by `encode_to_buf` is the space the
buffer offers after the header (`len(buf) - 12`), not the number of chunk bytes
actually written. `encode_to_vec` uses a buffer of `required_buf_len()` bytes.

`Decoder.data()` returns the input bytes that have not been decoded yet.

### Streams

`Encoder.encode_to_stream(writer)` writes to any object with a `write` method
and returns the number of bytes written. It writes the header as it stands, so
its data length must already be set: a fresh `Encoder` raises
`DataLengthNotSetError` here, while one that has run `encode_to_vec` or
`encode_to_buf` carries the length those recorded.

`Decoder.from_stream(reader)` reads from any object with a `read` method;
`Decoder.reader()` returns that object.

```python
import io
from gmqoi.encode import Encoder
from gmqoi.decode import Decoder

encoder = Encoder(pixels, width, height)
encoder.encode_to_vec()
stream = io.BytesIO()
encoder.encode_to_stream(stream)
stream.seek(0)

decoder = Decoder.from_stream(stream)
print(decoder.header())
image = decoder.decode_to_vec()
```

### Headers only

```python
from gmqoi.decode import decode_header
from gmqoi.header import encode_max_len

header = decode_header(encoded)
print(header.width, header.height, header.length)
print(header.n_pixels(), header.n_bytes(), header.encode_max_len())
print(encode_max_len(640, 480))
```

`Header.try_new(width, height, length)` validates dimensions, and
`Header.encode()` / `Header.decode(data)` convert to and from the 12 header
bytes.

## Errors

Every failure raises a subclass of `gmqoi.errors.QoiError`:

- `InvalidMagicError`: the data does not start with the QOI magic.
- `InvalidImageDimensionsError`: a zero dimension, a dimension above 65535, or more than 400 million pixels.
- `InvalidImageLengthError`: the pixel buffer length does not match the dimensions.
- `DataLengthNotSetError`: a header without a data length was serialised.
- `OutputBufferTooSmallError`: the target buffer cannot hold the result.
- `UnexpectedBufferEndError`: the input bytes ended before decoding finished.
- `InvalidPaddingError`: the end-of-stream marker is wrong.
- `QoiIOError`: the underlying reader or writer failed or ran out of data.

## What it does not do

The package works on raw RGBA bytes only. It has no command-line tool, does
not read or write PNG or other image formats, and has no benchmarking
utilities.

## Running the tests

```
pip install -e .[test]
pytest
```