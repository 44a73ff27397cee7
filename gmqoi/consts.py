"""Wire-format constants."""

QOI_OP_INDEX = 0x00
QOI_OP_DIFF = 0x40
QOI_OP_LUMA = 0x80
QOI_OP_RUN = 0xC0
QOI_OP_RGB = 0xFE
QOI_OP_RGBA = 0xFF

QOI_MASK_2 = 0xC0

QOI_HEADER_SIZE = 12

# Seven zero bytes followed by a 0x01 end marker.
QOI_PADDING = bytes([0, 0, 0, 0, 0, 0, 0, 0x01])
QOI_PADDING_SIZE = 8

QOI_MAGIC = int.from_bytes(b"qoif", "big")

QOI_PIXELS_MAX = 400_000_000