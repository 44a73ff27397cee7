"""RGBA pixel value and its per-pixel encoding operations."""

from dataclasses import dataclass

from gmqoi.consts import QOI_OP_DIFF, QOI_OP_LUMA, QOI_OP_RGB, QOI_OP_RGBA


@dataclass(frozen=True, slots=True)
class Pixel:
    """An immutable RGBA pixel with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    @classmethod
    def from_bytes(cls, data):
        """Build a pixel from exactly four RGBA bytes."""
        if len(data) != 4:
            raise ValueError(f"a pixel needs exactly 4 bytes, got {len(data)}")
        r, g, b, a = data
        return cls(r, g, b, a)

    def to_bytes(self):
        """Return the pixel as four RGBA bytes."""
        return bytes((self.r, self.g, self.b, self.a))

    def with_rgb(self, r, g, b):
        """Return a copy with new colour channels and the same alpha."""
        return Pixel(r, g, b, self.a)

    def with_rgba(self, r, g, b, a):
        """Return a pixel with all four channels replaced."""
        return Pixel(r, g, b, a)

    def with_alpha(self, a):
        """Return a copy with a new alpha channel."""
        return Pixel(self.r, self.g, self.b, a)

    def with_diff(self, b1):
        """Apply a DIFF operation byte to this pixel."""
        return Pixel(
            (self.r + ((b1 >> 4) & 0x03) - 2) & 0xFF,
            (self.g + ((b1 >> 2) & 0x03) - 2) & 0xFF,
            (self.b + (b1 & 0x03) - 2) & 0xFF,
            self.a,
        )

    def with_luma(self, b1, b2):
        """Apply a two-byte LUMA operation to this pixel."""
        vg = (b1 & 0x3F) - 32
        vr = vg - 8 + ((b2 >> 4) & 0x0F)
        vb = vg - 8 + (b2 & 0x0F)
        return Pixel(
            (self.r + vr) & 0xFF,
            (self.g + vg) & 0xFF,
            (self.b + vb) & 0xFF,
            self.a,
        )

    def hash_index(self):
        """Return the slot of this pixel in the 64-entry colour index."""
        return (self.r * 3 + self.g * 5 + self.b * 7 + self.a * 11) % 64

    def encode_op(self, prev):
        """Return the shortest DIFF, LUMA, RGB or RGBA chunk from ``prev`` to this pixel."""
        if self.a != prev.a:
            return bytes((QOI_OP_RGBA, self.r, self.g, self.b, self.a))
        rgb = bytes((QOI_OP_RGB, self.r, self.g, self.b))
        vg = (self.g - prev.g) & 0xFF
        vg_32 = (vg + 32) & 0xFF
        if vg_32 > 63:
            return rgb
        vr = (self.r - prev.r) & 0xFF
        vb = (self.b - prev.b) & 0xFF
        vr_2, vg_2, vb_2 = ((v + 2) & 0xFF for v in (vr, vg, vb))
        if (vr_2 | vg_2 | vb_2) <= 3:
            return bytes((QOI_OP_DIFF | (vr_2 << 4) | (vg_2 << 2) | vb_2,))
        vg_r_8 = (vr - vg + 8) & 0xFF
        vg_b_8 = (vb - vg + 8) & 0xFF
        if (vg_r_8 | vg_b_8) <= 15:
            return bytes((QOI_OP_LUMA | vg_32, (vg_r_8 << 4) | vg_b_8))
        return rgb