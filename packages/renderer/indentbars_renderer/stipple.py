"""Stipple tile generation for indentation bars.

A stipple is one repeating tile of the bar pattern, one character cell wide
and one line high. Rows are packed least significant bit first, so bit 0 of
the first byte in a row is the leftmost pixel. The host tiles it from the
frame origin, which is why the tile is rotated by the caller-supplied pixel
offset of the text area.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor

from .models import BLANK_CHAR, Bitmap, CellGeometry, PatternSpec


def block_mask(n: int) -> int:
    """Return ``n`` low-order 1 bits."""
    return (1 << n) - 1 if n > 0 else 0


def rotate(value: int, total_bits: int, shift: int) -> int:
    """Rotate ``value`` up by ``shift`` bits inside a ``total_bits`` field.

    Bits carried past the top of the field wrap around to the low bits.
    """
    if not 0 <= shift <= total_bits:
        raise ValueError(f"shift {shift} outside [0, {total_bits}]")
    return ((value << shift) | (value >> (total_bits - shift))) & block_mask(total_bits)


def _shift(value: int, n: int) -> int:
    return value << n if n >= 0 else value >> -n


def row_bits(w: int, pad_bits: int, rot_bits: int, width_frac: float) -> int:
    """Bits of one filled row for a cell ``w`` pixels wide.

    The bar is ``max(1, round(w * width_frac))`` pixels, moved right by
    ``pad_bits`` (left for negative values) and then rotated by ``rot_bits``.
    """
    bar_width = max(1, round(w * width_frac))
    return rotate(_shift(block_mask(bar_width), pad_bits), w, rot_bits)


def pack_row(bits: int, w: int) -> bytes:
    return (bits & block_mask(w)).to_bytes((w + 7) // 8, "little")


@dataclass(frozen=True)
class ZigzagState:
    """Horizontal offset carried between the bands of one pattern."""

    last_fill: str | None
    offset: int

    def advance(self, ch: str) -> ZigzagState:
        if ch == BLANK_CHAR:
            return self
        if self.last_fill is not None and ch != self.last_fill:
            return ZigzagState(ch, -self.offset)
        return ZigzagState(ch, self.offset)


def chunk_heights(height: int, count: int) -> list[int]:
    """Split ``height`` rows into ``count`` bands of near-equal height."""
    chunk = height / count
    bounds = [floor(k * chunk + 0.5) for k in range(count + 1)]
    bounds[-1] = height
    return [bounds[k + 1] - bounds[k] for k in range(count)]


def generate(geometry: CellGeometry, pattern_spec: PatternSpec) -> Bitmap:
    w, h, rot = geometry.width_px, geometry.height_px, geometry.rotation_px
    pattern = pattern_spec.pattern[:h]
    pad = round(w * pattern_spec.pad_frac)

    if len(pattern) == 1 and pattern != BLANK_CHAR:
        solid = pack_row(row_bits(w, pad, rot, pattern_spec.width_frac), w)
        return Bitmap(width_px=w, height_px=h, rows=(solid,) * h)

    zeroes = pack_row(0, w)
    state = ZigzagState(None, round(w * pattern_spec.zigzag) if pattern_spec.zigzag else 0)
    rows: list[bytes] = []
    row = zeroes
    prev: str | None = None
    for ch, n in zip(pattern, chunk_heights(h, len(pattern))):
        state = state.advance(ch)
        if ch != prev:
            if ch == BLANK_CHAR:
                row = zeroes
            else:
                row = pack_row(row_bits(w, pad + state.offset, rot, pattern_spec.width_frac), w)
            prev = ch
        rows.extend([row] * n)
    return Bitmap(width_px=w, height_px=h, rows=tuple(rows))


def ascii_rows(bitmap: Bitmap, on: str = "#", off: str = ".") -> list[str]:
    out = []
    for row in bitmap.rows:
        bits = int.from_bytes(row, "little")
        out.append("".join(on if bits >> x & 1 else off for x in range(bitmap.width_px)))
    return out
