"""RGB color values and linear blending."""

from __future__ import annotations

from dataclasses import dataclass

CHANNEL_MAX = 0xFFFF


def _clamp8(value: int) -> int:
    return max(0, min(255, round(value / 257)))


@dataclass(frozen=True)
class Color:
    """RGB color with 16-bit channels.

    Channels normally lie in ``0..65535``; an extrapolating :func:`blend` can
    leave that range, which only matters once the color is formatted.
    """

    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        """24-bit ``#rrggbb`` string, clamped to the displayable range."""
        return "#{:02x}{:02x}{:02x}".format(*self.rgb8)

    @property
    def rgb8(self) -> tuple[int, int, int]:
        return (_clamp8(self.r), _clamp8(self.g), _clamp8(self.b))

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int) -> Color:
        return cls(r * 257, g * 257, b * 257)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` or ``#rgb`` (leading ``#`` optional)."""
        h = value.strip().lstrip("#")
        if len(h) == 3:
            h = "".join(ch * 2 for ch in h)
        if len(h) != 6:
            raise ValueError(f"Not a hex color: {value!r}")
        return cls.from_rgb8(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def blend(c1: Color, c2: Color, factor: float) -> Color:
    """Return ``factor * c1 + (1 - factor) * c2`` per channel.

    ``factor`` is not clamped, so values outside ``[0, 1]`` extrapolate.
    """
    inv = 1.0 - factor
    return Color(
        round(factor * c1.r + inv * c2.r),
        round(factor * c1.g + inv * c2.g),
        round(factor * c1.b + inv * c2.b),
    )
