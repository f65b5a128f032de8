"""PNG preview of planned bars, composed the way a host display would tile them."""

from __future__ import annotations

import base64
from collections.abc import Callable, Sequence
from io import BytesIO
from typing import Any

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .colors import Color
from .models import Bitmap, CellGeometry, DepthStyle


def bitmap_mask(bitmap: Bitmap) -> np.ndarray:
    """Boolean ``(height, width)`` array of a tile's set pixels."""
    raw = np.frombuffer(bitmap.data, dtype=np.uint8).reshape(bitmap.height_px, -1)
    bits = np.unpackbits(raw, axis=1, bitorder="little")
    return bits[:, : bitmap.width_px].astype(bool)


class PreviewRenderer:
    """Draws text lines and their bars onto an RGB image.

    The image stands in for the host frame: the text area starts
    ``geometry.rotation_px`` pixels from the left edge, and stipples are tiled
    from the image origin, so a correctly rotated tile lines up with its cell.
    """

    def __init__(self, geometry: CellGeometry, background: Color, foreground: Color) -> None:
        self.geometry = geometry
        self.background = background
        self.foreground = foreground

    def render_image(
        self,
        lines: Sequence[str],
        plan: Sequence[Any],
        style_for_depth: Callable[[int], DepthStyle],
        draw_text: bool = True,
    ) -> Image.Image:
        w, h, rot = self.geometry.width_px, self.geometry.height_px, self.geometry.rotation_px
        columns = max([len(text) for text in lines] + [m.column + 1 for line in plan for m in line.all_marks] + [1])
        canvas = np.empty((max(len(lines), 1) * h, rot + columns * w, 3), dtype=np.uint8)
        canvas[:, :] = self.background.rgb8

        tile_cols = (np.arange(w) + rot) % w
        masks: dict[Bitmap, np.ndarray] = {}
        for row, line in enumerate(plan):
            y0 = row * h
            for mark in line.all_marks:
                style = style_for_depth(mark.depth)
                if style.bitmap not in masks:
                    masks[style.bitmap] = bitmap_mask(style.bitmap)[:, tile_cols]
                x0 = rot + mark.column * w
                cell = canvas[y0 : y0 + h, x0 : x0 + w]
                if style.background is not None:
                    cell[:, :] = style.background.rgb8
                cell[masks[style.bitmap]] = style.color.rgb8

        image = Image.fromarray(canvas)
        if draw_text:
            self._draw_text(ImageDraw.Draw(image), lines)
        return image

    def preview_data_url(self, *args: Any, **kwargs: Any) -> str:
        image = self.render_image(*args, **kwargs)
        buf = BytesIO()
        image.save(buf, format="PNG")
        b64 = base64.b64encode(buf.getvalue()).decode("ascii")
        return f"data:image/png;base64,{b64}"

    def _draw_text(self, draw: ImageDraw.ImageDraw, lines: Sequence[str]) -> None:
        font = ImageFont.load_default()
        fill = self.foreground.rgb8
        w, h, rot = self.geometry.width_px, self.geometry.height_px, self.geometry.rotation_px
        for row, text in enumerate(lines):
            for col, ch in enumerate(text):
                if not ch.isspace():
                    draw.text((rot + col * w, row * h), ch, font=font, fill=fill)
