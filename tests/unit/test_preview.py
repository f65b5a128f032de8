import sys
import unittest
from pathlib import Path

try:
    import numpy as np
    from PIL import Image
except Exception:  # pragma: no cover
    np = None
    Image = None

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "layout"))

from indentbars_layout.lines import plan_lines
from indentbars_renderer.colors import Color
from indentbars_renderer.models import CellGeometry, DepthStyle, PatternSpec
from indentbars_renderer.stipple import generate


@unittest.skipIf(Image is None, "Pillow/numpy not installed")
class PreviewTests(unittest.TestCase):
    def setUp(self):
        from indentbars_renderer.preview import PreviewRenderer, bitmap_mask

        self.PreviewRenderer = PreviewRenderer
        self.bitmap_mask = bitmap_mask
        self.bg = Color.from_hex("#000000")
        self.fg = Color.from_hex("#ffffff")
        self.bar = Color.from_hex("#ff0000")

    def test_bitmap_mask_matches_rows(self):
        bitmap = generate(CellGeometry(10, 4), PatternSpec(width_frac=0.2, pad_frac=0.1, pattern=". "))
        mask = self.bitmap_mask(bitmap)
        self.assertEqual(mask.shape, (4, 10))
        self.assertEqual(np.flatnonzero(mask[0]).tolist(), [1, 2])
        self.assertFalse(mask[3].any())

    def _render(self, rotation):
        geometry = CellGeometry(8, 4, rotation)
        bitmap = generate(geometry, PatternSpec(width_frac=0.25, pad_frac=0.0, pattern="."))
        lines = ["a", "    b"]
        plan = plan_lines(lines, spacing=2)

        def style(depth):
            return DepthStyle(depth=depth, color=self.bar, bitmap=bitmap)

        renderer = self.PreviewRenderer(geometry, background=self.bg, foreground=self.fg)
        return renderer.render_image(lines, plan, style, draw_text=False)

    def test_bar_lands_in_its_cell(self):
        image = self._render(0)
        self.assertEqual(image.size, (5 * 8, 2 * 4))
        pixels = np.asarray(image)
        red_columns = np.flatnonzero((pixels[4:8, :, 0] == 255).all(axis=0)).tolist()
        self.assertEqual(red_columns, [16, 17])
        self.assertFalse((pixels[0:4, :, 0] == 255).any())

    def test_rotated_tile_stays_aligned(self):
        image = self._render(3)
        self.assertEqual(image.size, (3 + 5 * 8, 2 * 4))
        pixels = np.asarray(image)
        red_columns = np.flatnonzero((pixels[4:8, :, 0] == 255).all(axis=0)).tolist()
        self.assertEqual(red_columns, [3 + 16, 3 + 17])

    def test_data_url(self):
        geometry = CellGeometry(8, 4)
        renderer = self.PreviewRenderer(geometry, background=self.bg, foreground=self.fg)
        url = renderer.preview_data_url(["x"], plan_lines(["x"], spacing=2), lambda d: None)
        self.assertTrue(url.startswith("data:image/png;base64,"))


if __name__ == "__main__":
    unittest.main()
