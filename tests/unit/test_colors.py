import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from indentbars_renderer.colors import Color, blend


class ColorTests(unittest.TestCase):
    def test_hex_round_trip(self):
        self.assertEqual(Color.from_hex("#3a4b63").hex, "#3a4b63")
        self.assertEqual(Color.from_hex("FFF").hex, "#ffffff")

    def test_channels_are_sixteen_bit(self):
        self.assertEqual(Color.from_hex("#ff0000"), Color(0xFFFF, 0, 0))

    def test_rejects_malformed_hex(self):
        with self.assertRaises(ValueError):
            Color.from_hex("#12345")

    def test_hex_clamps_extrapolated_channels(self):
        self.assertEqual(Color(-500, 70000, 0x8080).hex, "#00ff80")


class BlendTests(unittest.TestCase):
    def setUp(self):
        self.red = Color.from_hex("#ff0000")
        self.blue = Color.from_hex("#0000ff")

    def test_endpoints(self):
        self.assertEqual(blend(self.red, self.blue, 1.0), self.red)
        self.assertEqual(blend(self.red, self.blue, 0.0), self.blue)

    def test_equal_inputs_are_fixed_points(self):
        c = Color.from_hex("#3a4b63")
        for f in (0.0, 0.1, 0.33, 0.5, 0.77, 1.0, 1.5, -0.25):
            self.assertEqual(blend(c, c, f), c)

    def test_midpoint(self):
        mid = blend(Color.from_hex("#000000"), Color.from_hex("#ffffff"), 0.5)
        self.assertEqual(mid.hex, "#808080")

    def test_extrapolation_is_not_clamped(self):
        out = blend(self.red, self.blue, 1.5)
        self.assertGreater(out.r, 0xFFFF)
        self.assertLess(out.b, 0)


if __name__ == "__main__":
    unittest.main()
