"""
Tests for the shared render recipe.

Tests cover:
- Filter chain order, units and CSS rendering
- Geometry transform matrices and CSS rendering
- Layer clipping and rasterization
"""

import math
import unittest

from PIL import Image

from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector, GeometryState
from PF_Libs.AdjustLib.presets import get_preset
from PF_Libs.RenderLib.render_recipe import (
    FilterOperation,
    GeometryTransform,
    apply_filter_chain,
    build_filter_chain,
    build_transform,
    chain_to_css,
    clip_right,
    render_layer,
)
from conftest import LEFT_COLOR, RIGHT_COLOR, make_two_tone_image


def assert_pixel_close(test, actual, expected, delta=2):
    for a, e in zip(actual, expected):
        test.assertLessEqual(abs(a - e), delta, f"{actual} != {expected}")


class TestFilterChain(unittest.TestCase):
    """Test build_filter_chain() and its CSS form."""

    def test_fixed_order(self):
        chain = build_filter_chain(AdjustmentVector())

        self.assertEqual(
            [op.function for op in chain],
            ["brightness", "contrast", "saturate", "grayscale", "sepia", "invert", "hue-rotate", "blur"],
        )
        self.assertEqual([op.unit for op in chain], ["%"] * 6 + ["deg", "px"])

    def test_default_css(self):
        css = chain_to_css(build_filter_chain(AdjustmentVector()))

        self.assertEqual(
            css,
            "brightness(100%) contrast(100%) saturate(100%) grayscale(0%) "
            "sepia(0%) invert(0%) hue-rotate(0deg) blur(0px)",
        )

    def test_vintage_css(self):
        css = chain_to_css(build_filter_chain(get_preset("Vintage").vector))

        self.assertIn("sepia(40%)", css)
        self.assertIn("hue-rotate(15deg)", css)
        self.assertTrue(css.endswith("blur(0.5px)"))

    def test_empty_chain_css(self):
        self.assertEqual(chain_to_css(()), "none")

    def test_amount_units(self):
        self.assertAlmostEqual(FilterOperation("brightness", 110, "%").amount, 1.1)
        self.assertEqual(FilterOperation("hue-rotate", 90, "deg").amount, 90)
        self.assertEqual(FilterOperation("blur", 2.5, "px").amount, 2.5)

    def test_identity_flags(self):
        chain = build_filter_chain(AdjustmentVector(sepia=20))
        identity = {op.function: op.is_identity for op in chain}

        self.assertFalse(identity["sepia"])
        self.assertTrue(identity["brightness"])
        self.assertTrue(identity["blur"])

    def test_default_chain_leaves_pixels(self):
        image = make_two_tone_image()

        result = apply_filter_chain(image, build_filter_chain(AdjustmentVector()))

        self.assertEqual(result.tobytes(), image.tobytes())

    def test_chain_applies_in_order(self):
        # invert after brightness(0): black becomes white
        image = Image.new("RGBA", (2, 2), (120, 80, 40, 255))
        vector = AdjustmentVector(brightness=0, invert=100)

        result = apply_filter_chain(image, build_filter_chain(vector))

        self.assertEqual(result.getpixel((0, 0)), (255, 255, 255, 255))


class TestGeometryTransform(unittest.TestCase):
    """Test GeometryTransform."""

    def test_css(self):
        self.assertEqual(GeometryTransform(1.5, 90).css(), "rotate(90deg) scale(1.5)")
        self.assertEqual(build_transform(GeometryState()).css(), "rotate(0deg) scale(1)")

    def test_identity_matrix(self):
        matrix = GeometryTransform(1.0, 0.0).matrix((10, 20))

        self.assertEqual(matrix, (1.0, -0.0, 10, 0.0, 1.0, 20))

    def test_inverse_undoes_forward(self):
        transform = GeometryTransform(2.0, 30.0)
        center = (50.0, 40.0)
        a, b, c, d, e, f = transform.matrix(center, extra_scale=0.5)
        ia, ib, ic, id_, ie, if_ = transform.inverse_data(center, (30, 16), extra_scale=0.5)

        local = (3.0, -2.0)
        x = a * local[0] + b * local[1] + c
        y = d * local[0] + e * local[1] + f
        src_x = ia * x + ib * y + ic
        src_y = id_ * x + ie * y + if_

        self.assertTrue(math.isclose(src_x, local[0] + 15.0, abs_tol=1e-9))
        self.assertTrue(math.isclose(src_y, local[1] + 8.0, abs_tol=1e-9))


class TestClipRight(unittest.TestCase):
    def test_full_visible_returns_same(self):
        image = make_two_tone_image()

        self.assertIs(clip_right(image, 1.0), image)

    def test_half_visible(self):
        image = make_two_tone_image()

        clipped = clip_right(image, 0.5)

        self.assertEqual(clipped.getpixel((19, 5)), LEFT_COLOR)
        self.assertEqual(clipped.getpixel((20, 5))[3], 0)
        self.assertEqual(image.getpixel((30, 5)), RIGHT_COLOR)

    def test_nothing_visible(self):
        clipped = clip_right(make_two_tone_image(), 0.0)

        self.assertIsNone(clipped.getchannel("A").getbbox())


class TestRenderLayer(unittest.TestCase):
    """Test render_layer()."""

    def setUp(self):
        self.image = make_two_tone_image()
        self.chain = build_filter_chain(AdjustmentVector())

    def test_output_size(self):
        result = render_layer(self.image, self.chain, GeometryTransform(1.0, 0.0), (64, 48))

        self.assertEqual(result.size, (64, 48))
        self.assertEqual(result.mode, "RGBA")

    def test_identity_geometry_keeps_layout(self):
        result = render_layer(self.image, self.chain, GeometryTransform(1.0, 0.0), self.image.size)

        assert_pixel_close(self, result.getpixel((5, 10)), LEFT_COLOR)
        assert_pixel_close(self, result.getpixel((35, 10)), RIGHT_COLOR)

    def test_rotation_half_turn_swaps_sides(self):
        result = render_layer(self.image, self.chain, GeometryTransform(1.0, 180.0), self.image.size)

        assert_pixel_close(self, result.getpixel((5, 10)), RIGHT_COLOR)
        assert_pixel_close(self, result.getpixel((35, 10)), LEFT_COLOR)

    def test_zoom_out_leaves_transparent_border(self):
        result = render_layer(self.image, self.chain, GeometryTransform(0.5, 0.0), self.image.size)

        self.assertEqual(result.getpixel((0, 0))[3], 0)
        assert_pixel_close(self, result.getpixel((20, 10))[3:], (255,))

    def test_visible_fraction_hides_right_side(self):
        result = render_layer(
            self.image,
            self.chain,
            GeometryTransform(1.0, 0.0),
            self.image.size,
            visible_fraction=0.5,
        )

        self.assertEqual(result.getpixel((30, 10))[3], 0)
        assert_pixel_close(self, result.getpixel((10, 10)), LEFT_COLOR)

    def test_source_not_modified(self):
        before = self.image.tobytes()

        render_layer(
            self.image,
            build_filter_chain(AdjustmentVector(invert=100)),
            GeometryTransform(1.3, 45.0),
            (50, 50),
            visible_fraction=0.3,
        )

        self.assertEqual(self.image.tobytes(), before)

    def test_not_an_image(self):
        with self.assertRaises(TypeError):
            render_layer("image.png", self.chain, GeometryTransform(1.0, 0.0), (10, 10))


if __name__ == "__main__":
    unittest.main()
