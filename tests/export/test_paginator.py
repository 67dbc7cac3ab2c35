"""
Unit tests for the pagination planner.

Includes regression tests for exact page-height multiples (no trailing
empty page) and the zero-height capture (one page, not zero).
"""

import math
import random
from fractions import Fraction
from types import SimpleNamespace

import pytest

from report_export.core.errors import InvalidInputError
from report_export.core.models import PageSpec
from report_export.export.paginator import display_size, plan


def _expected_pages(pixel_w: int, pixel_h: int, page_w: int, page_h: int) -> int:
    """Exact ceil(display_height / page_height), minimum 1."""
    display = Fraction(pixel_h * page_w, pixel_w)
    return max(1, math.ceil(display / page_h))


class TestConcreteScenarios:
    """Worked examples for A4 (210 x 297 mm)."""

    def test_when_capture_twice_as_tall_as_wide_then_two_pages(self, make_capture, a4):
        capture = make_capture(1000, 2000)

        placements = plan(capture, a4)

        # display height = 2000 * 210 / 1000 = 420 -> ceil(420 / 297) = 2
        assert len(placements) == 2
        assert [p.vertical_offset for p in placements] == [0, -297]
        assert placements[0].image_display_height == pytest.approx(420)

    def test_when_capture_square_then_single_page(self, make_capture, a4):
        capture = make_capture(1000, 1000)

        placements = plan(capture, a4)

        assert len(placements) == 1
        assert placements[0].vertical_offset == 0
        assert placements[0].image_display_height == pytest.approx(210)

    def test_when_capture_has_zero_height_then_one_empty_page(self, make_capture, a4):
        capture = make_capture(1000, 0)

        placements = plan(capture, a4)

        assert len(placements) == 1
        assert placements[0].image_display_height == 0
        assert placements[0].vertical_offset == 0

    def test_when_display_height_is_exact_multiple_then_no_trailing_page(self, make_capture):
        # 1000x3000 px on 100 x 100 pages -> display height 300 = 3 pages exactly
        capture = make_capture(1000, 3000)

        placements = plan(capture, PageSpec(100, 100))

        assert len(placements) == 3
        assert [p.vertical_offset for p in placements] == [0, -100, -200]

    def test_when_display_height_equals_one_page_then_one_page(self, make_capture, a4):
        # 210 x 297 px scaled to 210 mm wide is exactly one A4 page
        capture = make_capture(210, 297)

        assert len(plan(capture, a4)) == 1

    def test_when_display_height_just_over_one_page_then_two_pages(self, make_capture, a4):
        capture = make_capture(210, 298)

        assert len(plan(capture, a4)) == 2

    def test_float_noise_does_not_add_sliver_page(self, make_capture):
        # 0.1-based page heights accumulate float error when subtracted
        capture = make_capture(10, 3)

        placements = plan(capture, PageSpec(1.0, 0.1))

        # display height = 3 * 1.0 / 10 = 0.3 -> three pages of 0.1
        assert len(placements) == 3


class TestPlacementInvariants:
    """Properties that hold for every plan."""

    @pytest.mark.parametrize(
        "pixel_w,pixel_h,page_w,page_h",
        [
            (1000, 2000, 210, 297),
            (1000, 1000, 210, 297),
            (1654, 2339, 210, 297),
            (800, 12000, 216, 279),
            (1, 1, 1, 1),
            (3, 7, 5, 2),
            (1200, 5940, 210, 297),
            (500, 1, 210, 297),
        ],
    )
    def test_page_count_matches_ceiling(self, make_capture, pixel_w, pixel_h, page_w, page_h):
        capture = make_capture(pixel_w, pixel_h)

        placements = plan(capture, PageSpec(page_w, page_h))

        assert len(placements) == _expected_pages(pixel_w, pixel_h, page_w, page_h)

    def test_random_sweep_matches_ceiling(self, make_capture):
        rng = random.Random(42)
        for _ in range(300):
            pixel_w = rng.randint(100, 4000)
            pixel_h = rng.randint(0, 20000)
            page_w = rng.randint(1, 600)
            page_h = rng.randint(50, 900)
            capture = make_capture(pixel_w, pixel_h)

            placements = plan(capture, PageSpec(page_w, page_h))

            assert len(placements) == _expected_pages(pixel_w, pixel_h, page_w, page_h), (
                pixel_w, pixel_h, page_w, page_h
            )

    def test_offsets_are_sequential_multiples_of_page_height(self, make_capture):
        capture = make_capture(640, 9000)
        spec = PageSpec(210, 297)

        placements = plan(capture, spec)

        assert [p.page_index for p in placements] == list(range(len(placements)))
        for p in placements:
            assert p.vertical_offset == pytest.approx(-p.page_index * spec.height)
        offsets = [p.vertical_offset for p in placements]
        assert offsets == sorted(offsets, reverse=True)
        assert offsets[0] == 0

    def test_display_size_constant_and_aspect_preserved(self, make_capture):
        capture = make_capture(1366, 7000)
        spec = PageSpec(215.9, 279.4)

        placements = plan(capture, spec)

        widths = {p.image_display_width for p in placements}
        heights = {p.image_display_height for p in placements}
        assert widths == {spec.width}
        assert len(heights) == 1
        (height,) = heights
        assert height / spec.width == pytest.approx(capture.pixel_height / capture.pixel_width)

    def test_plan_is_deterministic(self, make_capture, a4):
        capture = make_capture(1000, 4321)

        assert plan(capture, a4) == plan(capture, a4)

    def test_last_window_covers_image_bottom(self, make_capture, a4):
        capture = make_capture(1000, 4321)

        placements = plan(capture, a4)
        last = placements[-1]

        assert last.window_top < last.image_display_height
        assert last.window_top + a4.height >= last.image_display_height


class TestValidation:
    """InvalidInputError for unusable geometry."""

    @pytest.mark.parametrize("pixel_w", [0, -5])
    def test_rejects_non_positive_pixel_width(self, a4, pixel_w):
        capture = SimpleNamespace(pixel_width=pixel_w, pixel_height=100)

        with pytest.raises(InvalidInputError, match="pixel_width"):
            plan(capture, a4)

    def test_rejects_negative_pixel_height(self, a4):
        capture = SimpleNamespace(pixel_width=100, pixel_height=-1)

        with pytest.raises(InvalidInputError, match="pixel_height"):
            plan(capture, a4)

    @pytest.mark.parametrize("width,height", [(0, 297), (210, 0), (-1, 297), (210, -3)])
    def test_rejects_non_positive_page_dimensions(self, make_capture, width, height):
        capture = make_capture(100, 100)
        spec = SimpleNamespace(width=width, height=height, unit="mm")

        with pytest.raises(InvalidInputError):
            plan(capture, spec)

    def test_invalid_input_is_a_value_error(self, a4):
        capture = SimpleNamespace(pixel_width=0, pixel_height=0)

        with pytest.raises(ValueError):
            display_size(capture, a4)

    def test_real_models_reject_unusable_dimensions(self, make_capture):
        with pytest.raises(InvalidInputError, match="pixel_width"):
            plan(make_capture(0, 100), PageSpec(210, 297))
        with pytest.raises(InvalidInputError, match="height"):
            plan(make_capture(100, 100), PageSpec(210, 0))
