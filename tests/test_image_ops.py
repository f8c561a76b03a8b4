"""
Unit tests for utils.image_ops (dimension planning, naming, size formatting).
"""

import pytest

from utils.image_ops import (
    build_optimized_filename,
    compute_target_dimensions,
    format_extension,
    format_file_size,
)


class TestComputeTargetDimensions:
    def test_landscape_photo_is_scaled_to_max_width(self):
        assert compute_target_dimensions(6000, 4000, 4000, 4000) == (4000, 2667)

    def test_portrait_photo_is_scaled_to_max_height(self):
        assert compute_target_dimensions(4000, 6000, 4000, 4000) == (2667, 4000)

    def test_very_tall_image_satisfies_both_limits(self):
        width, height = compute_target_dimensions(1000, 9000, 4000, 4000)
        assert (width, height) == (444, 4000)

    def test_both_limits_apply_with_single_factor(self):
        # Width limit alone would leave the height at 3000.
        width, height = compute_target_dimensions(8000, 6000, 4000, 2000)
        assert (width, height) == (2667, 2000)

    def test_small_image_is_not_enlarged(self):
        assert compute_target_dimensions(800, 600, 4000, 4000) == (800, 600)

    def test_extreme_aspect_ratio_never_yields_zero(self):
        width, height = compute_target_dimensions(100000, 10, 4000, 4000)
        assert width == 4000
        assert height == 1

    @pytest.mark.parametrize(
        "natural,limits",
        [
            ((6000, 4000), (4000, 4000)),
            ((8000, 8000), (4000, 4000)),
            ((3001, 7919), (1920, 1080)),
            ((123, 45678), (500, 300)),
            ((4000, 4000), (4000, 4000)),
        ],
    )
    def test_output_fits_limits_and_keeps_aspect(self, natural, limits):
        width, height = compute_target_dimensions(*natural, *limits)

        assert 0 < width <= limits[0]
        assert 0 < height <= limits[1]
        # Aspect ratio within rounding error of half a pixel per side.
        assert abs(width * natural[1] - height * natural[0]) <= (natural[0] + natural[1]) / 2

    @pytest.mark.parametrize(
        "args", [(0, 100, 10, 10), (100, -1, 10, 10), (100, 100, 0, 10), (100, 100, 10, 0)]
    )
    def test_non_positive_arguments_raise(self, args):
        with pytest.raises(ValueError):
            compute_target_dimensions(*args)


class TestFilenames:
    def test_jpeg_uses_jpg_extension(self):
        assert format_extension("jpeg") == "jpg"
        assert format_extension("webp") == "webp"

    def test_extension_is_replaced(self):
        name = build_optimized_filename("IMG_0001.jpeg", "jpeg", 1700000000123)
        assert name == "IMG_0001_optimized_1700000000123.jpg"

    def test_only_last_extension_is_stripped(self):
        name = build_optimized_filename("wedding.day.one.PNG", "webp", 42)
        assert name == "wedding.day.one_optimized_42.webp"

    def test_name_without_extension(self):
        assert build_optimized_filename("portrait", "png", 7) == "portrait_optimized_7.png"


class TestFormatFileSize:
    @pytest.mark.parametrize(
        "num_bytes,expected",
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (10 * 1024 * 1024, "10 MB"),
            (int(2.25 * 1024 ** 3), "2.25 GB"),
            (1024 ** 4, "1024 GB"),
        ],
    )
    def test_human_readable(self, num_bytes, expected):
        assert format_file_size(num_bytes) == expected

    @pytest.mark.parametrize(
        "num_bytes,expected",
        [
            (1_000_000 * 1024 ** 3, "1000000 GB"),
            (int(1234567.5 * 1024 ** 3), "1234567.5 GB"),
        ],
    )
    def test_large_sizes_never_use_exponent_notation(self, num_bytes, expected):
        assert format_file_size(num_bytes) == expected
