"""Tests for hex/RGB/HSL parsing, conversion and formatting."""

import numpy as np
import pytest

from cssfilter.color.space import (
    TargetColor,
    hex_to_rgb,
    is_hex,
    normalize_hex,
    parse_color,
    rgb_to_hex,
    rgb_to_hsl,
)
from cssfilter.exceptions import InvalidColorFormat


class TestHexToRgb:
    """Test hex parsing."""

    def test_six_digit(self):
        """Test 6-digit hex with and without leading #."""
        assert hex_to_rgb("#FF5733") == (255, 87, 51)
        assert hex_to_rgb("ff5733") == (255, 87, 51)

    def test_three_digit_expansion(self):
        """Test 3-digit hex doubles each digit."""
        assert hex_to_rgb("#f53") == (255, 85, 51)
        assert hex_to_rgb("abc") == (170, 187, 204)
        assert hex_to_rgb("#000") == (0, 0, 0)

    @pytest.mark.parametrize(
        "value",
        ["", "#", "#12", "#1234", "#12345", "#1234567", "GGGGGG", "#12345G", "12,34"],
    )
    def test_invalid(self, value):
        """Test malformed hex strings are rejected."""
        with pytest.raises(InvalidColorFormat):
            hex_to_rgb(value)

    def test_is_hex(self):
        """Test hex detection."""
        assert is_hex("#abc")
        assert is_hex("A1B2C3")
        assert not is_hex("255,0,0")
        assert not is_hex("#abcd")


class TestRgbToHex:
    """Test hex formatting."""

    def test_uppercase(self):
        """Test output is uppercase #RRGGBB."""
        assert rgb_to_hex(255, 87, 51) == "#FF5733"
        assert rgb_to_hex(10, 11, 12) == "#0A0B0C"

    def test_rounding(self):
        """Test channels are rounded to the nearest integer."""
        assert rgb_to_hex(254.6, 0.4, 16.7) == "#FF0011"

    def test_clamping(self):
        """Test out-of-range channels are clamped."""
        assert rgb_to_hex(300, -5, 128) == "#FF0080"

    def test_round_trip_channels(self):
        """Test every channel value survives hex formatting and parsing."""
        for v in range(256):
            assert hex_to_rgb(rgb_to_hex(v, 0, 0)) == (v, 0, 0)
            assert hex_to_rgb(rgb_to_hex(0, v, 0)) == (0, v, 0)
            assert hex_to_rgb(rgb_to_hex(0, 0, v)) == (0, 0, v)

    def test_round_trip_grid(self):
        """Test round trip over a coarse grid of full colors."""
        values = list(range(0, 256, 15)) + [255]
        for r in values:
            for g in values:
                for b in values:
                    assert hex_to_rgb(rgb_to_hex(r, g, b)) == (r, g, b)


class TestRgbToHsl:
    """Test RGB to HSL conversion."""

    @pytest.mark.parametrize(
        "rgb,expected",
        [
            ((255, 0, 0), (0.0, 100.0, 50.0)),
            ((0, 255, 0), (120.0, 100.0, 50.0)),
            ((0, 0, 255), (240.0, 100.0, 50.0)),
            ((255, 255, 0), (60.0, 100.0, 50.0)),
            ((0, 255, 255), (180.0, 100.0, 50.0)),
            ((255, 0, 255), (300.0, 100.0, 50.0)),
            ((255, 255, 255), (0.0, 0.0, 100.0)),
            ((0, 0, 0), (0.0, 0.0, 0.0)),
        ],
    )
    def test_reference_colors(self, rgb, expected):
        """Test primaries, secondaries, black and white."""
        np.testing.assert_allclose(rgb_to_hsl(*rgb), expected, atol=1e-9)

    def test_achromatic_hue_zero(self):
        """Test gray has zero hue and saturation."""
        h, s, l = rgb_to_hsl(128, 128, 128)
        assert h == 0.0
        assert s == 0.0
        assert abs(l - 128 / 255 * 100) < 1e-9

    def test_red_branch_wraps(self):
        """Test hue just below 360 when blue slightly exceeds green."""
        h, _, _ = rgb_to_hsl(255, 0, 1)
        assert 359.0 < h < 360.0

    def test_ranges(self):
        """Test h in [0, 360), s and l in [0, 100] for arbitrary inputs."""
        rng = np.random.default_rng(42)
        colors = rng.random((5000, 3)) * 255.0
        colors[:100] = np.round(colors[:100])
        for r, g, b in colors:
            h, s, l = rgb_to_hsl(r, g, b)
            assert 0.0 <= h < 360.0
            assert 0.0 <= s <= 100.0
            assert 0.0 <= l <= 100.0


class TestParseColor:
    """Test user color parsing."""

    def test_hex(self):
        """Test hex forms are accepted."""
        assert parse_color("#FF5733") == (255, 87, 51)
        assert parse_color("f53") == (255, 85, 51)

    def test_rgb_triple(self):
        """Test decimal triples are accepted."""
        assert parse_color("255,87,51") == (255, 87, 51)
        assert parse_color(" 0, 10 ,200 ") == (0, 10, 200)

    @pytest.mark.parametrize(
        "value",
        ["256,0,0", "0,0,1000", "1,2", "1,2,3,4", "a,b,c", "-1,0,0", "1.5,2,3", "red", ""],
    )
    def test_invalid(self, value):
        """Test invalid strings raise InvalidColorFormat."""
        with pytest.raises(InvalidColorFormat):
            parse_color(value)

    @pytest.mark.parametrize("value", ["\u0662\u0665\u0665,0,0", "0,\uff11,0", "0,0,\u0967"])
    def test_non_ascii_digits(self, value):
        """Test only ASCII digits are accepted in r,g,b triples."""
        with pytest.raises(InvalidColorFormat):
            parse_color(value)

    def test_non_string(self):
        """Test non-string input is rejected."""
        with pytest.raises(InvalidColorFormat):
            parse_color(123)

    def test_is_value_error(self):
        """Test InvalidColorFormat can be caught as ValueError."""
        with pytest.raises(ValueError, match="Invalid color format"):
            parse_color("nope")

    def test_normalize_hex(self):
        """Test canonical hex output for every accepted form."""
        assert normalize_hex("f53") == "#FF5533"
        assert normalize_hex("#ff5733") == "#FF5733"
        assert normalize_hex("255,87,51") == "#FF5733"


class TestTargetColor:
    """Test TargetColor construction."""

    def test_from_string(self):
        """Test target holds RGB and derived HSL."""
        target = TargetColor.from_string("#FF0000")
        assert target.rgb == (255.0, 0.0, 0.0)
        np.testing.assert_allclose(target.hsl, (0.0, 100.0, 50.0))
        assert target.hex == "#FF0000"

    def test_immutable(self):
        """Test target cannot be modified."""
        target = TargetColor.from_rgb(1, 2, 3)
        with pytest.raises(AttributeError):
            target.rgb = (0.0, 0.0, 0.0)

    def test_out_of_range(self):
        """Test out-of-range channels are rejected."""
        with pytest.raises(InvalidColorFormat):
            TargetColor.from_rgb(0, 0, 256)
