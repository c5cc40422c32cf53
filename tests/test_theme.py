"""Tests for color theme derivation."""

import logging

import pytest

from cvpress.theme import (
    DEFAULT_BRAND,
    PdfColors,
    darken,
    gradient_bands,
    hex_to_rgb,
    make_colors,
    mix,
    normalize_hex,
)

HEX_INPUTS = [
    "#2563eb",
    "#FFFFFF",
    "#000000",
    "#abc",
    "ff0000",
    " #10B981 ",
    "",
    None,
    "blue",
    "#12345",
    "#gggggg",
]


class TestNormalizeHex:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("#2563EB", "#2563eb"),
            ("2563eb", "#2563eb"),
            ("#abc", "#aabbcc"),
            ("  #10b981 ", "#10b981"),
        ],
    )
    def test_valid(self, value, expected):
        assert normalize_hex(value) == expected

    @pytest.mark.parametrize("value", ["", None, "blue", "#12345", "#gggggg"])
    def test_invalid_falls_back(self, value):
        assert normalize_hex(value) == DEFAULT_BRAND

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="cvpress.theme"):
            normalize_hex("nope")
        assert "Invalid brand color" in caplog.text

    @pytest.mark.parametrize("value", HEX_INPUTS)
    def test_idempotent(self, value):
        once = normalize_hex(value)
        assert normalize_hex(once) == once


class TestMakeColors:
    def test_default_brand(self):
        colors = make_colors("#2563eb")
        assert colors.brand == "#2563eb"
        assert colors.brand_dark == "#0947cf"
        assert isinstance(colors, PdfColors)

    def test_invalid_brand_uses_default(self):
        assert make_colors("not a color") == make_colors(DEFAULT_BRAND)

    @pytest.mark.parametrize("value", HEX_INPUTS)
    def test_channels_in_bounds(self, value):
        colors = make_colors(value)
        for color in (colors.brand, colors.brand_dark, colors.ink, colors.bg_soft):
            assert all(0 <= c <= 255 for c in hex_to_rgb(color))

    @pytest.mark.parametrize("value", HEX_INPUTS)
    def test_dark_is_never_lighter(self, value):
        colors = make_colors(value)
        brand = hex_to_rgb(colors.brand)
        dark = hex_to_rgb(colors.brand_dark)
        assert all(d <= b for d, b in zip(dark, brand))

    def test_deterministic(self):
        assert make_colors("#abc") == make_colors("#aabbcc")

    def test_near_black_brand_clamps_dark_variant(self):
        colors = make_colors("#101010")
        assert colors.brand == "#101010"
        assert colors.brand_dark == "#000000"


class TestColorMath:
    def test_darken_clamps(self):
        assert darken("#101010") == "#000000"

    def test_mix_endpoints(self):
        assert mix("#000000", "#ffffff", 0) == "#000000"
        assert mix("#000000", "#ffffff", 1) == "#ffffff"
        assert mix("#000000", "#ffffff", 2) == "#ffffff"

    def test_mix_midpoint(self):
        assert mix("#000000", "#ffffff", 0.5) == "#808080"

    def test_gradient_bands(self):
        bands = gradient_bands("#000000", "#ffffff", 5)
        assert len(bands) == 5
        assert bands[0] == "#000000"
        assert bands[-1] == "#ffffff"

    def test_single_band(self):
        assert gradient_bands("#ABC", "#000000", 1) == ["#aabbcc"]
