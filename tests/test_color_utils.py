"""color_utils 보조 함수 테스트"""
from pathlib import Path
import re
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from color_utils import (
    ColorFormatError,
    DifficultyMode,
    expand_short_form,
    generate_random_color,
    hex_to_hsv,
    hex_to_rgb,
    relative_luma,
    rgb_to_hex,
    round_half_up,
    text_color_for,
    to_short_form,
    validate_hex,
)


@pytest.mark.parametrize("value", ["#ABC", "#abc", "#3498DB", "#3498db", "#000", "#FfFfFf"])
def test_validate_hex_accepts_three_or_six_digits(value):
    assert validate_hex(value)


@pytest.mark.parametrize(
    "value",
    ["", "#", "ABC", "3498DB", "#AB", "#ABCD", "#3498DBA", "#GGG", " #ABC", "#ABC ", "#ABC\n", "#FFFFFF\n", "##ABC", None, 123],
)
def test_validate_hex_rejects_everything_else(value):
    assert not validate_hex(value)


def test_expand_short_form_doubles_digits_and_uppercases():
    assert expand_short_form("#f80") == "#FF8800"
    assert expand_short_form("#3498db") == "#3498DB"


def test_expand_short_form_rejects_invalid():
    with pytest.raises(ColorFormatError):
        expand_short_form("#12345")
    # ColorFormatError는 ValueError 계열
    with pytest.raises(ValueError):
        expand_short_form("red")


def test_to_short_form_is_lossy():
    assert to_short_form("#3498DB") == "#39D"
    assert expand_short_form(to_short_form("#FF8800")) == "#FF8800"
    assert expand_short_form(to_short_form("#3498DB")) != "#3498DB"


def test_hex_to_rgb_handles_short_form():
    assert hex_to_rgb("#3498DB") == (52, 152, 219)
    assert hex_to_rgb("#F80") == (255, 136, 0)


def test_hex_to_rgb_fails_loudly_on_malformed_input():
    with pytest.raises(ColorFormatError):
        hex_to_rgb("#12")


def test_trailing_newline_is_not_a_color():
    with pytest.raises(ColorFormatError):
        expand_short_form("#ABC\n")
    with pytest.raises(ColorFormatError):
        hex_to_rgb("#ABC\n")


def test_rgb_round_trip_is_lossless():
    for v in range(256):
        rgb = (v, 255 - v, (v * 7) % 256)
        assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb


def test_rgb_to_hex_clamps_channels():
    assert rgb_to_hex(300, -5, 128) == "#FF0080"


@pytest.mark.parametrize(
    "hex_color, expected",
    [
        ("#3498DB", (204, 76, 86)),
        ("#FF0000", (0, 100, 100)),
        ("#00FF00", (120, 100, 100)),
        ("#0000FF", (240, 100, 100)),
        ("#FF00FF", (300, 100, 100)),
        ("#808080", (0, 0, 50)),
        ("#000000", (0, 0, 0)),
        ("#FFFFFF", (0, 0, 100)),
    ],
)
def test_hex_to_hsv_rounds_to_integers(hex_color, expected):
    assert hex_to_hsv(hex_color) == expected


def test_round_half_up_rounds_away_from_zero_for_halves():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(1.835034, 2) == 1.84


def test_text_color_follows_luma():
    assert text_color_for("#000000") == "#FFFFFF"
    assert text_color_for("#FFFFFF") == "#000000"
    assert text_color_for("#0000FF") == "#FFFFFF"
    assert relative_luma("not-a-color") == 255.0
    assert text_color_for("not-a-color") == "#000000"


def test_generate_standard_color_is_canonical_hex():
    rng = np.random.default_rng(7)
    for _ in range(200):
        assert re.fullmatch(r"#[0-9A-F]{6}", generate_random_color(DifficultyMode.STANDARD, rng))


def test_generate_constrained_color_uses_three_channel_values():
    rng = np.random.default_rng(11)
    seen = set()
    for _ in range(200):
        color = generate_random_color(DifficultyMode.CONSTRAINED, rng)
        pairs = [color[1:3], color[3:5], color[5:7]]
        assert all(p in {"00", "88", "FF"} for p in pairs)
        seen.update(pairs)
    assert seen == {"00", "88", "FF"}


def test_generate_accepts_mode_value_string():
    rng = np.random.default_rng(3)
    color = generate_random_color("constrained", rng)
    assert validate_hex(color)
