"""색상 변환 유틸"""
from __future__ import annotations

import math
import re
from enum import Enum
from typing import Optional, Tuple

import numpy as np
from skimage import color as skcolor

HEX_RE = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
HEX_DIGITS = "0123456789ABCDEF"
CONSTRAINED_DIGITS = "08F"
CONSTRAINED_CHANNELS = (0x00, 0x88, 0xFF)


class ColorFormatError(ValueError):
    """검증을 거치지 않은 색상 문자열이 변환/채점 경로로 들어왔을 때"""


class DifficultyMode(str, Enum):
    STANDARD = "standard"
    CONSTRAINED = "constrained"


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def round_half_up(x: float, ndigits: int = 0) -> float:
    """0.5는 항상 올림. 브라우저 Math.round와 같은 결과를 낸다."""
    factor = 10 ** ndigits
    return math.floor(x * factor + 0.5) / factor


def validate_hex(s: str) -> bool:
    if not isinstance(s, str):
        return False
    return bool(HEX_RE.fullmatch(s))


def expand_short_form(s: str) -> str:
    if not validate_hex(s):
        raise ColorFormatError(f"올바른 HEX 형식이 아니야: {s!r} (예: #3498DB, #F80)")
    digits = s[1:].upper()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def to_short_form(s: str) -> str:
    digits = expand_short_form(s)[1:]
    return "#" + digits[0] + digits[2] + digits[4]


def hex_to_rgb(s: str) -> Tuple[int, int, int]:
    val = expand_short_form(s)[1:]
    return int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    r, g, b = (int(round(clamp(c, 0, 255))) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def rgb_to_hsv01(r: int, g: int, b: int) -> Tuple[float, float, float]:
    arr = np.array([[[r / 255.0, g / 255.0, b / 255.0]]], dtype=float)
    hsv = skcolor.rgb2hsv(arr)
    h, s, v = hsv[0, 0]
    return float(h), float(s), float(v)


def hex_to_hsv(s: str) -> Tuple[int, int, int]:
    """(H 0-360, S 0-100, V 0-100) 정수. 무채색이면 H는 0."""
    h, sat, v = rgb_to_hsv01(*hex_to_rgb(s))
    return (
        int(round_half_up(h * 360.0)),
        int(round_half_up(sat * 100.0)),
        int(round_half_up(v * 100.0)),
    )


def relative_luma(s: str) -> float:
    if not validate_hex(s):
        return 255.0
    r, g, b = hex_to_rgb(s)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def text_color_for(s: str) -> str:
    # 배경이 어두우면 흰 글씨
    return "#FFFFFF" if relative_luma(s) < 128 else "#000000"


def generate_random_color(
    mode: DifficultyMode = DifficultyMode.STANDARD,
    rng: Optional[np.random.Generator] = None,
) -> str:
    rng = rng or np.random.default_rng()
    if DifficultyMode(mode) is DifficultyMode.CONSTRAINED:
        picks = rng.integers(0, len(CONSTRAINED_CHANNELS), size=3)
        return rgb_to_hex(*(CONSTRAINED_CHANNELS[int(i)] for i in picks))
    picks = rng.integers(0, len(HEX_DIGITS), size=6)
    return "#" + "".join(HEX_DIGITS[int(i)] for i in picks)
