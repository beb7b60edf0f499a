"""라운드 화면용 색상 카드 이미지"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from color_utils import hex_to_rgb, text_color_for
from color_metrics.similarity import format_round_score
from game.round_state import RoundRecord

CARD_SIZE: Tuple[int, int] = (360, 480)
PAD = 24


def _font():
    return ImageFont.load_default()


def _hsv_caption(hsv: Tuple[int, int, int]) -> str:
    h, s, v = hsv
    return f"H{h} S{s} B{v}"


def render_memorize_card(target_hex: str, remaining: int, round_label: str, size: Tuple[int, int] = CARD_SIZE) -> Image.Image:
    img = Image.new("RGB", size, hex_to_rgb(target_hex))
    draw = ImageDraw.Draw(img)
    ink = hex_to_rgb(text_color_for(target_hex))
    font = _font()
    draw.text((PAD, PAD), round_label, fill=ink, font=font)
    draw.text((size[0] - PAD - 24, PAD), str(remaining), fill=ink, font=font)
    return img


def render_guess_card(background_hex: str, partial: str, round_label: str, invalid: bool = False, size: Tuple[int, int] = CARD_SIZE) -> Image.Image:
    img = Image.new("RGB", size, hex_to_rgb(background_hex))
    draw = ImageDraw.Draw(img)
    ink = hex_to_rgb(text_color_for(background_hex))
    font = _font()
    draw.text((PAD, PAD), round_label, fill=ink, font=font)
    draw.text((PAD, size[1] // 2), partial, fill=ink, font=font)
    if invalid:
        # 잘못된 입력 표시용 테두리
        draw.rectangle((0, 0, size[0] - 1, size[1] - 1), outline=(229, 115, 115), width=6)
    return img


def render_result_card(
    record: RoundRecord,
    target_hsv: Tuple[int, int, int],
    guess_hsv: Tuple[int, int, int],
    round_label: str,
    size: Tuple[int, int] = CARD_SIZE,
) -> Image.Image:
    """위쪽 절반은 입력한 색, 아래쪽 절반은 정답 색.

    기본 비트맵 폰트는 한글을 못 그리므로 코멘트 문구는 화면 쪽 텍스트로 보여준다.
    """
    w, h = size
    half = h // 2
    img = Image.new("RGB", size, hex_to_rgb(record.target))
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, w, half - 1), fill=hex_to_rgb(record.guess))
    font = _font()

    guess_ink = hex_to_rgb(text_color_for(record.guess))
    target_ink = hex_to_rgb(text_color_for(record.target))
    draw.text((PAD, PAD), round_label, fill=guess_ink, font=font)
    draw.text((w // 2, PAD), format_round_score(record.score), fill=guess_ink, font=font)
    draw.text((PAD, half - PAD - 28), f"GUESS {record.guess}", fill=guess_ink, font=font)
    draw.text((PAD, half - PAD - 12), _hsv_caption(guess_hsv), fill=guess_ink, font=font)
    draw.text((PAD, h - PAD - 28), f"TARGET {record.target}", fill=target_ink, font=font)
    draw.text((PAD, h - PAD - 12), _hsv_caption(target_hsv), fill=target_ink, font=font)
    return img


def render_history_strip(history: Iterable[RoundRecord], cell: int = 64, label_h: Optional[int] = 16) -> Image.Image:
    records = list(history)
    width = max(1, len(records)) * cell
    height = cell * 2 + (label_h or 0)
    img = Image.new("RGB", (width, height), (24, 24, 24))
    draw = ImageDraw.Draw(img)
    font = _font()
    for i, rec in enumerate(records):
        x0 = i * cell
        draw.rectangle((x0, 0, x0 + cell - 1, cell - 1), fill=hex_to_rgb(rec.target))
        draw.rectangle((x0, cell, x0 + cell - 1, cell * 2 - 1), fill=hex_to_rgb(rec.guess))
        if label_h:
            draw.text((x0 + 4, cell * 2 + 2), f"{rec.score:.1f}", fill=(235, 235, 235), font=font)
    return img
