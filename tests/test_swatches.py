"""색상 카드 렌더링 테스트"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from game.round_state import RoundRecord
from ui.swatches import (
    CARD_SIZE,
    render_guess_card,
    render_history_strip,
    render_memorize_card,
    render_result_card,
)


def test_memorize_card_is_filled_with_target():
    img = render_memorize_card("#3498DB", 3, "1 / 5")
    assert img.size == CARD_SIZE
    assert img.getpixel((2, CARD_SIZE[1] - 2)) == (52, 152, 219)


def test_result_card_splits_guess_and_target():
    record = RoundRecord(target="#FF0000", guess="#00FF00", score=1.84)
    img = render_result_card(record, (0, 100, 100), (120, 100, 100), "1 / 5")
    w, h = img.size
    assert img.getpixel((w - 2, h // 2 - 2)) == (0, 255, 0)
    assert img.getpixel((w - 2, h - 2)) == (255, 0, 0)


def test_invalid_guess_card_has_warning_border():
    img = render_guess_card("#FFFFFF", "#12", "1 / 5", invalid=True)
    assert img.getpixel((0, 0)) == (229, 115, 115)
    plain = render_guess_card("#FFFFFF", "#12", "1 / 5")
    assert plain.getpixel((0, 0)) == (255, 255, 255)


def test_history_strip_stacks_target_over_guess():
    records = [
        RoundRecord(target="#000000", guess="#FFFFFF", score=0.0),
        RoundRecord(target="#FF8800", guess="#FF8800", score=10.0),
    ]
    img = render_history_strip(records)
    assert img.size == (128, 64 * 2 + 16)
    assert img.getpixel((10, 10)) == (0, 0, 0)
    assert img.getpixel((10, 74)) == (255, 255, 255)
    assert img.getpixel((74, 10)) == (255, 136, 0)
    assert img.getpixel((74, 74)) == (255, 136, 0)
