"""RGB 유클리드 거리 기반 0~10 유사도 채점"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from color_utils import hex_to_rgb, round_half_up
from config import DEFAULT_LOCALE, REMARK_RULES

MAX_RGB_DISTANCE = 441.6729559300637  # sqrt(3 * 255^2)


@dataclass(frozen=True)
class ScoreBreakdown:
    score: float
    distance: float
    similarity: float


def rgb_distance(target_hex: str, guess_hex: str) -> float:
    diff = np.asarray(hex_to_rgb(target_hex), dtype=float) - np.asarray(hex_to_rgb(guess_hex), dtype=float)
    return float(np.linalg.norm(diff))


def evaluate_guess(target_hex: str, guess_hex: str) -> ScoreBreakdown:
    """두 색의 거리와 유사도, 소수 둘째 자리까지 반올림한 점수를 돌려준다.

    잘못된 HEX는 ColorFormatError로 바로 실패한다. 0점으로 대체하지 않는다.
    """
    distance = rgb_distance(target_hex, guess_hex)
    similarity = max(0.0, 1.0 - distance / MAX_RGB_DISTANCE)
    score = round_half_up(similarity * 10.0, 2)
    return ScoreBreakdown(score=score, distance=distance, similarity=similarity)


def score(target_hex: str, guess_hex: str) -> float:
    return evaluate_guess(target_hex, guess_hex).score


def remark_for_score(
    value: float,
    locale: str = DEFAULT_LOCALE,
    rules: Optional[List[Tuple[float, str]]] = None,
) -> str:
    table = rules if rules is not None else REMARK_RULES.get(locale, REMARK_RULES["en"])
    for threshold, text in table:
        if value >= threshold:
            return text
    return table[-1][1]


def format_round_score(value: float) -> str:
    return f"{value:.2f}"


def format_total_score(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}"
