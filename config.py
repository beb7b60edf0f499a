"""게임 전역 설정과 난이도별 파라미터"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from color_utils import DifficultyMode


@dataclass(frozen=True)
class GameConfig:
    countdown_ticks: int = 3
    total_rounds: int = 5
    max_input_length: int = 7  # '#' 포함
    tick_seconds: float = 1.0

    def __post_init__(self):
        if self.countdown_ticks < 1:
            raise ValueError("countdown_ticks는 1 이상이어야 해.")
        if self.total_rounds < 1:
            raise ValueError("total_rounds는 1 이상이어야 해.")
        if self.max_input_length not in (4, 7):
            raise ValueError("max_input_length는 4(#RGB) 또는 7(#RRGGBB)만 가능해.")
        if self.tick_seconds <= 0:
            raise ValueError("tick_seconds는 0보다 커야 해.")


MODE_CONFIGS: Dict[DifficultyMode, GameConfig] = {
    DifficultyMode.STANDARD: GameConfig(countdown_ticks=3, total_rounds=5, max_input_length=7),
    DifficultyMode.CONSTRAINED: GameConfig(countdown_ticks=5, total_rounds=5, max_input_length=4),
}

DEFAULT_CONFIG = MODE_CONFIGS[DifficultyMode.STANDARD]


def config_for_mode(mode: DifficultyMode, **overrides) -> GameConfig:
    base = MODE_CONFIGS[DifficultyMode(mode)]
    return replace(base, **overrides) if overrides else base


DEFAULT_LOCALE = "ko"

REMARK_RULES: Dict[str, List[Tuple[float, str]]] = {
    "en": [
        (9.5, "Unbelievable. You are a printer."),
        (8.0, "Great job. Almost perfect."),
        (6.0, "Not bad. You're getting there."),
        (3.0, "Right hemisphere. Wrong everything."),
        (0.0, "Are you even looking at the screen?"),
    ],
    "ko": [
        (9.5, "말도 안 돼. 사람 프린터네."),
        (8.0, "아주 좋아. 거의 완벽해."),
        (6.0, "나쁘지 않아. 감 잡고 있어."),
        (3.0, "방향은 맞았는데 나머지가 다 틀렸어."),
        (0.0, "화면 보고 있는 거 맞지?"),
    ],
}


MODE_DISPLAY_ORDER = [
    (DifficultyMode.STANDARD, "하드 (#RRGGBB)"),
    (DifficultyMode.CONSTRAINED, "이지 (#RGB, 0/8/F)"),
]
