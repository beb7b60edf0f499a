"""한 라운드의 상태 머신: 암기 → 입력 → 채점"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from color_utils import (
    CONSTRAINED_DIGITS,
    HEX_DIGITS,
    DifficultyMode,
    expand_short_form,
)
from color_metrics.similarity import evaluate_guess
from config import GameConfig, config_for_mode
from game.countdown import Countdown

logger = logging.getLogger("color_recall")


class RoundPhase(str, Enum):
    MEMORIZING = "memorizing"
    GUESSING = "guessing"
    SCORED = "scored"


class EditResult(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IGNORED = "ignored"


class RoundStateError(RuntimeError):
    """현재 단계에서 허용되지 않는 호출"""


class InvalidInputEdit(ValueError):
    def __init__(self, attempted: str, reason: str):
        super().__init__(f"입력을 받을 수 없어 ({reason}): {attempted!r}")
        self.attempted = attempted
        self.reason = reason


@dataclass(frozen=True)
class RoundRecord:
    target: str
    guess: str
    score: float


@dataclass(frozen=True)
class InvalidInputSignal:
    attempted: str
    reason: str
    partial: str


def normalize_edit(text: str, mode: DifficultyMode, max_length: int) -> str:
    """입력창의 새 값을 '#' + 대문자 HEX 형태로 정규화한다.

    허용되지 않는 글자는 지우지 않고 InvalidInputEdit로 거절한다.
    """
    val = text or ""
    if not val.startswith("#"):
        val = "#" + val.replace("#", "")
    val = val.upper()
    allowed = CONSTRAINED_DIGITS if DifficultyMode(mode) is DifficultyMode.CONSTRAINED else HEX_DIGITS
    for ch in val[1:]:
        if ch not in HEX_DIGITS:
            raise InvalidInputEdit(val, "non_hex")
        if ch not in allowed:
            raise InvalidInputEdit(val, "outside_palette")
    if len(val) > max_length:
        raise InvalidInputEdit(val, "too_long")
    return val


def effective_guess(partial: str, max_length: int) -> str:
    digits = partial[1:] if partial.startswith("#") else partial
    if len(digits) != 3:
        # 모자란 자리는 0으로 채운다
        digits = digits.ljust(max_length - 1, "0")
    return expand_short_form("#" + digits)


class Round:
    def __init__(
        self,
        index: int,
        target: str,
        mode: DifficultyMode = DifficultyMode.STANDARD,
        config: Optional[GameConfig] = None,
        token: int = 0,
    ):
        self.index = index
        self.target = expand_short_form(target)
        self.mode = DifficultyMode(mode)
        self.config = config or config_for_mode(self.mode)
        self.token = token
        self.phase = RoundPhase.MEMORIZING
        self.partial = "#"
        self.record: Optional[RoundRecord] = None
        self.last_rejection: Optional[InvalidInputSignal] = None
        self._countdown = Countdown(self.config.countdown_ticks, on_finish=self._begin_guessing)

    @property
    def remaining(self) -> int:
        if self.phase is not RoundPhase.MEMORIZING:
            return 0
        return self._countdown.remaining

    @property
    def invalid_input(self) -> bool:
        return self.last_rejection is not None

    @property
    def effective_guess(self) -> str:
        return effective_guess(self.partial, self.config.max_input_length)

    def _begin_guessing(self) -> None:
        self._countdown.cancel()
        self.phase = RoundPhase.GUESSING
        self.partial = "#"

    def tick(self) -> bool:
        if self.phase is not RoundPhase.MEMORIZING:
            return False
        return self._countdown.tick()

    def skip_countdown(self) -> None:
        if self.phase is RoundPhase.MEMORIZING:
            self._begin_guessing()

    def cancel(self) -> None:
        self._countdown.cancel()

    def acknowledge_invalid(self) -> None:
        self.last_rejection = None

    def edit(self, text: str) -> EditResult:
        if self.phase is not RoundPhase.GUESSING:
            return EditResult.IGNORED
        try:
            self.partial = normalize_edit(text, self.mode, self.config.max_input_length)
        except InvalidInputEdit as exc:
            self.last_rejection = InvalidInputSignal(attempted=exc.attempted, reason=exc.reason, partial=self.partial)
            logger.debug("입력 거절 (%s): %r, 유지=%s", exc.reason, exc.attempted, self.partial)
            return EditResult.REJECTED
        self.last_rejection = None
        return EditResult.ACCEPTED

    def submit(self) -> RoundRecord:
        if self.phase is not RoundPhase.GUESSING:
            raise RoundStateError(f"{self.phase.value} 단계에서는 제출할 수 없어.")
        guess = self.effective_guess
        breakdown = evaluate_guess(self.target, guess)
        self.record = RoundRecord(target=self.target, guess=guess, score=breakdown.score)
        self.phase = RoundPhase.SCORED
        self.last_rejection = None
        logger.info(
            "[정보] 라운드 %d: 정답=%s, 입력=%s, 거리=%.2f → %.2f점",
            self.index,
            self.target,
            guess,
            breakdown.distance,
            breakdown.score,
        )
        return self.record
