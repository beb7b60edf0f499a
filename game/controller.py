"""화면 쪽에서 호출하는 게임 진입점과 읽기 전용 뷰"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from color_utils import DifficultyMode, hex_to_hsv, text_color_for, to_short_form
from color_metrics.similarity import format_total_score, remark_for_score
from config import DEFAULT_LOCALE, GameConfig
from game.round_state import (
    EditResult,
    InvalidInputSignal,
    RoundPhase,
    RoundRecord,
    RoundStateError,
)
from game.session import Session

HSV = Tuple[int, int, int]


@dataclass(frozen=True)
class RoundOutcome:
    record: RoundRecord
    remark: str
    target_hsv: HSV
    guess_hsv: HSV


@dataclass(frozen=True)
class NextRoundView:
    round_index: int
    total_rounds: int
    countdown: int
    token: int


@dataclass(frozen=True)
class SessionFinished:
    final_score: float
    history: Tuple[RoundRecord, ...]
    max_score: float

    @property
    def display_score(self) -> str:
        return format_total_score(self.final_score)

    @property
    def display_max(self) -> str:
        return format_total_score(self.max_score)


@dataclass(frozen=True)
class RoundView:
    round_index: int
    total_rounds: int
    state: RoundPhase
    remaining: int
    token: int
    partial: str
    invalid_input: bool
    # 암기/결과 단계에서만 정답을 노출한다
    target: Optional[str]
    target_display: Optional[str]
    target_hsv: Optional[HSV]
    guess: Optional[str]
    guess_hsv: Optional[HSV]
    score: Optional[float]
    background: str
    text_color: str


class GameController:
    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        locale: str = DEFAULT_LOCALE,
    ):
        self.rng = rng
        self.locale = locale
        self.session: Optional[Session] = None

    def _require_session(self) -> Session:
        if self.session is None or self.session.current_round is None:
            raise RoundStateError("먼저 start_session을 호출해줘.")
        return self.session

    def start_session(
        self,
        mode: DifficultyMode = DifficultyMode.STANDARD,
        config: Optional[GameConfig] = None,
    ) -> Session:
        if self.session is not None and self.session.current_round is not None:
            self.session.current_round.cancel()
        self.session = Session(mode=mode, config=config, rng=self.rng)
        return self.session.start()

    def restart(self) -> Session:
        session = self._require_session()
        return session.restart()

    def tick(self, token: int) -> bool:
        if self.session is None:
            return False
        return self.session.tick(token)

    def edit_guess(self, text: str) -> Union[EditResult, InvalidInputSignal]:
        rnd = self._require_session().current_round
        result = rnd.edit(text)
        if result is EditResult.REJECTED:
            return rnd.last_rejection
        return result

    def submit_guess(self, text: Optional[str] = None) -> Union[RoundOutcome, InvalidInputSignal, EditResult]:
        """암기 중 제출은 입력 이벤트로 보고 무시한다 (EditResult.IGNORED)."""
        rnd = self._require_session().current_round
        if rnd.phase is RoundPhase.MEMORIZING:
            return EditResult.IGNORED
        if rnd.phase is not RoundPhase.GUESSING:
            raise RoundStateError(f"{rnd.phase.value} 단계에서는 제출할 수 없어.")
        if text is not None and rnd.edit(text) is EditResult.REJECTED:
            return rnd.last_rejection
        record = rnd.submit()
        return RoundOutcome(
            record=record,
            remark=remark_for_score(record.score, self.locale),
            target_hsv=hex_to_hsv(record.target),
            guess_hsv=hex_to_hsv(record.guess),
        )

    def advance_round(self) -> Union[NextRoundView, SessionFinished]:
        session = self._require_session()
        session.complete_round()
        if session.finished:
            return SessionFinished(
                final_score=session.final_score(),
                history=session.history,
                max_score=session.max_score,
            )
        rnd = session.current_round
        return NextRoundView(
            round_index=session.round_index,
            total_rounds=session.total_rounds,
            countdown=rnd.remaining,
            token=rnd.token,
        )

    def snapshot(self) -> RoundView:
        session = self._require_session()
        rnd = session.current_round
        phase = rnd.phase
        shows_target = phase is not RoundPhase.GUESSING
        target_display = None
        if shows_target:
            constrained = rnd.mode is DifficultyMode.CONSTRAINED
            target_display = to_short_form(rnd.target) if constrained else rnd.target

        guess = None
        if phase is RoundPhase.SCORED:
            guess = rnd.record.guess
        elif phase is RoundPhase.GUESSING:
            guess = rnd.effective_guess

        if phase is RoundPhase.MEMORIZING:
            background = rnd.target
        elif phase is RoundPhase.GUESSING:
            background = guess if len(rnd.partial) > 1 else "#FFFFFF"
        else:
            background = guess

        return RoundView(
            round_index=session.round_index,
            total_rounds=session.total_rounds,
            state=phase,
            remaining=rnd.remaining,
            token=rnd.token,
            partial=rnd.partial,
            invalid_input=rnd.invalid_input,
            target=rnd.target if shows_target else None,
            target_display=target_display,
            target_hsv=hex_to_hsv(rnd.target) if shows_target else None,
            guess=guess,
            guess_hsv=hex_to_hsv(guess) if guess else None,
            score=rnd.record.score if rnd.record else None,
            background=background,
            text_color=text_color_for(background),
        )
