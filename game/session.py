"""N 라운드 진행과 누적 점수 관리"""
from __future__ import annotations

import itertools
import logging
from typing import List, Optional, Tuple

import numpy as np

from color_utils import DifficultyMode, generate_random_color, round_half_up
from config import GameConfig, config_for_mode
from game.round_state import (
    EditResult,
    InvalidInputEdit,
    Round,
    RoundPhase,
    RoundRecord,
    RoundStateError,
)

logger = logging.getLogger("color_recall")


class Session:
    """한 번의 플레이. 다시 하기는 start()로 기록을 모두 버리고 새로 시작한다."""

    def __init__(
        self,
        mode: DifficultyMode = DifficultyMode.STANDARD,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.rng = rng or np.random.default_rng()
        self._tokens = itertools.count(1)
        self._history: List[RoundRecord] = []
        self.mode = DifficultyMode(mode)
        self.config = config or config_for_mode(self.mode)
        self.round_index = 0
        self.current_round: Optional[Round] = None
        self.finished = False

    @property
    def total_rounds(self) -> int:
        return self.config.total_rounds

    @property
    def history(self) -> Tuple[RoundRecord, ...]:
        return tuple(self._history)

    @property
    def current_target(self) -> Optional[str]:
        return self.current_round.target if self.current_round else None

    @property
    def max_score(self) -> float:
        return self.total_rounds * 10.0

    def _new_round(self) -> Round:
        target = generate_random_color(self.mode, self.rng)
        return Round(
            index=self.round_index,
            target=target,
            mode=self.mode,
            config=self.config,
            token=next(self._tokens),
        )

    def start(self, mode: Optional[DifficultyMode] = None, config: Optional[GameConfig] = None) -> "Session":
        if self.current_round is not None:
            self.current_round.cancel()
        if mode is not None:
            self.mode = DifficultyMode(mode)
            self.config = config or config_for_mode(self.mode)
        elif config is not None:
            self.config = config
        self._history = []
        self.finished = False
        self.round_index = 1
        self.current_round = self._new_round()
        logger.info("[정보] 세션 시작: 모드=%s, 라운드 %d개", self.mode.value, self.total_rounds)
        return self

    def restart(self) -> "Session":
        return self.start()

    def tick(self, token: int) -> bool:
        """현재 라운드의 토큰이 아니면 지난 타이머의 tick이므로 버린다."""
        rnd = self.current_round
        if rnd is None or self.finished or rnd.token != token:
            logger.debug("지난 라운드 tick 무시: token=%s", token)
            return False
        return rnd.tick()

    def complete_round(self, guess: Optional[str] = None) -> "Session":
        """끝난 라운드를 기록하고 다음 라운드로 넘어간다.

        guess가 주어지고 라운드가 아직 입력 단계면 그 값으로 제출까지 한다.
        """
        if self.finished or self.current_round is None:
            raise RoundStateError("진행 중인 세션이 없어.")
        rnd = self.current_round
        if guess is not None and rnd.phase is RoundPhase.GUESSING:
            if rnd.edit(guess) is EditResult.REJECTED:
                signal = rnd.last_rejection
                raise InvalidInputEdit(signal.attempted, signal.reason)
            rnd.submit()
        if rnd.phase is not RoundPhase.SCORED or rnd.record is None:
            raise RoundStateError("채점이 끝나지 않은 라운드는 넘길 수 없어.")
        self._history.append(rnd.record)
        if self.round_index < self.total_rounds:
            self.round_index += 1
            self.current_round = self._new_round()
        else:
            self.finished = True
            logger.info(
                "[정보] 세션 종료: 총점 %.2f / %.1f",
                self.final_score(),
                self.max_score,
            )
        return self

    def final_score(self) -> float:
        return round_half_up(sum(r.score for r in self._history), 2)
