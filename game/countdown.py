"""암기 단계 카운트다운 (외부 타이머가 tick을 호출하는 협력형)"""
from __future__ import annotations

from typing import Callable, Optional


class Countdown:
    def __init__(self, ticks: int, on_finish: Optional[Callable[[], None]] = None):
        if ticks < 1:
            raise ValueError("카운트다운은 1틱 이상이어야 해.")
        self.remaining = ticks
        self._on_finish = on_finish
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled and self.remaining > 0

    def cancel(self) -> None:
        self._cancelled = True

    def tick(self) -> bool:
        """남은 틱을 하나 줄인다. 취소됐거나 이미 끝났으면 무시하고 False."""
        if not self.active:
            return False
        self.remaining -= 1
        if self.remaining == 0 and self._on_finish is not None:
            self._on_finish()
        return True
