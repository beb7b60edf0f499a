from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from color_utils import DifficultyMode, validate_hex
from config import GameConfig, config_for_mode
from game.round_state import InvalidInputEdit, RoundPhase, RoundStateError
from game.session import Session


def make_session(mode=DifficultyMode.STANDARD, seed=1234, **overrides) -> Session:
    return Session(mode=mode, config=config_for_mode(mode, **overrides), rng=np.random.default_rng(seed)).start()


def play_round(session: Session, guess: str):
    rnd = session.current_round
    rnd.skip_countdown()
    rnd.edit(guess)
    record = rnd.submit()
    session.complete_round()
    return record


def test_start_resets_to_first_round():
    session = make_session()
    assert session.round_index == 1
    assert session.total_rounds == 5
    assert session.history == ()
    assert validate_hex(session.current_target)
    assert session.current_round.phase is RoundPhase.MEMORIZING
    assert not session.finished


def test_five_rounds_then_finished():
    session = make_session()
    scores = []
    guesses = ["#000000", "#FFFFFF", "#808080", "#3498DB", "#F80"]
    for i, guess in enumerate(guesses, 1):
        assert session.round_index == i
        scores.append(play_round(session, guess).score)
    assert session.finished
    assert len(session.history) == 5
    assert session.final_score() == pytest.approx(sum(scores), abs=0.01)
    assert session.max_score == 50.0
    with pytest.raises(RoundStateError):
        session.complete_round()


def test_each_round_gets_a_fresh_target_round():
    session = make_session()
    first = session.current_round
    play_round(session, "#123456")
    second = session.current_round
    assert second is not first
    assert second.phase is RoundPhase.MEMORIZING
    assert second.token != first.token
    assert session.history[0].target == first.target


def test_complete_round_requires_scored_round():
    session = make_session()
    with pytest.raises(RoundStateError):
        session.complete_round()
    session.current_round.skip_countdown()
    with pytest.raises(RoundStateError):
        session.complete_round()


def test_complete_round_with_guess_submits_it():
    session = make_session()
    target = session.current_target
    session.current_round.skip_countdown()
    session.complete_round(target)
    assert session.history[0].guess == target
    assert session.history[0].score == 10.0
    assert session.round_index == 2


def test_complete_round_with_invalid_guess_raises():
    session = make_session()
    session.current_round.skip_countdown()
    with pytest.raises(InvalidInputEdit):
        session.complete_round("#QQ")
    assert session.history == ()
    assert session.current_round.phase is RoundPhase.GUESSING


def test_stale_tick_is_ignored():
    session = make_session()
    old = session.current_round
    play_round(session, "#000")
    current = session.current_round
    assert not session.tick(old.token)
    assert current.remaining == session.config.countdown_ticks
    assert session.tick(current.token)
    assert current.remaining == session.config.countdown_ticks - 1


def test_ticks_drive_round_into_guessing():
    session = make_session()
    rnd = session.current_round
    for _ in range(session.config.countdown_ticks):
        assert session.tick(rnd.token)
    assert rnd.phase is RoundPhase.GUESSING
    assert not session.tick(rnd.token)


def test_restart_discards_history_and_cancels_timer():
    session = make_session()
    play_round(session, "#000")
    live = session.current_round
    session.restart()
    assert session.history == ()
    assert session.round_index == 1
    assert session.current_round is not live
    assert not live.tick()
    assert not session.tick(live.token)


def test_start_can_switch_mode():
    session = make_session()
    session.start(DifficultyMode.CONSTRAINED)
    assert session.mode is DifficultyMode.CONSTRAINED
    assert session.config.max_input_length == 4
    target = session.current_target
    assert all(target[i:i + 2] in {"00", "88", "FF"} for i in (1, 3, 5))


def test_custom_round_count():
    session = make_session(total_rounds=2)
    play_round(session, "#000")
    assert not session.finished
    play_round(session, "#000")
    assert session.finished
    assert session.max_score == 20.0


def test_game_config_validates_values():
    with pytest.raises(ValueError):
        GameConfig(countdown_ticks=0)
    with pytest.raises(ValueError):
        GameConfig(total_rounds=0)
    with pytest.raises(ValueError):
        GameConfig(max_input_length=5)
