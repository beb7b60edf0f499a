"""컬러 리콜 게임 Gradio 앱"""
from __future__ import annotations
import logging
from typing import Optional

import gradio as gr
from PIL import Image

from color_utils import DifficultyMode
from color_metrics.similarity import format_round_score
from config import MODE_DISPLAY_ORDER, config_for_mode
from game.controller import GameController, RoundView, SessionFinished
from game.round_state import EditResult, InvalidInputSignal, RoundPhase, RoundStateError
from ui.swatches import (
    render_guess_card,
    render_history_strip,
    render_memorize_card,
    render_result_card,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("color_recall")

DEFAULT_MODE = MODE_DISPLAY_ORDER[0][0]

REJECT_MESSAGES = {
    "non_hex": "0-9, A-F만 입력할 수 있어.",
    "outside_palette": "이지 모드에서는 0, 8, F만 쓸 수 있어.",
    "too_long": "더 이상 입력할 수 없어.",
}


def mode_options():
    return MODE_DISPLAY_ORDER


def resolve_mode(label: str) -> DifficultyMode:
    for mode, display in mode_options():
        if display == label:
            return mode
    return DEFAULT_MODE


def round_label(view: RoundView) -> str:
    return f"{view.round_index} / {view.total_rounds}"


def render_card(view: RoundView) -> Image.Image:
    if view.state is RoundPhase.MEMORIZING:
        return render_memorize_card(view.target, view.remaining, round_label(view))
    if view.state is RoundPhase.GUESSING:
        return render_guess_card(view.background, view.partial, round_label(view), invalid=view.invalid_input)
    return render_guess_card(view.background, view.guess, round_label(view))


def render_status(view: RoundView) -> str:
    if view.state is RoundPhase.MEMORIZING:
        return f"**{view.remaining}초** 동안 기억해. ({view.target_display})"
    if view.state is RoundPhase.GUESSING:
        return "기억한 색의 HEX를 입력하고 제출해. 빈 자리는 0으로 채워져."
    return f"**{format_round_score(view.score)}** 점"


def render_summary(result: SessionFinished) -> str:
    rows = "".join(
        f"| {i} | `{rec.target}` | `{rec.guess}` | {rec.score:.1f} |\n"
        for i, rec in enumerate(result.history, 1)
    )
    return (
        f"### 총점 **{result.display_score}** / {result.display_max}\n\n"
        "| 라운드 | 정답 | 입력 | 점수 |\n|---|---|---|---|\n" + rows
    )


def on_start(mode_label: str):
    mode = resolve_mode(mode_label)
    ctrl = GameController()
    ctrl.start_session(mode)
    view = ctrl.snapshot()
    cfg = config_for_mode(mode)
    return (
        ctrl,
        render_card(view),
        render_status(view),
        gr.update(value="#", interactive=False, max_lines=1),
        "",
        gr.Timer(value=cfg.tick_seconds, active=True),
        view.token,
    )


def on_tick(ctrl: Optional[GameController], token: Optional[int]):
    """타이머를 켤 때 저장해 둔 라운드 토큰으로 tick. 지난 라운드 토큰이면 아무것도 바꾸지 않는다."""
    if ctrl is None or ctrl.session is None or token is None:
        return gr.update(), gr.update(), gr.update(), gr.Timer(active=False)
    if not ctrl.tick(token):
        view = ctrl.snapshot()
        still_counting = view.state is RoundPhase.MEMORIZING and view.token != token
        return gr.update(), gr.update(), gr.update(), gr.Timer(active=still_counting)
    view = ctrl.snapshot()
    guessing = view.state is RoundPhase.GUESSING
    return (
        render_card(view),
        render_status(view),
        gr.update(value=view.partial, interactive=guessing),
        gr.Timer(active=not guessing),
    )


def on_guess_input(text: str, ctrl: Optional[GameController]):
    if ctrl is None or ctrl.session is None:
        return gr.update(), gr.update()
    result = ctrl.edit_guess(text)
    view = ctrl.snapshot()
    if isinstance(result, InvalidInputSignal):
        gr.Warning(REJECT_MESSAGES.get(result.reason, "입력을 받을 수 없어."))
    return render_card(view), gr.update(value=view.partial)


def on_submit(text: str, ctrl: Optional[GameController]):
    if ctrl is None or ctrl.session is None:
        gr.Warning("먼저 게임을 시작해줘.")
        return gr.update(), gr.update(), gr.update(), gr.update()
    try:
        outcome = ctrl.submit_guess(text)
    except RoundStateError as exc:
        gr.Warning(str(exc))
        return gr.update(), gr.update(), gr.update(), gr.update()
    if outcome is EditResult.IGNORED:
        return gr.update(), gr.update(), gr.update(), gr.update()
    if isinstance(outcome, InvalidInputSignal):
        gr.Warning(REJECT_MESSAGES.get(outcome.reason, "입력을 받을 수 없어."))
        return gr.update(), gr.update(), gr.update(value=outcome.partial), gr.update()
    view = ctrl.snapshot()
    card = render_result_card(outcome.record, outcome.target_hsv, outcome.guess_hsv, round_label(view))
    return card, render_status(view), gr.update(interactive=False), outcome.remark


def on_next(ctrl: Optional[GameController]):
    if ctrl is None or ctrl.session is None:
        return gr.update(), gr.update(), gr.update(), gr.update(), gr.Timer(active=False), gr.update()
    try:
        result = ctrl.advance_round()
    except RoundStateError as exc:
        gr.Warning(str(exc))
        return gr.update(), gr.update(), gr.update(), gr.update(), gr.Timer(active=False), gr.update()
    if isinstance(result, SessionFinished):
        logger.info("[정보] 최종 점수 %s / %s", result.display_score, result.display_max)
        return (
            render_history_strip(result.history),
            render_summary(result),
            gr.update(value="#", interactive=False),
            "",
            gr.Timer(active=False),
            None,
        )
    view = ctrl.snapshot()
    return (
        render_card(view),
        render_status(view),
        gr.update(value="#", interactive=False),
        "",
        gr.Timer(active=True),
        view.token,
    )


def build_ui() -> gr.Blocks:
    with gr.Blocks(title="컬러 리콜", css="body{background:#111;}") as demo:
        gr.Markdown("""
        # 컬러 리콜
        잠깐 보여주는 색을 기억했다가 HEX 코드로 다시 맞춰봐. 5라운드, 라운드당 10점.
        """)
        ctrl_state = gr.State(None)
        token_state = gr.State(None)
        timer = gr.Timer(value=1.0, active=False)
        with gr.Row():
            with gr.Column(scale=1):
                mode_radio = gr.Radio(choices=[label for _, label in mode_options()], value=mode_options()[0][1], label="난이도")
                start_btn = gr.Button("시작 / 다시 하기", variant="primary")
                status_out = gr.Markdown()
                guess_box = gr.Textbox(label="HEX 입력", value="#", max_lines=1, interactive=False)
                with gr.Row():
                    submit_btn = gr.Button("제출")
                    next_btn = gr.Button("다음")
                remark_out = gr.Markdown()
            with gr.Column(scale=1):
                card_out = gr.Image(label="색상 카드", type="pil")

        start_btn.click(
            fn=on_start,
            inputs=[mode_radio],
            outputs=[ctrl_state, card_out, status_out, guess_box, remark_out, timer, token_state],
        )
        timer.tick(
            fn=on_tick,
            inputs=[ctrl_state, token_state],
            outputs=[card_out, status_out, guess_box, timer],
        )
        guess_box.input(
            fn=on_guess_input,
            inputs=[guess_box, ctrl_state],
            outputs=[card_out, guess_box],
        )
        guess_box.submit(
            fn=on_submit,
            inputs=[guess_box, ctrl_state],
            outputs=[card_out, status_out, guess_box, remark_out],
        )
        submit_btn.click(
            fn=on_submit,
            inputs=[guess_box, ctrl_state],
            outputs=[card_out, status_out, guess_box, remark_out],
        )
        next_btn.click(
            fn=on_next,
            inputs=[ctrl_state],
            outputs=[card_out, status_out, guess_box, remark_out, timer, token_state],
        )

    return demo


if __name__ == "__main__":
    print("Gradio 앱을 시작할게. 브라우저에서 확인해줘.")
    app = build_ui()
    app.launch()
