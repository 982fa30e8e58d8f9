"""톤 프로필 컬러 체커 Gradio 앱"""
from __future__ import annotations
import logging
from typing import List, Tuple

import gradio as gr
from PIL import Image

from color_utils import InvalidFormat, hex_to_rgb, normalize_color_input
from config import DEFAULT_CONFIG, PROFILE_DISPLAY_ORDER
from profile_loader import ProfileRepository
from tone_metrics.evaluator import ToneResult, evaluate_tone
from tone_metrics.ranking import rank_profiles
from ui.overlays import average_color, center_box, dominant_color, draw_selection_box

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger("tone_evaluator")

REPO = ProfileRepository()
DEFAULT_PROFILE = PROFILE_DISPLAY_ORDER[0][0]
DEFAULT_HEX = "#8A9BB8"
SAMPLING_MODES = [("center", "중앙 평균색"), ("dominant", "대표색 (히스토그램)")]


def profile_options() -> List[Tuple[str, str]]:
    return PROFILE_DISPLAY_ORDER


def resolve_profile_id(label: str) -> str:
    for profile_id, display in profile_options():
        if display == label:
            return profile_id
    return DEFAULT_PROFILE


def render_swatch(hex_color: str) -> str:
    r, g, b = hex_to_rgb(hex_color)
    return f"""
    <div style='display:flex;align-items:center;gap:16px;'>
      <div style='width:120px;height:120px;border-radius:16px;border:3px solid #222;background:{hex_color}'></div>
      <div style='font-size:14px;line-height:1.6'>
        <div>HEX: <code>{hex_color}</code></div>
        <div>RGB: <code>{r}, {g}, {b}</code></div>
      </div>
    </div>
    """


def _gauge_color(score: float) -> str:
    if score >= 85:
        return "linear-gradient(90deg,#9FC5E8,#6D8FC9)"
    if score >= 70:
        return "linear-gradient(90deg,#CFE2F3,#9FC5E8)"
    if score >= 50:
        return "linear-gradient(90deg,#FFEFB0,#F4D35E)"
    return "linear-gradient(90deg,#F8D7DA,#E57373)"


def render_score_card(result: ToneResult) -> str:
    notes = "".join(f"<li>{note}</li>" for note in result.notes) or "<li>모든 규칙 안쪽이야.</li>"
    p = result.penalties
    return f"""
    <div style='display:flex;flex-direction:column;gap:10px;'>
      <div style='font-weight:700;'>{result.tone_label}</div>
      <div style='display:flex;align-items:center;gap:12px;'>
        <div style='flex:1;height:22px;border-radius:9999px;background:#eee;overflow:hidden;position:relative;'>
          <div style='position:absolute;left:0;top:0;height:100%;width:{result.score}%;background:{_gauge_color(result.score)};'></div>
        </div>
        <div style='font-size:22px;font-weight:700;'>{result.score}</div>
        <div style='padding:4px 10px;border-radius:9999px;border:1px solid #444;'>{result.match_level}</div>
      </div>
      <div style='font-size:13px;color:#555;'>
        L <b>{result.lab.L:.1f}</b>, Chroma <b>{result.chroma}</b>, Hue <b>{result.hue}°</b>
        · 명도 <b>-{p.lightness:.1f}</b>, 채도 <b>-{p.chroma:.1f}</b>, 색상각 <b>-{p.hue:.1f}</b>, 웜 <b>-{p.warmth:.1f}</b>
      </div>
      <ul style='margin:0;padding-left:18px;font-size:13px;color:#444;'>{notes}</ul>
    </div>
    """


def render_ranking(hex_color: str) -> str:
    rows = [
        f"<tr><td>{idx}</td><td>{r.tone_label}</td><td>{r.score}</td><td>{r.match_level}</td></tr>"
        for idx, r in enumerate(rank_profiles(hex_color, REPO.load_all(), DEFAULT_CONFIG), 1)
    ]
    return """
    <table style='width:100%;border-collapse:collapse;font-size:12px;'>
      <thead><tr style='border-bottom:1px solid #ccc'><th>순위</th><th>톤</th><th>점수</th><th>판정</th></tr></thead>
      <tbody>{rows}</tbody>
    </table>
    """.format(rows="".join(rows))


def compute_score(hex_color: str, profile_id: str) -> Tuple[str, str, str]:
    profile = REPO.load(profile_id)
    result = evaluate_tone(hex_color, profile, DEFAULT_CONFIG)
    return render_swatch(hex_color), render_score_card(result), render_ranking(hex_color)


def on_hex_change(hex_value: str, profile_id: str):
    normalized = normalize_color_input(hex_value or "")
    if normalized is None:
        gr.Warning("HEX 형식이 올바르지 않아. 예: #8A9BB8, #89B")
        return hex_value, gr.update(), gr.update(), gr.update()
    try:
        swatch_html, score_html, ranking_html = compute_score(normalized, profile_id)
    except InvalidFormat as exc:
        gr.Warning(str(exc))
        return hex_value, gr.update(), gr.update(), gr.update()
    return normalized, swatch_html, score_html, ranking_html


def resolve_sampling_mode(label: str) -> str:
    for mode, display in SAMPLING_MODES:
        if display == label:
            return mode
    return SAMPLING_MODES[0][0]


def on_image_upload(img: Image.Image, profile_id: str, mode: str = "center"):
    if img is None:
        return (gr.update(),) * 5
    if mode == "dominant":
        sample = dominant_color(img)
        marked = img
    else:
        box = center_box(img.size)
        sample = average_color(img, box)
        marked = draw_selection_box(img, box)
    logger.info("[정보] %s 샘플: %s, 밝기=%.1f", mode, sample.hex, sample.brightness)
    if sample.is_dark:
        gr.Warning(f"너무 어두워 ({sample.hex}). 카메라가 가려졌거나 조명이 부족한지 확인해줘.")
    normalized, swatch_html, score_html, ranking_html = on_hex_change(sample.hex, profile_id)
    return normalized, swatch_html, score_html, ranking_html, marked


def on_image_select_event(img: Image.Image, evt: gr.SelectData, profile_label: str):
    profile_id = resolve_profile_id(profile_label)
    if img is None or evt is None:
        return (gr.update(),) * 5
    box = getattr(evt, "bounding_box", None) or getattr(evt, "region", None)
    if box:
        x0 = int(box.get("x0", box.get("x", 0)))
        y0 = int(box.get("y0", box.get("y", 0)))
        selection = (
            x0,
            y0,
            int(box.get("x1", x0 + box.get("width", 0))),
            int(box.get("y1", y0 + box.get("height", 0))),
        )
    else:
        x, y = int(evt.index[0]), int(evt.index[1])
        selection = (x, y, x, y)
    sample = average_color(img, selection)
    logger.info("[정보] 선택 영역 평균색: %s, 밝기=%.1f", sample.hex, sample.brightness)
    normalized, swatch_html, score_html, ranking_html = on_hex_change(sample.hex, profile_id)
    return normalized, swatch_html, score_html, ranking_html, draw_selection_box(img, selection)


def build_ui() -> gr.Blocks:
    with gr.Blocks(title="톤 프로필 컬러 체커") as demo:
        gr.Markdown("""
        # 톤 프로필 컬러 체커
        Lab 명도 · 채도 · 색상각 규칙으로 선택한 색이 각 시즌 톤에 얼마나 어울리는지 확인해봐.
        """)
        with gr.Row():
            with gr.Column(scale=1):
                profile_dropdown = gr.Dropdown(
                    choices=[label for _, label in profile_options()],
                    label="분석 톤",
                    value=profile_options()[0][1],
                    interactive=True,
                )
                hex_box = gr.Textbox(label="HEX 입력", value=DEFAULT_HEX, max_lines=1)
                color_picker = gr.ColorPicker(label="컬러 피커", value=DEFAULT_HEX)
                swatch_out = gr.HTML(label="선택 색상")
                score_out = gr.HTML(label="톤 일치도")
            with gr.Column(scale=1):
                ranking_out = gr.HTML(label="톤별 순위")
                sampling_radio = gr.Radio(
                    choices=[label for _, label in SAMPLING_MODES],
                    label="업로드 샘플링",
                    value=SAMPLING_MODES[0][1],
                )
                upload = gr.Image(label="이미지 업로드", type="pil")
                annotated = gr.Image(label="선택 영역", type="pil")
        gr.Markdown("※ 이미지를 클릭하거나 드래그하면 해당 영역 평균색으로 다시 채점해.")

        swatch_out.value, score_out.value, ranking_out.value = compute_score(DEFAULT_HEX, DEFAULT_PROFILE)

        outputs = [hex_box, swatch_out, score_out, ranking_out]
        profile_dropdown.change(
            fn=lambda label, hx: on_hex_change(hx, resolve_profile_id(label)),
            inputs=[profile_dropdown, hex_box],
            outputs=outputs,
        )
        hex_box.input(
            fn=lambda hx, label: on_hex_change(hx, resolve_profile_id(label)),
            inputs=[hex_box, profile_dropdown],
            outputs=outputs,
            trigger_mode="always_last",
        )
        color_picker.input(
            fn=lambda hx, label: on_hex_change(hx, resolve_profile_id(label)),
            inputs=[color_picker, profile_dropdown],
            outputs=outputs,
            trigger_mode="always_last",
        )
        upload.change(
            fn=lambda img, label, mode: on_image_upload(img, resolve_profile_id(label), resolve_sampling_mode(mode)),
            inputs=[upload, profile_dropdown, sampling_radio],
            outputs=outputs + [annotated],
        )
        upload.select(
            fn=on_image_select_event,
            inputs=[upload, profile_dropdown],
            outputs=outputs + [annotated],
        )

    return demo


if __name__ == "__main__":
    print("Gradio 앱을 시작할게. 브라우저에서 확인해줘.")
    app = build_ui()
    app.launch()
