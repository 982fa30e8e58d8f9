"""톤 프로필 채점 로직 (Lab 명도/채도/색상각 규칙 기반)"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from color_utils import Lab, chroma, clamp, convert_hex_to_lab, hue
from config import DEFAULT_CONFIG, ScoringConfig
from profile_loader import MatchBucket, ToneProfile
from tone_metrics.penalties import (
    hue_penalty,
    hue_sector_distance,
    range_penalty,
    round_half_away,
)

logger = logging.getLogger("tone_evaluator")

NOTE_TOO_DARK = "too dark for this tone"
NOTE_TOO_LIGHT = "too light/washed"
NOTE_TOO_GRAY = "too gray/soft"
NOTE_TOO_SATURATED = "too saturated/bright"
NOTE_HUE_OUTSIDE = "leans outside cool hue sectors"
NOTE_WARMTH = "yellow warmth present"


@dataclass(frozen=True)
class PenaltyBreakdown:
    lightness: float
    chroma: float
    hue: float
    warmth: float

    @property
    def total(self) -> float:
        return self.lightness + self.chroma + self.hue + self.warmth


@dataclass(frozen=True)
class ToneResult:
    input: str
    tone_label: str
    lab: Lab
    chroma: float
    hue: float
    score: float
    match_level: str
    notes: Tuple[str, ...]
    penalties: PenaltyBreakdown

    def to_dict(self) -> Dict[str, Any]:
        """모바일 앱이 쓰던 camelCase 키로 직렬화한다."""
        return {
            "input": self.input,
            "toneLabel": self.tone_label,
            "lab": {"L": self.lab.L, "a": self.lab.a, "b": self.lab.b},
            "chroma": self.chroma,
            "hue": self.hue,
            "score": self.score,
            "matchLevel": self.match_level,
            "notes": list(self.notes),
            "penalties": {
                "lightness": round_half_away(self.penalties.lightness, 2),
                "chroma": round_half_away(self.penalties.chroma, 2),
                "hue": round_half_away(self.penalties.hue, 2),
                "warmth": round_half_away(self.penalties.warmth, 2),
                "total": round_half_away(self.penalties.total, 2),
            },
        }


def round_hue(h: float, ndigits: int) -> float:
    """반올림 후에도 [0, 360) 범위를 유지한다 (359.95 → 0.0)."""
    rounded = round_half_away(h, ndigits)
    return 0.0 if rounded >= 360.0 else rounded


def select_match_level(score: float, buckets: Iterable[MatchBucket], fallback: str) -> str:
    # 원본 버킷 순서는 건드리지 않는다
    for bucket in sorted(buckets, key=lambda b: b.min_score, reverse=True):
        if score >= bucket.min_score:
            return bucket.label
    return fallback


def evaluate_tone(
    hex_color: str,
    profile: ToneProfile,
    config: ScoringConfig | None = None,
) -> ToneResult:
    cfg = config or DEFAULT_CONFIG
    lab = convert_hex_to_lab(hex_color)
    c = chroma(lab)
    h = hue(lab)
    notes = []

    lightness_pen = range_penalty(lab.L, profile.lightness)
    if lab.L < profile.lightness.min:
        notes.append(NOTE_TOO_DARK)
    if lab.L > profile.lightness.max:
        notes.append(NOTE_TOO_LIGHT)

    chroma_pen = range_penalty(c, profile.chroma)
    if c < profile.chroma.min:
        notes.append(NOTE_TOO_GRAY)
    if c > profile.chroma.max:
        notes.append(NOTE_TOO_SATURATED)

    # 무채색은 색상각이 의미 없으므로 섹터 평가를 건너뛴다
    hue_pen = 0.0
    achromatic = cfg.skip_hue_for_achromatic and c <= cfg.achromatic_chroma_threshold
    if not achromatic:
        rule = profile.hue_sectors
        dist = hue_sector_distance(h, rule.sectors)
        tolerance = rule.tolerance_degrees or cfg.default_hue_tolerance
        hue_pen = hue_penalty(dist, tolerance, rule.weight)
        if dist > 0:
            notes.append(NOTE_HUE_OUTSIDE)

    warmth_pen = 0.0
    warmth = profile.warmth_penalty
    if warmth is not None and lab.b > warmth.lab_b_gt:
        warmth_pen = warmth.penalty
        notes.append(NOTE_WARMTH)

    penalties = PenaltyBreakdown(
        lightness=lightness_pen,
        chroma=chroma_pen,
        hue=hue_pen,
        warmth=warmth_pen,
    )
    score = clamp(100.0 - penalties.total, 0.0, 100.0)
    match_level = select_match_level(score, profile.match_buckets, cfg.fallback_match_label)

    logger.info(
        "[정보] %s | %s: L=%.1f C=%.1f H=%.1f, 명도-%.1f 채도-%.1f 색상각-%.1f 웜-%.1f → %.1f점 (%s)",
        profile.label,
        hex_color,
        lab.L,
        c,
        h,
        lightness_pen,
        chroma_pen,
        hue_pen,
        warmth_pen,
        score,
        match_level,
    )

    return ToneResult(
        input=hex_color,
        tone_label=profile.label,
        lab=lab,
        chroma=round_half_away(c, cfg.chroma_decimals),
        hue=round_hue(h, cfg.hue_decimals),
        score=round_half_away(score, cfg.score_decimals),
        match_level=match_level,
        notes=tuple(notes),
        penalties=penalties,
    )


evaluate = evaluate_tone
