"""여러 톤 프로필 중 어울리는 순서 매기기"""
from __future__ import annotations

from typing import Iterable, List, Optional

from color_utils import hex_to_rgb
from config import ScoringConfig
from profile_loader import ToneProfile
from tone_metrics.evaluator import ToneResult, evaluate_tone


def rank_profiles(
    hex_color: str,
    profiles: Iterable[ToneProfile],
    config: ScoringConfig | None = None,
) -> List[ToneResult]:
    hex_to_rgb(hex_color)  # 프로필이 없어도 형식 오류는 올린다
    results = [evaluate_tone(hex_color, profile, config) for profile in profiles]
    results.sort(key=lambda r: (-r.score, r.tone_label))
    return results


def best_profile(
    hex_color: str,
    profiles: Iterable[ToneProfile],
    config: ScoringConfig | None = None,
) -> Optional[ToneResult]:
    ranked = rank_profiles(hex_color, profiles, config)
    return ranked[0] if ranked else None
