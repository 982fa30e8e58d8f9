"""앱 전역 설정과 채점 파라미터"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ScoringConfig:
    fallback_match_label: str = "not a match"
    default_hue_tolerance: float = 60.0  # toleranceDegrees가 0/누락일 때
    skip_hue_for_achromatic: bool = True
    achromatic_chroma_threshold: float = 1e-3  # 이하이면 색상각 무의미
    score_decimals: int = 1
    hue_decimals: int = 1
    chroma_decimals: int = 2


DEFAULT_CONFIG = ScoringConfig()

PROFILE_DIR = Path(__file__).resolve().parent / "tone_metrics" / "profiles"

PROFILE_DISPLAY_ORDER = [
    ("summer_cool_muted", "여름 쿨 뮤트"),
    ("spring_bright", "봄 브라이트"),
    ("autumn_deep", "가을 딥"),
    ("winter_clear", "겨울 클리어"),
]
