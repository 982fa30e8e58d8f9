"""규칙별 페널티 계산 (명도/채도 범위, 색상각 섹터)"""
from __future__ import annotations

import math
from typing import Iterable, Tuple

from profile_loader import RangeRule


def round_half_away(x: float, ndigits: int) -> float:
    """0에서 먼 쪽으로 반올림 (2.25 → 2.3, -2.25 → -2.3)."""
    factor = 10.0 ** ndigits
    return math.copysign(math.floor(abs(x) * factor + 0.5) / factor, x)


def range_distance(value: float, rule: RangeRule) -> float:
    if value < rule.min:
        return rule.min - value
    if value > rule.max:
        return value - rule.max
    return 0.0


def range_penalty(value: float, rule: RangeRule) -> float:
    """범위 밖 거리를 반폭(최소 1)으로 나눠 weight까지 선형 증가시킨다."""
    dist = range_distance(value, rule)
    if dist <= 0:
        return 0.0
    half = max((rule.max - rule.min) / 2.0, 1.0)
    return min(dist / half, 1.0) * rule.weight


def in_sector(h: float, start: float, end: float) -> bool:
    if start <= end:
        return start <= h <= end
    # 0°를 가로지르는 섹터
    return h >= start or h <= end


def angular_distance(x: float, y: float) -> float:
    d = abs(x - y) % 360.0
    return 360.0 - d if d > 180.0 else d


def hue_sector_distance(h: float, sectors: Iterable[Tuple[float, float]]) -> float:
    """섹터 안이면 0, 밖이면 가장 가까운 섹터 경계까지의 원형 거리. 섹터가 없으면 inf."""
    best = math.inf
    for start, end in sectors:
        if in_sector(h, start, end):
            return 0.0
        best = min(best, angular_distance(h, start), angular_distance(h, end))
    return best


def hue_penalty(distance: float, tolerance: float, weight: float) -> float:
    if distance <= 0:
        return 0.0
    return min(distance / tolerance, 1.0) * weight
