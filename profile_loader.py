"""톤 프로필 데이터 모델과 JSON 로딩 유틸"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from config import PROFILE_DIR

logger = logging.getLogger("tone_evaluator")


class ProfileError(ValueError):
    """프로필 데이터가 규칙(범위/가중치/섹터)을 어길 때 발생한다."""


@dataclass(frozen=True)
class RangeRule:
    min: float
    max: float
    weight: float

    def __post_init__(self):
        if self.weight < 0:
            raise ProfileError(f"weight는 0 이상이어야 해: {self.weight}")
        if self.min > self.max:
            raise ProfileError(f"min({self.min})이 max({self.max})보다 커.")


@dataclass(frozen=True)
class HueSectorsRule:
    sectors: Tuple[Tuple[float, float], ...]
    tolerance_degrees: float
    weight: float

    def __post_init__(self):
        if self.weight < 0:
            raise ProfileError(f"hue weight는 0 이상이어야 해: {self.weight}")
        if self.tolerance_degrees < 0:
            raise ProfileError(f"toleranceDegrees는 0 이상이어야 해: {self.tolerance_degrees}")
        for start, end in self.sectors:
            if not (0 <= start < 360 and 0 <= end < 360):
                raise ProfileError(f"섹터 경계는 [0, 360) 범위여야 해: ({start}, {end})")


@dataclass(frozen=True)
class WarmthPenaltyRule:
    lab_b_gt: float
    penalty: float

    def __post_init__(self):
        if self.penalty < 0:
            raise ProfileError(f"warmth penalty는 0 이상이어야 해: {self.penalty}")


@dataclass(frozen=True)
class MatchBucket:
    min_score: float
    label: str


@dataclass(frozen=True)
class ToneProfile:
    label: str
    lightness: RangeRule
    chroma: RangeRule
    hue_sectors: HueSectorsRule
    warmth_penalty: Optional[WarmthPenaltyRule] = None
    match_buckets: Tuple[MatchBucket, ...] = field(default_factory=tuple)
    profile_id: str = ""


def _require(raw: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in raw:
        raise ProfileError(f"{where}에 '{key}' 항목이 없어.")
    return raw[key]


def _range_rule(raw: Mapping[str, Any], where: str) -> RangeRule:
    return RangeRule(
        min=float(_require(raw, "min", where)),
        max=float(_require(raw, "max", where)),
        weight=float(_require(raw, "weight", where)),
    )


def profile_from_dict(raw: Mapping[str, Any], profile_id: Optional[str] = None) -> ToneProfile:
    """모바일 앱 JSON 형식(camelCase)의 프로필을 ToneProfile로 변환한다."""
    if not isinstance(raw, Mapping):
        raise ProfileError("프로필은 JSON 객체여야 해.")
    pid = profile_id or str(raw.get("profile_id", ""))

    hue_raw = _require(raw, "hueSectors", "profile")
    sectors = tuple(
        (float(start), float(end)) for start, end in _require(hue_raw, "sectors", "hueSectors")
    )
    hue_rule = HueSectorsRule(
        sectors=sectors,
        tolerance_degrees=float(hue_raw.get("toleranceDegrees") or 0.0),
        weight=float(_require(hue_raw, "weight", "hueSectors")),
    )

    warmth = None
    warmth_raw = raw.get("warmthPenalty")
    if warmth_raw is not None:
        warmth = WarmthPenaltyRule(
            lab_b_gt=float(_require(warmth_raw, "lab_b_gt", "warmthPenalty")),
            penalty=float(_require(warmth_raw, "penalty", "warmthPenalty")),
        )

    buckets = tuple(
        MatchBucket(
            min_score=float(_require(b, "minScore", "matchBuckets")),
            label=str(_require(b, "label", "matchBuckets")),
        )
        for b in raw.get("matchBuckets") or []
    )

    return ToneProfile(
        label=str(_require(raw, "label", "profile")),
        lightness=_range_rule(_require(raw, "lightness", "profile"), "lightness"),
        chroma=_range_rule(_require(raw, "chroma", "profile"), "chroma"),
        hue_sectors=hue_rule,
        warmth_penalty=warmth,
        match_buckets=buckets,
        profile_id=pid,
    )


class ProfileRepository:
    def __init__(self, base_dir: Path = PROFILE_DIR):
        self.base_dir = Path(base_dir)
        self._cache: Dict[str, ToneProfile] = {}

    def list_profiles(self) -> List[str]:
        return sorted(p.stem for p in self.base_dir.glob("*.json"))

    def load(self, profile_id: str) -> ToneProfile:
        if profile_id in self._cache:
            logger.debug("[정보] 프로필 캐시 사용: %s", profile_id)
            return self._cache[profile_id]
        path = self.base_dir / f"{profile_id}.json"
        if not path.is_file():
            raise ProfileError(f"프로필 파일이 없어: {path}")
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        profile = profile_from_dict(raw, profile_id=profile_id)
        self._cache[profile_id] = profile
        return profile

    def load_all(self) -> List[ToneProfile]:
        return [self.load(pid) for pid in self.list_profiles()]
