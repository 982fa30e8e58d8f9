from __future__ import annotations

import math
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from profile_loader import RangeRule
from tone_metrics.penalties import (
    angular_distance,
    hue_penalty,
    hue_sector_distance,
    in_sector,
    range_penalty,
    round_half_away,
)

RULE = RangeRule(min=40, max=60, weight=30)


@pytest.mark.parametrize(
    "value,expected",
    [(50, 0.0), (40, 0.0), (60, 0.0), (62, 6.0), (65, 15.0), (70, 30.0), (95, 30.0), (35, 15.0), (0, 30.0)],
)
def test_range_penalty_ramp(value, expected):
    assert range_penalty(value, RULE) == pytest.approx(expected)


def test_range_penalty_strictly_increases_until_cap():
    values = [60.5, 62, 64, 66, 68, 69.9]
    penalties = [range_penalty(v, RULE) for v in values]
    assert all(a < b for a, b in zip(penalties, penalties[1:]))
    assert range_penalty(70, RULE) == RULE.weight
    assert range_penalty(120, RULE) == RULE.weight


def test_zero_width_range_uses_unit_half_width():
    rule = RangeRule(min=50, max=50, weight=10)
    assert range_penalty(50, rule) == 0.0
    assert range_penalty(50.5, rule) == pytest.approx(5.0)
    assert range_penalty(52, rule) == pytest.approx(10.0)


@pytest.mark.parametrize("h,inside", [(355, True), (5, True), (350, True), (10, True), (180, False), (11, False)])
def test_wrap_around_sector(h, inside):
    assert in_sector(h, 350, 10) is inside


def test_plain_sector_is_inclusive():
    assert in_sector(200, 200, 320)
    assert in_sector(320, 200, 320)
    assert not in_sector(199.9, 200, 320)


def test_angular_distance_is_shortest_arc():
    assert angular_distance(350, 10) == pytest.approx(20)
    assert angular_distance(10, 350) == pytest.approx(20)
    assert angular_distance(0, 180) == pytest.approx(180)
    assert angular_distance(90, 90) == 0


def test_hue_sector_distance():
    assert hue_sector_distance(180, [(350, 10)]) == pytest.approx(170)
    assert hue_sector_distance(30, [(200, 320), (340, 20)]) == pytest.approx(10)
    assert hue_sector_distance(250, [(200, 320), (340, 20)]) == 0.0
    assert math.isinf(hue_sector_distance(90, []))


def test_hue_penalty_ramp():
    assert hue_penalty(0, 40, 35) == 0.0
    assert hue_penalty(20, 40, 35) == pytest.approx(17.5)
    assert hue_penalty(80, 40, 35) == pytest.approx(35)
    assert hue_penalty(math.inf, 40, 35) == pytest.approx(35)


@pytest.mark.parametrize(
    "value,ndigits,expected",
    [(2.25, 1, 2.3), (-2.25, 1, -2.3), (0.125, 2, 0.13), (99.94, 1, 99.9), (0.0, 1, 0.0), (100.0, 1, 100.0)],
)
def test_round_half_away(value, ndigits, expected):
    assert round_half_away(value, ndigits) == pytest.approx(expected)
