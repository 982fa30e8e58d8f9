"""색상 변환 유틸 (sRGB → CIE-Lab, D65)"""
from __future__ import annotations

import math
import re
from typing import NamedTuple, Optional, Tuple

import numpy as np
from skimage import color as skcolor

HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
CSS_RGB_RE = re.compile(r"^rgba?\(([^)]+)\)$", re.IGNORECASE)

# D65 기준 백색점
XN, YN, ZN = 0.95047, 1.0, 1.08883

_LAB_EPSILON = (6.0 / 29.0) ** 3
_LAB_KAPPA = (29.0 / 3.0) ** 2 / 3.0


class InvalidFormat(ValueError):
    """3자리/6자리 HEX 색상이 아닐 때 발생한다."""


class Lab(NamedTuple):
    L: float
    a: float
    b: float


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def validate_hex(s: str) -> bool:
    if not isinstance(s, str):
        return False
    return bool(HEX_RE.match(s.strip()))


def hex_to_rgb(s: str) -> Tuple[int, int, int]:
    if not isinstance(s, str):
        raise InvalidFormat(f"HEX 문자열이 필요해: {s!r}")
    m = HEX_RE.match(s.strip())
    if not m:
        raise InvalidFormat(f"올바른 HEX 형식이 아니야: {s!r} (예: #FF6B5C, #F65)")
    val = m.group(1)
    if len(val) == 3:
        val = "".join(ch * 2 for ch in val)
    return int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    if not (0 <= r <= 255 and 0 <= g <= 255 and 0 <= b <= 255):
        raise ValueError("RGB 범위는 0~255야.")
    return f"#{r:02X}{g:02X}{b:02X}"


def _try_css_to_hex(s: str) -> Optional[str]:
    match = CSS_RGB_RE.match(s)
    if not match:
        return None
    parts = [p.strip() for p in match.group(1).split(",")]
    if len(parts) < 3:
        return None
    try:
        r = int(round(float(parts[0])))
        g = int(round(float(parts[1])))
        b = int(round(float(parts[2])))
    except ValueError:
        return None
    if not (0 <= r <= 255 and 0 <= g <= 255 and 0 <= b <= 255):
        return None
    return rgb_to_hex(r, g, b)


def normalize_color_input(s: str) -> Optional[str]:
    """HEX(3/6자리, # 생략 가능) 또는 CSS rgb()/rgba() 문자열을 #RRGGBB로 정규화한다."""

    if not s:
        return None
    candidate = s.strip()
    if not candidate:
        return None
    if validate_hex(candidate):
        return rgb_to_hex(*hex_to_rgb(candidate))
    return _try_css_to_hex(candidate)


def srgb_to_linear(channel: float) -> float:
    """0~255 채널 값을 선형 0~1 값으로 디코딩한다."""
    v = channel / 255.0
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def rgb_to_xyz(r: int, g: int, b: int) -> Tuple[float, float, float]:
    rl = srgb_to_linear(r)
    gl = srgb_to_linear(g)
    bl = srgb_to_linear(b)
    x = 0.4124564 * rl + 0.3575761 * gl + 0.1804375 * bl
    y = 0.2126729 * rl + 0.7151522 * gl + 0.0721750 * bl
    z = 0.0193339 * rl + 0.1191920 * gl + 0.9503041 * bl
    return x, y, z


def _lab_f(t: float) -> float:
    if t > _LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return _LAB_KAPPA * t + 4.0 / 29.0


def xyz_to_lab(x: float, y: float, z: float) -> Lab:
    fx = _lab_f(x / XN)
    fy = _lab_f(y / YN)
    fz = _lab_f(z / ZN)
    return Lab(L=116.0 * fy - 16.0, a=500.0 * (fx - fy), b=200.0 * (fy - fz))


def rgb_to_lab(r: int, g: int, b: int) -> Lab:
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


def convert_hex_to_lab(s: str) -> Lab:
    """HEX 색상을 CIE-Lab(D65)으로 변환한다. 형식 오류는 InvalidFormat으로 그대로 올린다."""
    return rgb_to_lab(*hex_to_rgb(s))


hex_to_lab = convert_hex_to_lab


def chroma(lab: Lab) -> float:
    return math.hypot(lab.a, lab.b)


def hue(lab: Lab) -> float:
    """a/b 평면 각도(0~360). 무채색(a=b=0)은 atan2(0, 0) = 0으로 나온다."""
    deg = math.degrees(math.atan2(lab.b, lab.a))
    if deg < 0:
        deg += 360.0
    # -0.0 근처 부동소수 오차로 360.0이 나오는 경우
    return 0.0 if deg >= 360.0 else deg


def lab_to_hex(lab: Lab) -> str:
    """Lab → HEX 역변환 (검증/미리보기용, scikit-image D65)."""
    arr = np.array([[[lab[0], lab[1], lab[2]]]], dtype=float)
    rgb = skcolor.lab2rgb(arr, illuminant="D65")
    r, g, b = [int(round(float(v) * 255.0)) for v in np.clip(rgb[0, 0], 0.0, 1.0)]
    return rgb_to_hex(r, g, b)
