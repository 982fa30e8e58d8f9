"""이미지 색 샘플링 (영역 평균, 중앙 평균, 히스토그램 대표색)과 선택 영역 표시"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw

from color_utils import clamp, rgb_to_hex

Box = Tuple[int, int, int, int]

# 평균 밝기가 이 값보다 낮으면 카메라가 가려진 것으로 본다
DARK_BRIGHTNESS = 30.0


@dataclass(frozen=True)
class ColorSample:
    hex: str
    rgb: Tuple[int, int, int]
    brightness: float

    @property
    def is_dark(self) -> bool:
        return self.brightness < DARK_BRIGHTNESS


def _sample(rgb) -> ColorSample:
    r, g, b = [int(v) for v in rgb]
    return ColorSample(hex=rgb_to_hex(r, g, b), rgb=(r, g, b), brightness=(r + g + b) / 3.0)


def clamp_box(size: Tuple[int, int], box: Box) -> Box:
    """뒤집힌/이미지 밖 좌표를 정리해 (left, top, right, bottom) 포함 좌표로 돌려준다."""
    w, h = size
    x0, y0, x1, y1 = box
    return (
        int(clamp(min(x0, x1), 0, w - 1)),
        int(clamp(min(y0, y1), 0, h - 1)),
        int(clamp(max(x0, x1), 0, w - 1)),
        int(clamp(max(y0, y1), 0, h - 1)),
    )


def average_color(img: Image.Image, box: Box) -> ColorSample:
    left, top, right, bottom = clamp_box(img.size, box)
    arr = np.asarray(img.convert("RGB").crop((left, top, right + 1, bottom + 1)), dtype=np.float32)
    return _sample(np.rint(arr.reshape(-1, 3).mean(axis=0)))


def center_box(size: Tuple[int, int], fraction: float = 0.1) -> Box:
    """가운데 정사각형 샘플 영역 (한 변 = 짧은 변 × fraction, 최소 1px)."""
    w, h = size
    side = max(1, int(min(w, h) * fraction))
    x0 = max(0, w // 2 - side // 2)
    y0 = max(0, h // 2 - side // 2)
    return x0, y0, min(w - 1, x0 + side - 1), min(h - 1, y0 + side - 1)


def sample_center_color(img: Image.Image, fraction: float = 0.1) -> ColorSample:
    return average_color(img, center_box(img.size, fraction))


def dominant_color(img: Image.Image, bucket_size: int = 32) -> ColorSample:
    """채널을 bucket_size 단위로 묶은 히스토그램에서 가장 많은 칸의 중심색.

    동률이면 (R, G, B) 칸 번호가 가장 작은 칸을 고른다.
    """
    if not 1 <= bucket_size <= 256:
        raise ValueError(f"bucket_size는 1~256이어야 해: {bucket_size}")
    pixels = np.asarray(img.convert("RGB"), dtype=np.uint16).reshape(-1, 3)
    buckets, counts = np.unique(pixels // bucket_size, axis=0, return_counts=True)
    center = buckets[int(np.argmax(counts))] * bucket_size + bucket_size // 2
    return _sample(np.minimum(center, 255))


def draw_selection_box(img: Image.Image, box: Box, outline: Tuple[int, int, int] = (255, 200, 0)) -> Image.Image:
    marked = img.convert("RGB")  # convert는 항상 새 이미지를 만든다
    ImageDraw.Draw(marked).rectangle(clamp_box(img.size, box), outline=outline, width=3)
    return marked
