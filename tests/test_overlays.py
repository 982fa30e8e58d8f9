"""이미지 색 샘플링 테스트"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from PIL import Image, ImageDraw

from ui.overlays import (
    average_color,
    center_box,
    clamp_box,
    dominant_color,
    draw_selection_box,
    sample_center_color,
)


def test_center_box_uses_tenth_of_short_side():
    assert center_box((100, 50)) == (48, 23, 52, 27)


def test_center_box_never_empty():
    assert center_box((1, 1)) == (0, 0, 0, 0)


def test_clamp_box_orders_and_clips():
    assert clamp_box((10, 10), (12, 8, -3, 2)) == (0, 2, 9, 8)


def test_sample_center_color_of_flat_image():
    sample = sample_center_color(Image.new("RGB", (100, 50), (10, 20, 30)))
    assert sample.hex == "#0A141E"
    assert sample.rgb == (10, 20, 30)
    assert sample.brightness == pytest.approx(20.0)


def test_sample_center_ignores_border():
    img = Image.new("RGB", (200, 200), (128, 128, 128))
    ImageDraw.Draw(img).rectangle((80, 80, 120, 120), fill=(255, 0, 0))
    assert sample_center_color(img).hex == "#FF0000"


@pytest.mark.parametrize(
    "rgb,dark",
    [((0, 0, 0), True), ((29, 29, 29), True), ((10, 20, 59), True), ((30, 30, 30), False), ((200, 180, 170), False)],
)
def test_dark_frame_flag(rgb, dark):
    assert sample_center_color(Image.new("RGB", (40, 40), rgb)).is_dark is dark


def test_average_color_mixes_region_and_clamps():
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), (0, 0, 0))
    img.putpixel((1, 0), (255, 255, 255))
    sample = average_color(img, (-10, -10, 50, 50))
    assert sample.rgb == (128, 128, 128)
    assert sample.hex == "#808080"


def test_average_color_handles_rgba_input():
    img = Image.new("RGBA", (10, 10), (0, 0, 255, 128))
    assert average_color(img, (0, 0, 9, 9)).hex == "#0000FF"


def test_dominant_color_picks_most_common_bucket_center():
    img = Image.new("RGB", (10, 10), (250, 10, 10))
    ImageDraw.Draw(img).rectangle((0, 0, 9, 2), fill=(10, 10, 250))
    sample = dominant_color(img)
    # 250 → 칸 7 → 7*32 + 16, 10 → 칸 0 → 16
    assert sample.rgb == (240, 16, 16)
    assert sample.hex == "#F01010"


def test_dominant_color_groups_similar_shades():
    img = Image.new("RGB", (4, 1))
    for x, rgb in enumerate([(65, 65, 65), (70, 80, 90), (200, 200, 200), (66, 67, 68)]):
        img.putpixel((x, 0), rgb)
    assert dominant_color(img).rgb == (80, 80, 80)


def test_dominant_color_tie_takes_lowest_bucket():
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), (255, 255, 255))
    img.putpixel((1, 0), (0, 0, 0))
    sample = dominant_color(img)
    assert sample.rgb == (16, 16, 16)
    assert sample.is_dark


def test_dominant_color_clamps_oversized_buckets():
    img = Image.new("RGB", (3, 3), (250, 250, 250))
    assert dominant_color(img, bucket_size=200).rgb == (255, 255, 255)


@pytest.mark.parametrize("size", [0, 300])
def test_dominant_color_rejects_bad_bucket_size(size):
    with pytest.raises(ValueError):
        dominant_color(Image.new("RGB", (2, 2)), bucket_size=size)


def test_draw_selection_box_keeps_original():
    img = Image.new("RGB", (20, 20), (0, 0, 0))
    boxed = draw_selection_box(img, (2, 2, 10, 10))
    assert boxed.getpixel((2, 2)) == (255, 200, 0)
    assert img.getpixel((2, 2)) == (0, 0, 0)
