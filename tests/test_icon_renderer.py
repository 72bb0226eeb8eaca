"""Tests for the graduation-cap icon renderer."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest
from PIL import Image

from config.icon_config import IconConfig
from tools.icon_renderer import DARK_RED, _Canvas, _offset_polygon, render_icon, write_icons


def test_master_icon_is_rgba_at_master_size() -> None:
    image = render_icon()
    assert image.mode == "RGBA"
    assert image.size == (256, 256)


def test_rendering_is_deterministic() -> None:
    assert render_icon().tobytes() == render_icon().tobytes()


def test_background_stays_transparent() -> None:
    image = render_icon()
    for xy in [(0, 0), (255, 0), (0, 255), (255, 255), (128, 20)]:
        assert image.getpixel(xy)[3] == 0


def test_cap_colours() -> None:
    image = render_icon()

    # Mortarboard below the highlight band
    r, g, b, a = image.getpixel((128, 125))
    assert a == 255 and r > 200 and g < 60 and b < 60

    # Highlight is blended over the red, not painted as flat white
    r, g, b, a = image.getpixel((128, 107))
    assert a == 255 and r > 215 and 60 < g < 130

    # Cap base below the mortarboard
    r, g, b, a = image.getpixel((128, 185))
    assert a == 255 and 130 < r < 180 and g < 50

    # Tassel button
    r, g, b, a = image.getpixel((220, 100))
    assert r > 220 and g > 150 and b < 110


def test_supersampling_can_be_disabled() -> None:
    image = render_icon(dataclasses.replace(IconConfig(), supersample=1))
    assert image.size == (256, 256)
    assert image.getpixel((128, 125)) == (220, 38, 38, 255)


def test_write_icons_produces_three_sizes(tmp_path: Path) -> None:
    written = write_icons(tmp_path)

    assert [p.name for p in written] == ["app-icon.png", "app-icon-64.png", "app-icon-32.png"]
    sizes = {}
    for path in written:
        with Image.open(path) as img:
            assert img.mode == "RGBA"
            sizes[path.name] = img.size
    assert sizes == {
        "app-icon.png": (256, 256),
        "app-icon-64.png": (64, 64),
        "app-icon-32.png": (32, 32),
    }


def test_written_files_are_byte_identical_across_runs(tmp_path: Path) -> None:
    first = write_icons(tmp_path / "a")
    second = write_icons(tmp_path / "b")
    for a, b in zip(first, second):
        assert a.read_bytes() == b.read_bytes()


def test_offset_polygon_builds_mitred_corners() -> None:
    square = [(10, 10), (30, 10), (30, 30), (10, 30)]

    outer = _offset_polygon(square, 2)
    inner = _offset_polygon(square, -2)

    assert outer == [pytest.approx(p) for p in [(8, 8), (32, 8), (32, 32), (8, 32)]]
    assert inner == [pytest.approx(p) for p in [(12, 12), (28, 12), (28, 28), (12, 28)]]


def test_offset_polygon_ignores_winding_order() -> None:
    square = [(10, 30), (30, 30), (30, 10), (10, 10)]
    assert _offset_polygon(square, 2)[0] == pytest.approx((8, 32))


def test_outline_is_centred_with_sharp_corners() -> None:
    image = Image.new("RGBA", (40, 40), (0, 0, 0, 0))
    _Canvas(image, 1).outline([(10, 10), (30, 10), (30, 30), (10, 30)], fill=DARK_RED, width=4)

    assert image.getpixel((8, 8)) == DARK_RED  # mitre tip, past a round join
    assert image.getpixel((20, 9)) == DARK_RED
    assert image.getpixel((20, 11)) == DARK_RED
    assert image.getpixel((20, 20))[3] == 0
    assert image.getpixel((20, 4))[3] == 0


def test_lines_have_square_caps() -> None:
    image = Image.new("RGBA", (40, 40), (0, 0, 0, 0))
    _Canvas(image, 1).line((10, 20), (30, 20), fill=DARK_RED, width=4)

    assert image.getpixel((31, 20)) == DARK_RED
    assert image.getpixel((9, 20)) == DARK_RED
    assert image.getpixel((34, 20))[3] == 0
    assert image.getpixel((6, 20))[3] == 0
