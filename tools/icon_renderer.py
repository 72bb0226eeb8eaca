from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw

from config.icon_config import IconConfig

Point = tuple[float, float]

TRANSPARENT = (0, 0, 0, 0)
RED_CAP = (220, 38, 38, 255)
DARK_RED = (153, 27, 27, 255)
TASSEL = (30, 30, 30, 255)
GOLD = (251, 191, 36, 255)
HIGHLIGHT = (255, 255, 255, 60)

# Geometry on the 256 px master canvas
CAP_BASE = (64, 140, 128, 60)  # x, y, w, h
MORTARBOARD: Sequence[Point] = ((40, 100), (216, 80), (200, 120), (56, 140))
CORD = ((200, 100), (220, 140))
BUTTON = (216, 96, 8, 8)
SHINE: Sequence[Point] = ((50, 110), (180, 95), (170, 105), (60, 125))


def _offset_polygon(points: Sequence[Point], distance: float) -> list[Point]:
    """
    Push every edge of a convex polygon outward by `distance` (inward when
    negative) and rejoin neighbouring edges at their intersection: a mitre.
    """
    closed = list(points)
    edges = list(zip(closed, closed[1:] + closed[:1]))
    area = sum(x0 * y1 - x1 * y0 for (x0, y0), (x1, y1) in edges)
    sign = 1 if area > 0 else -1

    lines = []
    for (x0, y0), (x1, y1) in edges:
        dx, dy = x1 - x0, y1 - y0
        length = math.hypot(dx, dy)
        nx, ny = sign * dy / length, -sign * dx / length
        lines.append(((x0 + nx * distance, y0 + ny * distance), (dx, dy)))

    out: list[Point] = []
    for i in range(len(lines)):
        (px, py), (rx, ry) = lines[i - 1]
        (qx, qy), (sx, sy) = lines[i]
        t = ((qx - px) * sy - (qy - py) * sx) / (rx * sy - ry * sx)
        out.append((px + t * rx, py + t * ry))
    return out


class _Canvas:
    """
    Maps master-canvas coordinates and stroke widths onto a scaled image.

    Strokes follow the usual 2D pen defaults: centred on the path, square
    end caps, mitred corners.
    """

    def __init__(self, image: Image.Image, scale: float) -> None:
        self.image = image
        self.draw = ImageDraw.Draw(image)
        self.scale = scale

    def _pts(self, points: Sequence[Point]) -> list[Point]:
        return [(x * self.scale, y * self.scale) for x, y in points]

    def _width(self, width: int) -> int:
        return max(1, round(width * self.scale))

    def oval(self, box: tuple[int, int, int, int], fill) -> None:
        x, y, w, h = box
        s = self.scale
        self.draw.ellipse([x * s, y * s, (x + w) * s - 1, (y + h) * s - 1], fill=fill)

    def polygon(self, points: Sequence[Point], fill) -> None:
        self.draw.polygon(self._pts(points), fill=fill)

    def outline(self, points: Sequence[Point], fill, width: int) -> None:
        pts = self._pts(points)
        half = self._width(width) / 2
        ring = Image.new("L", self.image.size, 0)
        ring_draw = ImageDraw.Draw(ring)
        ring_draw.polygon(_offset_polygon(pts, half), fill=255)
        ring_draw.polygon(_offset_polygon(pts, -half), fill=0)
        self.image.paste(fill, mask=ring)

    def line(self, start: Point, end: Point, fill, width: int) -> None:
        (x0, y0), (x1, y1) = self._pts([start, end])
        w = self._width(width)
        length = math.hypot(x1 - x0, y1 - y0) or 1.0
        # Square caps: run half the pen width past both ends
        ex, ey = (x1 - x0) / length * w / 2, (y1 - y0) / length * w / 2
        self.draw.line([(x0 - ex, y0 - ey), (x1 + ex, y1 + ey)], fill=fill, width=w)


def render_icon(cfg: IconConfig = IconConfig()) -> Image.Image:
    """Draw the graduation cap at cfg.master_size. Pure function of cfg."""
    big = cfg.master_size * cfg.supersample
    scale = big / 256

    base = Image.new("RGBA", (big, big), TRANSPARENT)
    canvas = _Canvas(base, scale)

    canvas.oval(CAP_BASE, fill=DARK_RED)
    canvas.polygon(MORTARBOARD, fill=RED_CAP)
    canvas.outline(MORTARBOARD, fill=DARK_RED, width=3)

    canvas.line(*CORD, fill=TASSEL, width=4)
    for i in range(8):
        canvas.line((220 + i * 2, 140), (215 + i * 3, 170 + i * 2), fill=TASSEL, width=2)

    canvas.oval(BUTTON, fill=GOLD)

    # ImageDraw replaces pixels, so translucent paint goes on its own layer
    shine = Image.new("RGBA", base.size, TRANSPARENT)
    _Canvas(shine, scale).polygon(SHINE, fill=HIGHLIGHT)
    image = Image.alpha_composite(base, shine)

    if cfg.supersample > 1:
        image = image.resize((cfg.master_size, cfg.master_size), Image.Resampling.LANCZOS)
    return image


def write_icons(out_dir: Path = Path("."), cfg: IconConfig = IconConfig()) -> list[Path]:
    """Save the master icon and its bilinear downsamples into out_dir."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    master = render_icon(cfg)
    written = [out_dir / cfg.master_name]
    master.save(written[0], "PNG")

    for name, size in cfg.variants:
        path = out_dir / name
        master.resize((size, size), Image.Resampling.BILINEAR).save(path, "PNG")
        written.append(path)
    return written
