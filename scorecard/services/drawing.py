from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np
from PIL import Image, ImageChops, ImageColor, ImageDraw

from scorecard.services.fonts import FontFactory
from scorecard.services.layout import LayoutBox

RGBA = tuple[int, int, int, int]
Point = tuple[float, float]
Region = tuple[int, int, int, int]


def parse_color(value: str | tuple) -> RGBA:
    if isinstance(value, tuple):
        rgb = tuple(int(v) for v in value)
    else:
        rgb = ImageColor.getrgb(value)
    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return (rgb[0], rgb[1], rgb[2], rgb[3])


@dataclass(frozen=True)
class SolidFill:
    color: RGBA


@dataclass(frozen=True)
class GradientSpec:
    """Two-stop linear ramp in canvas coordinates."""

    start_color: RGBA
    end_color: RGBA
    start: Point
    end: Point

    @classmethod
    def diagonal(cls, box: LayoutBox, colors: tuple[str, str]) -> "GradientSpec":
        return cls(
            parse_color(colors[0]),
            parse_color(colors[1]),
            (float(box.x), float(box.y)),
            (float(box.right), float(box.bottom)),
        )

    @classmethod
    def vertical(cls, top: float, bottom: float, colors: tuple[str, str]) -> "GradientSpec":
        return cls(parse_color(colors[0]), parse_color(colors[1]), (0.0, top), (0.0, bottom))

    def _t(self, xs, ys):
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        denom = dx * dx + dy * dy
        if denom == 0:
            return np.zeros(np.broadcast(xs, ys).shape)
        t = ((xs - self.start[0]) * dx + (ys - self.start[1]) * dy) / denom
        return np.clip(t, 0.0, 1.0)

    def color_at(self, x: float, y: float) -> RGBA:
        t = float(self._t(np.float64(x), np.float64(y)))
        return tuple(
            int(round(a + (b - a) * t)) for a, b in zip(self.start_color, self.end_color)
        )


Fill = Union[SolidFill, GradientSpec]


def gradient_fill(ramp: GradientSpec, region: Region) -> Image.Image:
    """Evaluate the ramp at each pixel centre of ``region`` (left, top, right, bottom)."""
    left, top, right, bottom = region
    xs = np.arange(left, right, dtype=np.float64)[None, :] + 0.5
    ys = np.arange(top, bottom, dtype=np.float64)[:, None] + 0.5
    t = ramp._t(xs, ys)
    c0 = np.asarray(ramp.start_color, dtype=np.float64)
    c1 = np.asarray(ramp.end_color, dtype=np.float64)
    pixels = c0 + (c1 - c0) * t[..., None]
    return Image.fromarray(np.rint(pixels).astype(np.uint8))


def fill_image(fill: Fill, region: Region) -> Image.Image:
    left, top, right, bottom = region
    if isinstance(fill, SolidFill):
        return Image.new("RGBA", (right - left, bottom - top), fill.color)
    return gradient_fill(fill, region)


@dataclass(frozen=True)
class TextCommand:
    """Everything needed to put one run of text on the canvas."""

    text: str
    position: Point
    anchor: str
    font_size: int
    fill: Fill


def _clamp_region(bbox, size: tuple[int, int]) -> Region:
    left, top, right, bottom = bbox
    return (
        max(0, math.floor(left)),
        max(0, math.floor(top)),
        min(size[0], math.ceil(right)),
        min(size[1], math.ceil(bottom)),
    )


def draw_text(canvas: Image.Image, cmd: TextCommand, font_for: FontFactory) -> Region | None:
    """Rasterise ``cmd`` as a coverage mask and composite its fill through it.

    Returns the canvas region touched, or None when the text lands entirely
    off-canvas.
    """
    font = font_for(cmd.font_size)
    bbox = ImageDraw.Draw(canvas).textbbox(cmd.position, cmd.text, font=font, anchor=cmd.anchor)
    region = _clamp_region(bbox, canvas.size)
    left, top, right, bottom = region
    if right <= left or bottom <= top:
        return None

    mask = Image.new("L", (right - left, bottom - top), 0)
    ImageDraw.Draw(mask).text(
        (cmd.position[0] - left, cmd.position[1] - top),
        cmd.text,
        font=font,
        fill=255,
        anchor=cmd.anchor,
    )
    layer = fill_image(cmd.fill, region)
    layer.putalpha(ImageChops.multiply(layer.getchannel("A"), mask))
    canvas.alpha_composite(layer, (left, top))
    return region
