"""Tests for scorecard/services/clipping.py."""

import math

import pytest
from PIL import Image

from scorecard.services.clipping import paste_clipped, rounded_rect_mask
from scorecard.services.layout import AVATAR_BOX, AVATAR_CORNER_RADIUS, LayoutBox

BG = (0, 0, 0, 255)
RED = (255, 0, 0, 255)


def _outside_arc(px: int, py: int, size: tuple[int, int], r: int) -> bool:
    """True when the whole pixel lies at least a pixel beyond its nearest corner arc."""
    w, h = size
    cx = r if px < r else (w - r if px >= w - r else None)
    cy = r if py < r else (h - r if py >= h - r else None)
    if cx is None or cy is None:
        return False
    nearest_x = min(max(cx, px), px + 1)
    nearest_y = min(max(cy, py), py + 1)
    return math.hypot(nearest_x - cx, nearest_y - cy) > r + 1


def test_mask_corners_and_centre():
    mask = rounded_rect_mask((200, 100), 30)
    assert mask.mode == "L"
    assert mask.size == (200, 100)
    for corner in [(0, 0), (199, 0), (0, 99), (199, 99)]:
        assert mask.getpixel(corner) == 0
    assert mask.getpixel((100, 50)) == 255
    # Straight edges are fully covered between the arcs.
    assert mask.getpixel((100, 0)) == 255
    assert mask.getpixel((0, 50)) == 255


def test_mask_is_zero_beyond_every_arc():
    size, r = (760, 775), AVATAR_CORNER_RADIUS
    mask = rounded_rect_mask(size, r)
    w, h = size
    for px in list(range(0, r + 1)) + list(range(w - r - 1, w)):
        for py in list(range(0, r + 1)) + list(range(h - r - 1, h)):
            if _outside_arc(px, py, size, r):
                assert mask.getpixel((px, py)) == 0, (px, py)


def test_radius_is_capped_by_box():
    mask = rounded_rect_mask((20, 20), 500)
    assert mask.getpixel((10, 10)) == 255
    assert mask.getpixel((0, 0)) == 0


def test_paste_clipped_leaves_outside_pixels_untouched():
    canvas = Image.new("RGBA", (1200, 1200), BG)
    avatar = Image.new("RGBA", (64, 64), RED)
    paste_clipped(canvas, avatar, AVATAR_BOX, AVATAR_CORNER_RADIUS)

    x, y, w, h = AVATAR_BOX.x, AVATAR_BOX.y, AVATAR_BOX.width, AVATAR_BOX.height
    # Corner transition points: the box corner and the 45 degree point just past the arc.
    off = int(AVATAR_CORNER_RADIUS * (1 - 1 / math.sqrt(2))) - 2
    for cx, cy in [(x, y), (x + w - 1, y), (x, y + h - 1), (x + w - 1, y + h - 1)]:
        assert canvas.getpixel((cx, cy)) == BG
    assert canvas.getpixel((x + off, y + off)) == BG
    assert canvas.getpixel((x + w - 1 - off, y + h - 1 - off)) == BG
    # Just inside the arc and on the straight edges the avatar shows.
    inner = int(AVATAR_CORNER_RADIUS * (1 - 1 / math.sqrt(2))) + 3
    assert canvas.getpixel((x + inner, y + inner)) == RED
    assert canvas.getpixel((x + w // 2, y)) == RED
    assert canvas.getpixel((x + w // 2, y + h // 2)) == RED
    # Outside the box.
    assert canvas.getpixel((x - 1, y + h // 2)) == BG
    assert canvas.getpixel((x + w, y + h // 2)) == BG
    assert canvas.getpixel((x + w // 2, y + h)) == BG


def test_transparent_avatar_keeps_canvas_opaque():
    canvas = Image.new("RGBA", (100, 100), BG)
    avatar = Image.new("RGBA", (10, 10), (255, 0, 0, 0))
    paste_clipped(canvas, avatar, LayoutBox(10, 10, 80, 80), 10)
    assert canvas.getpixel((50, 50)) == BG
    assert canvas.getchannel("A").getextrema() == (255, 255)


def test_clipped_avatar_over_transparent_canvas():
    canvas = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
    paste_clipped(canvas, Image.new("RGBA", (10, 10), RED), LayoutBox(10, 10, 80, 80), 10)
    assert canvas.getpixel((50, 50)) == RED
    assert canvas.getpixel((10, 10))[3] == 0
    assert canvas.getpixel((5, 50)) == (0, 0, 0, 0)


def test_transparent_avatar_over_transparent_canvas():
    canvas = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
    paste_clipped(canvas, Image.new("RGBA", (10, 10), (255, 0, 0, 0)), LayoutBox(10, 10, 80, 80), 10)
    assert canvas.getchannel("A").getextrema() == (0, 0)


@pytest.mark.parametrize("size", [(1, 1), (3, 50), (50, 3)])
def test_tiny_boxes(size):
    mask = rounded_rect_mask(size, 50)
    assert mask.size == size
