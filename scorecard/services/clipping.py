from __future__ import annotations

from PIL import Image, ImageChops, ImageDraw

from scorecard.services.layout import LayoutBox

_SUPERSAMPLE = 4


def rounded_rect_mask(size: tuple[int, int], radius: int, *, supersample: int = _SUPERSAMPLE) -> Image.Image:
    """Coverage mask for a rectangle with four circular corners.

    Drawn at ``supersample`` times the size and box-filtered down, so edge
    pixels get partial coverage and pixels beyond the arc stay at 0.
    """
    width, height = size
    radius = max(0, min(radius, width // 2, height // 2))
    scale = max(1, supersample)
    big = Image.new("L", (width * scale, height * scale), 0)
    ImageDraw.Draw(big).rounded_rectangle(
        (0, 0, width * scale - 1, height * scale - 1),
        radius=radius * scale,
        fill=255,
    )
    if scale == 1:
        return big
    return big.resize((width, height), Image.Resampling.BOX)


def paste_clipped(canvas: Image.Image, image: Image.Image, box: LayoutBox, radius: int) -> None:
    """Stretch ``image`` over ``box`` and paste it inside the rounded corners only."""
    fitted = image.convert("RGBA").resize(box.size, Image.Resampling.LANCZOS)
    mask = rounded_rect_mask(box.size, radius)
    fitted.putalpha(ImageChops.multiply(mask, fitted.getchannel("A")))
    canvas.alpha_composite(fitted, (box.x, box.y))
