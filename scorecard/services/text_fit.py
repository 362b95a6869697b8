from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from PIL import ImageFont

from scorecard.services.fonts import FontFactory
from scorecard.services.layout import FONT_STEP, MIN_FONT_SIZE


@dataclass(frozen=True)
class FittedText:
    font_size: int
    width: float


@dataclass(frozen=True)
class PlacedRun:
    text: str
    left: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left


@dataclass(frozen=True)
class FittedRuns:
    font_size: int
    total_width: float
    runs: tuple[PlacedRun, ...]


def text_width(text: str, font: ImageFont.FreeTypeFont) -> float:
    return font.getlength(text)


def _check_sizes(start_size: int, min_size: int, step: int) -> None:
    if step <= 0:
        raise ValueError("step must be positive")
    if start_size < min_size:
        raise ValueError(f"start size {start_size} is below the floor {min_size}")


def fit_text(
    text: str,
    max_width: float,
    font_for: FontFactory,
    *,
    start_size: int,
    min_size: int = MIN_FONT_SIZE,
    step: int = FONT_STEP,
) -> FittedText:
    """Largest size (start_size, start_size - step, ...) whose width fits max_width.

    Stops at min_size even if the text still overflows; the caller draws it
    at the floor size.
    """
    _check_sizes(start_size, min_size, step)
    size = start_size
    width = text_width(text, font_for(size))
    while width > max_width and size > min_size:
        size = max(min_size, size - step)
        width = text_width(text, font_for(size))
    return FittedText(size, width)


def _runs_total(widths: Sequence[float], gaps: Sequence[float]) -> float:
    return sum(widths) + sum(gaps)


def fit_runs(
    texts: Sequence[str],
    gaps: Sequence[float],
    max_width: float,
    right_edge: float,
    font_for: FontFactory,
    *,
    start_size: int,
    min_size: int = MIN_FONT_SIZE,
    step: int = FONT_STEP,
) -> FittedRuns:
    """Fit a right-aligned group of runs sharing one font size.

    ``gaps[i]`` is the space between ``texts[i]`` and ``texts[i + 1]``. The
    returned runs are in reading order, left to right.
    """
    if not texts:
        raise ValueError("at least one run is required")
    if len(gaps) != len(texts) - 1:
        raise ValueError("need exactly one gap between each pair of runs")
    _check_sizes(start_size, min_size, step)

    def measure(size: int) -> list[float]:
        font = font_for(size)
        return [text_width(t, font) for t in texts]

    size = start_size
    widths = measure(size)
    while _runs_total(widths, gaps) > max_width and size > min_size:
        size = max(min_size, size - step)
        widths = measure(size)

    placed: list[PlacedRun] = []
    cursor = right_edge
    for idx in range(len(texts) - 1, -1, -1):
        left = cursor - widths[idx]
        placed.append(PlacedRun(texts[idx], left, cursor))
        cursor = left - (gaps[idx - 1] if idx > 0 else 0)
    placed.reverse()
    return FittedRuns(size, _runs_total(widths, gaps), tuple(placed))
