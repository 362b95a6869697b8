"""Fixed geometry of the score card template.

Every coordinate here is in pixels on the 3000x1700 canvas. The boxes are the
visual contract with the background artwork, so they are constants rather
than anything computed per render.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Literal

CANVAS_SIZE = (3000, 1700)
MIN_FONT_SIZE = 10
FONT_STEP = 2
SCORE_RUN_GAP = 5
AVATAR_CORNER_RADIUS = 50

Align = Literal["center", "right"]
GradientAxis = Literal["vertical", "diagonal"]


@dataclass(frozen=True)
class LayoutBox:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> "LayoutBox":
        return cls(x0, y0, x1 - x0, y1 - y0)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class TextSlot:
    box: LayoutBox
    start_size: int
    align: Align = "right"
    gradient: GradientAxis = "diagonal"

    @property
    def anchor_point(self) -> tuple[float, float]:
        cx, cy = self.box.center
        if self.align == "center":
            return (cx, cy)
        return (float(self.box.right), cy)

    @property
    def pil_anchor(self) -> str:
        return "mm" if self.align == "center" else "rm"


@dataclass(frozen=True)
class CardTemplate:
    avatar_box: LayoutBox
    handle: TextSlot
    score: TextSlot
    stats: tuple[TextSlot, ...]
    stat_ranges: tuple[tuple[int, int], ...]
    disclaimer: TextSlot
    disclaimer_text: str
    canvas_size: tuple[int, int] = CANVAS_SIZE
    corner_radius: int = AVATAR_CORNER_RADIUS
    score_range: tuple[Decimal, Decimal] = (Decimal("3.9"), Decimal("4.9"))
    score_separator: str = "/"
    score_max: str = "5"
    run_gap: float = SCORE_RUN_GAP
    min_font_size: int = MIN_FONT_SIZE
    font_step: int = FONT_STEP
    gold: tuple[str, str] = field(default=("#fdde45", "#ffcf01"))
    separator_color: str = "#ffffff"

    def __post_init__(self):
        if len(self.stats) != 3:
            raise ValueError(f"a card has exactly 3 statistic slots, got {len(self.stats)}")
        if len(self.stat_ranges) != len(self.stats):
            raise ValueError("stat_ranges must pair one range with each statistic slot")
        for lo, hi in self.stat_ranges:
            if lo > hi:
                raise ValueError(f"invalid statistic range {lo}-{hi}")
        if self.score_range[0] > self.score_range[1]:
            raise ValueError("score_range is inverted")

    def with_overrides(
        self,
        *,
        stat_ranges: list[tuple[int, int]] | tuple[tuple[int, int], ...] | None = None,
        disclaimer_text: str | None = None,
    ) -> "CardTemplate":
        changes: dict = {}
        if stat_ranges is not None:
            changes["stat_ranges"] = tuple((int(lo), int(hi)) for lo, hi in stat_ranges)
        if disclaimer_text is not None:
            changes["disclaimer_text"] = disclaimer_text
        return replace(self, **changes) if changes else self


AVATAR_BOX = LayoutBox.from_corners(325, 285, 1085, 1060)
HANDLE_SLOT = TextSlot(LayoutBox.from_corners(255, 1270, 1165, 1400), 100, "center", "vertical")
SCORE_SLOT = TextSlot(LayoutBox.from_corners(2420, 272, 2645, 332), 70)
STAT_SLOTS = (
    TextSlot(LayoutBox.from_corners(2420, 604, 2645, 666), 70),
    TextSlot(LayoutBox.from_corners(2420, 940, 2645, 998), 70),
    TextSlot(LayoutBox.from_corners(2420, 1269, 2645, 1334), 70),
)
DISCLAIMER_SLOT = TextSlot(LayoutBox.from_corners(208, 1444, 2800, 1545), 48, "center")

DEFAULT_STAT_RANGES = ((1, 1000), (100, 1000), (1000, 10000))
# First release drew the first statistic from 1-100.
LEGACY_STAT_RANGES = ((1, 100), (100, 1000), (1000, 10000))

DEFAULT_TEMPLATE = CardTemplate(
    avatar_box=AVATAR_BOX,
    handle=HANDLE_SLOT,
    score=SCORE_SLOT,
    stats=STAT_SLOTS,
    stat_ranges=DEFAULT_STAT_RANGES,
    disclaimer=DISCLAIMER_SLOT,
    disclaimer_text="SAMPLE CARD PRELAUNCH DOES NOT REFLECT ACTUAL SCORES",
)


def template_from_settings(settings) -> CardTemplate:
    return DEFAULT_TEMPLATE.with_overrides(
        stat_ranges=settings.stat_ranges,
        disclaimer_text=settings.card_disclaimer,
    )
