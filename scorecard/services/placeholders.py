from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from PIL import Image

from scorecard.core.decimalutils import D, format_thousands, q_score


def format_handle(screen_name: str) -> str:
    if not screen_name or not screen_name.strip():
        raise ValueError("handle must not be empty")
    return f"@{screen_name}"


def make_rng(rng: random.Random | None = None, seed: int | None = None) -> random.Random:
    if rng is not None and seed is not None:
        raise ValueError("pass either rng or seed, not both")
    if rng is not None:
        return rng
    return random.Random(seed)


def random_score(rng: random.Random, low: Decimal = Decimal("3.9"), high: Decimal = Decimal("4.9")) -> Decimal:
    span = D(high) - D(low)
    return q_score(D(low) + D(rng.random()) * span)


def random_stats(rng: random.Random, ranges: Sequence[tuple[int, int]]) -> tuple[int, ...]:
    return tuple(rng.randint(lo, hi) for lo, hi in ranges)


@dataclass(frozen=True)
class CardInputs:
    handle: str
    avatar: Image.Image
    score: Decimal
    stats: tuple[int, ...]

    def __post_init__(self):
        if not self.handle or not self.handle.strip():
            raise ValueError("handle must not be empty")
        if len(self.stats) != 3:
            raise ValueError(f"expected exactly 3 statistics, got {len(self.stats)}")
        if D(self.score).as_tuple().exponent != -1:
            raise ValueError(f"score must carry exactly one decimal digit, got {self.score}")

    @property
    def display_handle(self) -> str:
        return format_handle(self.handle)

    @property
    def score_text(self) -> str:
        return str(self.score)

    @property
    def stat_texts(self) -> tuple[str, ...]:
        return tuple(format_thousands(v) for v in self.stats)


def placeholder_inputs(handle: str, avatar: Image.Image, rng: random.Random, template) -> CardInputs:
    """Draw this render's fake score and statistics from ``rng``."""
    score = random_score(rng, *template.score_range)
    stats = random_stats(rng, template.stat_ranges)
    return CardInputs(handle=handle, avatar=avatar, score=score, stats=stats)
