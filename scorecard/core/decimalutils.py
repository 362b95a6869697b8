from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

NumberLike = Union[str, float, int, Decimal]


def D(value: NumberLike) -> Decimal:
    """Safe Decimal constructor using string conversion to avoid float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def q_score(value: NumberLike) -> Decimal:
    return D(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def format_thousands(value: int) -> str:
    return f"{int(value):,}"
