from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Callable

from PIL import ImageFont

from scorecard.core.config import settings
from scorecard.core.errors import FontLoadError
from scorecard.core.logger import get_logger

log = get_logger(__name__)

FontFactory = Callable[[int], ImageFont.FreeTypeFont]

_registered: dict[str, Path | None] = {}


@lru_cache(maxsize=256)
def _load_font(path: str | None, size: int) -> ImageFont.FreeTypeFont:
    if path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(path, size=size)
    except OSError as exc:
        raise FontLoadError(f"cannot read font {path}: {exc}") from exc


def register_font(name: str | None = None, path: Path | None = None) -> Path | None:
    """Make a typeface available under ``name``; safe to call repeatedly.

    Returns the resolved font file, or None when the file is missing and the
    bundled default font stands in for it.
    """
    name = name or settings.card_font_name
    path = path or settings.font_path
    if name in _registered and _registered[name] == (path if path.exists() else None):
        return _registered[name]
    if path.exists():
        _load_font(str(path), 12)
        _registered[name] = path
        log.info("font_registered name=%s path=%s", name, path)
    else:
        _registered[name] = None
        log.warning("font_missing name=%s path=%s; using bundled default", name, path)
    return _registered[name]


def font_factory(name: str | None = None) -> FontFactory:
    name = name or settings.card_font_name
    if name not in _registered:
        register_font(name)
    path = _registered[name]
    key = str(path) if path is not None else None

    def _factory(size: int) -> ImageFont.FreeTypeFont:
        return _load_font(key, size)

    return _factory
