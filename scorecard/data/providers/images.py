from __future__ import annotations

import asyncio
import io
import re
from pathlib import Path

import httpx
from PIL import Image, UnidentifiedImageError

from scorecard.core.config import settings
from scorecard.core.errors import ImageLoadError
from scorecard.core.http import assets_client, request_with_retries
from scorecard.core.logger import get_logger

log = get_logger(__name__)

_REMOTE_PREFIXES = ("http://", "https://")
_TWITTER_SIZE_SUFFIX = re.compile(r"_normal(\.[A-Za-z0-9]+)?$")


def is_remote(source: str) -> bool:
    return source.strip().lower().startswith(_REMOTE_PREFIXES)


def high_res_avatar_url(url: str) -> str:
    """Swap Twitter's 48px "_normal" profile image for the 400x400 variant."""
    return _TWITTER_SIZE_SUFFIX.sub(lambda m: "_400x400" + (m.group(1) or ""), url.strip())


def decode_image(data: bytes, source: str) -> Image.Image:
    if not data:
        raise ImageLoadError(source, "empty body")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
        EOFError,
        SyntaxError,
    ) as exc:
        raise ImageLoadError(source, f"not a decodable image ({exc})") from exc
    return img.convert("RGBA")


def _read_local(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise ImageLoadError(str(path), "file not found") from exc
    except PermissionError as exc:
        raise ImageLoadError(str(path), "permission denied") from exc
    except OSError as exc:
        raise ImageLoadError(str(path), str(exc)) from exc


async def _fetch_remote(url: str, *, client: httpx.AsyncClient | None = None) -> bytes:
    client = client or assets_client()
    try:
        resp = await request_with_retries(
            client,
            "GET",
            url,
            retries=max(0, settings.avatar_fetch_retries),
            backoff_base=0.4,
            backoff_max=2.0,
        )
    except httpx.HTTPError as exc:
        raise ImageLoadError(url, f"request failed ({exc.__class__.__name__})") from exc
    try:
        if resp.status_code < 200 or resp.status_code >= 300:
            raise ImageLoadError(url, f"HTTP {resp.status_code}")
        data = await resp.aread()
    finally:
        await resp.aclose()
    if len(data) > settings.avatar_max_bytes:
        raise ImageLoadError(url, f"body exceeds {settings.avatar_max_bytes} bytes")
    return data


async def load_image(source: str | Path, *, client: httpx.AsyncClient | None = None) -> Image.Image:
    """Load a local file or http(s) URL into an RGBA bitmap.

    Raises ImageLoadError for unreachable sources and undecodable bytes. There
    is no fallback image: callers abort the render on failure.
    """
    if isinstance(source, Path):
        data = await asyncio.to_thread(_read_local, source)
        return decode_image(data, str(source))

    raw = (source or "").strip()
    if not raw:
        raise ImageLoadError(repr(source), "empty image source")
    if is_remote(raw):
        log.debug("image_fetch url=%s", raw)
        data = await _fetch_remote(raw, client=client)
    else:
        data = await asyncio.to_thread(_read_local, Path(raw).expanduser())
    return decode_image(data, raw)
