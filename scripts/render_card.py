from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scorecard.core.config import settings
from scorecard.core.errors import CardRenderError
from scorecard.core.http import close_http_clients
from scorecard.core.logger import get_logger
from scorecard.services.card_renderer import render
from scorecard.services.fonts import register_font

log = get_logger("render_card")


async def _render(args: argparse.Namespace) -> bytes:
    try:
        return await render(
            args.handle,
            args.avatar,
            seed=args.seed,
            background_source=args.background,
        )
    finally:
        await close_http_clients()


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a score card PNG")
    parser.add_argument("--handle", required=True, help="screen name, drawn as @handle")
    parser.add_argument("--avatar", required=True, help="avatar file path or http(s) URL")
    parser.add_argument("--background", default=None, help="override CARD_BACKGROUND_PATH")
    parser.add_argument("--seed", type=int, default=None, help="seed for the placeholder score and stats")
    parser.add_argument("--out", default=None, help="output file (default: CARD_OUTPUT_DIR/<handle>.png)")
    args = parser.parse_args()

    register_font()
    try:
        png = asyncio.run(_render(args))
    except CardRenderError:
        log.exception("card_render_failed handle=%s avatar=%s", args.handle, args.avatar)
        return 1

    out = Path(args.out) if args.out else settings.output_dir / f"{args.handle.lstrip('@')}.png"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(png)
    print(f"card written: {out} ({len(png)} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
