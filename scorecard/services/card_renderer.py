from __future__ import annotations

import asyncio
import io
import random
from pathlib import Path

import httpx
from PIL import Image

from scorecard.core.config import settings
from scorecard.core.errors import EncodeError
from scorecard.core.logger import get_logger
from scorecard.data.providers.images import high_res_avatar_url, is_remote, load_image
from scorecard.services.clipping import paste_clipped
from scorecard.services.drawing import GradientSpec, SolidFill, TextCommand, draw_text, parse_color
from scorecard.services.fonts import FontFactory, font_factory
from scorecard.services.layout import CardTemplate, TextSlot, template_from_settings
from scorecard.services.placeholders import CardInputs, make_rng, placeholder_inputs
from scorecard.services.text_fit import fit_runs, fit_text

log = get_logger(__name__)


def _slot_gradient(slot: TextSlot, font_size: int, template: CardTemplate) -> GradientSpec:
    if slot.gradient == "vertical":
        _, cy = slot.box.center
        return GradientSpec.vertical(cy - font_size / 2, cy + font_size / 2, template.gold)
    return GradientSpec.diagonal(slot.box, template.gold)


def fitted_text_command(
    slot: TextSlot,
    text: str,
    template: CardTemplate,
    font_for: FontFactory,
) -> TextCommand:
    fitted = fit_text(
        text,
        slot.box.width,
        font_for,
        start_size=slot.start_size,
        min_size=template.min_font_size,
        step=template.font_step,
    )
    return TextCommand(
        text=text,
        position=slot.anchor_point,
        anchor=slot.pil_anchor,
        font_size=fitted.font_size,
        fill=_slot_gradient(slot, fitted.font_size, template),
    )


def score_commands(score_text: str, template: CardTemplate, font_for: FontFactory) -> list[TextCommand]:
    slot = template.score
    gap = template.run_gap
    fitted = fit_runs(
        [score_text, template.score_separator, template.score_max],
        [gap, gap],
        slot.box.width,
        slot.box.right,
        font_for,
        start_size=slot.start_size,
        min_size=template.min_font_size,
        step=template.font_step,
    )
    gold = _slot_gradient(slot, fitted.font_size, template)
    white = SolidFill(parse_color(template.separator_color))
    fills = (gold, white, gold)
    _, cy = slot.box.center
    return [
        TextCommand(run.text, (run.right, cy), "rm", fitted.font_size, fill)
        for run, fill in zip(fitted.runs, fills)
    ]


def build_commands(inputs: CardInputs, template: CardTemplate, font_for: FontFactory) -> list[TextCommand]:
    """Every text draw for the card, in z-order."""
    commands = [fitted_text_command(template.handle, inputs.display_handle, template, font_for)]
    commands.extend(score_commands(inputs.score_text, template, font_for))
    for slot, text in zip(template.stats, inputs.stat_texts):
        commands.append(fitted_text_command(slot, text, template, font_for))
    commands.append(fitted_text_command(template.disclaimer, template.disclaimer_text, template, font_for))
    return commands


def compose_card(
    inputs: CardInputs,
    background: Image.Image,
    *,
    template: CardTemplate | None = None,
    font_for: FontFactory | None = None,
) -> Image.Image:
    template = template or template_from_settings(settings)
    font_for = font_for or font_factory()

    canvas = Image.new("RGBA", template.canvas_size, (0, 0, 0, 0))
    bg = background.convert("RGBA")
    if bg.size != template.canvas_size:
        bg = bg.resize(template.canvas_size, Image.Resampling.LANCZOS)
    canvas.alpha_composite(bg)

    paste_clipped(canvas, inputs.avatar, template.avatar_box, template.corner_radius)

    for cmd in build_commands(inputs, template, font_for):
        draw_text(canvas, cmd, font_for)
        log.debug("card_text text=%r size=%d", cmd.text, cmd.font_size)
    return canvas


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(f"PNG encoding failed: {exc}") from exc
    return buf.getvalue()


def render_card(
    handle: str,
    avatar: Image.Image,
    background: Image.Image,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    template: CardTemplate | None = None,
    font_for: FontFactory | None = None,
) -> bytes:
    """Compose and encode one card from already decoded images."""
    template = template or template_from_settings(settings)
    inputs = placeholder_inputs(handle, avatar, make_rng(rng, seed), template)
    image = compose_card(inputs, background, template=template, font_for=font_for)
    return encode_png(image)


async def render(
    handle: str,
    avatar_source: str | Path,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
    template: CardTemplate | None = None,
    background_source: str | Path | None = None,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """Render the score card PNG for ``handle``.

    Loads the background and avatar (the only awaited steps), then composes
    and encodes in a worker thread. Raises ImageLoadError if either image
    cannot be loaded and EncodeError if encoding fails.
    """
    if isinstance(avatar_source, str) and is_remote(avatar_source):
        avatar_source = high_res_avatar_url(avatar_source)
    background = await load_image(background_source or settings.background_path, client=client)
    avatar = await load_image(avatar_source, client=client)
    png = await asyncio.to_thread(
        render_card,
        handle,
        avatar,
        background,
        rng=rng,
        seed=seed,
        template=template,
    )
    log.debug("card_rendered handle=%s bytes=%d", handle, len(png))
    return png
