import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

os.environ.setdefault("LOG_LEVEL", "WARNING")

from card_snapshot_cases import make_avatar, make_background  # noqa: E402


class FakeFont:
    """Fixed-advance font: every glyph is half the font size wide."""

    def __init__(self, size: int):
        self.size = size

    def getlength(self, text: str) -> float:
        return len(text) * self.size * 0.5


@pytest.fixture()
def fake_font_for():
    sizes = []

    def _factory(size: int) -> FakeFont:
        sizes.append(size)
        return FakeFont(size)

    _factory.sizes = sizes
    return _factory


@pytest.fixture()
def font_for():
    from scorecard.services.fonts import font_factory

    return font_factory()


@pytest.fixture()
def background():
    return make_background()


@pytest.fixture()
def avatar():
    return make_avatar()


@pytest.fixture()
def background_file(tmp_path, background):
    path = tmp_path / "card.png"
    background.save(path, format="PNG")
    return path


@pytest.fixture()
def avatar_png_bytes(avatar):
    import io

    buf = io.BytesIO()
    avatar.save(buf, format="PNG")
    return buf.getvalue()
