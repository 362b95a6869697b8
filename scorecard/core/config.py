from pathlib import Path
from typing import List, Tuple

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logger import get_logger

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DISCLAIMER = "SAMPLE CARD PRELAUNCH DOES NOT REFLECT ACTUAL SCORES"


def parse_ranges(raw: str) -> List[Tuple[int, int]]:
    """Parse "1-1000,100-1000" into [(1, 1000), (100, 1000)]."""
    out: list[tuple[int, int]] = []
    for chunk in (raw or "").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        lo_raw, sep, hi_raw = chunk.partition("-")
        if not sep:
            raise ValueError(f"range '{chunk}' must look like LOW-HIGH")
        lo, hi = int(lo_raw.strip()), int(hi_raw.strip())
        if lo > hi:
            raise ValueError(f"range '{chunk}' has LOW greater than HIGH")
        out.append((lo, hi))
    return out


def resolve_path(value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else PROJECT_ROOT / path


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field("dev", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    card_background_path: str = Field("assets/card.png", alias="CARD_BACKGROUND_PATH")
    card_font_path: str = Field("assets/fonts/Manrope-Bold.ttf", alias="CARD_FONT_PATH")
    card_font_name: str = Field("Manrope", alias="CARD_FONT_NAME")
    card_disclaimer: str = Field(DEFAULT_DISCLAIMER, alias="CARD_DISCLAIMER")
    # Open question carried from the first release: stat 1 was drawn from 1-100 there.
    card_stat_ranges_raw: str = Field("1-1000,100-1000,1000-10000", alias="CARD_STAT_RANGES")
    card_output_dir: str = Field("public/cards", alias="CARD_OUTPUT_DIR")

    avatar_fetch_timeout_seconds: float = Field(default=15.0, alias="AVATAR_FETCH_TIMEOUT_SECONDS")
    avatar_fetch_retries: int = Field(default=0, alias="AVATAR_FETCH_RETRIES")
    avatar_max_bytes: int = Field(default=10 * 1024 * 1024, alias="AVATAR_MAX_BYTES")

    @model_validator(mode="after")
    def validate_card_settings(self):
        ranges = parse_ranges(self.card_stat_ranges_raw)
        if len(ranges) != 3:
            raise ValueError("CARD_STAT_RANGES must list exactly three LOW-HIGH ranges")
        if not resolve_path(self.card_font_path).exists():
            logger = get_logger("settings")
            logger.warning(
                "card font not found path=%s; falling back to the bundled default font",
                self.card_font_path,
            )
        return self

    @property
    def stat_ranges(self) -> List[Tuple[int, int]]:
        return parse_ranges(self.card_stat_ranges_raw)

    @property
    def background_path(self) -> Path:
        return resolve_path(self.card_background_path)

    @property
    def font_path(self) -> Path:
        return resolve_path(self.card_font_path)

    @property
    def output_dir(self) -> Path:
        return resolve_path(self.card_output_dir)


default_settings = Settings()
settings = default_settings
