# config/settings.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from vickrey.core.models import AuctionConfig

DEFAULT_MECHANISM = "second_price"


@dataclass(frozen=True)
class Settings:
    auction: AuctionConfig
    log_level: int = logging.INFO
    log_file: Optional[str] = None
    plot_dir: Optional[str] = None


def _log_level_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"{name} is not a logging level: {raw!r}")
    return level


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Load .env (safe to call multiple times) and read VICKREY_* variables.
    Values already set in the environment win over the .env file.
    """
    load_dotenv(dotenv_path)

    auction = AuctionConfig(
        mechanism=os.getenv("VICKREY_MECHANISM") or DEFAULT_MECHANISM,
    )
    return Settings(
        auction=auction,
        log_level=_log_level_env("VICKREY_LOG_LEVEL", logging.INFO),
        log_file=os.getenv("VICKREY_LOG_FILE") or None,
        plot_dir=os.getenv("VICKREY_PLOT_DIR") or None,
    )
