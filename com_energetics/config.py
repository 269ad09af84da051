"""Project configuration helpers for environment-driven defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Physical and processing constants
GRAVITY = 9.81  # m/s^2
DEFAULT_CRANK_LENGTH = 0.1725  # m
PEAK_HEIGHT_FRACTION = 0.8  # Peaks must exceed this fraction of max(angle)
NUM_PHASE_POINTS = 101  # 0%..100% of the crank cycle, both endpoints included
SMOOTHING_SPAN = 10  # Savitzky-Golay span in samples
SMOOTHING_POLYORDER = 3  # Same as quadratic on a centred window; cubic fits at the two edges


def _default_env_path() -> Path:
    return Path(__file__).resolve().parents[1] / ".env.local"


def load_env_file(env_path: Path | None = None) -> None:
    """Load environment variables from a .env file if present.

    Already-set variables are never overridden.
    """
    path = env_path or _default_env_path()
    if not path.exists():
        return
    load_dotenv(path, override=False)


def get_default_crank_length() -> float:
    """Return the crank length (m) used when none is supplied."""
    raw = os.environ.get("COM_ENERGETICS_CRANK_LENGTH")
    if raw:
        return float(raw)
    return DEFAULT_CRANK_LENGTH


def get_output_root(default: Path | None = None) -> Path | None:
    """Return the configured output directory root, if available."""
    raw = os.environ.get("COM_ENERGETICS_OUTPUT_ROOT")
    if raw:
        return Path(raw).expanduser().resolve()
    return default


def setup_logging(verbose: bool = False) -> None:
    """Configure logging output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
