"""Best-score persistence, one small text file per game variant."""

from __future__ import annotations

import logging
from pathlib import Path

from .config import HIGHSCORE_DIR

logger = logging.getLogger(__name__)


def highscore_path(variant: str, directory: Path | None = None) -> Path:
    return (directory or HIGHSCORE_DIR) / f"highscore-{variant}.txt"


def load_high_score(variant: str, directory: Path | None = None) -> int:
    path = highscore_path(variant, directory)
    try:
        text = path.read_text(encoding="utf-8")
        return int(text.strip() or "0")
    except FileNotFoundError:
        return 0
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable high score file %s: %s", path, exc)
        return 0


def save_high_score(variant: str, score: int, directory: Path | None = None) -> bool:
    """Store ``score`` only if it beats the saved best; return whether it did."""

    if score <= load_high_score(variant, directory):
        return False
    path = highscore_path(variant, directory)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(str(score), encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not save high score to %s: %s", path, exc)
        return False
    return True
