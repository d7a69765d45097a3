"""
Write exported scores to disk.

Save failures are surfaced: an OSError is logged and re-raised as
ExportError so a caller can tell the respondent. The session itself is
never touched here.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

from mai.export import export_filename, scores_to_csv
from mai.model import ScoreEntry

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when the score file cannot be written."""
    pass


def save_scores_csv(
    scores: Sequence[ScoreEntry],
    inventory_name: str,
    directory: Union[str, Path] = ".",
) -> Path:
    """
    Save scores as UTF-8 CSV named "<inventory_name>_scores.csv".

    Args:
        scores: Output of compute_scores()
        inventory_name: Used for the filename
        directory: Target directory (must exist)

    Returns:
        Path of the written file

    Raises:
        ExportError: If the file cannot be written
    """
    target = Path(directory) / export_filename(inventory_name)
    try:
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(scores_to_csv(scores))
    except OSError as e:
        logger.error("Could not save scores to %s: %s", target, e)
        raise ExportError(f"Could not save scores to {target}: {e}") from e
    logger.info("Saved %d category scores to %s", len(scores), target)
    return target
