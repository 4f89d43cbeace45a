"""YAML loader for local candidate fixtures."""

import logging
from pathlib import Path
from typing import Any

import yaml

from src.core.schemas import CandidateRecord

logger = logging.getLogger(__name__)


def load_candidates(path: str | Path) -> list[CandidateRecord]:
    """Load candidate records from a YAML file.

    Accepts either a top-level ``candidates:`` list or a bare list. Keys may
    be snake_case or camelCase (``match_score`` / ``matchScore``).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document has the wrong shape or a record is invalid.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Candidates file not found: {path}"
        raise FileNotFoundError(msg)

    raw: Any = yaml.safe_load(path.read_text())
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = raw.get("candidates") or []
    if not isinstance(raw, list):
        msg = f"Expected a list of candidates in {path}"
        raise ValueError(msg)

    candidates = [CandidateRecord.model_validate(entry) for entry in raw]
    logger.debug("Loaded %d candidates from %s", len(candidates), path)
    return candidates
