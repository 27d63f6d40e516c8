from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from ..errors import DirectoryError

logger = logging.getLogger(__name__)


@dataclass
class LoadedData:
    classes: List[Dict[str, Any]]
    subjects: List[Dict[str, Any]]
    users: List[Dict[str, Any]]


def load_json(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        logger.warning(f"{path.name} not found in {path.parent}; using an empty list")
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DirectoryError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, list):
        raise DirectoryError(f"{path}: expected a list of records")
    for i, rec in enumerate(data):
        if not isinstance(rec, dict) or not rec.get("id"):
            raise DirectoryError(f"{path}: record {i} has no id")
    return data


def load_data(data_dir: Path) -> LoadedData:
    return LoadedData(
        classes=load_json(data_dir / "classes.json"),
        subjects=load_json(data_dir / "subjects.json"),
        users=load_json(data_dir / "users.json"),
    )
