from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .data.settings import slot_from_record
from .errors import SettingsError

CONFIG_NAME = "timetabler.toml"


@dataclass
class EngineConfig:
    data_dir: str = "data"
    store_dir: str = "store"
    outputs_dir: str = "outputs"
    log_level: str = "INFO"
    days: List[str] = field(default_factory=list)
    slots: List[Dict[str, str]] = field(default_factory=list)

    def resolve(self, root: Path, name: str) -> Path:
        p = Path(getattr(self, name))
        return p if p.is_absolute() else root / p

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)


def load_config(root: Path, path: Path | None = None) -> EngineConfig:
    cfg_path = path or (root / CONFIG_NAME)
    if not cfg_path.exists():
        return EngineConfig()
    try:
        with open(cfg_path, "rb") as f:
            raw: Dict[str, Any] = tomllib.load(f)
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise SettingsError(f"{cfg_path}: invalid TOML ({e})") from e
    # Both a bare file and a [timetabler] table are accepted
    section = raw.get("timetabler", raw)
    cfg = EngineConfig()
    for key in ("data_dir", "store_dir", "outputs_dir", "log_level"):
        if key in section:
            setattr(cfg, key, str(section[key]))
    cfg.days = [str(d) for d in section.get("days", [])]
    cfg.slots = [slot_from_record(s).to_dict() for s in section.get("slots", [])]
    return cfg
