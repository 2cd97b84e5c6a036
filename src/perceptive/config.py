"""Configuration loader and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class Config:
    hash_kind: str = "difference"
    variant_threshold: int = 10
    duplicate_threshold: int = 10
    batch_size: int = 64
    log_level: str = "INFO"


def load_config(path: Optional[str]) -> Config:
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    return _from_dict(data)


def _from_dict(data: Dict[str, Any]) -> Config:
    # unknown keys are ignored
    return Config(
        hash_kind=str(data.get("hash_kind", "difference")),
        variant_threshold=int(data.get("variant_threshold", 10)),
        duplicate_threshold=int(data.get("duplicate_threshold", 10)),
        batch_size=int(data.get("batch_size", 64)),
        log_level=str(data.get("log_level", "INFO")),
    )


def override_config(cfg: Config, overrides: Dict[str, Any]) -> Config:
    for key, value in overrides.items():
        if value is None:
            continue
        setattr(cfg, key, value)
    return cfg
