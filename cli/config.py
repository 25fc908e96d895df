"""Configuration loader for the apigwint CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from cli.output import FORMATS

DEFAULTS = {
    "default_format": "json",
    "default_stage": "dev",
    "allow_overwrite": True,
    "log_level": "WARNING",
}


@dataclass(slots=True)
class Settings:
    default_format: str = DEFAULTS["default_format"]
    default_stage: str = DEFAULTS["default_stage"]
    allow_overwrite: bool = DEFAULTS["allow_overwrite"]
    log_level: str = DEFAULTS["log_level"]

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Settings":
        default_format = data.get("default_format", DEFAULTS["default_format"])
        if default_format not in FORMATS:
            raise ValueError(f"default_format must be one of {', '.join(FORMATS)}, got {default_format!r}")
        log_level = str(data.get("log_level", DEFAULTS["log_level"])).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"log_level {log_level!r} is not a known logging level")
        return cls(
            default_format=default_format,
            default_stage=str(data.get("default_stage", DEFAULTS["default_stage"])),
            allow_overwrite=bool(data.get("allow_overwrite", DEFAULTS["allow_overwrite"])),
            log_level=log_level,
        )

    def merge_cli(
        self,
        format_override: str | None = None,
        stage_override: str | None = None,
        allow_overwrite: bool | None = None,
    ) -> "Settings":
        return Settings(
            default_format=format_override or self.default_format,
            default_stage=stage_override or self.default_stage,
            allow_overwrite=self.allow_overwrite if allow_overwrite is None else allow_overwrite,
            log_level=self.log_level,
        )


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Configuration file must be a mapping of keys to values.")

    return Settings.from_mapping(data)


__all__ = ["Settings", "load_settings"]
