"""Pydantic models for application configuration.

The optional YAML config is parsed into :class:`StoreConfig` at startup so a
bad value fails before any record is read.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_DATA_FILE = "usuarios.txt"
DATA_FILE_ENV = "USER_STORE_FILE"


class StoreConfig(BaseModel):
    data_file: str = DEFAULT_DATA_FILE
    log_level: str = "WARNING"
    email_width: int = Field(30, ge=8)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level


def load_config(config_path: str | Path | None = None) -> StoreConfig:
    """Build the config from an optional YAML file plus the environment.

    ``USER_STORE_FILE`` wins over ``data_file`` from the file.
    """
    raw: dict = {}
    if config_path is not None:
        raw = yaml.safe_load(Path(config_path).read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"config file {config_path} must contain a mapping")

    env_file = os.environ.get(DATA_FILE_ENV)
    if env_file:
        raw["data_file"] = env_file

    return StoreConfig.model_validate(raw)
