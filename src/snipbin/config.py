"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:       str = "snipbin"
    db_url:         str = "sqlite:///snipbin.db"
    words_file:     Optional[str] = Field(default=None, description="Word list for identifiers; unset = alphanumeric only")
    max_filesize:   int = Field(default=1024 * 1024, ge=0, description="Max normalized content size in bytes; 0 = unlimited")
    spam_patterns:  list[str] = Field(default_factory=list, description="Regexes that reject rendered content")
    max_links:      int = Field(default=0, ge=0, description="Max URLs per document; 0 = unlimited")
    allow_legacy_plaintext: bool = Field(default=True, description="Serve unencrypted pre-encryption records as-is")
    log_level:      str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("spam_patterns", mode="before")
    @classmethod
    def _split_patterns(cls, v):
        if isinstance(v, str):
            return [line for line in v.splitlines() if line.strip()]
        return v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then SNIPBIN_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SNIPBIN_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
