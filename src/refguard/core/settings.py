"""refguard settings: Pydantic model and load."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from refguard.core.constants import DOCUMENT_FILENAME, REFGUARD_DIR_NAME, SETTINGS_FILENAME
from refguard.core.exceptions import SettingsError


def refguard_dir() -> Path:
    """Return the refguard settings directory (~/.refguard). Not created here."""
    return Path.home() / REFGUARD_DIR_NAME


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class LoggingSettings(BaseModel):
    level: str = "WARNING"
    format: str = "text"  # "text" | "json"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {sorted(allowed)}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v.lower()


class DocumentSettings(BaseModel):
    path: str = ""  # empty → use default


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class RefguardSettings(BaseModel):
    """Root refguard settings model."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    document: DocumentSettings = Field(default_factory=DocumentSettings)

    @property
    def document_path(self) -> Path:
        if self.document.path:
            return Path(self.document.path).expanduser()
        return refguard_dir() / DOCUMENT_FILENAME


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


def _settings_file_path() -> Path:
    if env_path := os.environ.get("REFGUARD_SETTINGS"):
        return Path(env_path)
    return refguard_dir() / SETTINGS_FILENAME


def load_settings(path: Path | None = None) -> RefguardSettings:
    """
    Load RefguardSettings from a TOML file, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (REFGUARD_*)
      2. Settings file (~/.refguard/settings.toml)
      3. Built-in defaults (a missing file is not an error)
    """
    import tomllib

    settings_path = path or _settings_file_path()

    data: dict[str, Any] = {}
    if settings_path.exists():
        try:
            with open(settings_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise SettingsError(f"Cannot read settings file {settings_path}: {exc}") from exc

    _apply_env_overrides(data)

    try:
        return RefguardSettings.model_validate(data)
    except ValueError as exc:
        raise SettingsError(f"Invalid settings at {settings_path}: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay REFGUARD_* environment variables onto the parsed TOML data."""
    if level := os.environ.get("REFGUARD_LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("REFGUARD_LOG_FORMAT"):
        data.setdefault("logging", {})["format"] = fmt
    if doc := os.environ.get("REFGUARD_CONFIG"):
        data.setdefault("document", {})["path"] = doc
