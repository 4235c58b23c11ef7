"""Sweeper settings model and persistence.

Settings are stored as TOML in ~/.config/sweepctl/settings.toml. Keys that
are missing from the file take their default values, so a partial file is
always valid as long as the values it does contain are in range.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sweepctl.core.paths import ensure_config_dir, get_settings_path

logger = logging.getLogger(__name__)

TTL_MINUTES_MIN = 1
TTL_MINUTES_MAX = 10080  # one week
CHECK_INTERVAL_MIN = 0
CHECK_INTERVAL_MAX = 1440  # one day


class Settings(BaseModel):
    """Configuration for the cleanup scheduler.

    Attributes:
        target_folder: Vault-relative path of the folder to sweep.
        ttl_minutes: Age in minutes after which a note expires (1-10080).
        check_interval: Minutes between sweeps (0-1440, 0 disables sweeping).
        confirmed: The user agreed that files are deleted automatically.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_folder: Annotated[
        str,
        Field(description="Vault-relative folder to sweep"),
    ] = "tmp"
    ttl_minutes: Annotated[
        int,
        Field(ge=TTL_MINUTES_MIN, le=TTL_MINUTES_MAX, description="File lifetime in minutes"),
    ] = 1440
    check_interval: Annotated[
        int,
        Field(
            ge=CHECK_INTERVAL_MIN,
            le=CHECK_INTERVAL_MAX,
            description="Sweep interval in minutes (0 = stopped)",
        ),
    ] = 0
    confirmed: Annotated[
        bool,
        Field(description="Automatic deletion has been acknowledged"),
    ] = False

    @field_validator("target_folder", mode="before")
    @classmethod
    def strip_target_folder(cls, v: object) -> object:
        """Trim surrounding whitespace from the folder path."""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def is_enabled(self) -> bool:
        """Whether the scheduler repeats at all."""
        return self.check_interval > 0

    @property
    def is_armed(self) -> bool:
        """Whether a sweep is allowed to delete files."""
        return self.is_enabled and self.confirmed


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def get_default_settings() -> Settings:
    """Create Settings with every value at its default."""
    return Settings()


def build_settings(data: dict[str, Any]) -> Settings:
    """Validate raw settings data, filling missing keys with defaults.

    Args:
        data: Mapping of setting names to values.

    Returns:
        Validated Settings object.

    Raises:
        SettingsError: If a value is out of range or a key is unknown.
    """
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {_describe_errors(e)}") from e


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file, merged over the defaults.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or holds invalid values.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return get_default_settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    return build_settings(data)


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    try:
        if path is None:
            ensure_config_dir()
        else:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, RuntimeError) as e:
        raise SettingsError(f"Cannot create settings directory: {e}") from e

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    logger.debug("Saved settings to %s", settings_path)
    return settings_path


def _describe_errors(error: ValidationError) -> str:
    """Flatten pydantic errors into a single readable line."""
    parts: list[str] = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "settings"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
