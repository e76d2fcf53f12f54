"""Configuration and credential management for AgroNDVI.

Suppliers receive an explicit ``Config`` snapshot at construction time;
nothing is initialised globally at import.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from agrondvi.exceptions import ConfigurationError

logger = logging.getLogger("agrondvi")

_CREDENTIALS_ENV_VAR = "AGRONDVI_CREDENTIALS"
_DEFAULT_CREDENTIALS_PATH = Path("~/.agrondvi/credentials.json")


class Config(BaseModel):
    """Package configuration model.

    Immutable pydantic model. A supplier captures the ``Config`` it was
    built with, so later ``configure()`` calls never affect it.

    Args:
        storage_bucket: Object storage bucket holding the band rasters.
        storage_url: Base URL of the object storage media API.
        storage_credentials: Path to a JSON credentials file.
        red_object: Object name of the red band raster.
        nir_object: Object name of the near-infrared band raster.
        raster_dir: Directory used by the local file supplier.
        default_supplier: Registry name of the supplier used when the
            caller does not pick one.
        max_pixels: Hard cap on pixels reduced per call.
        sample_size: Number of per-pixel values kept in the sample.
        simulated_length: Band length produced by the simulated supplier.
        simulation_seed: Seed for the simulated supplier (``None`` = random).

    Example:
        >>> cfg = Config(default_supplier="local", raster_dir="~/rasters")
        >>> cfg.max_pixels
        1000000
    """

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    storage_bucket: str = "agro-ndvi.firebasestorage.app"
    storage_url: str = "https://firebasestorage.googleapis.com/v0"
    storage_credentials: Path | None = None
    red_object: str = "red.tif"
    nir_object: str = "nir.tif"
    raster_dir: Path = Path("~/.agrondvi/rasters")
    default_supplier: str = "simulated"
    max_pixels: int = 1_000_000
    sample_size: int = 100
    simulated_length: int = 1000
    simulation_seed: int | None = None

    @field_validator("storage_credentials", mode="before")
    @classmethod
    def _expand_credential_path(cls, v: str | Path | None) -> Path | None:
        """Expand ``~`` in the credentials path."""
        if v is None:
            return None
        return Path(v).expanduser()

    @field_validator("raster_dir", mode="before")
    @classmethod
    def _expand_raster_dir(cls, v: str | Path) -> Path:
        """Expand ``~`` in the raster directory path."""
        return Path(v).expanduser()

    @field_validator("storage_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        """Ensure the storage URL is an http(s) URL without trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = "storage_url must start with http:// or https://"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("storage_bucket", "red_object", "nir_object")
    @classmethod
    def _validate_not_blank(cls, v: str) -> str:
        """Reject empty object and bucket names."""
        if not v.strip():
            msg = "storage names must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("default_supplier")
    @classmethod
    def _normalise_supplier(cls, v: str) -> str:
        """Store supplier names lower-case (registry keys)."""
        return v.lower()

    @field_validator("max_pixels", "sample_size", "simulated_length")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        """Ensure pixel counts are positive."""
        if v <= 0:
            msg = "pixel counts must be greater than 0"
            raise ValueError(msg)
        return v


_default_config = Config()


def configure(**kwargs: Any) -> None:
    """Set module-level default configuration.

    Creates a new ``Config`` from the current defaults merged with
    the provided keyword arguments.

    Args:
        **kwargs: Any ``Config`` field (e.g. ``default_supplier``,
            ``raster_dir``, ``simulation_seed``).

    Raises:
        ValidationError: If a provided value fails pydantic validation.

    Example:
        >>> configure(default_supplier="storage", storage_bucket="my-bucket")
    """
    global _default_config  # noqa: PLW0603
    current = _default_config.model_dump()
    current.update(kwargs)
    _default_config = Config(**current)


def get_default_config() -> Config:
    """Return the current module-level default configuration."""
    return _default_config


def resolve_credentials_path(
    explicit: Path | None = None,
) -> Path | None:
    """Resolve the credentials file path.

    Resolution order:
        1. *explicit* argument (highest priority)
        2. ``AGRONDVI_CREDENTIALS`` environment variable
        3. Default ``~/.agrondvi/credentials.json``

    Emits a warning if the resolved file is readable by group or others
    on POSIX systems.

    Args:
        explicit: An explicit path passed via ``Config``.

    Returns:
        Resolved ``Path``, or ``None`` if no credentials file exists
        at the chosen location.
    """
    if explicit is not None:
        path = Path(explicit).expanduser()
    elif os.environ.get(_CREDENTIALS_ENV_VAR):
        path = Path(os.environ[_CREDENTIALS_ENV_VAR]).expanduser()
    else:
        path = _DEFAULT_CREDENTIALS_PATH.expanduser()

    if not path.exists():
        return None

    _check_file_permissions(path)
    return path


def _check_file_permissions(path: Path) -> None:
    """Warn if *path* is readable by group or others.

    Skipped on Windows where POSIX permission bits are not meaningful.
    """
    if sys.platform == "win32":
        return
    try:
        mode = path.stat().st_mode
    except OSError:
        return
    if mode & 0o077:
        logger.warning(
            "Credentials file %s has overly permissive "
            "permissions (%o). Consider running: "
            "chmod 600 %s",
            path,
            mode & 0o777,
            path,
        )


def load_credentials(path: Path) -> dict[str, Any]:
    """Load and parse a JSON credentials file.

    Args:
        path: Absolute or ``~``-expanded path to the JSON file.

    Returns:
        Parsed credentials dictionary.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or does
            not contain a JSON object.
    """
    resolved = Path(path).expanduser()
    expected = 'Ensure the file contains a JSON object like {"storage": {"token": "..."}}'
    try:
        text = resolved.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            what="Cannot read credentials file",
            cause=f"File not found: {resolved}",
            fix=(
                f"Create {resolved} with storage credentials, "
                f"or set the {_CREDENTIALS_ENV_VAR} environment variable"
            ),
        ) from None
    except PermissionError:
        raise ConfigurationError(
            what="Cannot read credentials file",
            cause=f"Permission denied: {resolved}",
            fix=f"Check file permissions on {resolved}",
        ) from None

    try:
        parsed: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            what="Invalid credentials file format",
            cause=f"JSON parse error in {resolved}: {exc}",
            fix=expected,
        ) from None

    if not isinstance(parsed, dict):
        raise ConfigurationError(
            what="Invalid credentials file format",
            cause=f"Expected a JSON object in {resolved}, got {type(parsed).__name__}",
            fix=expected,
        )

    return parsed
