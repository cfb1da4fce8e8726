# src/keyprint/core/config.py
"""
Configuration schema and loading for keyprint.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from keyprint.core.logging import get_logger
from keyprint.core.security.digest import is_valid_digest_name, normalize_digest_name

logger = get_logger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class FingerprintSettings(BaseModel):
    """How fingerprints are computed and displayed.

    Example YAML:
        fingerprint:
          digest: sha256
          separator: ":"
          group_size: 2
          uppercase: true
    """

    model_config = {"frozen": True, "extra": "forbid"}

    digest: str = Field(
        default="sha1",
        description="Default digest tag (sha1 is the legacy protocol default); resolved against the engine's registry",
    )
    separator: str = Field(
        default=":",
        max_length=1,
        description="Character placed between hex groups in the display form",
    )
    group_size: int = Field(
        default=1,
        ge=1,
        le=8,
        description="Digest bytes per display group",
    )
    uppercase: bool = Field(
        default=False,
        description="Display hex digits in uppercase",
    )

    @field_validator("digest")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        """Digest must be a well-formed tag.

        Whether the digest exists is checked by FingerprintEngine against its
        registry, which may hold digests beyond the built-ins.
        """
        name = normalize_digest_name(v)
        if not is_valid_digest_name(name):
            raise ValueError(f"Invalid digest name {v!r}: expected a tag such as sha1 or sha256")
        return name

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        """A hex digit separator would make the display form ambiguous."""
        if v in _HEX_DIGITS:
            raise ValueError(f"separator must not be a hex digit, got {v!r}")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class KeyprintSettings(BaseModel):
    """Top-level keyprint configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    fingerprint: FingerprintSettings = Field(default_factory=FingerprintSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> KeyprintSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (KEYPRINT_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: KEYPRINT_FINGERPRINT__DIGEST for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated KeyprintSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="KEYPRINT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): _lower_keys(v)
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    settings = KeyprintSettings(**raw_config)
    logger.debug("settings loaded", path=str(config_path), digest=settings.fingerprint.digest)
    return settings


def resolve_config(settings: KeyprintSettings) -> dict[str, Any]:
    """Convert validated settings to a JSON-safe dict."""
    return settings.model_dump(mode="json")
