"""Configuration management for imgmeta."""

import os
from dataclasses import dataclass, field

from .exceptions import ConfigError

_FALSE_VALUES = {"0", "false", "no", "off"}
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class HTTPConfig:
    """Remote acquisition configuration."""

    timeout_seconds: float = 30.0
    follow_redirects: bool = True
    user_agent: str = "imgmeta/0.1 (Metadata Reader)"


@dataclass
class Config:
    """Main extraction configuration.

    Attributes:
        xmp_enabled: Run the XMP decoder during extraction.
        http: Settings for remote byte acquisition.
    """

    xmp_enabled: bool = True
    http: HTTPConfig = field(default_factory=HTTPConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()

        if flag := os.environ.get("IMGMETA_XMP_ENABLED"):
            config.xmp_enabled = _parse_bool("IMGMETA_XMP_ENABLED", flag)

        if timeout := os.environ.get("IMGMETA_HTTP_TIMEOUT"):
            try:
                config.http.timeout_seconds = float(timeout)
            except ValueError as e:
                raise ConfigError(
                    f"IMGMETA_HTTP_TIMEOUT must be a number, got {timeout!r}"
                ) from e

        if user_agent := os.environ.get("IMGMETA_USER_AGENT"):
            config.http.user_agent = user_agent

        return config


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


# Process-wide default, read once per extraction
_default_config: Config | None = None


def get_default_config() -> Config:
    """Get the process-wide default configuration.

    Lazily created from the environment on first access. Mutating the
    returned object (for example ``xmp_enabled``) affects later extractions.

    Returns:
        The singleton Config instance.
    """
    global _default_config
    if _default_config is None:
        _default_config = Config.from_env()
    return _default_config


def reset_default_config() -> None:
    """Reset the default configuration singleton.

    This is primarily useful for testing to ensure a clean state.
    """
    global _default_config
    _default_config = None
