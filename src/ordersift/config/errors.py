"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""

    def __init__(self, names: tuple[str, ...]) -> None:
        super().__init__(f"Missing configuration for: {', '.join(sorted(names))}")
        self.names = names
