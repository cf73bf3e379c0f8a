"""Exceptions raised by themesync."""


class ThemeSyncError(Exception):
    """Base class for themesync errors."""


class ConfigError(ThemeSyncError, ValueError):
    """Raised when a theme configuration is malformed."""

    def __init__(self, message: str, prop: str | None = None) -> None:
        self.prop = prop
        if prop is not None:
            message = f"Property '{prop}': {message}"
        super().__init__(message)


class NotInitializedError(ThemeSyncError, RuntimeError):
    """Raised when state is read before its owner was initialized."""
