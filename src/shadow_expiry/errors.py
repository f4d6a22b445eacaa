"""Exception types raised by shadow_expiry."""


class ShadowExpiryError(Exception):
    """Base class for all shadow_expiry errors."""


class DatabaseUnavailableError(ShadowExpiryError):
    """The account database could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read account database {path}: {reason}")


class ConfigError(ShadowExpiryError, ValueError):
    """A configuration file is malformed or contains unknown keys."""
