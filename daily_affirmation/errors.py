"""Exceptions raised by loaders and codecs.

None of these reach the presentation layer: the engine, pool and collection
catch them and fall back to a safe default.
"""


class AffirmationError(Exception):
    """Base class for Daily Affirmation errors."""


class CatalogMissingError(AffirmationError):
    """A bundled quote or reply catalog could not be found."""

    def __init__(self, path: str):
        super().__init__(f"Catalog not found: {path}")
        self.path = path


class RecordDecodeError(AffirmationError):
    """A persisted blob is present but cannot be parsed."""

    def __init__(self, key: str, reason: str = ""):
        message = f"Could not decode '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.key = key
        self.reason = reason
