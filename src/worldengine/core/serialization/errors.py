"""Errors raised by the serializer."""

from __future__ import annotations


class WorldDocumentError(Exception):
    """Base class for failures reading or writing a world document."""

    pass


class ValidationError(WorldDocumentError):
    """Raised when a document fails validation. Carries every error found."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"World document is invalid: {'; '.join(self.errors)}")


class ParseError(WorldDocumentError):
    """Raised when wire text is not well-formed."""

    pass


class UnsupportedVersionError(WorldDocumentError):
    """Raised when wire text declares a schema version newer than supported."""

    def __init__(self, version: int, supported: int):
        self.version = version
        self.supported = supported
        super().__init__(
            f"Cannot load future schema version {version} (newest supported is {supported})"
        )
