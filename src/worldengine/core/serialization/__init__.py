"""Versioned wire encoding of world documents.

Usage:
    text = serialize_world(doc)
    doc = deserialize_world(text)  # raises ParseError, UnsupportedVersionError, ValidationError
"""

from worldengine.core.serialization.core import (
    deserialize_world,
    fingerprint,
    migrate_document,
    serialize_world,
)
from worldengine.core.serialization.errors import (
    ParseError,
    UnsupportedVersionError,
    ValidationError,
    WorldDocumentError,
)

__all__ = [
    "serialize_world",
    "deserialize_world",
    "migrate_document",
    "fingerprint",
    "WorldDocumentError",
    "ValidationError",
    "ParseError",
    "UnsupportedVersionError",
]
