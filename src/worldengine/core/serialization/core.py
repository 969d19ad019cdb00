"""Serializer: validated, versioned JSON encoding of world documents.

The wire form is the document record verbatim, pretty-printed, with a
top-level ``version`` stamped to ``CURRENT_WORLD_SCHEMA_VERSION``. Input
without a ``version`` is treated as version 0, the oldest unversioned form.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from worldengine.core.document.models import CURRENT_WORLD_SCHEMA_VERSION, WorldDocument
from worldengine.core.serialization.errors import (
    ParseError,
    UnsupportedVersionError,
    ValidationError,
)
from worldengine.core.validation import validate_world_document

UNVERSIONED = 0
"""Version assumed for wire input that carries no ``version`` field."""

Migration = Callable[[dict[str, Any]], dict[str, Any]]

# Rewrites keyed by the version they upgrade *from*; a version with no entry
# is structurally identical to the next one.
_MIGRATIONS: dict[int, Migration] = {}


def migrate_document(document: dict[str, Any], from_version: int) -> dict[str, Any]:
    """Upgrade a parsed document to the current schema version.

    Applies each registered migration from ``from_version`` upward and stamps
    the result with the current version. Versions 0 and 1 share one layout,
    so today this only restamps.

    Args:
        document: Parsed document body.
        from_version: Version the body was written at.

    Returns:
        New document dict at ``CURRENT_WORLD_SCHEMA_VERSION``.
    """
    migrated = document
    for version in range(from_version, CURRENT_WORLD_SCHEMA_VERSION):
        step = _MIGRATIONS.get(version)
        if step is not None:
            migrated = step(migrated)
    return {**migrated, "version": CURRENT_WORLD_SCHEMA_VERSION}


def serialize_world(world: WorldDocument, indent: int | None = 2) -> str:
    """Encode a document as wire text.

    Args:
        world: Document to encode. Its ``version`` is ignored and overwritten.
        indent: JSON indentation; the wire format is pretty-printed by default.

    Returns:
        JSON text of the document at the current schema version.

    Raises:
        ValidationError: If the document fails validation or cannot be encoded.
    """
    validation = validate_world_document(world)
    if not validation.valid:
        raise ValidationError(validation.errors)
    try:
        return json.dumps(
            {**world, "version": CURRENT_WORLD_SCHEMA_VERSION},
            indent=indent,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise ValidationError([f"World document cannot be encoded: {e}"]) from e


def _read_version(parsed: Any) -> int:
    if not isinstance(parsed, dict) or "version" not in parsed:
        return UNVERSIONED
    version = parsed["version"]
    if isinstance(version, bool) or not isinstance(version, int) or version < 0:
        raise ValidationError(["version must be a non-negative integer when present"])
    return version


def deserialize_world(serialized: str | bytes) -> WorldDocument:
    """Decode and validate wire text.

    The version gate runs before field validation, so a document from a newer
    schema is rejected without being inspected.

    Args:
        serialized: JSON wire text.

    Returns:
        Validated document stamped at the current schema version.

    Raises:
        ParseError: If the text is not valid JSON.
        UnsupportedVersionError: If the declared version is newer than supported.
        ValidationError: If the version field or the document body is invalid.
    """
    try:
        parsed = json.loads(serialized)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"World document is not valid JSON: {e}") from e

    version = _read_version(parsed)
    if version > CURRENT_WORLD_SCHEMA_VERSION:
        raise UnsupportedVersionError(version, CURRENT_WORLD_SCHEMA_VERSION)

    validation = validate_world_document(parsed)
    if not validation.valid:
        raise ValidationError(validation.errors)
    return migrate_document(parsed, version)  # type: ignore[return-value]


def fingerprint(text: str) -> str:
    """Order-dependent, non-cryptographic hash of wire text.

    Rolling ``h = (h << 5) - h + unit`` over UTF-16 code units, wrapped to a
    signed 32-bit integer, reported as the absolute value in lowercase hex.
    Meant for showing users whether an export changed, not for integrity.
    """
    encoded = text.encode("utf-16-le")
    value = 0
    for offset in range(0, len(encoded), 2):
        unit = encoded[offset] | (encoded[offset + 1] << 8)
        value = ((value << 5) - value + unit + 0x80000000) % 0x100000000 - 0x80000000
    return format(abs(value), "x")
