"""Validation result and traversal context."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a world document.

    Errors are collected exhaustively, one per violation, each prefixed with
    the dotted/bracketed path of the offending value.
    """

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class NodeContext:
    """State shared across one recursive descent of the node forest.

    ``seen_ids`` is a single flat namespace for the whole forest, so a
    duplicate is reported wherever its second occurrence is, even between
    unrelated subtrees.
    """

    asset_ids: frozenset[str] = frozenset()
    seen_ids: set[str] = field(default_factory=set)
