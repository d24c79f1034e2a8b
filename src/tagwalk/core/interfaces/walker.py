from __future__ import annotations

from typing import Protocol, runtime_checkable

from tagwalk.core.models import EntryKind


@runtime_checkable
class EntryWalkerProtocol(Protocol):
    """Classifies paths and expands directories into dispatched entries."""

    def classify(self, path: str) -> EntryKind:
        ...

    def create_tags_for_entry(self, path: str, depth: int = 0) -> bool:
        """Classify *path*, found *depth* levels deep, and dispatch it.

        Returns the resize decision.
        """
        ...

    def recurse_into_directory(self, dir_name: str, depth: int = 1) -> bool:
        """Expand *dir_name*, which sits at recursion level *depth*.

        Returns the resize decision.
        """
        ...
