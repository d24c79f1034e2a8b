from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TagStoreProtocol(Protocol):
    """Tag-store writer: opened before a scan, finalized after it."""

    @property
    def tags_added(self) -> int:
        ...

    @property
    def tags_total(self) -> int:
        ...

    def open(self) -> None:
        ...

    def add_tag(self, line: str) -> None:
        ...

    def close(self, resize: bool) -> None:
        """Finalize the store; *resize* requests a rewrite of its layout."""
        ...
