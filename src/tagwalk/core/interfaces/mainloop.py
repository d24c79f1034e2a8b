from __future__ import annotations

from typing import Protocol, runtime_checkable

from tagwalk.parsing.cursor import ArgumentCursor


@runtime_checkable
class MainLoopProtocol(Protocol):
    """One terminal behavior of the process (batch or interactive)."""

    name: str

    def run(self, cursor: ArgumentCursor) -> int:
        """Run to completion and return the process exit status."""
        ...
