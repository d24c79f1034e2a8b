from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class TagParserProtocol(Protocol):
    """External tag-generation stage.

    Implementations are constructed with the keywords `stats` (the shared
    `ScanStats`), `options` (the option namespace) and `store` (the
    `TagStoreProtocol` opened around each scan). They write tag lines with
    `store.add_tag`, update the totals themselves, and report whether the
    store must be resized after their additions.
    """

    def parse_file(self, path: str) -> bool:
        """Parse a regular file on disk and return the resize decision."""
        ...

    def parse_buffer(self, name: str, data: bytes) -> bool:
        """Parse in-memory content presented as a virtual file called *name*."""
        ...

    def languages(self) -> Iterable[str]:
        """Names of the languages this stage recognizes."""
        ...

    def language_for(self, path: str) -> Optional[str]:
        ...
