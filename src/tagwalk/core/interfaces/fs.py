from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class DirectoryListerProtocol(Protocol):
    """Capability that lists the immediate children of one directory.

    Implementations return bare child names. They may or may not include the
    `.` and `..` pseudo-entries; callers filter them out. Failures to open the
    directory are raised as `OSError`.
    """

    name: str

    def list_children(self, dir_name: str) -> Iterable[str]:
        ...
