from __future__ import annotations

"""
Directory listing capability with two interchangeable implementations.

    NativeDirectoryLister    – os.scandir based iteration.
    WildcardDirectoryLister  – glob expansion of "<dir>/*" (plus dotfiles),
                               the fallback for hosts without directory
                               iteration; it also expands wildcard arguments.

Callers depend on DirectoryListerProtocol only; `make_lister` picks the
implementation from configuration.
"""

import glob
import logging
import os
from typing import Dict, Iterable, List, Optional, Type

from tagwalk.core.interfaces.fs import DirectoryListerProtocol
from tagwalk.logging.helpers import get_logger
from tagwalk.utils.paths import combine_path_and_file, has_glob_magic

PSEUDO_ENTRIES = frozenset({".", ".."})


def without_pseudo_entries(names: Iterable[str]) -> List[str]:
    """Drop the self and parent entries some listings report."""
    return [n for n in names if n not in PSEUDO_ENTRIES]


class NativeDirectoryLister(DirectoryListerProtocol):
    name = "native"

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger("io.listing")

    def list_children(self, dir_name: str) -> List[str]:
        with os.scandir(dir_name) as it:
            return [entry.name for entry in it]


class WildcardDirectoryLister(DirectoryListerProtocol):
    name = "wildcard"

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger("io.listing")

    @staticmethod
    def patterns_for(dir_name: str) -> List[str]:
        base = glob.escape(dir_name)
        return [os.path.join(base, "*"), os.path.join(base, ".*")]

    def list_children(self, dir_name: str) -> List[str]:
        if not os.path.isdir(dir_name):
            raise NotADirectoryError(dir_name)
        if not os.access(dir_name, os.R_OK | os.X_OK):
            raise PermissionError(f"Permission denied: '{dir_name}'")
        names: Dict[str, None] = {}
        for pattern in self.patterns_for(dir_name):
            for match in glob.iglob(pattern):
                names.setdefault(os.path.basename(match), None)
        return list(names)

    def expand_argument(self, arg: str, *, recurse: bool) -> List[str]:
        """Expand a command-line pattern into concrete entry names.

        "." and ".." expand to their children when recursing so their contents are
        scanned. Arguments without wildcards are returned untouched, so that
        a missing file is still reported by the classifier.
        """
        if recurse and arg in PSEUDO_ENTRIES:
            names = sorted(without_pseudo_entries(self.list_children(arg)))
            return [combine_path_and_file(arg, n) for n in names]
        if not has_glob_magic(arg):
            return [arg]
        matches = sorted(glob.glob(arg))
        if not matches:
            self._log.debug('no match for pattern "%s"', arg)
        return [m for m in matches if os.path.basename(m) not in PSEUDO_ENTRIES]


_LISTERS: Dict[str, Type[DirectoryListerProtocol]] = {
    NativeDirectoryLister.name: NativeDirectoryLister,
    WildcardDirectoryLister.name: WildcardDirectoryLister,
}


def make_lister(name: Optional[str] = None, *, logger: Optional[logging.Logger] = None) -> DirectoryListerProtocol:
    """Build the lister selected by *name*, $TAGWALK_LISTING, or the native default."""
    key = (name or os.getenv("TAGWALK_LISTING") or NativeDirectoryLister.name).strip().lower()
    cls = _LISTERS.get(key)
    if cls is None:
        (logger or get_logger("io.listing")).warning(
            'unknown listing strategy "%s"; using native iteration', key
        )
        cls = NativeDirectoryLister
    return cls(logger=logger)
