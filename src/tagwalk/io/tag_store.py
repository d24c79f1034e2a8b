from __future__ import annotations

"""
Default tag store: a plain line-oriented tag file.

The store is opened before a scan and finalized with the run's resize
decision. A resize rewrites the file through a temporary sibling so that a
reader never observes a half-written layout.
"""

import argparse
import logging
import os
import sys
import tempfile
from typing import Optional, TextIO

from tagwalk.constants import DEFAULT_TAG_FILE, STDOUT_DESTINATIONS
from tagwalk.core.interfaces.store import TagStoreProtocol
from tagwalk.logging.helpers import get_logger


def is_destination_stdout(ns: argparse.Namespace) -> bool:
    """Return True when tags must go to standard output instead of a file."""
    if getattr(ns, "filter", False) or getattr(ns, "interactive", False):
        return True
    return (getattr(ns, "tag_file", None) or DEFAULT_TAG_FILE) in STDOUT_DESTINATIONS


class TagFileStore(TagStoreProtocol):
    def __init__(
        self,
        *,
        path: str = DEFAULT_TAG_FILE,
        append: bool = False,
        to_stdout: bool = False,
        stdout: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._path = path
        self._append = append
        self._to_stdout = to_stdout or path in STDOUT_DESTINATIONS
        self._stdout = stdout
        self._log = logger or get_logger("store")
        self._fh: Optional[TextIO] = None
        self._added = 0
        self._existing = 0

    @classmethod
    def from_options(cls, ns: argparse.Namespace, *, stdout: Optional[TextIO] = None,
                     logger: Optional[logging.Logger] = None) -> "TagFileStore":
        return cls(
            path=getattr(ns, "tag_file", None) or DEFAULT_TAG_FILE,
            append=bool(getattr(ns, "append", False)),
            to_stdout=is_destination_stdout(ns),
            stdout=stdout,
            logger=logger,
        )

    @property
    def tags_added(self) -> int:
        return self._added

    @property
    def tags_total(self) -> int:
        return self._existing + self._added

    def _count_existing(self) -> int:
        try:
            with open(self._path, "r", encoding="utf-8", errors="replace") as fh:
                return sum(1 for ln in fh if ln.strip() and not ln.startswith("!_"))
        except FileNotFoundError:
            return 0

    def open(self) -> None:
        if self._fh is not None:
            return
        self._added = 0
        if self._to_stdout:
            self._existing = 0
            self._fh = self._stdout or sys.stdout
            return
        self._existing = self._count_existing() if self._append else 0
        self._fh = open(self._path, "a" if self._append else "w", encoding="utf-8")
        self._log.debug('opened tag file "%s" (%s)', self._path, "append" if self._append else "create")

    def add_tag(self, line: str) -> None:
        if self._fh is None:
            raise RuntimeError("tag store is not open")
        self._fh.write(line if line.endswith("\n") else line + "\n")
        self._added += 1

    def close(self, resize: bool) -> None:
        fh, self._fh = self._fh, None
        if fh is None:
            return
        if self._to_stdout:
            fh.flush()
            return
        fh.close()
        if resize:
            self._rewrite()

    def _rewrite(self) -> None:
        self._log.debug('rewriting tag file "%s"', self._path)
        directory = os.path.dirname(os.path.abspath(self._path))
        with open(self._path, "r", encoding="utf-8") as src:
            lines = src.readlines()
        fd, tmp = tempfile.mkstemp(prefix=".tags-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as dst:
                dst.writelines(lines)
            os.replace(tmp, self._path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
