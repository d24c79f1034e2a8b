from __future__ import annotations

import argparse
import logging
from typing import Optional

from tagwalk.core.interfaces.fs import DirectoryListerProtocol
from tagwalk.core.interfaces.parser import TagParserProtocol
from tagwalk.core.interfaces.walker import EntryWalkerProtocol
from tagwalk.core.models import EntryKind, EntryStatus
from tagwalk.io.listing import NativeDirectoryLister, without_pseudo_entries
from tagwalk.io.status import stat_entry
from tagwalk.logging.helpers import get_logger
from tagwalk.utils.paths import combine_path_and_file, is_excluded, is_recursive_link


class EntryWalker(EntryWalkerProtocol):
    """Classify input paths and expand directories into parse-stage calls.

    Options are read from the shared namespace on every decision, so an
    option re-parsed between two arguments affects the entries that follow.
    Recursion depth is passed explicitly: `depth` is the number of directory
    levels already entered above the entry (0 for a command-line argument).
    """

    def __init__(
        self,
        *,
        options: argparse.Namespace,
        parser: TagParserProtocol,
        lister: Optional[DirectoryListerProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._opts = options
        self._parser = parser
        self._lister = lister or NativeDirectoryLister()
        self._log = logger or get_logger('walker')

    @property
    def lister(self) -> DirectoryListerProtocol:
        return self._lister

    def _kind_of(self, path: str, status: EntryStatus) -> EntryKind:
        if is_excluded(path, getattr(self._opts, 'exclude', None) or ()):
            return EntryKind.EXCLUDED
        if status.is_symbolic_link and not getattr(self._opts, 'follow_links', True):
            return EntryKind.SYMLINK
        if not status.exists:
            return EntryKind.MISSING
        if status.is_directory:
            return EntryKind.DIRECTORY
        if not status.is_normal_file:
            return EntryKind.SPECIAL
        return EntryKind.REGULAR

    def classify(self, path: str) -> EntryKind:
        return self._kind_of(path, stat_entry(path))

    def create_tags_for_entry(self, path: str, depth: int = 0) -> bool:
        kind = self._kind_of(path, stat_entry(path))

        if kind is EntryKind.EXCLUDED:
            self._log.debug('excluding "%s"', path)
        elif kind is EntryKind.SYMLINK:
            self._log.debug('ignoring "%s" (symbolic link)', path)
        elif kind is EntryKind.MISSING:
            self._log.warning('cannot open input file "%s"', path)
        elif kind is EntryKind.DIRECTORY:
            return self.recurse_into_directory(path, depth + 1)
        elif kind is EntryKind.SPECIAL:
            self._log.debug('ignoring "%s" (special file)', path)
        else:
            return bool(self._parser.parse_file(path))
        return False

    def recurse_into_directory(self, dir_name: str, depth: int = 1) -> bool:
        """Expand *dir_name*, which sits at recursion level *depth* (1 = top level)."""
        max_depth = getattr(self._opts, 'max_depth', None)

        if is_recursive_link(dir_name):
            self._log.debug('ignoring "%s" (recursive link)', dir_name)
            return False
        if not getattr(self._opts, 'recurse', False):
            self._log.debug('ignoring "%s" (directory)', dir_name)
            return False
        if max_depth is not None and depth > max_depth:
            self._log.debug(
                'not descending in directory "%s" (depth %d > %d)', dir_name, depth, max_depth
            )
            return False

        self._log.debug('RECURSING into directory "%s"', dir_name)
        try:
            children = without_pseudo_entries(self._lister.list_children(dir_name))
        except OSError as exc:
            self._log.warning('cannot recurse into directory "%s": %s', dir_name, exc.strerror or exc)
            return False

        resize = False
        for name in sorted(children):
            child = combine_path_and_file(dir_name, name)
            resize = self.create_tags_for_entry(child, depth) or resize
        return resize
