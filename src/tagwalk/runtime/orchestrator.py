from __future__ import annotations

"""
Orchestrator – drive every input source through the entry walker.

Each entry protocol returns the OR-fold of the per-entry resize decisions:

    create_tags_for_args         positional arguments (argv cursor)
    create_tags_from_file_input  an open line stream (list file or filter input)
    create_tags_from_list_file   a named list file, '-' selecting stdin
"""

import logging
import sys
from typing import Callable, List, Optional, TextIO

from tagwalk.constants import STDIN_SENTINEL
from tagwalk.core.interfaces.walker import EntryWalkerProtocol
from tagwalk.logging.helpers import get_logger
from tagwalk.parsing.cursor import ArgumentCursor, OptionState


class Orchestrator:
    def __init__(
        self,
        *,
        walker: EntryWalkerProtocol,
        options: OptionState,
        fatal: Callable[[str], None],
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._walker = walker
        self._options = options
        self._fatal = fatal
        self._stdin = stdin
        self._stdout = stdout
        self._log = logger or get_logger('orchestrator')

    @property
    def ns(self):
        return self._options.ns

    def has_sources(self, cursor: ArgumentCursor) -> bool:
        return (not cursor.is_off()) or bool(self.ns.list_file) or bool(self.ns.filter)

    def _expand_argument(self, arg: str) -> List[str]:
        expand = getattr(self._walker, 'lister', None)
        expand = getattr(expand, 'expand_argument', None)
        if expand is None:
            return [arg]
        try:
            return expand(arg, recurse=bool(self.ns.recurse))
        except OSError as exc:
            self._log.warning('cannot expand "%s": %s', arg, exc.strerror or exc)
            return []

    def create_tags_for_args(self, cursor: ArgumentCursor) -> bool:
        resize = False
        while not cursor.is_off():
            for entry in self._expand_argument(cursor.item):
                resize = self._walker.create_tags_for_entry(entry) or resize
            cursor.forth()
            self._options.consume(cursor)
        return resize

    def create_tags_from_file_input(self, stream: TextIO, *, filter: bool = False) -> bool:
        resize = False
        cursor = ArgumentCursor.from_line_file(stream, source=getattr(stream, 'name', '<list>'))
        self._options.consume(cursor)
        while not cursor.is_off():
            resize = self._walker.create_tags_for_entry(cursor.item) or resize
            if filter:
                out = self._stdout or sys.stdout
                terminator = self.ns.filter_terminator
                if terminator is not None:
                    out.write(terminator)
                out.flush()
            cursor.forth()
            self._options.consume(cursor)
        return resize

    def create_tags_from_list_file(self, file_name: str) -> bool:
        if file_name == STDIN_SENTINEL:
            return self.create_tags_from_file_input(self._stdin or sys.stdin, filter=False)
        try:
            fh = open(file_name, 'r', encoding='utf-8', errors='surrogateescape')
        except OSError as exc:
            self._fatal(f'cannot open list file "{file_name}": {exc.strerror or exc}')
            return False
        with fh:
            return self.create_tags_from_file_input(fh, filter=False)

    def run(self, cursor: ArgumentCursor) -> bool:
        """Process every configured source in batch order."""
        files = self.has_sources(cursor)
        resize = False
        if not cursor.is_off():
            self._log.debug('Reading command line arguments')
            resize = self.create_tags_for_args(cursor) or resize
        if self.ns.list_file:
            self._log.debug('Reading list file')
            resize = self.create_tags_from_list_file(self.ns.list_file) or resize
        if self.ns.filter:
            self._log.debug('Reading filter input')
            resize = self.create_tags_from_file_input(self._stdin or sys.stdin, filter=True) or resize
        if not files and self.ns.recurse:
            resize = self._walker.recurse_into_directory('.') or resize
        return resize
