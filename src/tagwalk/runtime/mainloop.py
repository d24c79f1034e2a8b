from __future__ import annotations

"""
Main-loop selection.

A run has exactly one terminal behavior, chosen once from the startup
options: batch scanning (default) or the interactive JSON protocol.
"""

import argparse
import logging
import sys
from typing import Callable, Optional, TextIO

from tagwalk.constants import PROGRAM_NAME
from tagwalk.core.interfaces.mainloop import MainLoopProtocol
from tagwalk.core.interfaces.store import TagStoreProtocol
from tagwalk.core.report import ScanStats, StageClock, print_totals
from tagwalk.logging.helpers import get_logger
from tagwalk.parsing.attr_sets import _PRINT_ONLY_ATTRS
from tagwalk.parsing.cursor import ArgumentCursor
from tagwalk.runtime.orchestrator import Orchestrator


def files_required(ns: argparse.Namespace) -> bool:
    """Return True if a batch run without any input source is an error."""
    if getattr(ns, 'recurse', False):
        return False
    return not any(getattr(ns, attr, False) for attr in _PRINT_ONLY_ATTRS)


class BatchMainLoop(MainLoopProtocol):
    name = 'batch'

    def __init__(
        self,
        *,
        orchestrator: Orchestrator,
        store: TagStoreProtocol,
        stats: ScanStats,
        fatal: Callable[[str], None],
        stderr: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._orch = orchestrator
        self._store = store
        self._stats = stats
        self._fatal = fatal
        self._stderr = stderr
        self._log = logger or get_logger('mainloop')
        self.clock = StageClock()
        self.resize: Optional[bool] = None

    def _uses_store(self, ns: argparse.Namespace) -> bool:
        return not ns.filter and not ns.print_language

    def exit_status(self, ns: argparse.Namespace) -> int:
        if ns.print_language:
            return 1 if self._stats.unknown_language else 0
        return 0

    def run(self, cursor: ArgumentCursor) -> int:
        ns = self._orch.ns
        files = self._orch.has_sources(cursor)

        if not files:
            if files_required(ns):
                self._fatal(f'No files specified. Try "{PROGRAM_NAME} --help".')
                return 1
            if not ns.recurse:
                return 0

        uses_store = self._uses_store(ns)
        if uses_store:
            try:
                self._store.open()
            except OSError as exc:
                self._fatal(f'cannot open tag file: {exc}')
                return 1

        self.clock.mark(0)
        resize = self._orch.run(cursor)
        self.clock.mark(1)

        if uses_store:
            self._store.close(resize)
        self.clock.mark(2)
        self.clock.commit(self._stats)
        self.resize = resize
        self._log.debug('batch finished (resize=%s)', resize)

        if ns.print_totals:
            print_totals(
                self._stats,
                self.clock,
                self._stderr or sys.stderr,
                tags_added=self._store.tags_added,
                tags_total=self._store.tags_total,
                append=bool(ns.append),
                sorted_output=bool(ns.sorted),
            )
        return self.exit_status(ns)


class MainLoopDispatcher:
    """Select the batch or interactive loop once per process and run it."""

    def __init__(
        self,
        *,
        batch: Callable[[], MainLoopProtocol],
        interactive: Callable[[], MainLoopProtocol],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._factories = {'batch': batch, 'interactive': interactive}
        self._selected: Optional[MainLoopProtocol] = None
        self._log = logger or get_logger('mainloop')

    @property
    def selected(self) -> Optional[MainLoopProtocol]:
        return self._selected

    def select(self, ns: argparse.Namespace) -> MainLoopProtocol:
        if self._selected is None:
            key = 'interactive' if getattr(ns, 'interactive', False) else 'batch'
            self._selected = self._factories[key]()
            self._log.debug('main loop: %s', key)
        return self._selected

    def run(self, ns: argparse.Namespace, cursor: ArgumentCursor) -> int:
        return self.select(ns).run(cursor)
