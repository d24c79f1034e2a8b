from __future__ import annotations

"""
ArgumentCursor – forward-only stream over "cooked" command-line items.

A cursor is built either from argv-like tokens or from a line-oriented file
(list file, filter input). In the latter case every non-blank line is one
token and lines are pulled lazily, so a filter pipeline gets an answer for
each file name before the next one is written.

Options may appear between positional items. `OptionState.consume` strips
the option run at the cursor and re-parses it into the shared namespace
before the next positional item is inspected.
"""

import argparse
from typing import Callable, Iterable, Iterator, List, Optional, Set, TextIO

from tagwalk.logging.helpers import get_logger
from tagwalk.parsing.attr_sets import _STARTUP_ONLY_ATTRS, _VALUE_FLAGS, takes_separate_value
from tagwalk.parsing.parser import _build_parser, post_parse

logger = get_logger("cursor")

_END_OF_OPTIONS = "--"


def _iter_line_tokens(stream: TextIO) -> Iterator[str]:
    for raw in iter(stream.readline, ""):
        tok = raw.strip()
        if tok:
            yield tok


class ArgumentCursor:
    def __init__(self, tokens: Iterable[str], *, source: str = "<argv>") -> None:
        self._it: Iterator[str] = iter(tokens)
        self._current: Optional[str] = None
        self._off = False
        self._options_closed = False
        self.source = source
        self._advance()

    @classmethod
    def from_argv(cls, argv: Iterable[str]) -> "ArgumentCursor":
        return cls(list(argv), source="<argv>")

    @classmethod
    def from_line_file(cls, stream: TextIO, *, source: str = "<list>") -> "ArgumentCursor":
        return cls(_iter_line_tokens(stream), source=source)

    def _advance(self) -> None:
        try:
            self._current = next(self._it)
        except StopIteration:
            self._current = None
            self._off = True

    def is_off(self) -> bool:
        return self._off

    @property
    def item(self) -> str:
        if self._off or self._current is None:
            raise IndexError(f"cursor over {self.source} is exhausted")
        return self._current

    def forth(self) -> None:
        if not self._off:
            self._advance()

    def is_option(self) -> bool:
        """Return True if the current item starts an option run."""
        if self._off or self._options_closed:
            return False
        tok = self._current or ""
        return tok.startswith("-") and tok != "-"

    def take_option_run(self, value_flags: Set[str] = _VALUE_FLAGS) -> List[str]:
        """Consume consecutive option tokens (and their values) at the cursor."""
        run: List[str] = []
        while self.is_option():
            tok = self.item
            self.forth()
            if tok == _END_OF_OPTIONS:
                self._options_closed = True
                break
            run.append(tok)
            if takes_separate_value(tok, value_flags) and not self._off:
                run.append(self.item)
                self.forth()
        return run


class OptionState:
    """Shared, mutable option namespace plus the parser that feeds it.

    Every component reads options through the same namespace object, so a
    re-parse between two positional items is visible to the next dispatch.
    """

    def __init__(
        self,
        *,
        parser_factory: Callable[[], argparse.ArgumentParser] = _build_parser,
        namespace: Optional[argparse.Namespace] = None,
    ) -> None:
        self._parser = parser_factory()
        self.ns = namespace if namespace is not None else self._parser.parse_args([])
        post_parse(self.ns)
        self._frozen = False

    def apply(self, tokens: List[str]) -> argparse.Namespace:
        if not tokens:
            return self.ns
        before = {k: getattr(self.ns, k, None) for k in _STARTUP_ONLY_ATTRS}
        self._parser.parse_args(tokens, namespace=self.ns)
        if self._frozen:
            for key, old in before.items():
                if getattr(self.ns, key, None) != old:
                    logger.warning('option "%s" is only honored at startup; ignored', key.replace("_", "-"))
                    setattr(self.ns, key, old)
        post_parse(self.ns)
        return self.ns

    def freeze(self) -> None:
        """Mark startup parsing as done; main-loop selectors become read-only."""
        self._frozen = True

    def consume(self, cursor: ArgumentCursor) -> argparse.Namespace:
        """Parse the option run at *cursor*, leaving it on the next positional item."""
        return self.apply(cursor.take_option_run())
