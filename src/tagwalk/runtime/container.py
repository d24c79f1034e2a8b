from __future__ import annotations
import argparse
import io
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, TextIO

from tagwalk.core.interfaces.fs import DirectoryListerProtocol
from tagwalk.core.interfaces.parser import TagParserProtocol
from tagwalk.core.interfaces.store import TagStoreProtocol
from tagwalk.core.report import ScanStats
from tagwalk.io.listing import make_lister
from tagwalk.io.parsers import StatsOnlyTagParser
from tagwalk.io.tag_store import TagFileStore
from tagwalk.io.walker import EntryWalker
from tagwalk.parsing.cursor import OptionState
from tagwalk.runtime.interactive import InteractiveMainLoop, InteractiveProtocolHandler
from tagwalk.runtime.mainloop import BatchMainLoop, MainLoopDispatcher
from tagwalk.runtime.orchestrator import Orchestrator
from tagwalk.utils.imports import build_from_ref

ParserFactory = Callable[..., TagParserProtocol]
StoreFactory = Callable[[argparse.Namespace], TagStoreProtocol]


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration blob used to seed the EngineBuilder."""
    logger: logging.Logger
    fatal: Callable[[str], None]
    stdin: TextIO
    stdout: TextIO
    stderr: TextIO
    version: str

    # Optional overrides / DI hooks
    parser_factory: Optional[ParserFactory] = None
    store_factory: Optional[StoreFactory] = None
    lister: Optional[DirectoryListerProtocol] = None
    interactive_on_error: Optional[Callable[[str], None]] = None


@dataclass
class Engine:
    """Everything one invocation needs, already wired together."""
    options: OptionState
    stats: ScanStats
    parser: TagParserProtocol
    store: TagStoreProtocol
    walker: EntryWalker
    orchestrator: Orchestrator
    dispatcher: MainLoopDispatcher


@dataclass
class EngineBuilder:
    """Composable builder that wires collaborators into an Engine."""
    logger: logging.Logger
    fatal: Callable[[str], None]
    stdin: TextIO
    stdout: TextIO
    stderr: TextIO
    version: str
    parser_factory: Optional[ParserFactory] = None
    store_factory: Optional[StoreFactory] = None
    lister: Optional[DirectoryListerProtocol] = None
    interactive_on_error: Optional[Callable[[str], None]] = None

    @classmethod
    def from_config(cls, cfg: EngineConfig) -> 'EngineBuilder':
        """Build a new EngineBuilder from a single EngineConfig."""
        return cls(
            logger=cfg.logger,
            fatal=cfg.fatal,
            stdin=cfg.stdin,
            stdout=cfg.stdout,
            stderr=cfg.stderr,
            version=cfg.version,
            parser_factory=cfg.parser_factory,
            store_factory=cfg.store_factory,
            lister=cfg.lister,
            interactive_on_error=cfg.interactive_on_error,
        )

    def _binary_stdin(self) -> BinaryIO:
        """Return the byte stream under stdin; interactive sizes count bytes."""
        buffer = getattr(self.stdin, 'buffer', None)
        if buffer is not None:
            return buffer
        if isinstance(self.stdin, io.TextIOBase):
            raise TypeError(
                f'interactive mode needs a byte stream; {type(self.stdin).__name__} has no .buffer'
            )
        return self.stdin  # type: ignore[return-value]

    def _make_parser(
        self, ns: argparse.Namespace, stats: ScanStats, store: TagStoreProtocol
    ) -> TagParserProtocol:
        """Resolve the parse stage: explicit factory, plug-in reference, then default."""
        if self.parser_factory is not None:
            return self.parser_factory(stats=stats, options=ns, store=store)
        ref = (getattr(ns, 'parser_ref', None) or os.getenv('TAGWALK_PARSER') or '').strip()
        if ref and ref.lower() != 'none':
            try:
                return build_from_ref(ref, stats=stats, options=ns, store=store)
            except Exception as exc:
                self.logger.warning('failed to load parser %r: %s; falling back to the built-in parser', ref, exc)
        return StatsOnlyTagParser(stats=stats, options=ns, store=store, stdout=self.stdout)

    def _make_store(self, ns: argparse.Namespace) -> TagStoreProtocol:
        if self.store_factory is not None:
            return self.store_factory(ns)
        return TagFileStore.from_options(ns, stdout=self.stdout)

    def build(self, options: OptionState) -> Engine:
        """Materialize an Engine for the (already parsed) startup options."""
        ns = options.ns
        stats = ScanStats()
        store = self._make_store(ns)
        parser = self._make_parser(ns, stats, store)
        lister = self.lister or make_lister(getattr(ns, 'listing', None), logger=self.logger)

        walker = EntryWalker(options=ns, parser=parser, lister=lister)
        orchestrator = Orchestrator(
            walker=walker,
            options=options,
            fatal=self.fatal,
            stdin=self.stdin,
            stdout=self.stdout,
        )

        def _batch() -> BatchMainLoop:
            return BatchMainLoop(
                orchestrator=orchestrator,
                store=store,
                stats=stats,
                fatal=self.fatal,
                stderr=self.stderr,
            )

        def _interactive() -> InteractiveMainLoop:
            handler = InteractiveProtocolHandler(
                walker=walker,
                parser=parser,
                store=store,
                stdin=self._binary_stdin(),
                stdout=self.stdout,
                stats=stats,
                version=self.version,
            )
            return InteractiveMainLoop(handler=handler, on_error=self.interactive_on_error or self.fatal)

        dispatcher = MainLoopDispatcher(batch=_batch, interactive=_interactive)
        return Engine(
            options=options,
            stats=stats,
            parser=parser,
            store=store,
            walker=walker,
            orchestrator=orchestrator,
            dispatcher=dispatcher,
        )
