from __future__ import annotations

__version__ = '1.0.0'

from tagwalk.constants import PROGRAM_NAME
from tagwalk.cli import TagWalk, main
from tagwalk.core.models import EntryKind, InteractiveRequest, RequestOutcome
from tagwalk.core.report import ScanStats
from tagwalk.io.listing import NativeDirectoryLister, WildcardDirectoryLister, make_lister
from tagwalk.io.walker import EntryWalker
from tagwalk.parsing.cursor import ArgumentCursor, OptionState
from tagwalk.processing.environ import EnvironmentSanitizer
from tagwalk.runtime.container import EngineBuilder, EngineConfig
from tagwalk.runtime.interactive import InteractiveProtocolHandler
from tagwalk.runtime.mainloop import BatchMainLoop, MainLoopDispatcher
from tagwalk.runtime.orchestrator import Orchestrator

__all__ = [
    'PROGRAM_NAME',
    'TagWalk',
    'main',
    'EntryKind',
    'InteractiveRequest',
    'RequestOutcome',
    'ScanStats',
    'NativeDirectoryLister',
    'WildcardDirectoryLister',
    'make_lister',
    'EntryWalker',
    'ArgumentCursor',
    'OptionState',
    'EnvironmentSanitizer',
    'EngineBuilder',
    'EngineConfig',
    'InteractiveProtocolHandler',
    'BatchMainLoop',
    'MainLoopDispatcher',
    'Orchestrator',
]
