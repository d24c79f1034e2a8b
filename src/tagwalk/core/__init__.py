from __future__ import annotations

"""Public surface for tagwalk.core.

Stable import location for the data model, the statistics aggregator and
the collaborator Protocols:

    from tagwalk.core import EntryKind, ScanStats, TagParserProtocol, ...
"""

from tagwalk.core.models import (
    EntryKind,
    EntryStatus,
    InteractiveRequest,
    RequestOutcome,
)
from tagwalk.core.report import ScanStats, StageClock, StageTimer, print_totals
from tagwalk.core.interfaces import (
    DirectoryListerProtocol,
    EntryWalkerProtocol,
    MainLoopProtocol,
    TagParserProtocol,
    TagStoreProtocol,
)

__all__ = [
    "EntryKind",
    "EntryStatus",
    "InteractiveRequest",
    "RequestOutcome",
    "ScanStats",
    "StageClock",
    "StageTimer",
    "print_totals",
    "DirectoryListerProtocol",
    "EntryWalkerProtocol",
    "MainLoopProtocol",
    "TagParserProtocol",
    "TagStoreProtocol",
]
