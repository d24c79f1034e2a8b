from __future__ import annotations

"""
Running totals and phase timings for one tagwalk invocation.

`ScanStats` replaces process-wide counters: a single owner creates it and
hands it by reference to the parse stage, which is the only writer of the
file/line/byte totals.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO


def _plural(value: int) -> str:
    return '' if value == 1 else 's'


@dataclass
class ScanStats:
    files: int = 0
    lines: int = 0
    bytes: int = 0

    # Language diagnostics collected in print-language mode.
    languages: Dict[str, str] = field(default_factory=dict)
    unknown_language: List[str] = field(default_factory=list)

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {'scan': 0.0, 'finalize': 0.0}
    )

    def add_totals(self, files: int, lines: int, nbytes: int) -> None:
        if files < 0 or lines < 0 or nbytes < 0:
            raise ValueError('totals never decrease')
        self.files += files
        self.lines += lines
        self.bytes += nbytes

    def note_language(self, path: str, language: Optional[str]) -> None:
        if language:
            self.languages[path] = language
        else:
            self.unknown_language.append(path)

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds


@dataclass
class StageClock:
    """Three timestamps around a batch run: start, after scan, after finalize."""
    stamps: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])

    def mark(self, index: int) -> None:
        self.stamps[index] = time.perf_counter()

    @property
    def scan_seconds(self) -> float:
        return max(self.stamps[1] - self.stamps[0], 0.0)

    @property
    def finalize_seconds(self) -> float:
        return max(self.stamps[2] - self.stamps[1], 0.0)

    def commit(self, stats: ScanStats) -> None:
        stats.add_time('scan', self.scan_seconds)
        stats.add_time('finalize', self.finalize_seconds)


class StageTimer:
    def __init__(self, stats: ScanStats, stage: str):
        self._stats = stats
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._stats.add_time(self._stage, time.perf_counter() - self._t0)
        return False


def print_totals(
    stats: ScanStats,
    clock: StageClock,
    stream: TextIO,
    *,
    tags_added: int = 0,
    tags_total: int = 0,
    append: bool = False,
    sorted_output: bool = True,
) -> None:
    """Write the human-readable totals report."""
    kb = stats.bytes // 1024
    line = (
        f'{stats.files} file{_plural(stats.files)}, '
        f'{stats.lines} line{_plural(stats.lines)} ({kb} kB) scanned'
    )
    interval = clock.scan_seconds
    line += f' in {interval:.1f} seconds'
    if interval != 0.0:
        line += f' ({int(stats.bytes / interval) // 1024} kB/s)'
    print(line, file=stream)

    added = f'{tags_added} tag{_plural(tags_added)} added to tag file'
    if append:
        added += f' (now {tags_total} tags)'
    print(added, file=stream)

    if tags_total > 0 and sorted_output:
        print(
            f'{tags_total} tag{_plural(tags_total)} sorted in {clock.finalize_seconds:.2f} seconds',
            file=stream,
        )
