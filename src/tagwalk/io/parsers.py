from __future__ import annotations

"""
Default parse stage.

Tag extraction itself is delegated to plug-ins (`--parser module:Class`).
The built-in stage only accounts each file in the shared statistics and
recognizes languages by file suffix, which is enough for the totals report
and for `--print-language`.
"""

import argparse
import logging
import os
import sys
from typing import Dict, Iterable, Optional, TextIO

from tagwalk.core.interfaces.parser import TagParserProtocol
from tagwalk.core.interfaces.store import TagStoreProtocol
from tagwalk.core.report import ScanStats
from tagwalk.logging.helpers import get_logger

SUFFIX_LANGUAGES: Dict[str, str] = {
    ".py": "Python",
    ".rb": "Ruby",
    ".php": "PHP",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".dart": "Dart",
    ".sh": "Sh",
    ".bash": "Sh",
    ".ps1": "PowerShell",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".cc": "C++",
    ".cxx": "C++",
    ".hpp": "C++",
    ".go": "Go",
    ".rs": "Rust",
    ".java": "Java",
    ".cs": "C#",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".scala": "Scala",
    ".yml": "Yaml",
    ".yaml": "Yaml",
    ".sql": "SQL",
    ".html": "HTML",
    ".xml": "XML",
}


def count_lines(data: bytes) -> int:
    if not data:
        return 0
    return data.count(b"\n") + (0 if data.endswith(b"\n") else 1)


class StatsOnlyTagParser(TagParserProtocol):
    def __init__(
        self,
        *,
        stats: ScanStats,
        options: Optional[argparse.Namespace] = None,
        store: Optional[TagStoreProtocol] = None,
        stdout: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._stats = stats
        self._opts = options
        # Accounting only: this stage never writes into the store.
        self._store = store
        self._stdout = stdout
        self._log = logger or get_logger("parser")

    def languages(self) -> Iterable[str]:
        return sorted(set(SUFFIX_LANGUAGES.values()))

    def language_for(self, path: str) -> Optional[str]:
        return SUFFIX_LANGUAGES.get(os.path.splitext(path)[1].lower())

    def _print_language_mode(self) -> bool:
        return bool(getattr(self._opts, "print_language", False))

    def _report_language(self, path: str) -> bool:
        lang = self.language_for(path)
        self._stats.note_language(path, lang)
        out = self._stdout or sys.stdout
        out.write(f"{path}: {lang or 'NONE'}\n")
        return False

    def _account(self, path: str, data: bytes) -> bool:
        self._stats.add_totals(1, count_lines(data), len(data))
        self._log.debug('scanned "%s" (%s, %d bytes)', path, self.language_for(path) or "unknown", len(data))
        return False

    def parse_file(self, path: str) -> bool:
        if self._print_language_mode():
            return self._report_language(path)
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            self._log.warning('cannot open input file "%s": %s', path, exc.strerror or exc)
            return False
        return self._account(path, data)

    def parse_buffer(self, name: str, data: bytes) -> bool:
        if self._print_language_mode():
            return self._report_language(name)
        return self._account(name, data)
