from __future__ import annotations

import logging
from typing import Optional, TextIO

from tagwalk.logging.helpers import get_logger, setup_base_logger


class DefaultLoggerFactory:
    """Apply one logging configuration to the tagwalk tree, then hand out loggers.

    Configuration happens on the first `get_logger` call; `-V/--verbose`
    may lower the level afterwards through the option parser.
    """

    def __init__(self, *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
        self.json_logs = bool(json_logs)
        self.level = int(level)
        self._stream = stream
        self._base: Optional[logging.Logger] = None

    @property
    def base(self) -> logging.Logger:
        if self._base is None:
            self._base = setup_base_logger(json_logs=self.json_logs, level=self.level, stream=self._stream)
        return self._base

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        base = self.base
        return get_logger(name) if name else base
