from __future__ import annotations

"""
EnvironmentSanitizer – blank exported shell functions before anything runs.

A variable whose value starts with "() {" is a bash function export; a
vulnerable shell spawned later (e.g. by a tag-generation hook) would
execute whatever follows the definition. Such values are emptied unless
the variable is a well-known function export of a shell framework.
"""

import logging
import os
from typing import AbstractSet, List, MutableMapping, Optional

from tagwalk.constants import SAFE_FUNCTION_EXPORTS, SHELL_FUNCTION_PREFIX
from tagwalk.logging.helpers import get_logger


class EnvironmentSanitizer:
    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        *,
        safe_names: AbstractSet[str] = SAFE_FUNCTION_EXPORTS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._env = os.environ if environ is None else environ
        self._safe = safe_names
        self._log = logger or get_logger('processing.environ')

    def is_safe_var(self, name: str) -> bool:
        return name in self._safe

    @staticmethod
    def is_function_export(value: str) -> bool:
        return value.startswith(SHELL_FUNCTION_PREFIX)

    def sanitize(self) -> List[str]:
        """Blank every unsafe function export and return the affected names."""
        reset: List[str] = []
        for name, value in list(self._env.items()):
            if not self.is_function_export(value) or self.is_safe_var(name):
                continue
            self._log.warning('reset environment: %s=%s', name, value)
            self._env[name] = ''
            reset.append(name)
        return reset
