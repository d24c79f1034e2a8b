from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

from typing import FrozenSet

PROGRAM_NAME: str = 'tagwalk'

# Sentinel filename that selects the standard input stream for list files.
STDIN_SENTINEL: str = '-'

# Interactive `size` value meaning "read the file from disk".
READ_FROM_DISK: int = -1

# Exported shell functions start their value with this sequence.
SHELL_FUNCTION_PREFIX: str = '() {'

# Function exports installed by environment-modules and software collections.
SAFE_FUNCTION_EXPORTS: FrozenSet[str] = frozenset(
    {
        'BASH_FUNC_module()',
        'BASH_FUNC_scl()',
        'BASH_FUNC_module%%',
        'BASH_FUNC_scl%%',
    }
)

DEFAULT_TAG_FILE: str = 'tags'
STDOUT_DESTINATIONS: FrozenSet[str] = frozenset({'-', '/dev/stdout'})

# Effectively unlimited, mirrors an unsigned 32-bit maximum.
UNLIMITED_DEPTH: int = 0xFFFFFFFF

OPTION_FILE_NAME: str = '.tagwalk'
OPTIONS_ENV_VAR: str = 'TAGWALK_OPTIONS'
