"""
Centralized CLI attribute sets for tagwalk.

The argument cursor needs to know which option tokens consume the
following token as their value, so that a value such as `-L files.txt`
is never mistaken for a positional file name.
"""
from __future__ import annotations
from typing import Set

_VALUE_FLAGS: Set[str] = {
    "-f", "-o", "--output",
    "-L", "--list-file",
    "--maxdepth",
    "--links",
    "--exclude",
    "--filter-terminator",
    "--sort",
    "--listing",
    "--parser",
}

# Options that only print information and therefore do not need input files.
_PRINT_ONLY_ATTRS: Set[str] = {
    "list_languages",
}

# Options that select the main loop; changing them mid-stream is rejected.
_STARTUP_ONLY_ATTRS: Set[str] = {
    "interactive",
    "filter",
    "json_logs",
}


def takes_separate_value(tok: str, value_flags: Set[str] = _VALUE_FLAGS) -> bool:
    """Return True if *tok* leaves its value in the next token.

    A short-option cluster such as `-Rf` behaves like its first letter that
    takes a value: when that letter ends the cluster, the value follows as a
    separate token; otherwise the rest of the cluster is the value (`-Rfout`).
    """
    if tok in value_flags:
        return True
    if tok.startswith("--") or not tok.startswith("-") or "=" in tok or len(tok) <= 2:
        return False
    for idx, letter in enumerate(tok[1:], start=1):
        if "-" + letter in value_flags:
            return idx == len(tok) - 1
    return False
