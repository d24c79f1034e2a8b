# src/tagwalk/utils/paths.py
"""
paths – Small, centralized path helpers for tagwalk.

Provides:
  • base_filename(str)                  – final path component, trailing separators ignored
  • combine_path_and_file(dir, name)    – child path as reported to the parse stage
  • is_excluded(path, patterns)         – fnmatch exclusion on basename, then full path
  • is_recursive_link(path)             – symlink pointing into its own ancestor chain
  • has_glob_magic(str)                 – wildcard detection for manual globbing
"""

from __future__ import annotations

import fnmatch
import os
import re
from typing import Iterable

_GLOB_MAGIC = re.compile(r"[*?\[]")


def base_filename(path: str) -> str:
    """Return the last component of *path*, ignoring trailing separators."""
    trimmed = path.rstrip(os.sep + (os.altsep or ""))
    return os.path.basename(trimmed) if trimmed else path


def combine_path_and_file(dir_name: str, name: str) -> str:
    """Join a directory and a child name.

    The current directory is never spelled out, so entries found under "."
    are reported as bare names.
    """
    if dir_name == ".":
        return name
    return os.path.join(dir_name, name)


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """Return True if the basename or the full *path* matches any pattern."""
    pats = [p for p in patterns or () if p]
    if not pats:
        return False
    base = base_filename(path)
    if any(fnmatch.fnmatch(base, p) for p in pats):
        return True
    if base != path:
        return any(fnmatch.fnmatch(path, p) for p in pats)
    return False


def is_recursive_link(path: str) -> bool:
    """Return True if *path* is a symlink whose target contains the link itself.

    The link's parent directory is resolved and compared against the
    resolved link target: when the parent lies inside the target, descending
    through the link would revisit an ancestor forever.
    """
    link = path.rstrip(os.sep) or path
    if not os.path.islink(link):
        return False
    target = os.path.realpath(link)
    parent = os.path.realpath(os.path.dirname(os.path.abspath(link)))
    if parent == target:
        return True
    prefix = target if target.endswith(os.sep) else target + os.sep
    return parent.startswith(prefix)


def has_glob_magic(pattern: str) -> bool:
    """Return True if *pattern* contains shell wildcard characters."""
    return _GLOB_MAGIC.search(pattern or "") is not None
