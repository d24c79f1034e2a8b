from __future__ import annotations

"""Single-shot filesystem status query used by the entry classifier."""

import os
import stat
from typing import Optional

from tagwalk.core.models import EntryStatus
from tagwalk.logging.helpers import get_logger, trace_io

_log = get_logger("io.status")


def stat_entry(path: str) -> EntryStatus:
    """Return the status of *path*, following a symlink for the target facts.

    A dangling link is reported as a symbolic link that does not exist.
    """
    link: Optional[os.stat_result]
    try:
        link = os.lstat(path)
    except OSError:
        link = None

    if link is None:
        trace_io(_log, "stat", path=path, exists=False)
        return EntryStatus(path=path, exists=False)

    is_link = stat.S_ISLNK(link.st_mode)
    st = link
    if is_link:
        try:
            st = os.stat(path)
        except OSError:
            trace_io(_log, "stat", path=path, exists=False, link=True)
            return EntryStatus(path=path, exists=False, is_symbolic_link=True)

    status = EntryStatus(
        path=path,
        exists=True,
        is_directory=stat.S_ISDIR(st.st_mode),
        is_symbolic_link=is_link,
        is_normal_file=stat.S_ISREG(st.st_mode),
        size=st.st_size,
    )
    trace_io(_log, "stat", path=path, dir=status.is_directory, link=is_link, regular=status.is_normal_file)
    return status
