from __future__ import annotations

"""
Default option sources read before the command line.

Order (later sources override earlier ones, the command line wins last):
    1. ~/.tagwalk
    2. ./.tagwalk
    3. $TAGWALK_OPTIONS

Option files hold options only, one or more per line; '#' starts a comment
outside quotes. Lines are split with shlex, like shell words.
"""

import logging
import os
import shlex
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from tagwalk.constants import OPTION_FILE_NAME, OPTIONS_ENV_VAR
from tagwalk.logging.helpers import get_logger
from tagwalk.parsing.attr_sets import takes_separate_value

logger = get_logger("config")


def strip_comment(line: str) -> str:
    in_quote: Optional[str] = None
    for i, ch in enumerate(line):
        if ch in {"'", '"'}:
            if in_quote is None:
                in_quote = ch
            elif in_quote == ch:
                in_quote = None
        elif ch == "#" and in_quote is None:
            return line[:i]
    return line


def tokenize_option_text(text: str, *, origin: str = "<options>", log: Optional[logging.Logger] = None) -> List[str]:
    tokens: List[str] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        stripped = strip_comment(raw).strip()
        if not stripped:
            continue
        try:
            parts = shlex.split(stripped)
        except ValueError as exc:
            (log or logger).warning("ignoring %s:%d: %s", origin, lineno, exc)
            continue
        expect_value = False
        for tok in parts:
            if expect_value:
                tokens.append(tok)
                expect_value = False
                continue
            expect_value = takes_separate_value(tok)
            if not tok.startswith("-"):
                (log or logger).warning("ignoring %s:%d: %r is not an option", origin, lineno, tok)
                continue
            tokens.append(tok)
    return tokens


def option_files(cwd: Optional[Path] = None, home: Optional[Path] = None) -> List[Path]:
    home_dir = home if home is not None else Path(os.path.expanduser("~"))
    work_dir = cwd if cwd is not None else Path.cwd()
    files = [home_dir / OPTION_FILE_NAME, work_dir / OPTION_FILE_NAME]
    seen: List[Path] = []
    for f in files:
        if f.is_file() and f.resolve() not in [s.resolve() for s in seen]:
            seen.append(f)
    return seen


def load_default_options(
    *,
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
    skip_files: bool = False,
) -> List[str]:
    """Collect option tokens from option files and the environment."""
    env = os.environ if environ is None else environ
    tokens: List[str] = []
    if not skip_files:
        for path in option_files(cwd, home):
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as exc:
                logger.warning('cannot read option file "%s": %s', path, exc)
                continue
            logger.debug('reading options from "%s"', path)
            tokens.extend(tokenize_option_text(text, origin=str(path)))
    env_text = env.get(OPTIONS_ENV_VAR, "")
    if env_text.strip():
        tokens.extend(tokenize_option_text(env_text, origin=f"${OPTIONS_ENV_VAR}"))
    return tokens


def with_defaults(argv: Sequence[str], defaults: Sequence[str]) -> List[str]:
    """Prepend default option tokens so the command line overrides them."""
    return [*defaults, *argv]
