# tagwalk/parsing/parser.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from tagwalk.constants import DEFAULT_TAG_FILE, PROGRAM_NAME, UNLIMITED_DEPTH
from tagwalk.logging.helpers import get_logger

logger = get_logger("options")


def _depth(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"depth must be >= 0 (got {n})")
    return n


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser for the dispatch-relevant options.

    Notes:
        - Positional file arguments are not declared here: the argument
          cursor separates them and feeds only option runs to this parser,
          so options may appear between (or after) file names.
        - The same parser re-parses options read from list files and from
          filter input.
    """
    from tagwalk import __version__

    p = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s [OPTIONS] [FILE | DIR | PATTERN] …",
        description=(
            "tagwalk – resolve files, directories and list files into a tag index.\n"
            "Options may be interleaved with file arguments; each option applies "
            "to the files that follow it."
        ),
    )

    g_in = p.add_argument_group("Input selection")
    g_out = p.add_argument_group("Output & store")
    g_mode = p.add_argument_group("Modes")
    g_misc = p.add_argument_group("Miscellaneous")

    # -----------------------
    # Input selection
    # -----------------------
    g_in.add_argument(
        "-R",
        "--recurse",
        dest="recurse",
        action="store_true",
        default=False,
        help=(
            "Recurse into directories given on the command line or found while "
            "scanning. Without file arguments, the current directory is scanned."
        ),
    )
    g_in.add_argument(
        "--no-recurse",
        dest="recurse",
        action="store_false",
        help="Disable recursion again (directories are then ignored).",
    )
    g_in.add_argument(
        "--maxdepth",
        metavar="N",
        type=_depth,
        dest="max_depth",
        default=UNLIMITED_DEPTH,
        help="Do not descend more than N directory levels (default: unlimited).",
    )
    g_in.add_argument(
        "--links",
        choices=("yes", "no"),
        dest="links",
        default="yes",
        help="Follow symbolic links (default: yes).",
    )
    g_in.add_argument(
        "--exclude",
        metavar="PATTERN",
        action="append",
        dest="exclude",
        default=None,
        help=(
            "Skip files and directories matching PATTERN (shell wildcards, tested "
            "against the basename and then the full path). '@FILE' reads one "
            "pattern per line from FILE. Repeatable."
        ),
    )
    g_in.add_argument(
        "-L",
        "--list-file",
        metavar="FILE",
        dest="list_file",
        default=None,
        help="Read additional file names, one per line, from FILE ('-' = stdin).",
    )
    g_in.add_argument(
        "--listing",
        choices=("native", "wildcard"),
        dest="listing",
        default=None,
        help=(
            "Directory iteration strategy: 'native' (os.scandir) or 'wildcard' "
            "(glob expansion, also expands wildcard arguments). "
            "Defaults to $TAGWALK_LISTING or 'native'."
        ),
    )

    # -----------------------
    # Output & store
    # -----------------------
    g_out.add_argument(
        "-f",
        "-o",
        "--output",
        metavar="FILE",
        dest="tag_file",
        default=DEFAULT_TAG_FILE,
        help="Tag file to write ('-' = stdout).",
    )
    g_out.add_argument(
        "-a",
        "--append",
        dest="append",
        action="store_true",
        default=False,
        help="Append to an existing tag file instead of replacing it.",
    )
    g_out.add_argument(
        "--sort",
        choices=("yes", "no"),
        dest="sort",
        default="yes",
        help="Whether the finalized store is reported as sorted (default: yes).",
    )
    g_out.add_argument(
        "--totals",
        dest="print_totals",
        action="store_true",
        default=False,
        help="Print file/line/byte totals and timings to stderr when done.",
    )

    # -----------------------
    # Modes
    # -----------------------
    g_mode.add_argument(
        "--filter",
        dest="filter",
        action="store_true",
        default=False,
        help=(
            "Read file names from stdin and write each file's tags to stdout "
            "immediately, bypassing the tag file."
        ),
    )
    g_mode.add_argument(
        "--filter-terminator",
        metavar="STRING",
        dest="filter_terminator",
        default=None,
        help="String written to stdout after each file processed in --filter mode.",
    )
    g_mode.add_argument(
        "--interactive",
        dest="interactive",
        action="store_true",
        default=False,
        help="Serve line-delimited JSON requests on stdin/stdout.",
    )
    g_mode.add_argument(
        "--print-language",
        dest="print_language",
        action="store_true",
        default=False,
        help="Only print the language detected for each file; no tag file is written.",
    )
    g_mode.add_argument(
        "--list-languages",
        dest="list_languages",
        action="store_true",
        default=False,
        help="List the languages known to the parse stage and exit.",
    )

    # -----------------------
    # Miscellaneous
    # -----------------------
    g_misc.add_argument(
        "--parser",
        metavar="module:Class",
        dest="parser_ref",
        default=None,
        help="Custom parse-stage implementation (advanced). Defaults to $TAGWALK_PARSER.",
    )
    g_misc.add_argument(
        "-V",
        "--verbose",
        dest="verbose",
        action="store_true",
        default=False,
        help="Report every decision taken while resolving inputs.",
    )
    g_misc.add_argument(
        "--json-logs",
        dest="json_logs",
        action="store_true",
        default=False,
        help="Emit diagnostics as JSON lines on stderr.",
    )
    g_misc.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return p


def _read_pattern_file(path: str) -> List[str]:
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("cannot open exclusion file \"%s\": %s", path, exc)
        return []
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def post_parse(ns: argparse.Namespace) -> None:
    """Normalize derived flags in-place.

    Runs after every (re-)parse, so it must be idempotent.
    """
    ns.follow_links = ns.links != "no"
    ns.sorted = ns.sort != "no"

    patterns: List[str] = []
    for pat in ns.exclude or []:
        if pat.startswith("@"):
            patterns.extend(_read_pattern_file(pat[1:]))
        else:
            patterns.append(pat)
    ns.exclude = patterns

    if getattr(ns, "verbose", False):
        logging.getLogger("tagwalk").setLevel(logging.DEBUG)
