from __future__ import annotations

import logging
import os
import sys
from typing import Callable, MutableMapping, NoReturn, Optional, Sequence, TextIO

from tagwalk.config import load_default_options, with_defaults
from tagwalk.logging.factory import DefaultLoggerFactory
from tagwalk.logging.helpers import get_logger
from tagwalk.parsing.cursor import ArgumentCursor, OptionState
from tagwalk.processing.environ import EnvironmentSanitizer
from tagwalk.runtime.container import EngineBuilder, EngineConfig


logger = get_logger('tagwalk')


def _configure_logging(enable_json: bool) -> None:
    """Configure process-wide logging, either JSON or plain text."""
    factory = DefaultLoggerFactory(json_logs=enable_json, level=logging.INFO)
    lg = factory.get_logger('tagwalk')
    global logger
    logger = lg


def _fatal(msg: str, code: int = 1) -> None:
    """Exit the process with a logged error."""
    logger.error(msg)
    sys.exit(code)


class TagWalk:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        environ: Optional[MutableMapping[str, str]] = None,
        fatal: Optional[Callable[[str], None]] = None,
        load_option_files: bool = True,
    ) -> int:
        """Run the tool with an argv-like sequence and return the exit status."""
        from tagwalk import __version__

        env = os.environ if environ is None else environ
        json_logs = '--json-logs' in argv or env.get('TAGWALK_JSON_LOGS') == '1'
        _configure_logging(json_logs)

        EnvironmentSanitizer(env).sanitize()

        defaults = load_default_options(environ=env, skip_files=not load_option_files)
        cursor = ArgumentCursor.from_argv(with_defaults(argv, defaults))
        options = OptionState()
        logger.debug('Reading initial options from command line')
        options.consume(cursor)
        options.freeze()

        out = stdout or sys.stdout
        cfg = EngineConfig(
            logger=logger,
            fatal=fatal or (lambda msg: _fatal(msg)),
            stdin=stdin or sys.stdin,
            stdout=out,
            stderr=stderr or sys.stderr,
            version=__version__,
        )
        engine = EngineBuilder.from_config(cfg).build(options)

        if options.ns.list_languages:
            for lang in engine.parser.languages():
                out.write(f'{lang}\n')
            out.flush()
            return 0

        return engine.dispatcher.run(options.ns, cursor)


def main() -> NoReturn:
    """Entry point for `tagwalk` and `python -m tagwalk`."""
    try:
        raise SystemExit(TagWalk.run(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except SystemExit:
        raise
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
