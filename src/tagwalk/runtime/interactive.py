from __future__ import annotations

"""
Interactive protocol: newline-delimited JSON requests on stdin.

Inbound:   {"command": "generate-tags", "filename": "x.c", "size": 10}
Outbound:  {"_type": "program", "name": ..., "version": ...}   once at start
           {"_type": "completed", "command": "generate-tags"} per request

When `size` is a non-negative integer, exactly that many bytes follow the
request line on the same stream and are parsed as a virtual file; otherwise
the named file is read from disk. Malformed requests produce an error
outcome; the loop hands it to its error policy, which by default ends the
process.
"""

import json
import logging
from typing import Any, BinaryIO, Callable, Dict, Optional, TextIO, Tuple, Union

from tagwalk.constants import PROGRAM_NAME, READ_FROM_DISK
from tagwalk.core.interfaces.mainloop import MainLoopProtocol
from tagwalk.core.interfaces.parser import TagParserProtocol
from tagwalk.core.interfaces.store import TagStoreProtocol
from tagwalk.core.interfaces.walker import EntryWalkerProtocol
from tagwalk.core.models import InteractiveRequest, RequestOutcome
from tagwalk.core.report import ScanStats, StageTimer
from tagwalk.logging.helpers import get_logger
from tagwalk.parsing.cursor import ArgumentCursor

GENERATE_TAGS = 'generate-tags'

ERR_INVALID_JSON = 'invalid json'
ERR_NO_COMMAND = 'command name not found'
ERR_BAD_GENERATE = 'invalid generate-tags request'
ERR_UNKNOWN_COMMAND = 'unknown command name'


class RequestScope:
    """Own one decoded request object for the duration of its handling.

    The payload is released on every exit path of the `with` block,
    including early returns for malformed requests.
    """

    _decoder = json.JSONDecoder()

    def __init__(self, line: Union[bytes, str]) -> None:
        self._line = line
        self.payload: Any = None
        self.error: Optional[str] = None

    def __enter__(self) -> 'RequestScope':
        try:
            line = self._line
            text = (line.decode('utf-8') if isinstance(line, bytes) else line).lstrip()
            # Data after the first JSON value on the line is ignored.
            self.payload, _end = self._decoder.raw_decode(text)
        except (UnicodeDecodeError, ValueError):
            self.error = ERR_INVALID_JSON
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if isinstance(self.payload, (dict, list)):
            self.payload.clear()
        self.payload = None
        return False


def decode_request(payload: Any) -> Tuple[Optional[InteractiveRequest], Optional[str]]:
    """Validate a decoded JSON value; return (request, None) or (None, error)."""
    if not isinstance(payload, dict) or 'command' not in payload:
        return None, ERR_NO_COMMAND
    command = payload['command']
    if command != GENERATE_TAGS:
        return None, ERR_UNKNOWN_COMMAND
    filename = payload.get('filename')
    if not isinstance(filename, str):
        return None, ERR_BAD_GENERATE
    size = payload.get('size')
    if isinstance(size, bool) or not isinstance(size, int):
        size = READ_FROM_DISK
    return InteractiveRequest(command=command, filename=filename, size=size), None


class InteractiveProtocolHandler:
    def __init__(
        self,
        *,
        walker: EntryWalkerProtocol,
        parser: TagParserProtocol,
        store: TagStoreProtocol,
        stdin: BinaryIO,
        stdout: TextIO,
        stats: Optional[ScanStats] = None,
        version: str = '',
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._walker = walker
        self._parser = parser
        self._store = store
        self._stdin = stdin
        self._stdout = stdout
        self._stats = stats or ScanStats()
        self._version = version
        self._log = logger or get_logger('interactive')

    def _emit(self, event: Dict[str, Any]) -> None:
        self._stdout.write(json.dumps(event) + '\n')
        self._stdout.flush()

    def announce(self) -> None:
        self._emit({'_type': 'program', 'name': PROGRAM_NAME, 'version': self._version})

    def _generate_tags(self, req: InteractiveRequest) -> RequestOutcome:
        self._store.open()
        try:
            if req.reads_from_disk:
                # The resize decision is not applied in interactive sessions.
                self._walker.create_tags_for_entry(req.filename)
            else:
                data = self._stdin.read(req.size) if req.size else b''
                if isinstance(data, str):
                    data = data.encode('utf-8')
                if len(data) < req.size:
                    self._log.warning(
                        'short read for "%s": expected %d bytes, got %d', req.filename, req.size, len(data)
                    )
                self._parser.parse_buffer(req.filename, data)
        finally:
            self._store.close(False)
        self._emit({'_type': 'completed', 'command': req.command})
        return RequestOutcome.success(req.command)

    def handle_line(self, line: Union[bytes, str]) -> RequestOutcome:
        with RequestScope(line) as scope:
            if scope.error is not None:
                return RequestOutcome.failure(scope.error)
            req, err = decode_request(scope.payload)
            if err is not None:
                return RequestOutcome.failure(err)
            with StageTimer(self._stats, 'interactive'):
                return self._generate_tags(req)

    def serve(self, on_error: Callable[[str], None]) -> int:
        """Announce, then handle requests until end of input.

        *on_error* receives the message of every malformed request; the
        loop continues only if it returns.
        """
        self.announce()
        while True:
            line = self._stdin.readline()
            if not line:
                break
            if not line.strip():
                continue
            outcome = self.handle_line(line)
            if not outcome.ok:
                on_error(outcome.error or ERR_INVALID_JSON)
        return 0


class InteractiveMainLoop(MainLoopProtocol):
    name = 'interactive'

    def __init__(
        self,
        *,
        handler: InteractiveProtocolHandler,
        on_error: Callable[[str], None],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._handler = handler
        self._on_error = on_error
        self._log = logger or get_logger('interactive')

    def run(self, cursor: ArgumentCursor) -> int:
        if not cursor.is_off():
            self._log.debug('ignoring file arguments in interactive mode (first: "%s")', cursor.item)
        return self._handler.serve(self._on_error)
