from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EntryKind(Enum):
    """Classification of a single input path, first matching rule wins."""
    EXCLUDED = 'excluded'
    SYMLINK = 'symlink'
    MISSING = 'missing'
    DIRECTORY = 'directory'
    SPECIAL = 'special'
    REGULAR = 'regular'


@dataclass(frozen=True)
class EntryStatus:
    """Result of one filesystem status query.

    `exists`, `is_directory` and `is_normal_file` describe the link target
    when `path` is a symbolic link.
    """
    path: str
    exists: bool
    is_directory: bool = False
    is_symbolic_link: bool = False
    is_normal_file: bool = False
    size: int = 0


@dataclass(frozen=True)
class InteractiveRequest:
    command: str
    filename: str
    size: Optional[int] = None

    @property
    def reads_from_disk(self) -> bool:
        return self.size is None or self.size < 0


@dataclass(frozen=True)
class RequestOutcome:
    """Per-request result of the interactive protocol.

    Exactly one of `completed` or `error` is meaningful.
    """
    completed: bool
    command: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, command: str) -> 'RequestOutcome':
        return cls(completed=True, command=command)

    @classmethod
    def failure(cls, message: str) -> 'RequestOutcome':
        return cls(completed=False, error=message)

    @property
    def ok(self) -> bool:
        return self.completed and self.error is None
