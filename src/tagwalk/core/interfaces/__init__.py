from .fs import DirectoryListerProtocol
from .mainloop import MainLoopProtocol
from .parser import TagParserProtocol
from .store import TagStoreProtocol
from .walker import EntryWalkerProtocol

__all__ = [
    'DirectoryListerProtocol',
    'EntryWalkerProtocol',
    'MainLoopProtocol',
    'TagParserProtocol',
    'TagStoreProtocol',
]
