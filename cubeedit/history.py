import typing, logging
from . import log

class History:
    """Newest-first record of the actions performed in a session."""

    _entries: typing.List[str]

    def __init__(self): self._entries = []

    def record(self, entry: str):
        self._entries.insert(0, entry)
        log.LOGGER.log(logging.DEBUG, f"history | {entry}")

    @property
    def entries(self) -> typing.Tuple[str, ...]: return tuple(self._entries)

    @property
    def text(self) -> str: return "\n".join(self._entries)

    def __len__(self): return len(self._entries)
    def __iter__(self) -> typing.Iterator[str]: return iter(self._entries)
