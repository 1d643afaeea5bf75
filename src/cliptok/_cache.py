"""Thread-safe memo of merged pre-tokens."""

import threading

from .types import Word


class MergeCache:
    """
    Mapping from raw pre-token to its merged subwords, shared across threads.

    Entries are immutable tuples and are only ever added, never replaced or
    evicted. Reads go straight to the dict; writes take a lock so two threads
    racing on the same key agree on a single stored value.
    """

    def __init__(self, seed: dict[str, Word] | None = None) -> None:
        self._entries: dict[str, Word] = dict(seed) if seed else {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Word | None:
        """Return the cached decomposition of ``key`` or ``None``."""
        return self._entries.get(key)

    def setdefault(self, key: str, value: Word) -> Word:
        """Store ``value`` unless ``key`` is present; return the stored value."""
        with self._lock:
            return self._entries.setdefault(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
