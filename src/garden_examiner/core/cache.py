"""Memoizing cache over a :class:`~garden_examiner.core.protocols.Cacher`.

The cache tracks whether a full scan has completed.  Before that it
grows one point lookup at a time; afterwards it answers everything from
memory and a missing key is final.

Guarantees
----------
* One coarse lock per cache guards every operation for its full duration.
* At most one source ``get_all`` call per cache generation.  Every
  :meth:`Cache.reset` starts a new generation.
* Source errors propagate unmodified and leave the state untouched.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from garden_examiner.core.iterator import (
    MapEntry,
    MappedIterator,
    SliceIterator,
    entry_values,
)
from garden_examiner.core.protocols import Cacher
from garden_examiner.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class Cache:
    """Cache over a pluggable data source.

    Parameters
    ----------
    cacher:
        Any object satisfying the :class:`Cacher` protocol.
    """

    def __init__(self, cacher: Cacher) -> None:
        self._cacher: Cacher = cacher
        self._lock = threading.Lock()
        self._entries: dict[Any, Any] = {}
        self._complete: bool = False
        self._generation: int = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def complete(self) -> bool:
        """Whether a full scan has been loaded."""
        return self._complete

    @property
    def generation(self) -> int:
        """Counter bumped by every :meth:`reset`."""
        return self._generation

    @property
    def size(self) -> int:
        return len(self._entries)

    def key(self, element: Any) -> Any:
        return self._cacher.key(element)

    def reset(self) -> None:
        """Forget everything; the next read goes back to the source."""
        with self._lock:
            self._entries = {}
            self._complete = False
            self._generation += 1

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> MappedIterator:
        """Return an iterator over every element, scanning at most once."""
        with self._lock:
            if not self._complete:
                logger.debug("cache miss: listing all elements from source")
                elements: Iterable[Any] = self._cacher.get_all()
                fresh = {self._cacher.key(element): element for element in elements}
                self._entries = fresh
                self._complete = True
            return entry_values(self._snapshot())

    def get(self, key: Any) -> Any:
        """Return the element for *key*.

        Raises
        ------
        NotFoundError
            If the cache is complete and does not hold *key*, or the
            source returned nothing for it.
        """
        with self._lock:
            element = self._entries.get(key)
            if element is None and not self._complete:
                logger.debug("cache miss: fetching %r from source", key)
                element = self._cacher.get(key)
                if element is not None:
                    self._entries[key] = element
            if element is None:
                raise NotFoundError(key, source="cache")
            return element

    def iterator(self) -> SliceIterator:
        """Snapshot the current entries as :class:`MapEntry` pairs."""
        with self._lock:
            return self._snapshot()

    def entries(self) -> MappedIterator:
        """Snapshot the current elements; never fetches."""
        return entry_values(self.iterator())

    def _snapshot(self) -> SliceIterator:
        return SliceIterator(
            MapEntry(key, value) for key, value in self._entries.items()
        )
