"""Lazy iteration primitives used by the cache and the resolution handler.

Iterators expose the explicit ``has_next()`` / ``next()`` contract the
resolution loop is written against, and additionally speak the Python
iteration protocol so they can be drained by ``for`` loops and
``list()``.

* :class:`SliceIterator` walks an in-memory sequence.
* :class:`MappedIterator` applies a transform per element, lazily.
* :class:`IndexedAccess` / :class:`IndexedIterator` build restartable
  iterators over a finite, ordered collection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from garden_examiner.exceptions import ExhaustedError


class Iterator(Protocol):
    """Minimal lazy-sequence contract."""

    def has_next(self) -> bool:
        ...  # pragma: no cover

    def next(self) -> Any:
        """Return the next element or raise :class:`ExhaustedError`."""
        ...  # pragma: no cover


class IndexedAccess(Protocol):
    """Random access by position over a finite ordered collection."""

    def length(self) -> int:
        ...  # pragma: no cover

    def at(self, index: int) -> Any:
        ...  # pragma: no cover


@dataclass(frozen=True, slots=True)
class MapEntry:
    """One ``key -> value`` pair of a cache snapshot."""

    key: Any
    value: Any


class _IteratorBase:
    """Bridges ``has_next()`` / ``next()`` to ``__iter__`` / ``__next__``."""

    def has_next(self) -> bool:
        raise NotImplementedError

    def next(self) -> Any:
        raise NotImplementedError

    def __iter__(self) -> _IteratorBase:
        return self

    def __next__(self) -> Any:
        if not self.has_next():
            raise StopIteration
        return self.next()


# ---------------------------------------------------------------------------
# Indexed access
# ---------------------------------------------------------------------------

class IndexedSliceAccess:
    """:class:`IndexedAccess` over a snapshot of a sequence."""

    def __init__(self, elements: Iterable[Any]) -> None:
        self._elements: tuple[Any, ...] = tuple(elements)

    def length(self) -> int:
        return len(self._elements)

    def at(self, index: int) -> Any:
        return self._elements[index]


class IndexedIterator(_IteratorBase):
    """Single-pass iterator over an :class:`IndexedAccess`.

    The position lives in the iterator, not in the collection, so any
    number of independent iterators can be built over the same access
    object without touching the underlying source again.
    """

    def __init__(self, access: IndexedAccess) -> None:
        self._access: IndexedAccess = access
        self._current: int = 0

    def has_next(self) -> bool:
        return self._current < self._access.length()

    def next(self) -> Any:
        if not self.has_next():
            raise ExhaustedError("iterator exhausted")
        element = self._access.at(self._current)
        self._current += 1
        return element


class SliceIterator(IndexedIterator):
    """Iterator over an in-memory sequence."""

    def __init__(self, elements: Iterable[Any]) -> None:
        super().__init__(IndexedSliceAccess(elements))


# ---------------------------------------------------------------------------
# Mapped iterator
# ---------------------------------------------------------------------------

class MappedIterator(_IteratorBase):
    """Lazily yields ``mapper(e)`` for every element of *source*.

    Finite iff the source is finite.  Not restartable: it consumes
    *source* as it goes.
    """

    def __init__(self, source: Iterator, mapper: Callable[[Any], Any]) -> None:
        self._source: Iterator = source
        self._mapper: Callable[[Any], Any] = mapper

    def has_next(self) -> bool:
        return self._source.has_next()

    def next(self) -> Any:
        if not self._source.has_next():
            raise ExhaustedError("iterator exhausted")
        return self._mapper(self._source.next())


def entry_values(entries: Iterator) -> MappedIterator:
    """Project an iterator of :class:`MapEntry` onto its values."""
    return MappedIterator(entries, lambda entry: entry.value)


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

def to_list(elements: Iterator | Sequence[Any]) -> list[Any]:
    """Drain *elements* into a new list."""
    if isinstance(elements, Sequence):
        return list(elements)
    result: list[Any] = []
    while elements.has_next():
        result.append(elements.next())
    return result


def to_string_list(elements: Iterator | Sequence[Any]) -> list[str]:
    """Drain *elements* into a list, insisting every element is a ``str``."""
    result = to_list(elements)
    for element in result:
        if not isinstance(element, str):
            raise TypeError(f"expected str element, got {type(element).__name__}")
    return result
