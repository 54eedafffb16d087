"""Element resolution: from command-line names to an output sink.

:func:`resolve` is the single orchestration entry point shared by every
resource kind.  Depending on the arguments it runs one of three modes:

1. **Bulk**: no names (and no default) or exactly ``["all"]``, selects every
   element passing the filter, in source order.
2. **Direct**: only exact names, one point lookup per name, trusted
   without filtering.
3. **Scan**: at least one name needs an enumeration (a pattern), the
   full source is listed once and every pattern is resolved against it.

Bulk and direct mode finish with ``close()`` then ``out()``; scan mode
finishes with ``out()`` only.

:class:`ElementHandler` is the standard :class:`Handler`: it composes a
resource kind (the adapter, also the cache's data source), a
:class:`~garden_examiner.core.cache.Cache` and an output sink.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from garden_examiner.core.cache import Cache
from garden_examiner.core.iterator import (
    IndexedIterator,
    IndexedSliceAccess,
    Iterator,
    to_list,
)
from garden_examiner.core.options import ResolveOptions
from garden_examiner.core.protocols import Handler, HandlerAdapter, Output
from garden_examiner.exceptions import (
    FilterError,
    GexError,
    MatchError,
    NotFoundError,
    SelectionError,
)

logger = logging.getLogger(__name__)

ALL: str = "all"
"""Reserved sole argument selecting every element."""


# ---------------------------------------------------------------------------
# Standard handler
# ---------------------------------------------------------------------------

class ElementHandler:
    """Handler composed of a resource kind, its cache and an output sink.

    Parameters
    ----------
    kind:
        Any object satisfying the :class:`HandlerAdapter` protocol.
    output:
        Sink receiving the resolved elements.
    """

    def __init__(self, kind: HandlerAdapter, output: Output) -> None:
        self._kind: HandlerAdapter = kind
        self._output: Output = output
        self._cache: Cache = Cache(kind)
        self._elements: IndexedSliceAccess | None = None
        self._generation: int = -1

    @property
    def cache(self) -> Cache:
        return self._cache

    @property
    def output(self) -> Output:
        return self._output

    def get_default(self, options: ResolveOptions) -> str | None:
        return self._kind.get_default(options)

    def require_scan(self, key: str) -> bool:
        return self._kind.require_scan(key)

    def match_name(self, element: Any, key: str) -> bool:
        return self._kind.match_name(element, key)

    def match(self, element: Any, options: ResolveOptions) -> bool:
        return self._kind.match(element, options)

    def get(self, key: str) -> Any:
        return self._cache.get(self._kind.canonical_key(key))

    def iterator(self, options: ResolveOptions) -> IndexedIterator:
        """Restartable iteration over the full listing.

        The listing is materialised once per cache generation, so a
        :meth:`Cache.reset` also invalidates it.
        """
        if self._elements is None or self._generation != self._cache.generation:
            self._generation = self._cache.generation
            self._elements = IndexedSliceAccess(self._cache.get_all())
        return IndexedIterator(self._elements)

    def add(self, element: Any) -> None:
        self._output.add(element)

    def close(self) -> None:
        self._output.close()

    def out(self) -> None:
        self._output.out()


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve(
    arguments: Sequence[str],
    options: ResolveOptions,
    handler: Handler,
) -> None:
    """Resolve *arguments* through *handler* and render the result.

    Raises
    ------
    NotFoundError
        If a named argument resolves to nothing.
    GexError
        Any error raised by the handler's capabilities, unchanged.
    """
    names = list(arguments)
    if not names:
        default = handler.get_default(options)
        if default:
            logger.debug("no argument given, using default %r", default)
            names = [default]

    if not names or names == [ALL]:
        _resolve_all(options, handler)
    else:
        _resolve_dedicated(names, options, handler)


def resolve_named(
    name: str | None,
    options: ResolveOptions,
    handler: Handler,
) -> None:
    """Resolve exactly one *name*, falling back to the handler's default.

    Raises
    ------
    SelectionError
        If neither *name* nor a default is available.
    """
    if not name:
        name = handler.get_default(options)
    if not name:
        raise SelectionError(
            "no element selected",
            hint="Pass a name or configure a default.",
        )
    _resolve_dedicated([name], options, handler)


def _resolve_all(options: ResolveOptions, handler: Handler) -> None:
    logger.debug("bulk resolution")
    elements = handler.iterator(options)
    while elements.has_next():
        element = elements.next()
        if _match(handler, element, options):
            handler.add(element)
    handler.close()
    handler.out()


def _resolve_dedicated(
    names: list[str],
    options: ResolveOptions,
    handler: Handler,
) -> None:
    if any(handler.require_scan(name) for name in names):
        _resolve_scan(names, options, handler)
        return

    logger.debug("direct resolution of %d name(s)", len(names))
    for name in names:
        handler.add(_get(handler, name))
    handler.close()
    handler.out()


def _resolve_scan(
    names: list[str],
    options: ResolveOptions,
    handler: Handler,
) -> None:
    logger.debug("scan resolution of %d name(s)", len(names))
    listing = IndexedSliceAccess(to_list(handler.iterator(options)))

    for name in names:
        if not handler.require_scan(name):
            element = _get(handler, name)
            if _match(handler, element, options):
                handler.add(element)
            continue

        found = False
        elements: Iterator = IndexedIterator(listing)
        while elements.has_next():
            element = elements.next()
            if _match(handler, element, options) and _match_name(handler, element, name):
                handler.add(element)
                found = True
        if not found:
            raise NotFoundError(name)

    # Scan mode renders without the close() finalizer.
    handler.out()


# ---------------------------------------------------------------------------
# Capability calls with error normalisation
# ---------------------------------------------------------------------------

def _get(handler: Handler, name: str) -> Any:
    element = handler.get(name)
    if element is None:
        raise NotFoundError(name)
    return element


def _match(handler: Handler, element: Any, options: ResolveOptions) -> bool:
    try:
        return bool(handler.match(element, options))
    except GexError:
        raise
    except Exception as exc:
        raise FilterError(f"cannot filter {element!r}: {exc}") from exc


def _match_name(handler: Handler, element: Any, name: str) -> bool:
    try:
        return bool(handler.match_name(element, name))
    except GexError:
        raise
    except Exception as exc:
        raise MatchError(f"cannot match '{name}': {exc}") from exc
