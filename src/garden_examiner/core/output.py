"""Output sinks that accumulate resolved elements.

The resolution handler only ever calls ``add``, ``close`` and ``out``.
These sinks implement the accumulation side; rendering subclasses live
in the CLI layer and override :meth:`ElementOutput.out`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from garden_examiner.exceptions import MultipleSelectionError, SelectionError


class ElementOutput:
    """Collects every added element, optionally transformed by *mapper*."""

    def __init__(self, mapper: Callable[[Any], Any] | None = None) -> None:
        self._mapper: Callable[[Any], Any] | None = mapper
        self.elements: list[Any] = []
        self.closed: bool = False

    def add(self, element: Any) -> None:
        if self._mapper is not None:
            element = self._mapper(element)
        self.elements.append(element)

    def close(self) -> None:
        self.closed = True

    def out(self) -> None:
        """Render the collected elements; a no-op for plain collection."""


class SingleElementOutput:
    """Accepts exactly one element.

    Used by commands that act on a single element (``select``,
    ``kubeconfig``), where a pattern matching several elements is an
    error rather than a listing.
    """

    def __init__(self) -> None:
        self.element: Any = None

    def add(self, element: Any) -> None:
        if self.element is not None:
            raise MultipleSelectionError(
                "only one element can be selected, "
                "but multiple elements selected/found",
                hint="Narrow the name pattern or pass an exact name.",
            )
        self.element = element

    def close(self) -> None:
        pass

    def out(self) -> None:
        pass

    def require(self) -> Any:
        """Return the selected element or raise :class:`SelectionError`."""
        if self.element is None:
            raise SelectionError("no element selected")
        return self.element
