"""Protocols (interfaces) consumed by the core layer.

These define the contracts that data sources, resource kinds and output
sinks must satisfy.  Core code depends ONLY on these protocols, never
on concrete implementations, preserving the dependency inversion
principle.  All of them are satisfied structurally; no explicit
inheritance is required.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from garden_examiner.core.iterator import Iterator
from garden_examiner.core.options import ResolveOptions


class Cacher(Protocol):
    """Fetch-all / fetch-one capability a data source exposes to the cache."""

    def get_all(self) -> Iterable[Any]:
        """Return every element the source can produce.

        Raises
        ------
        FetchError
            When the backend cannot be listed.
        """
        ...  # pragma: no cover

    def get(self, key: Any) -> Any:
        """Return the element identified by *key*, or ``None``.

        Raises
        ------
        NotFoundError
            When the backend confirms the element does not exist.
        FetchError
            When the backend cannot be queried.
        """
        ...  # pragma: no cover

    def key(self, element: Any) -> Any:
        """Derive the cache key of *element*."""
        ...  # pragma: no cover


class HandlerAdapter(Cacher, Protocol):
    """Per-resource capability set driving the resolution handler.

    One implementation exists per resource kind (shoot, seed, profile,
    project).  It doubles as the :class:`Cacher` of the kind's cache.
    """

    def get_default(self, options: ResolveOptions) -> str | None:
        """Return the key to resolve when no argument is given."""
        ...  # pragma: no cover

    def require_scan(self, key: str) -> bool:
        """Whether *key* can only be resolved by enumerating everything."""
        ...  # pragma: no cover

    def canonical_key(self, key: str) -> Any:
        """Translate a command-line name into the kind's cache key."""
        ...  # pragma: no cover

    def match_name(self, element: Any, key: str) -> bool:
        """Whether *element* is selected by the (pattern) argument *key*."""
        ...  # pragma: no cover

    def match(self, element: Any, options: ResolveOptions) -> bool:
        """Global filter predicate (project / seed / infrastructure scope)."""
        ...  # pragma: no cover


class Output(Protocol):
    """Output sink receiving resolved elements one at a time."""

    def add(self, element: Any) -> None:
        ...  # pragma: no cover

    def close(self) -> None:
        """Finalize accumulated elements before rendering."""
        ...  # pragma: no cover

    def out(self) -> None:
        """Render whatever has been accumulated."""
        ...  # pragma: no cover


class Handler(Protocol):
    """Everything :func:`~garden_examiner.core.handler.resolve` needs."""

    def get_default(self, options: ResolveOptions) -> str | None:
        ...  # pragma: no cover

    def require_scan(self, key: str) -> bool:
        ...  # pragma: no cover

    def match_name(self, element: Any, key: str) -> bool:
        ...  # pragma: no cover

    def get(self, key: str) -> Any:
        ...  # pragma: no cover

    def iterator(self, options: ResolveOptions) -> Iterator:
        ...  # pragma: no cover

    def match(self, element: Any, options: ResolveOptions) -> bool:
        ...  # pragma: no cover

    def add(self, element: Any) -> None:
        ...  # pragma: no cover

    def close(self) -> None:
        ...  # pragma: no cover

    def out(self) -> None:
        ...  # pragma: no cover


class GardenProvider(Protocol):
    """Contract for garden cluster backends.

    Implementations return raw custom-resource dicts (the shape of the
    Kubernetes API JSON) and must map all backend-specific exceptions to
    :class:`~garden_examiner.exceptions.GexError` subclasses.
    """

    def list_objects(self, kind: str) -> list[dict[str, Any]]:
        """List every object of *kind* (``shoots``, ``seeds``, ...).

        Raises
        ------
        FetchError
            When the garden cluster cannot be listed.
        """
        ...  # pragma: no cover

    def get_object(
        self,
        kind: str,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any] | None:
        """Fetch one object, returning ``None`` when it does not exist.

        Raises
        ------
        FetchError
            When the garden cluster cannot be queried.
        """
        ...  # pragma: no cover

    def read_secret(self, namespace: str, name: str) -> dict[str, str]:
        """Return the decoded data of a secret.

        Raises
        ------
        NotFoundError
            When the secret does not exist.
        FetchError
            When the garden cluster cannot be queried.
        """
        ...  # pragma: no cover
