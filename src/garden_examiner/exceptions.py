"""Custom exception hierarchy for garden-examiner.

All exceptions that cross layer boundaries must inherit from
:class:`GexError`.  Raw third-party exceptions (e.g. from the kubernetes
client) must NEVER propagate beyond the infrastructure layer; they must
be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
GexError
├── SelectionError
│   └── MultipleSelectionError
├── NotFoundError
├── FetchError
├── FilterError
├── MatchError
├── ExhaustedError
├── EnvironmentError
└── KubeconfigNotFoundError
"""

from __future__ import annotations


class GexError(Exception):
    """Base exception for all garden-examiner errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Element selection -----------------------------------------------------

class SelectionError(GexError):
    """Raised when no element (and no default) can be selected."""


class MultipleSelectionError(SelectionError):
    """Raised when a single-element output receives a second element."""


class NotFoundError(GexError):
    """Raised when a named element cannot be resolved.

    The message is always ``'<key>' not found``.  *source* records which
    layer gave up: ``"cache"`` (a complete cache misses the key),
    ``"handler"`` (resolution found nothing) or ``"provider"`` (the
    backend reported the object as absent).
    """

    def __init__(
        self,
        key: object,
        *,
        source: str = "handler",
        hint: str | None = None,
    ) -> None:
        super().__init__(f"'{key}' not found", hint=hint)
        self.key: object = key
        self.source: str = source


# --- Data access -----------------------------------------------------------

class FetchError(GexError):
    """Raised when the underlying data source fails to deliver elements."""


# --- Predicates ------------------------------------------------------------

class FilterError(GexError):
    """Raised when the global filter predicate cannot be evaluated."""


class MatchError(GexError):
    """Raised when matching an element against a name pattern fails."""


# --- Iteration -------------------------------------------------------------

class ExhaustedError(GexError):
    """Raised when ``next()`` is called on an exhausted iterator."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(GexError):
    """Raised when a required runtime dependency is not available."""


class KubeconfigNotFoundError(GexError):
    """Raised when no kubeconfig for the garden cluster can be located."""
