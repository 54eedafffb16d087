"""Resolution options threaded explicitly from the CLI into the core."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResolveOptions:
    """Plain configuration value for one ``resolve`` call.

    The core never reads global state: everything a resource kind or an
    output needs arrives through this object.
    """

    default: str | None = None
    """Fallback selection used when no argument is given."""

    output: str | None = None
    """Output format name, forwarded to sink creation."""

    project: str | None = None
    """Project scope; shoots and projects outside it are filtered out."""

    seed: str | None = None
    """Seed scope for shoots."""

    infrastructure: str | None = None
    """Infrastructure (provider type) scope, e.g. ``aws``."""
