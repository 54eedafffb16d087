"""Domain models for garden-examiner.

All models are **frozen** dataclasses; immutable point-in-time
snapshots of garden resources with no behaviour beyond data access.
They carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Shoots
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ShootName:
    """Project-qualified shoot name."""

    project: str
    name: str

    def __str__(self) -> str:
        return f"{self.project}/{self.name}"


@dataclass(frozen=True, slots=True)
class Shoot:
    """A shoot cluster managed by the garden."""

    name: ShootName
    namespace: str
    """Project namespace in the garden cluster (e.g. ``garden-dev``)."""

    profile: str
    """Name of the cloud profile the shoot is built from."""

    infrastructure: str
    """Provider type, e.g. ``aws`` or ``gcp``."""

    region: str
    seed: str | None
    domain: str | None
    kubernetes_version: str | None
    state: str
    """Last operation state, ``"Unknown"`` when never reconciled."""

    condition_errors: dict[str, str] = field(default_factory=dict)
    """Condition type → message for every condition not reporting ``True``."""

    error: str | None = None
    """Description of the last error, if any."""

    technical_id: str | None = None
    """Control-plane namespace of the shoot on its seed."""

    @property
    def api_server(self) -> str | None:
        if not self.domain:
            return None
        return f"https://api.{self.domain}"


# ---------------------------------------------------------------------------
# Seeds
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SecretRef:
    """Reference to a secret in the garden cluster."""

    namespace: str
    name: str


@dataclass(frozen=True, slots=True)
class Seed:
    """A seed cluster hosting shoot control planes."""

    name: str
    profile: str | None
    infrastructure: str
    region: str
    ingress_domain: str | None
    secret_ref: SecretRef | None


# ---------------------------------------------------------------------------
# Profiles and projects
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Profile:
    """A cloud profile describing one infrastructure offering."""

    name: str
    infrastructure: str
    kubernetes_versions: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Project:
    """A garden project grouping shoots in one namespace."""

    name: str
    namespace: str | None
    owner: str | None
    purpose: str | None = None
    description: str | None = None
