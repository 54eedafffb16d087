"""Raw custom-resource dict → domain-model parsers.

Every function in this module is a **pure** transformation of the JSON
shape returned by the Kubernetes API for ``core.gardener.cloud/v1beta1``
objects.  Missing or malformed fields degrade to ``None`` / defaults
instead of raising, so a half-reconciled object still renders.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from garden_examiner.core.models import (
    Profile,
    Project,
    SecretRef,
    Seed,
    Shoot,
    ShootName,
)

GARDEN_NAMESPACE: str = "garden"
PROJECT_NAMESPACE_PREFIX: str = "garden-"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _section(raw: dict[str, Any], *path: str) -> dict[str, Any]:
    """Walk nested dicts, returning ``{}`` for anything missing."""
    current: Any = raw
    for part in path:
        if not isinstance(current, dict):
            return {}
        current = current.get(part)
    return current if isinstance(current, dict) else {}


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def project_of_namespace(namespace: str) -> str:
    """Derive the project name from a project namespace.

    ``garden-dev`` → ``dev``; the bare ``garden`` namespace belongs to
    the ``garden`` project.
    """
    if namespace.startswith(PROJECT_NAMESPACE_PREFIX):
        return namespace[len(PROJECT_NAMESPACE_PREFIX):]
    return namespace


def namespace_of_project(project: str) -> str:
    """Conventional namespace of *project* (inverse of :func:`project_of_namespace`)."""
    if project == GARDEN_NAMESPACE:
        return GARDEN_NAMESPACE
    return f"{PROJECT_NAMESPACE_PREFIX}{project}"


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_shoot(
    raw: dict[str, Any],
    owners: Mapping[str, str] | None = None,
) -> Shoot:
    """Convert a raw ``Shoot`` object into a :class:`Shoot`.

    *owners* maps project namespaces to project names.  Namespaces it does
    not cover fall back to :func:`project_of_namespace`.
    """
    metadata = _section(raw, "metadata")
    spec = _section(raw, "spec")
    status = _section(raw, "status")
    namespace = str(metadata.get("namespace", GARDEN_NAMESPACE))

    conditions: dict[str, str] = {}
    for condition in status.get("conditions") or []:
        if not isinstance(condition, dict):
            continue
        if condition.get("status") != "True":
            conditions[str(condition.get("type", "Unknown"))] = str(
                condition.get("message", "")
            )

    errors = [
        str(entry.get("description", ""))
        for entry in status.get("lastErrors") or []
        if isinstance(entry, dict) and entry.get("description")
    ]

    return Shoot(
        name=ShootName(
            project=(owners or {}).get(namespace) or project_of_namespace(namespace),
            name=str(metadata.get("name", "")),
        ),
        namespace=namespace,
        profile=str(spec.get("cloudProfileName", "")),
        infrastructure=str(_section(spec, "provider").get("type", "unknown")),
        region=str(spec.get("region", "")),
        seed=_text(spec.get("seedName") or status.get("seedName")),
        domain=_text(_section(spec, "dns").get("domain")),
        kubernetes_version=_text(_section(spec, "kubernetes").get("version")),
        state=str(_section(status, "lastOperation").get("state", "Unknown")),
        condition_errors=conditions,
        error="; ".join(errors) or None,
        technical_id=_text(status.get("technicalID")),
    )


def parse_seed(raw: dict[str, Any]) -> Seed:
    """Convert a raw ``Seed`` object into a :class:`Seed`."""
    metadata = _section(raw, "metadata")
    spec = _section(raw, "spec")
    provider = _section(spec, "provider")

    ref = _section(spec, "secretRef")
    secret_ref = (
        SecretRef(namespace=str(ref.get("namespace", "")), name=str(ref["name"]))
        if ref.get("name")
        else None
    )
    ingress_domain = _section(spec, "ingress").get("domain") or _section(
        spec, "dns"
    ).get("ingressDomain")

    return Seed(
        name=str(metadata.get("name", "")),
        profile=_text(_section(metadata, "labels").get("cloudprofile")),
        infrastructure=str(provider.get("type", "unknown")),
        region=str(provider.get("region", "")),
        ingress_domain=_text(ingress_domain),
        secret_ref=secret_ref,
    )


def parse_profile(raw: dict[str, Any]) -> Profile:
    """Convert a raw ``CloudProfile`` object into a :class:`Profile`."""
    spec = _section(raw, "spec")
    versions = tuple(
        str(entry["version"])
        for entry in _section(spec, "kubernetes").get("versions") or []
        if isinstance(entry, dict) and entry.get("version")
    )
    return Profile(
        name=str(_section(raw, "metadata").get("name", "")),
        infrastructure=str(spec.get("type", "unknown")),
        kubernetes_versions=versions,
    )


def parse_project(raw: dict[str, Any]) -> Project:
    """Convert a raw ``Project`` object into a :class:`Project`."""
    spec = _section(raw, "spec")
    return Project(
        name=str(_section(raw, "metadata").get("name", "")),
        namespace=_text(spec.get("namespace")),
        owner=_text(_section(spec, "owner").get("name")),
        purpose=_text(spec.get("purpose")),
        description=_text(spec.get("description")),
    )
