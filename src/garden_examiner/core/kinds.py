"""Resource kinds: one resolution adapter per garden resource type.

Each kind satisfies :class:`~garden_examiner.core.protocols.HandlerAdapter`
and therefore also serves as the data source (``Cacher``) of its
handler's cache.  Kinds depend on a
:class:`~garden_examiner.core.protocols.GardenProvider` injected at
construction time and translate its raw dicts into domain models.

Guarantees
----------
* Only :class:`~garden_examiner.exceptions.GexError` subclasses escape.
* Name arguments containing ``*``, ``?`` or ``[`` are glob patterns and
  require a scan.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from garden_examiner.core.models import Profile, Project, Seed, Shoot, ShootName
from garden_examiner.core.options import ResolveOptions
from garden_examiner.core.parsers import (
    namespace_of_project,
    parse_profile,
    parse_project,
    parse_seed,
    parse_shoot,
)
from garden_examiner.core.protocols import GardenProvider
from garden_examiner.exceptions import FetchError, GexError, NotFoundError, SelectionError
from garden_examiner.utils.patterns import is_pattern, match_pattern

logger = logging.getLogger(__name__)

KUBECONFIG_KEY: str = "kubeconfig"


# ---------------------------------------------------------------------------
# Provider delegation (safe boundary)
# ---------------------------------------------------------------------------

def _call(what: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call the provider and ensure only our exceptions escape."""
    try:
        return func(*args, **kwargs)
    except GexError:
        raise
    except Exception as exc:
        raise FetchError(f"Unexpected provider error while reading {what}: {exc}") from exc


def _read_kubeconfig(provider: GardenProvider, namespace: str, secret: str) -> str:
    data = _call(f"secret {namespace}/{secret}", provider.read_secret, namespace, secret)
    kubeconfig = data.get(KUBECONFIG_KEY)
    if not kubeconfig:
        raise NotFoundError(
            f"{namespace}/{secret}:{KUBECONFIG_KEY}",
            source="provider",
            hint="The secret exists but carries no kubeconfig entry.",
        )
    return kubeconfig


def _infrastructure_matches(infrastructure: str, options: ResolveOptions) -> bool:
    return options.infrastructure is None or infrastructure == options.infrastructure


# ---------------------------------------------------------------------------
# Shoots
# ---------------------------------------------------------------------------

class ShootKind:
    """Shoots, keyed by :class:`ShootName` (``project/name``).

    Parameters
    ----------
    provider:
        Garden backend.
    project:
        Project scope used to qualify bare shoot names.  Without it a bare
        name may live in any project and has to be scanned for.

    A shoot belongs to the project declaring its namespace.  The
    ``garden-<project>`` convention only applies to namespaces no project
    object claims.
    """

    name: str = "shoot"

    def __init__(self, provider: GardenProvider, project: str | None = None) -> None:
        self._provider: GardenProvider = provider
        self._project: str | None = project
        self._namespaces: dict[str, str] = {}

    # Project namespaces --------------------------------------------------

    def _owners(self) -> dict[str, str]:
        """Map every declared project namespace to its project."""
        owners: dict[str, str] = {}
        for raw in _call("projects", self._provider.list_objects, "projects"):
            project = parse_project(raw)
            if project.namespace:
                owners[project.namespace] = project.name
                self._namespaces[project.name] = project.namespace
        return owners

    def _namespace_of(self, project: str) -> str:
        if project not in self._namespaces:
            raw = _call(
                f"project {project}", self._provider.get_object, "projects", project
            )
            namespace = parse_project(raw).namespace if raw is not None else None
            if namespace is None:
                logger.debug("project %s declares no namespace, using convention", project)
                namespace = namespace_of_project(project)
            self._namespaces[project] = namespace
        return self._namespaces[project]

    # Cacher --------------------------------------------------------------

    def get_all(self) -> list[Shoot]:
        raw = _call("shoots", self._provider.list_objects, "shoots")
        owners = self._owners()
        return [parse_shoot(entry, owners) for entry in raw]

    def get(self, key: ShootName) -> Shoot | None:
        namespace = self._namespace_of(key.project)
        raw = _call(
            f"shoot {key}",
            self._provider.get_object,
            "shoots",
            key.name,
            namespace=namespace,
        )
        return parse_shoot(raw, {namespace: key.project}) if raw is not None else None

    def key(self, element: Shoot) -> ShootName:
        return element.name

    # Adapter -------------------------------------------------------------

    def get_default(self, options: ResolveOptions) -> str | None:
        return options.default

    def require_scan(self, key: str) -> bool:
        if is_pattern(key):
            return True
        return "/" not in key and self._project is None

    def canonical_key(self, key: str) -> ShootName:
        if "/" in key:
            project, name = key.split("/", 1)
            return ShootName(project=project, name=name)
        if self._project is None:
            raise SelectionError(
                f"shoot '{key}' is ambiguous without a project",
                hint="Use <project>/<shoot> or pass --project.",
            )
        return ShootName(project=self._project, name=key)

    def match_name(self, element: Shoot, key: str) -> bool:
        if "/" in key:
            return match_pattern(str(element.name), key)
        return match_pattern(element.name.name, key)

    def match(self, element: Shoot, options: ResolveOptions) -> bool:
        if options.project is not None and element.name.project != options.project:
            return False
        if options.seed is not None and element.seed != options.seed:
            return False
        return _infrastructure_matches(element.infrastructure, options)

    # Extras --------------------------------------------------------------

    def kubeconfig(self, element: Shoot) -> str:
        """Return the admin kubeconfig of a shoot."""
        return _read_kubeconfig(
            self._provider, element.namespace, f"{element.name.name}.kubeconfig"
        )


# ---------------------------------------------------------------------------
# Cluster-scoped kinds keyed by plain name
# ---------------------------------------------------------------------------

class _NamedKind:
    """Shared behaviour of kinds whose key is the plain object name."""

    name: str = ""
    plural: str = ""

    def __init__(self, provider: GardenProvider) -> None:
        self._provider: GardenProvider = provider

    def _parse(self, raw: dict[str, Any]) -> Any:
        raise NotImplementedError

    def get_all(self) -> list[Any]:
        raw = _call(self.plural, self._provider.list_objects, self.plural)
        return [self._parse(entry) for entry in raw]

    def get(self, key: str) -> Any:
        raw = _call(f"{self.name} {key}", self._provider.get_object, self.plural, key)
        return self._parse(raw) if raw is not None else None

    def key(self, element: Any) -> str:
        return element.name

    def get_default(self, options: ResolveOptions) -> str | None:
        return options.default

    def require_scan(self, key: str) -> bool:
        return is_pattern(key)

    def canonical_key(self, key: str) -> str:
        return key

    def match_name(self, element: Any, key: str) -> bool:
        return match_pattern(element.name, key)

    def match(self, element: Any, options: ResolveOptions) -> bool:
        return True


class SeedKind(_NamedKind):
    """Seed clusters."""

    name = "seed"
    plural = "seeds"

    def _parse(self, raw: dict[str, Any]) -> Seed:
        return parse_seed(raw)

    def match(self, element: Seed, options: ResolveOptions) -> bool:
        return _infrastructure_matches(element.infrastructure, options)

    def kubeconfig(self, element: Seed) -> str:
        """Return the kubeconfig referenced by the seed's secret."""
        if element.secret_ref is None:
            raise NotFoundError(
                f"{element.name}:secretRef",
                source="provider",
                hint="The seed does not reference a kubeconfig secret.",
            )
        ref = element.secret_ref
        return _read_kubeconfig(self._provider, ref.namespace, ref.name)


class ProfileKind(_NamedKind):
    """Cloud profiles."""

    name = "profile"
    plural = "cloudprofiles"

    def _parse(self, raw: dict[str, Any]) -> Profile:
        return parse_profile(raw)

    def match(self, element: Profile, options: ResolveOptions) -> bool:
        return _infrastructure_matches(element.infrastructure, options)


class ProjectKind(_NamedKind):
    """Garden projects."""

    name = "project"
    plural = "projects"

    def _parse(self, raw: dict[str, Any]) -> Project:
        return parse_project(raw)

    def get_default(self, options: ResolveOptions) -> str | None:
        # The selected project is only a default, never a filter.
        return options.default or options.project


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

KIND_NAMES: tuple[str, ...] = ("shoot", "seed", "profile", "project")


def create_kind(name: str, provider: GardenProvider, options: ResolveOptions) -> Any:
    """Build the kind called *name* for one command invocation."""
    logger.debug("creating %s kind", name)
    if name == "shoot":
        return ShootKind(provider, project=options.project)
    if name == "seed":
        return SeedKind(provider)
    if name == "profile":
        return ProfileKind(provider)
    if name == "project":
        return ProjectKind(provider)
    raise SelectionError(
        f"unknown resource kind '{name}'",
        hint=f"Valid kinds: {', '.join(KIND_NAMES)}",
    )
