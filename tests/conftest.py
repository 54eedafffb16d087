"""Shared pytest fixtures and configuration for the garden-examiner test suite.

Guidelines
----------
* No cluster access in any test.
* The kubernetes client must be mocked at the infra boundary.
* Core tests must be pure; no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from fnmatch import fnmatchcase
from typing import Any

import pytest

from garden_examiner.core.options import ResolveOptions
from garden_examiner.core.output import ElementOutput
from garden_examiner.utils.patterns import is_pattern


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeKind:
    """String elements keyed by themselves, with call counting.

    Satisfies both ``Cacher`` and ``HandlerAdapter``.
    """

    def __init__(
        self,
        elements: Iterable[str],
        *,
        default: str | None = None,
        accept: Callable[[str, ResolveOptions], bool] | None = None,
    ) -> None:
        self.elements: list[str] = list(elements)
        self.default: str | None = default
        self.accept: Callable[[str, ResolveOptions], bool] = accept or (lambda e, o: True)
        self.get_all_calls: int = 0
        self.get_calls: list[str] = []
        self.require_scan_calls: list[str] = []
        self.fail_get_all: Exception | None = None

    # Cacher
    def get_all(self) -> list[str]:
        self.get_all_calls += 1
        if self.fail_get_all is not None:
            raise self.fail_get_all
        return list(self.elements)

    def get(self, key: str) -> str | None:
        self.get_calls.append(key)
        return key if key in self.elements else None

    def key(self, element: str) -> str:
        return element

    # Adapter
    def get_default(self, options: ResolveOptions) -> str | None:
        return self.default

    def require_scan(self, key: str) -> bool:
        self.require_scan_calls.append(key)
        return is_pattern(key)

    def canonical_key(self, key: str) -> str:
        return key

    def match_name(self, element: str, key: str) -> bool:
        return fnmatchcase(element, key)

    def match(self, element: str, options: ResolveOptions) -> bool:
        return self.accept(element, options)


class RecordingOutput(ElementOutput):
    """Element output that logs every sink call in order."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[Any] = []

    def add(self, element: Any) -> None:
        super().add(element)
        self.calls.append(("add", element))

    def close(self) -> None:
        super().close()
        self.calls.append("close")

    def out(self) -> None:
        self.calls.append("out")


class FakeGardenProvider:
    """In-memory ``GardenProvider`` over raw custom-resource dicts."""

    def __init__(
        self,
        objects: dict[str, list[dict[str, Any]]] | None = None,
        secrets: dict[tuple[str, str], dict[str, str]] | None = None,
    ) -> None:
        self.objects: dict[str, list[dict[str, Any]]] = objects or {}
        self.secrets: dict[tuple[str, str], dict[str, str]] = secrets or {}
        self.list_calls: list[str] = []
        self.get_calls: list[tuple[str, str, str | None]] = []

    def list_objects(self, kind: str) -> list[dict[str, Any]]:
        self.list_calls.append(kind)
        return list(self.objects.get(kind, []))

    def get_object(
        self,
        kind: str,
        name: str,
        namespace: str | None = None,
    ) -> dict[str, Any] | None:
        self.get_calls.append((kind, name, namespace))
        for raw in self.objects.get(kind, []):
            metadata = raw.get("metadata", {})
            if metadata.get("name") != name:
                continue
            if namespace is not None and metadata.get("namespace") != namespace:
                continue
            return raw
        return None

    def read_secret(self, namespace: str, name: str) -> dict[str, str]:
        from garden_examiner.exceptions import NotFoundError

        try:
            return self.secrets[(namespace, name)]
        except KeyError:
            raise NotFoundError(f"{namespace}/{name}", source="provider") from None


# ---------------------------------------------------------------------------
# Raw object factories
# ---------------------------------------------------------------------------

def raw_shoot(
    name: str,
    project: str = "dev",
    *,
    infra: str = "aws",
    seed: str | None = "aws-eu1",
    state: str = "Succeeded",
) -> dict[str, Any]:
    spec: dict[str, Any] = {
        "cloudProfileName": infra,
        "provider": {"type": infra},
        "region": "eu-west-1",
        "dns": {"domain": f"{name}.{project}.example.com"},
        "kubernetes": {"version": "1.29.3"},
    }
    if seed is not None:
        spec["seedName"] = seed
    return {
        "metadata": {"name": name, "namespace": f"garden-{project}"},
        "spec": spec,
        "status": {"lastOperation": {"state": state}},
    }


def raw_seed(name: str, *, infra: str = "aws") -> dict[str, Any]:
    return {
        "metadata": {"name": name, "labels": {"cloudprofile": infra}},
        "spec": {
            "provider": {"type": infra, "region": "eu-west-1"},
            "ingress": {"domain": f"ingress.{name}.example.com"},
            "secretRef": {"namespace": "garden", "name": f"seed-{name}"},
        },
    }


def raw_profile(name: str, *, infra: str = "aws") -> dict[str, Any]:
    return {
        "metadata": {"name": name},
        "spec": {
            "type": infra,
            "kubernetes": {"versions": [{"version": "1.29.3"}, {"version": "1.28.7"}]},
        },
    }


def raw_project(name: str) -> dict[str, Any]:
    return {
        "metadata": {"name": name},
        "spec": {
            "namespace": f"garden-{name}",
            "owner": {"kind": "User", "name": f"{name}-owner@example.com"},
            "purpose": f"{name} workloads",
        },
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def options() -> ResolveOptions:
    return ResolveOptions()


@pytest.fixture
def recording_output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def garden() -> FakeGardenProvider:
    """A small landscape: two projects, three shoots, two seeds."""
    return FakeGardenProvider(
        objects={
            "shoots": [
                raw_shoot("api", "dev"),
                raw_shoot("web", "dev", infra="gcp", seed="gcp-us1"),
                raw_shoot("api", "prod", seed=None, state="Processing"),
            ],
            "seeds": [raw_seed("aws-eu1"), raw_seed("gcp-us1", infra="gcp")],
            "cloudprofiles": [raw_profile("aws"), raw_profile("gcp", infra="gcp")],
            "projects": [raw_project("dev"), raw_project("prod")],
        },
        secrets={
            ("garden-dev", "api.kubeconfig"): {"kubeconfig": "apiVersion: v1\nkind: Config\n"},
            ("garden", "seed-aws-eu1"): {"kubeconfig": "seed-config"},
        },
    )
