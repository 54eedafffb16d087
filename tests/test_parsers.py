"""Tests for raw custom-resource parsing (core/parsers.py) and the models."""

from __future__ import annotations

import pytest

from conftest import raw_profile, raw_project, raw_seed, raw_shoot
from garden_examiner.core.models import SecretRef, ShootName
from garden_examiner.core.parsers import (
    namespace_of_project,
    parse_profile,
    parse_project,
    parse_seed,
    parse_shoot,
    project_of_namespace,
)


# ---------------------------------------------------------------------------
# Namespace convention
# ---------------------------------------------------------------------------

class TestNamespaces:
    @pytest.mark.parametrize(
        ("namespace", "project"),
        [("garden-dev", "dev"), ("garden", "garden"), ("garden-a-b", "a-b")],
    )
    def test_project_of_namespace(self, namespace: str, project: str) -> None:
        assert project_of_namespace(namespace) == project

    def test_namespace_of_project(self) -> None:
        assert namespace_of_project("dev") == "garden-dev"
        assert namespace_of_project("garden") == "garden"


# ---------------------------------------------------------------------------
# Shoots
# ---------------------------------------------------------------------------

class TestParseShoot:
    def test_fields(self) -> None:
        shoot = parse_shoot(raw_shoot("api", "dev"))
        assert shoot.name == ShootName(project="dev", name="api")
        assert str(shoot.name) == "dev/api"
        assert shoot.namespace == "garden-dev"
        assert shoot.profile == "aws"
        assert shoot.infrastructure == "aws"
        assert shoot.region == "eu-west-1"
        assert shoot.seed == "aws-eu1"
        assert shoot.kubernetes_version == "1.29.3"
        assert shoot.state == "Succeeded"
        assert shoot.condition_errors == {}
        assert shoot.error is None

    def test_api_server_from_domain(self) -> None:
        shoot = parse_shoot(raw_shoot("api", "dev"))
        assert shoot.api_server == "https://api.api.dev.example.com"

    def test_seed_falls_back_to_status(self) -> None:
        raw = raw_shoot("api", seed=None)
        raw["status"]["seedName"] = "status-seed"
        assert parse_shoot(raw).seed == "status-seed"

    def test_unreconciled_shoot(self) -> None:
        shoot = parse_shoot({"metadata": {"name": "new", "namespace": "garden-dev"}})
        assert shoot.state == "Unknown"
        assert shoot.seed is None
        assert shoot.api_server is None
        assert shoot.infrastructure == "unknown"

    def test_failed_conditions_and_errors(self) -> None:
        raw = raw_shoot("api")
        raw["status"]["conditions"] = [
            {"type": "APIServerAvailable", "status": "True", "message": "ok"},
            {"type": "EveryNodeReady", "status": "False", "message": "node down"},
        ]
        raw["status"]["lastErrors"] = [
            {"description": "quota exceeded"},
            {"description": "retry later"},
        ]
        shoot = parse_shoot(raw)
        assert shoot.condition_errors == {"EveryNodeReady": "node down"}
        assert shoot.error == "quota exceeded; retry later"

    def test_owner_map_names_the_project(self) -> None:
        raw = raw_shoot("s1")
        raw["metadata"]["namespace"] = "team-ns"
        assert str(parse_shoot(raw).name) == "team-ns/s1"
        assert str(parse_shoot(raw, {"team-ns": "team"}).name) == "team/s1"

    def test_technical_id(self) -> None:
        raw = raw_shoot("api")
        assert parse_shoot(raw).technical_id is None
        raw["status"]["technicalID"] = "shoot--dev--api"
        assert parse_shoot(raw).technical_id == "shoot--dev--api"

    def test_frozen(self) -> None:
        shoot = parse_shoot(raw_shoot("api"))
        with pytest.raises(AttributeError):
            shoot.state = "Failed"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Seeds, profiles, projects
# ---------------------------------------------------------------------------

class TestParseSeed:
    def test_fields(self) -> None:
        seed = parse_seed(raw_seed("aws-eu1"))
        assert seed.name == "aws-eu1"
        assert seed.profile == "aws"
        assert seed.infrastructure == "aws"
        assert seed.region == "eu-west-1"
        assert seed.ingress_domain == "ingress.aws-eu1.example.com"
        assert seed.secret_ref == SecretRef(namespace="garden", name="seed-aws-eu1")

    def test_legacy_ingress_domain(self) -> None:
        raw = raw_seed("s")
        del raw["spec"]["ingress"]
        raw["spec"]["dns"] = {"ingressDomain": "legacy.example.com"}
        assert parse_seed(raw).ingress_domain == "legacy.example.com"

    def test_without_secret_ref(self) -> None:
        raw = raw_seed("s")
        del raw["spec"]["secretRef"]
        assert parse_seed(raw).secret_ref is None


class TestParseProfile:
    def test_fields(self) -> None:
        profile = parse_profile(raw_profile("gcp", infra="gcp"))
        assert profile.name == "gcp"
        assert profile.infrastructure == "gcp"
        assert profile.kubernetes_versions == ("1.29.3", "1.28.7")

    def test_without_versions(self) -> None:
        profile = parse_profile({"metadata": {"name": "bare"}, "spec": {"type": "aws"}})
        assert profile.kubernetes_versions == ()


class TestParseProject:
    def test_fields(self) -> None:
        project = parse_project(raw_project("dev"))
        assert project.name == "dev"
        assert project.namespace == "garden-dev"
        assert project.owner == "dev-owner@example.com"
        assert project.purpose == "dev workloads"
        assert project.description is None

    def test_empty_spec(self) -> None:
        project = parse_project({"metadata": {"name": "p"}})
        assert project.namespace is None
        assert project.owner is None
