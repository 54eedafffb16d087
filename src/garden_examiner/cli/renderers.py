"""Output sinks that render resolved elements for the terminal.

Each renderer is an :class:`~garden_examiner.core.output.ElementOutput`
or :class:`~garden_examiner.core.output.SingleElementOutput` whose
``out()`` writes to stdout.  Tables and attribute listings go through
Rich; YAML, JSON, selections and kubeconfigs are written as plain text
so they can be piped.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable, Sequence
from typing import Any

from garden_examiner.cli.console import console, get_output_console
from garden_examiner.core.models import Profile, Project, Seed, Shoot
from garden_examiner.core.output import ElementOutput, SingleElementOutput
from garden_examiner.exceptions import EnvironmentError, SelectionError

OUTPUT_FORMATS: tuple[str, ...] = ("table", "wide", "yaml", "json")

Row = Sequence[str]
Attributes = list[tuple[str, str]]


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for tabular rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def _import_yaml() -> Any:
    """Import PyYAML lazily for YAML rendering."""
    try:
        import yaml
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyYAML is not installed. Install with: pip install pyyaml",
        ) from exc
    return yaml


def _escape(text: str) -> str:
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


def _or_dash(value: object) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


# ---------------------------------------------------------------------------
# Per-kind presentation (pure transforms)
# ---------------------------------------------------------------------------

def _shoot_row(shoot: Shoot, wide: bool) -> Row:
    row = [
        shoot.name.project,
        shoot.name.name,
        shoot.infrastructure,
        _or_dash(shoot.seed),
        shoot.state,
    ]
    if wide:
        row += [shoot.region, shoot.profile, _or_dash(shoot.kubernetes_version)]
    return row


def _seed_row(seed: Seed, wide: bool) -> Row:
    row = [seed.name, seed.infrastructure, seed.region]
    if wide:
        row += [_or_dash(seed.ingress_domain), _or_dash(seed.profile)]
    return row


def _profile_row(profile: Profile, wide: bool) -> Row:
    row = [profile.name, profile.infrastructure]
    if wide:
        row.append(", ".join(profile.kubernetes_versions) or "-")
    return row


def _project_row(project: Project, wide: bool) -> Row:
    row = [project.name, _or_dash(project.namespace), _or_dash(project.owner)]
    if wide:
        row.append(_or_dash(project.purpose))
    return row


TABLE_COLUMNS: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "shoot": (("Project", "Shoot", "Infra", "Seed", "State"), ("Region", "Profile", "Version")),
    "seed": (("Seed", "Infra", "Region"), ("Ingress Domain", "Profile")),
    "profile": (("Profile", "Infra"), ("Kubernetes Versions",)),
    "project": (("Project", "Namespace", "Owner"), ("Purpose",)),
}

TABLE_ROWS: dict[str, Callable[[Any, bool], Row]] = {
    "shoot": _shoot_row,
    "seed": _seed_row,
    "profile": _profile_row,
    "project": _project_row,
}


def describe_shoot(shoot: Shoot) -> Attributes:
    attrs: Attributes = [
        ("Shoot", shoot.name.name),
        ("Project", shoot.name.project),
        ("Profile", f"{shoot.profile} ({shoot.infrastructure})"),
        ("Region", shoot.region),
        ("Seed", _or_dash(shoot.seed)),
        ("Namespace", shoot.namespace),
        ("Seed Namespace", _or_dash(shoot.technical_id)),
        ("API Server", _or_dash(shoot.api_server)),
        ("Kubernetes", _or_dash(shoot.kubernetes_version)),
        ("State", shoot.state),
    ]
    attrs += [(f"  {condition}", message) for condition, message in shoot.condition_errors.items()]
    if shoot.error:
        attrs.append(("Error", shoot.error))
    return attrs


def describe_seed(seed: Seed) -> Attributes:
    secret = f"{seed.secret_ref.namespace}/{seed.secret_ref.name}" if seed.secret_ref else None
    return [
        ("Seed", seed.name),
        ("Infrastructure", seed.infrastructure),
        ("Region", seed.region),
        ("Profile", _or_dash(seed.profile)),
        ("Ingress Domain", _or_dash(seed.ingress_domain)),
        ("Secret", _or_dash(secret)),
    ]


def describe_profile(profile: Profile) -> Attributes:
    return [
        ("Profile", profile.name),
        ("Infrastructure", profile.infrastructure),
        ("Kubernetes Versions", ", ".join(profile.kubernetes_versions) or "-"),
    ]


def describe_project(project: Project) -> Attributes:
    return [
        ("Project", project.name),
        ("Namespace", _or_dash(project.namespace)),
        ("Owner", _or_dash(project.owner)),
        ("Purpose", _or_dash(project.purpose)),
        ("Description", _or_dash(project.description)),
    ]


DESCRIBERS: dict[str, Callable[[Any], Attributes]] = {
    "shoot": describe_shoot,
    "seed": describe_seed,
    "profile": describe_profile,
    "project": describe_project,
}


def to_document(element: Any) -> Any:
    """Convert a domain model into plain YAML/JSON-serialisable data."""
    if dataclasses.is_dataclass(element) and not isinstance(element, type):
        return {
            field.name: to_document(getattr(element, field.name))
            for field in dataclasses.fields(element)
        }
    if isinstance(element, dict):
        return {str(key): to_document(value) for key, value in element.items()}
    if isinstance(element, (list, tuple)):
        return [to_document(value) for value in element]
    return element


# ---------------------------------------------------------------------------
# Multi-element renderers
# ---------------------------------------------------------------------------

class TableOutput(ElementOutput):
    """Rich table with one row per element.

    ``close()`` sorts the rows; without it rows keep resolution order.
    """

    def __init__(
        self,
        headers: Sequence[str],
        row: Callable[[Any], Row],
    ) -> None:
        super().__init__(mapper=row)
        self.headers: tuple[str, ...] = tuple(headers)

    @property
    def rows(self) -> list[Row]:
        return self.elements

    def close(self) -> None:
        super().close()
        self.elements.sort(key=lambda row: tuple(row))

    def out(self) -> None:
        if not self.rows:
            console.print("[yellow]No resources found.[/yellow]")
            return
        table_class = _import_rich_table()
        table = table_class(show_header=True, header_style="bold cyan", border_style="dim")
        for header in self.headers:
            table.add_column(header)
        for row in self.rows:
            table.add_row(*(_escape(cell) for cell in row))
        get_output_console().print(table)


class DescribeOutput(ElementOutput):
    """Attribute listing per element, separated by ``---``."""

    def __init__(self, describe: Callable[[Any], Attributes]) -> None:
        super().__init__()
        self._describe: Callable[[Any], Attributes] = describe

    def out(self) -> None:
        output = get_output_console()
        for element in self.elements:
            output.print("---")
            attrs = self._describe(element)
            width = max((len(label) for label, _ in attrs), default=0) + 1
            for label, value in attrs:
                padded = f"{label + ':':<{width}}"
                output.print(f"[bold]{_escape(padded)}[/bold] {_escape(value)}")


class YamlOutput(ElementOutput):
    """YAML stream with one document per element."""

    def __init__(self) -> None:
        super().__init__(mapper=to_document)

    def out(self) -> None:
        yaml = _import_yaml()
        print(yaml.safe_dump_all(self.elements, sort_keys=False), end="")


class JsonOutput(ElementOutput):
    """JSON array of all elements."""

    def __init__(self) -> None:
        super().__init__(mapper=to_document)

    def out(self) -> None:
        print(json.dumps(self.elements, indent=2))


# ---------------------------------------------------------------------------
# Single-element renderers
# ---------------------------------------------------------------------------

class SelectOutput(SingleElementOutput):
    """Prints a shell assignment selecting the element as default."""

    def __init__(self, variable: str, key: Callable[[Any], Any]) -> None:
        super().__init__()
        self._variable: str = variable
        self._key: Callable[[Any], Any] = key

    def out(self) -> None:
        print(f"export {self._variable}={self._key(self.require())}")


class KubeconfigOutput(SingleElementOutput):
    """Prints the kubeconfig of the selected element."""

    def __init__(self, kubeconfig: Callable[[Any], str]) -> None:
        super().__init__()
        self._kubeconfig: Callable[[Any], str] = kubeconfig

    def out(self) -> None:
        text = self._kubeconfig(self.require())
        print(text, end="" if text.endswith("\n") else "\n")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_listing_output(kind_name: str, output_format: str | None) -> ElementOutput:
    """Build the sink for ``get`` according to ``-o``.

    Raises
    ------
    SelectionError
        For an unknown output format.
    """
    fmt = output_format or "table"
    if fmt in ("table", "wide"):
        wide = fmt == "wide"
        base, extra = TABLE_COLUMNS[kind_name]
        row = TABLE_ROWS[kind_name]
        return TableOutput(base + extra if wide else base, lambda e: row(e, wide))
    if fmt == "yaml":
        return YamlOutput()
    if fmt == "json":
        return JsonOutput()
    raise SelectionError(
        f"unknown output format '{fmt}'",
        hint=f"Valid formats: {', '.join(OUTPUT_FORMATS)}",
    )


def create_describe_output(kind_name: str) -> DescribeOutput:
    return DescribeOutput(DESCRIBERS[kind_name])
