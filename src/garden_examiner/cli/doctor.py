"""``gex doctor``: environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can talk to a garden cluster.

This module lives in the CLI layer; it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import importlib
import platform
import sys

from garden_examiner.cli import exit_codes
from garden_examiner.cli.console import console
from garden_examiner.infra.kubeconfig import (
    ENV_GEX_KUBECONFIG,
    ENV_KUBECONFIG,
    detect_kubeconfig,
)
from garden_examiner.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = major >= 3 and minor >= 10
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _library_check(
    label: str,
    module: str,
    *,
    required: bool,
) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable library."""
    try:
        imported = importlib.import_module(module)
    except ImportError:
        status = "[red]FAIL[/red]" if required else "[yellow]WARN[/yellow]"
        return label, "NOT INSTALLED", status
    version = getattr(imported, "__version__", None) or "unknown"
    return label, str(version), "[green]OK[/green]"


def _kubernetes_check() -> tuple[str, str, str]:
    return _library_check("kubernetes", "kubernetes", required=True)


def _yaml_check() -> tuple[str, str, str]:
    return _library_check("PyYAML", "yaml", required=False)


def _kubeconfig_check(explicit: str | None = None) -> tuple[str, str, str]:
    """Return (label, value, status) for the garden kubeconfig row."""
    status_obj = detect_kubeconfig(explicit)
    if status_obj.found:
        return "kubeconfig", f"{status_obj.path} ({status_obj.origin})", "[green]OK[/green]"
    return "kubeconfig", "not found", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _gex_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the garden-examiner version row."""
    return "gex", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ngex doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(kubeconfig: str | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _gex_version_check(),
        _python_version_check(),
        _kubernetes_check(),
        _yaml_check(),
        _kubeconfig_check(kubeconfig),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="gex doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    # Point at the lookup chain when no kubeconfig was found.
    if not detect_kubeconfig(kubeconfig).found:
        guidance = (
            f"Pass --kubeconfig, or set {ENV_GEX_KUBECONFIG} or {ENV_KUBECONFIG} "
            "to the garden cluster kubeconfig."
        )
        if rich_available:
            console.print("[yellow]No garden kubeconfig found.[/yellow]")
            console.print(f"{guidance}\n")
        else:
            print("No garden kubeconfig found.", file=sys.stderr)
            print(f"{guidance}\n", file=sys.stderr)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
