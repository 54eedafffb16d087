"""CLI application entry point and command routing for gex.

This module is the **sole error boundary** for the entire application.
It catches :class:`~garden_examiner.exceptions.GexError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; resolution is delegated to
  :func:`~garden_examiner.core.handler.resolve`, data access to the
  infrastructure layer.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

from garden_examiner.cli import exit_codes
from garden_examiner.cli.config import DEFAULT_ENV, build_options
from garden_examiner.cli.console import console
from garden_examiner.cli.log_setup import configure_logging
from garden_examiner.exceptions import GexError, NotFoundError
from garden_examiner.version import __version__

VERBS: dict[str, tuple[str, ...]] = {
    "shoot": ("get", "describe", "select", "kubeconfig"),
    "seed": ("get", "describe", "select", "kubeconfig"),
    "profile": ("get", "describe"),
    "project": ("get", "describe", "select"),
}

VERB_HELP: dict[str, str] = {
    "get": "list {kind}(s)",
    "describe": "describe {kind}(s)",
    "select": "print a shell export selecting one {kind} as default",
    "kubeconfig": "print the kubeconfig of one {kind}",
}


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_scope_options(parser: argparse.ArgumentParser, kind: str) -> None:
    if kind == "shoot":
        parser.add_argument(
            "-p",
            "--project",
            default=None,
            help="Restrict to one project (default: $GEX_PROJECT).",
        )
    if kind == "project":
        parser.add_argument(
            "-p",
            "--project",
            default=None,
            help="Project used when no name is given (default: $GEX_PROJECT).",
        )
    if kind == "shoot":
        parser.add_argument("--seed", default=None, help="Restrict to shoots on this seed.")
    if kind in ("shoot", "seed", "profile"):
        parser.add_argument(
            "--infra",
            default=None,
            help="Restrict to one infrastructure type (aws, gcp, azure, ...).",
        )


def _add_verb_parser(
    verbs: argparse._SubParsersAction,
    kind: str,
    verb: str,
) -> None:
    parser = verbs.add_parser(verb, help=VERB_HELP[verb].format(kind=kind))
    if verb == "kubeconfig":
        parser.add_argument(
            "name",
            nargs="?",
            default=None,
            help=f"{kind} name (default: ${DEFAULT_ENV[kind]}).",
        )
    else:
        parser.add_argument(
            "names",
            nargs="*",
            metavar=kind,
            help=f"{kind} names or glob patterns; 'all' selects every {kind}.",
        )
    if verb == "get":
        parser.add_argument(
            "-o",
            "--output",
            default=None,
            help="Output format: table (default), wide, yaml or json.",
        )
    if verb == "select":
        parser.add_argument(
            "-i",
            "--interactive",
            action="store_true",
            help=f"Choose the {kind} from an interactive list.",
        )
    _add_scope_options(parser, kind)
    parser.set_defaults(verb=verb)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands:
    * ``gex doctor``: environment diagnostics
    * ``gex <kind> <verb> [names...]``: resolve and render elements
    * ``gex --version``
    """
    parser = argparse.ArgumentParser(
        prog="gex",
        description="Inspect shoots, seeds, profiles and projects of a garden cluster.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Garden cluster kubeconfig (default: $GEX_KUBECONFIG, $KUBECONFIG, ~/.kube/config).",
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("doctor", help="run environment diagnostics")

    for kind, kind_verbs in VERBS.items():
        kind_parser = commands.add_parser(kind, help=f"inspect {kind}s")
        kind_parser.set_defaults(kind=kind, verb=None, kind_parser=kind_parser)
        verbs = kind_parser.add_subparsers(dest="verb")
        for verb in kind_verbs:
            _add_verb_parser(verbs, kind, verb)
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _create_provider(kubeconfig: str | None) -> Any:
    """Build the garden data provider for this invocation."""
    from garden_examiner.infra.kubeconfig import require_kubeconfig
    from garden_examiner.infra.kubernetes_provider import KubernetesGardenProvider

    return KubernetesGardenProvider(require_kubeconfig(kubeconfig))


def _handle_resource(args: argparse.Namespace) -> int:
    """Dispatch ``gex <kind> <verb>``.

    Flow:
    1. Collect resolution options from flags and environment.
    2. Build the provider and the resource kind.
    3. Pick the output sink for the verb.
    4. Resolve the name arguments into the sink.
    """
    from garden_examiner.cli.renderers import (
        KubeconfigOutput,
        create_describe_output,
        create_listing_output,
    )
    from garden_examiner.core.handler import ElementHandler, resolve, resolve_named
    from garden_examiner.core.kinds import create_kind

    options = build_options(args)
    if args.verb == "get":
        # Validate the format before touching the cluster.
        output: Any = create_listing_output(args.kind, options.output)
    elif args.verb == "describe":
        output = create_describe_output(args.kind)
    else:
        output = None

    kind = create_kind(args.kind, _create_provider(args.kubeconfig), options)

    if args.verb == "select":
        return _handle_select(args, kind, options)

    if args.verb == "kubeconfig":
        handler = ElementHandler(kind, KubeconfigOutput(kind.kubeconfig))
        resolve_named(args.name, options, handler)
        return exit_codes.SUCCESS

    resolve(args.names, options, ElementHandler(kind, output))
    return exit_codes.SUCCESS


def _handle_select(args: argparse.Namespace, kind: Any, options: Any) -> int:
    """Dispatch ``gex <kind> select``, optionally through a prompt."""
    from garden_examiner.cli.renderers import SelectOutput
    from garden_examiner.core.handler import ALL, ElementHandler, resolve
    from garden_examiner.core.output import ElementOutput

    select = SelectOutput(DEFAULT_ENV[args.kind], kind.key)
    if not args.interactive:
        resolve(args.names, options, ElementHandler(kind, select))
        return exit_codes.SUCCESS

    from garden_examiner.cli.select_prompt import prompt_element_selection

    candidates = ElementOutput()
    resolve(args.names or [ALL], options, ElementHandler(kind, candidates))
    chosen = prompt_element_selection(
        args.kind,
        candidates.elements,
        label=lambda element: str(kind.key(element)),
    )
    select.add(chosen)
    select.out()
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from garden_examiner.cli.doctor import run_doctor

    return run_doctor(args.kubeconfig)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the gex CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)

    if args.command == "doctor":
        return _handle_doctor(args)

    if args.verb is None:
        args.kind_parser.print_help()
        return exit_codes.SUCCESS

    return _handle_resource(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GexError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        if isinstance(exc, NotFoundError):
            sys.exit(exit_codes.NOT_FOUND)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
