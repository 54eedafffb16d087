"""Allow ``python -m garden_examiner`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m garden_examiner`` behaves identically to the ``gex``
console script.
"""

from __future__ import annotations

from garden_examiner.cli.app import cli

if __name__ == "__main__":
    cli()
