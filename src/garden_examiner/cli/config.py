"""Command-line configuration → :class:`ResolveOptions`.

There are no configuration files: flags win, environment variables
provide defaults.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping

from garden_examiner.core.options import ResolveOptions

ENV_PROJECT: str = "GEX_PROJECT"

DEFAULT_ENV: dict[str, str] = {
    "shoot": "GEX_SHOOT",
    "seed": "GEX_SEED",
    "profile": "GEX_PROFILE",
    "project": ENV_PROJECT,
}
"""Environment variable holding the default selection of each kind."""


def build_options(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
) -> ResolveOptions:
    """Merge parsed arguments with the environment."""
    env = os.environ if environ is None else environ
    kind: str = args.kind
    return ResolveOptions(
        default=env.get(DEFAULT_ENV[kind]) or None,
        output=getattr(args, "output", None),
        project=getattr(args, "project", None) or env.get(ENV_PROJECT) or None,
        seed=getattr(args, "seed", None),
        infrastructure=getattr(args, "infra", None),
    )
