"""Infrastructure: locating the garden cluster kubeconfig.

Lookup order
------------
1. An explicit path (``--kubeconfig``).
2. ``GEX_KUBECONFIG``.
3. The first entry of ``KUBECONFIG``.
4. ``~/.kube/config``.

Rules
-----
* Detection only checks the filesystem; the file is not parsed here.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from garden_examiner.exceptions import KubeconfigNotFoundError

ENV_GEX_KUBECONFIG: str = "GEX_KUBECONFIG"
ENV_KUBECONFIG: str = "KUBECONFIG"
DEFAULT_KUBECONFIG: Path = Path("~/.kube/config")


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class KubeconfigStatus:
    """Result of a kubeconfig lookup.

    Attributes
    ----------
    found : bool
        Whether an existing kubeconfig file was located.
    path : Path | None
        The located (or, when missing, the last candidate) path.
    origin : str
        Where the path came from: ``"argument"``, an environment variable
        name, or ``"default"``.
    """

    found: bool
    path: Path | None
    origin: str


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def _candidates(explicit: str | os.PathLike[str] | None) -> list[tuple[Path, str]]:
    candidates: list[tuple[Path, str]] = []
    if explicit:
        candidates.append((Path(explicit), "argument"))
    gex = os.environ.get(ENV_GEX_KUBECONFIG)
    if gex:
        candidates.append((Path(gex), ENV_GEX_KUBECONFIG))
    kube = os.environ.get(ENV_KUBECONFIG)
    if kube:
        first = kube.split(os.pathsep)[0]
        if first:
            candidates.append((Path(first), ENV_KUBECONFIG))
    candidates.append((DEFAULT_KUBECONFIG, "default"))
    return candidates


def detect_kubeconfig(explicit: str | os.PathLike[str] | None = None) -> KubeconfigStatus:
    """Locate the garden kubeconfig.

    An explicitly configured location wins even when the file is missing,
    so a typo is reported instead of silently falling back.
    """
    candidates = _candidates(explicit)
    for path, origin in candidates:
        resolved = path.expanduser()
        if resolved.is_file():
            return KubeconfigStatus(found=True, path=resolved, origin=origin)
        if origin != "default":
            return KubeconfigStatus(found=False, path=resolved, origin=origin)
    path, origin = candidates[-1]
    return KubeconfigStatus(found=False, path=path.expanduser(), origin=origin)


def require_kubeconfig(explicit: str | os.PathLike[str] | None = None) -> Path:
    """Locate the garden kubeconfig or raise :class:`KubeconfigNotFoundError`."""
    status = detect_kubeconfig(explicit)
    if not status.found or status.path is None:
        raise KubeconfigNotFoundError(
            f"No garden kubeconfig found at {status.path} (from {status.origin}).",
            hint=(
                f"Pass --kubeconfig, or set {ENV_GEX_KUBECONFIG} or "
                f"{ENV_KUBECONFIG} to the garden cluster kubeconfig."
            ),
        )
    return status.path
