"""Infrastructure layer: external system integration.

This layer wraps all interaction with the garden cluster API and the
local filesystem.  Every raw third-party exception must be caught here
and re-raised as a :class:`~garden_examiner.exceptions.GexError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from garden_examiner.infra.kubeconfig import (
    KubeconfigStatus,
    detect_kubeconfig,
    require_kubeconfig,
)
from garden_examiner.infra.kubernetes_provider import KubernetesGardenProvider

__all__: list[str] = [
    "KubeconfigStatus",
    "KubernetesGardenProvider",
    "detect_kubeconfig",
    "require_kubeconfig",
]
