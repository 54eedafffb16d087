"""Core / service layer: element resolution and pure data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""

from garden_examiner.core.cache import Cache
from garden_examiner.core.handler import ALL, ElementHandler, resolve, resolve_named
from garden_examiner.core.kinds import (
    ProfileKind,
    ProjectKind,
    SeedKind,
    ShootKind,
    create_kind,
)
from garden_examiner.core.models import Profile, Project, SecretRef, Seed, Shoot, ShootName
from garden_examiner.core.options import ResolveOptions
from garden_examiner.core.output import ElementOutput, SingleElementOutput
from garden_examiner.core.protocols import Cacher, GardenProvider, Handler, HandlerAdapter, Output

__all__: list[str] = [
    "ALL",
    "Cache",
    "Cacher",
    "ElementHandler",
    "ElementOutput",
    "GardenProvider",
    "Handler",
    "HandlerAdapter",
    "Output",
    "Profile",
    "ProfileKind",
    "Project",
    "ProjectKind",
    "ResolveOptions",
    "SecretRef",
    "Seed",
    "SeedKind",
    "Shoot",
    "ShootKind",
    "ShootName",
    "SingleElementOutput",
    "create_kind",
    "resolve",
    "resolve_named",
]
