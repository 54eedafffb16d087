"""garden-examiner: command-line inspector for Gardener landscapes.

Lists, filters and describes shoots, seeds, profiles and projects of a
garden cluster through one generic element-resolution framework.
"""

from garden_examiner.version import __version__

__all__: list[str] = ["__version__"]
