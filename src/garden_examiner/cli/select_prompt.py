"""Interactive element selection for ``gex <kind> select -i``.

This module is responsible for:

* Prompting the user to pick one element via questionary arrow keys.
* Returning the chosen element.

All display-related logic lives here; no resolution, no API access.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from garden_examiner.exceptions import EnvironmentError, SelectionError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def prompt_element_selection(
    kind_name: str,
    elements: Sequence[Any],
    label: Callable[[Any], str],
) -> Any:
    """Prompt the user to pick one of *elements*.

    Parameters
    ----------
    kind_name:
        Resource kind shown in the prompt (``project``, ``shoot``, ...).
    elements:
        Candidates, in display order.
    label:
        Renders the choice title of an element.

    Raises
    ------
    SelectionError
        If there is nothing to choose from, or the user cancels the
        prompt (Esc / Ctrl+C return ``None``).
    """
    if not elements:
        raise SelectionError(f"no {kind_name} available for selection")

    questionary = _import_questionary()
    choices = [
        questionary.Choice(title=label(element), value=index)
        for index, element in enumerate(elements)
    ]

    selected: int | None = questionary.select(
        f"Select {kind_name}:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()

    if selected is None:
        raise SelectionError(
            f"No {kind_name} selected.",
            hint="Use arrow keys to pick an entry, then press Enter.",
        )
    return elements[selected]
