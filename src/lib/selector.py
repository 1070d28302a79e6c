"""
Selection of the next macro to execute

Resolves every pending placeholder, turns unresolvable ones into errors on
the spot, and picks the candidate with the lowest priority value. Equal
priorities keep document order, so same-priority macros run top to bottom.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models.macros import MacroDescriptor, MacroNotFoundError, priority_key
from ..models.nodes import Placeholder
from .reporter import ErrorReporter, MacroErrorKind


@dataclass
class MacroHolder:
    """A placeholder paired with the descriptor it resolved to"""
    placeholder: Placeholder
    descriptor: MacroDescriptor


def macro_selectHighest(
    placeholders: Sequence[Placeholder],
    registry,
    syntax: Optional[str],
    reporter: ErrorReporter,
) -> Optional[MacroHolder]:
    """
    Pick the highest-priority resolvable placeholder

    Args:
        placeholders: Pending placeholders in document order
        registry: Anything with resolve(name, syntax) -> MacroDescriptor
        syntax: Active syntax identifier
        reporter: Used to replace unresolvable placeholders with errors

    Returns:
        The selected pair, or None when nothing is left to execute
    """
    holders: List[MacroHolder] = []

    for placeholder in placeholders:
        try:
            descriptor = registry.resolve(placeholder.name, syntax)
        except MacroNotFoundError:
            reporter.error_generate(
                placeholder,
                MacroErrorKind.UNRESOLVED,
                f"Unknown macro: {placeholder.name}",
                f'The "{placeholder.name}" macro is not in the list of registered macros. '
                "Verify the spelling or contact your administrator.",
            )
            continue
        holders.append(MacroHolder(placeholder, descriptor))

    # sorted() is stable: ties stay in document order
    holders = sorted(holders, key=lambda holder: priority_key(holder.descriptor))

    return holders[0] if holders else None
