"""
Execution context handed to every macro invocation

One context is created per top-level transform call and dropped when the
call returns. It is passed explicitly; there is no ambient/global context.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .nodes import Container, Placeholder


@dataclass
class ExecutionContext:
    """
    State a macro can rely on while it runs

    Attributes:
        document: Root of the tree being transformed
        syntax: Active syntax identifier
        transformation: Engine running this call, for nested transformation
                        (``context.transformation.transform(subtree, context.syntax)``)
        inline: Whether the placeholder being expanded is inline
        current_placeholder: Placeholder being expanded in the current step
    """
    document: "Container"
    syntax: Optional[str]
    transformation: Any = field(default=None, repr=False)
    inline: bool = False
    current_placeholder: Optional["Placeholder"] = None
