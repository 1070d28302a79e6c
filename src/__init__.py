"""
docmacro - Macro expansion for document trees

Expands macro placeholders embedded in parsed documents into generated
content, in priority order, until no placeholders remain.
"""

__version__ = "1.0.0"

from .lib import MacroTransformation, MacroRegistry, LOG, state_connectToLogger
from .models import (
    ContentLeaf,
    Container,
    Placeholder,
    Marker,
    Element,
    MacroDescriptor,
    ExecutionContext,
    InlinePolicy,
)

__all__ = [
    "MacroTransformation",
    "MacroRegistry",
    "LOG",
    "state_connectToLogger",
    "ContentLeaf",
    "Container",
    "Placeholder",
    "Marker",
    "Element",
    "MacroDescriptor",
    "ExecutionContext",
    "InlinePolicy",
    "__version__",
]
