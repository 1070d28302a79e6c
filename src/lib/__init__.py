"""
docmacro - Macro expansion for document trees

Expands macro placeholders embedded in parsed documents into generated content.
"""

__version__ = "1.0.0"

from .transformation import MacroTransformation
from .registry import MacroRegistry
from .tree import TreeError, placeholders_find, node_replace, parent_of
from .document import DocumentError, document_load, document_save
from .reporter import ErrorReporter, MacroErrorKind
from .log import LOG, state_connectToLogger

__all__ = [
    "MacroTransformation",
    "MacroRegistry",
    "TreeError",
    "placeholders_find",
    "node_replace",
    "parent_of",
    "DocumentError",
    "document_load",
    "document_save",
    "ErrorReporter",
    "MacroErrorKind",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
