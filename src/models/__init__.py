"""
Models package for docmacro

Contains data structures and type definitions for the macro transformation.
"""

from .state import ProgramState, pipeline
from .nodes import (
    NodeKind,
    Node,
    NODE_TYPES,
    ContentLeaf,
    Container,
    Placeholder,
    Marker,
    Element,
)
from .macros import (
    MacroDescriptor,
    InlinePolicy,
    MacroError,
    MacroNotFoundError,
    ParameterDecodeError,
    MacroExecutionError,
    descriptor_compare,
    priority_key,
)
from .context import ExecutionContext

__all__ = [
    "ProgramState",
    "pipeline",
    "NodeKind",
    "Node",
    "NODE_TYPES",
    "ContentLeaf",
    "Container",
    "Placeholder",
    "Marker",
    "Element",
    "MacroDescriptor",
    "InlinePolicy",
    "MacroError",
    "MacroNotFoundError",
    "ParameterDecodeError",
    "MacroExecutionError",
    "descriptor_compare",
    "priority_key",
    "ExecutionContext",
]
