"""
Macro descriptor and metadata models

Defines what the transformation needs to know about a macro: its priority,
whether it can run inline, how its parameters are decoded, and how it is
executed. Descriptors are resolved by MacroRegistry and are read-only for
the duration of a transform call.
"""

import functools
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Type, TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from .context import ExecutionContext
    from .nodes import Node


DEFAULT_PRIORITY = 1000


class MacroError(Exception):
    """Base class for macro-level failures contained by the transformation"""
    pass


class MacroNotFoundError(MacroError):
    """Raised when no macro is registered under a name for a syntax"""

    def __init__(self, name: str, syntax: Optional[str]) -> None:
        super().__init__(f"No macro registered for name [{name}] and syntax [{syntax}]")
        self.name = name
        self.syntax = syntax


class ParameterDecodeError(MacroError):
    """Raised when placeholder parameters cannot be decoded into a macro's schema"""
    pass


class MacroExecutionError(MacroError):
    """Raised by macros (or on their behalf) when execution fails"""
    pass


class InlinePolicy(str, Enum):
    """
    Reaction to an inline placeholder whose macro only supports block mode

    HALT stops the current transform pass after rendering the error.
    SKIP renders the error and carries on with the next candidate.
    """
    HALT = "halt"
    SKIP = "skip"


MacroExecute = Callable[[Any, Optional[str], "ExecutionContext"], Sequence["Node"]]
ParameterDecoder = Callable[[Mapping[str, str]], Any]


@dataclass(frozen=True)
class MacroDescriptor:
    """
    Specification of a macro as seen by the transformation

    Attributes:
        name: Macro name
        execute: Invocation function (parameters, content, context) -> nodes
        priority: Execution order, lower runs first
        supports_inline: Whether the macro may be used inside running text
        syntax: Syntax the macro is bound to (None = every syntax)
        parameters_model: pydantic model the raw parameters are validated into
        decoder: Explicit decode function, used instead of parameters_model
        description: Human-readable description
        aliases: Alternative names for the macro
    """
    name: str
    execute: MacroExecute
    priority: int = DEFAULT_PRIORITY
    supports_inline: bool = False
    syntax: Optional[str] = None
    parameters_model: Optional[Type[BaseModel]] = None
    decoder: Optional[ParameterDecoder] = None
    description: str = ""
    aliases: List[str] = field(default_factory=list)

    def parameters_decode(self, raw: Mapping[str, str]) -> Any:
        """
        Build the macro's parameter object from a placeholder's mapping

        Args:
            raw: String-keyed parameter mapping from the placeholder

        Returns:
            Decoded parameters: the decoder's result, a parameters_model
            instance, or a plain dict when the macro declares no schema

        Raises:
            ParameterDecodeError: If decoding or validation fails
        """
        if self.decoder is not None:
            try:
                return self.decoder(raw)
            except Exception as e:
                raise ParameterDecodeError(str(e)) from e

        if self.parameters_model is not None:
            try:
                return self.parameters_model.model_validate(dict(raw))
            except Exception as e:
                raise ParameterDecodeError(str(e)) from e

        return dict(raw)


def descriptor_compare(left: MacroDescriptor, right: MacroDescriptor) -> int:
    """Order two descriptors by priority (negative when left runs first)"""
    return (left.priority > right.priority) - (left.priority < right.priority)


priority_key = functools.cmp_to_key(descriptor_compare)
