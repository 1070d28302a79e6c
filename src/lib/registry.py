"""
Macro registry

Maps macro names to MacroDescriptor objects, scoped by syntax. A descriptor
registered with ``syntax=None`` is available in every syntax; a descriptor
bound to a syntax shadows a syntax-agnostic one of the same name.
"""

from typing import Callable, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel

from ..models.macros import (
    DEFAULT_PRIORITY,
    MacroDescriptor,
    MacroExecute,
    MacroNotFoundError,
    ParameterDecoder,
)
from .log import LOG


class MacroRegistry:
    """
    Registry of macro descriptors

    Example:
        registry = MacroRegistry()

        @registry.macro("hello", supports_inline=True)
        def hello(parameters, content, context):
            return [ContentLeaf("Hello")]

        registry.resolve("hello", "markdown").execute(...)
    """

    def __init__(self) -> None:
        self.specs: Dict[Tuple[str, Optional[str]], MacroDescriptor] = {}

    def register(self, descriptor: MacroDescriptor) -> MacroDescriptor:
        """Register a descriptor under its name and aliases"""
        for name in [descriptor.name, *descriptor.aliases]:
            self.specs[(name, descriptor.syntax)] = descriptor
        LOG(
            f"Registered macro [{descriptor.name}] for syntax [{descriptor.syntax}] "
            f"(priority={descriptor.priority}, inline={descriptor.supports_inline})",
            level=3,
        )
        return descriptor

    def macro(
        self,
        name: str,
        priority: int = DEFAULT_PRIORITY,
        supports_inline: bool = False,
        syntax: Optional[str] = None,
        parameters_model: Optional[Type[BaseModel]] = None,
        decoder: Optional[ParameterDecoder] = None,
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[MacroExecute], MacroExecute]:
        """
        Decorator registering a function as a macro's execute callable

        The function receives (parameters, content, context) and returns
        the list of nodes replacing the placeholder.
        """
        def decorator(fn: MacroExecute) -> MacroExecute:
            self.register(MacroDescriptor(
                name=name,
                execute=fn,
                priority=priority,
                supports_inline=supports_inline,
                syntax=syntax,
                parameters_model=parameters_model,
                decoder=decoder,
                description=description or (fn.__doc__ or "").strip(),
                aliases=list(aliases or []),
            ))
            return fn
        return decorator

    def resolve(self, name: str, syntax: Optional[str]) -> MacroDescriptor:
        """
        Find the descriptor for a macro name in a syntax

        Raises:
            MacroNotFoundError: If neither a syntax-bound nor a syntax-agnostic
                                macro is registered under name
        """
        descriptor = self.specs.get((name, syntax))
        if descriptor is None:
            descriptor = self.specs.get((name, None))
        if descriptor is None:
            raise MacroNotFoundError(name, syntax)
        return descriptor

    def has(self, name: str, syntax: Optional[str]) -> bool:
        return (name, syntax) in self.specs or (name, None) in self.specs

    def names(self, syntax: Optional[str] = None) -> List[str]:
        """Sorted macro names (aliases included) resolvable in a syntax"""
        return sorted({
            name for name, bound in self.specs
            if bound is None or bound == syntax
        })
