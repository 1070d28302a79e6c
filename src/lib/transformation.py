"""
Macro transformation

Looks for all placeholders in a document and iteratively executes each
macro in priority order until none are left. Macros can:
- provide a priority specifying when they should run
- generate other macros (including themselves)

The placeholder list is recomputed from the tree after every single
execution. One expansion may insert, delete or rename any number of
placeholders anywhere, so a cached list would go stale. This costs O(n) per
step and O(n^2) for n macros; it is kept deliberately.

Example:
    >>> registry = MacroRegistry()
    >>> @registry.macro("hello")
    ... def hello(parameters, content, context):
    ...     return [ContentLeaf("Hello")]
    >>> document = Container(children=[Placeholder(name="hello")])
    >>> MacroTransformation(registry).transform(document, "markdown")
    >>> document.children[0].children
    [ContentLeaf(text='Hello')]
"""

from typing import Optional, Sequence

from ..config import appsettings
from ..models.context import ExecutionContext
from ..models.macros import InlinePolicy
from ..models.nodes import Container, Placeholder
from .executor import StepExecutor
from .log import LOG
from .reporter import ErrorReporter
from .selector import macro_selectHighest
from .tree import placeholders_find


class MacroTransformation:
    """
    Expands macro placeholders until a fixed point or the execution cap

    The instance only holds read-only configuration, so it can transform
    different documents from different threads. A single document must not
    be transformed by two calls at once.
    """

    def __init__(
        self,
        registry,
        max_macro_executions: Optional[int] = None,
        inline_policy: Optional[InlinePolicy] = None,
        reporter: Optional[ErrorReporter] = None,
    ) -> None:
        """
        Initialize the transformation

        Args:
            registry: Macro lookups, anything with resolve(name, syntax)
            max_macro_executions: Number of macro executions allowed in one
                                  transform call before considering that we
                                  are in a loop (e.g. a macro generating itself)
            inline_policy: Reaction to inline usage of a block-only macro
            reporter: Error renderer (default built from appsettings)
        """
        self.registry = registry
        self.max_macro_executions = (
            appsettings.max_macro_executions
            if max_macro_executions is None else max_macro_executions
        )
        self.inline_policy = InlinePolicy(inline_policy or appsettings.inline_policy)
        self.reporter = reporter or ErrorReporter()
        self.executor = StepExecutor(self.reporter, self.inline_policy)

    def transform(self, document: Container, syntax: Optional[str]) -> None:
        """
        Expand the macros of document in place

        Macro-level failures are rendered into the document and never
        raised. Only a structurally broken tree (TreeError) or a failing
        registry propagates.

        Args:
            document: Root of the tree to transform
            syntax: Active syntax, scoping which macros resolve
        """
        context = ExecutionContext(document=document, syntax=syntax, transformation=self)

        executions = 0
        placeholders = placeholders_find(document)
        while placeholders:
            if executions >= self.max_macro_executions:
                LOG(
                    f"Stopped after {executions} macro executions with "
                    f"{len(placeholders)} placeholder(s) left",
                    level=1,
                )
                break
            if not self.transform_once(placeholders, context):
                break
            placeholders = placeholders_find(document)
            executions += 1

        LOG(f"Transformation finished after {executions} macro executions", level=3)

    def transform_once(self, placeholders: Sequence[Placeholder], context: ExecutionContext) -> bool:
        """Select and execute one macro; False when no progress was made"""
        holder = macro_selectHighest(placeholders, self.registry, context.syntax, self.reporter)
        if holder is None:
            return False

        LOG(
            f"Selected macro [{holder.placeholder.name}] "
            f"(priority={holder.descriptor.priority}) among {len(placeholders)}",
            level=3,
        )
        return self.executor.step_execute(holder, context)
