"""
Execution of a single selected macro

One step takes the placeholder chosen by the selector and always removes it
from the tree, either by the macro's wrapped output or by an error. Nothing
a macro does (bad parameters, exceptions, malformed results, edits to the
tree it was given) escapes this step; only structural tree defects do.
"""

from typing import List, Set

from ..models.context import ExecutionContext
from ..models.macros import InlinePolicy, MacroExecutionError, ParameterDecodeError
from ..models.nodes import NODE_TYPES, Node
from .log import LOG
from .reporter import ErrorReporter, MacroErrorKind
from .selector import MacroHolder
from .tree import node_replace, nodes_walk, parents_repair
from .wrapper import result_wrap


def node_check(node, owner, document_ids: Set[int], seen_ids: Set[int]) -> None:
    """
    Check one node of a macro result

    Args:
        node: Node to check
        owner: Result node whose children hold it (None at top level)
        document_ids: Identities of the nodes of the document
        seen_ids: Identities of the result nodes already checked

    Raises:
        MacroExecutionError: If node is not a document node, belongs to the
                             document, appears twice, or its back-reference
                             points elsewhere than its owner
    """
    if not isinstance(node, NODE_TYPES):
        raise MacroExecutionError(
            f"Macro returned {type(node).__name__}, which is not a document node"
        )
    if id(node) in document_ids:
        raise MacroExecutionError(
            f"Macro returned {node!r}, which is already attached to the document"
        )
    if id(node) in seen_ids:
        raise MacroExecutionError(f"Macro returned {node!r} more than once")
    if node.parent is not owner:
        raise MacroExecutionError(
            f"Macro returned {node!r}, which is already attached to another tree"
        )
    seen_ids.add(id(node))


def result_validate(result, document_ids: Set[int]) -> List[Node]:
    """
    Check that a macro returned new, tree-shaped nodes

    Every returned subtree is walked: no node may be part of the document
    (the document root included), appear twice, or be owned elsewhere.

    Args:
        result: Value returned by the macro
        document_ids: Identities of the nodes of the document after execution

    Raises:
        MacroExecutionError: If the result is not an iterable of such nodes
    """
    if result is None:
        raise MacroExecutionError("Macro returned None instead of a list of nodes")
    try:
        nodes = list(result)
    except TypeError:
        raise MacroExecutionError(
            f"Macro returned {type(result).__name__} instead of a list of nodes"
        )

    seen_ids: Set[int] = set()
    for node in nodes:
        node_check(node, None, document_ids, seen_ids)
        stack = [node]
        while stack:
            owner = stack.pop()
            for child in owner.children:
                node_check(child, owner, document_ids, seen_ids)
                stack.append(child)
    return nodes


class StepExecutor:
    """
    Runs one macro and splices its result

    Attributes:
        reporter: Renders contained failures in place of the placeholder
        inline_policy: Whether an inline violation halts the pass
    """

    def __init__(self, reporter: ErrorReporter, inline_policy: InlinePolicy) -> None:
        self.reporter = reporter
        self.inline_policy = inline_policy

    def step_execute(self, holder: MacroHolder, context: ExecutionContext) -> bool:
        """
        Execute the macro in holder and replace its placeholder

        Args:
            holder: Selected placeholder and its descriptor
            context: Context of the running transform call

        Returns:
            False when the pass must stop (inline violation under
            InlinePolicy.HALT), True otherwise
        """
        placeholder = holder.placeholder
        descriptor = holder.descriptor
        name = placeholder.name

        context.current_placeholder = placeholder
        context.inline = placeholder.inline

        # 1) Block-only macros cannot be used inline
        if placeholder.inline and not descriptor.supports_inline:
            self.reporter.error_generate(
                placeholder,
                MacroErrorKind.UNSUPPORTED_INLINE,
                "Not an inline macro",
                "This macro can only be used by itself on a new line",
            )
            LOG(f"The [{name}] macro doesn't support inline mode.", level=2)
            return self.inline_policy is InlinePolicy.SKIP

        # 2) Decode parameters
        try:
            parameters = descriptor.parameters_decode(placeholder.parameters)
        except ParameterDecodeError as e:
            self.reporter.error_generate(
                placeholder,
                MacroErrorKind.INVALID_PARAMETERS,
                f"Invalid macro parameters used for macro: {name}",
                e,
            )
            return True

        # 3) Execute. Any exception is contained here so that one macro
        #    never breaks the rest of the document.
        root_parent = context.document.parent
        try:
            result = descriptor.execute(parameters, placeholder.content, context)
            document_ids = {id(node) for node in nodes_walk(context.document)}
            if id(placeholder) not in document_ids:
                LOG(f"The [{name}] macro removed its own placeholder from the document", level=2)
                return True
            nodes = result_validate(result, document_ids)
        except Exception as e:
            # Building a result may have re-pointed back-references of document nodes
            context.document.parent = root_parent
            parents_repair(context.document)
            if not any(node is placeholder for node in nodes_walk(context.document)):
                LOG(f"Failed to execute macro [{name}], placeholder already removed. "
                    f"Internal error: [{e}]", level=2)
                return True
            self.reporter.error_generate(
                placeholder,
                MacroErrorKind.EXECUTION_FAILURE,
                f"Failed to execute macro: {name}",
                e,
            )
            return True

        # 4) Replace the placeholder by the wrapped output
        node_replace(placeholder, result_wrap(placeholder, nodes))
        LOG(f"Executed macro [{name}], generated {len(nodes)} node(s)", level=3)
        return True
