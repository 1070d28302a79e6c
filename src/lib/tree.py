"""
Document tree operations

Query and splice helpers over the node model. Positions in the tree are
identified by node identity, never by equality: two structurally equal
placeholders side by side are still two different invocations.

Example:
    >>> root = Container(children=[Placeholder(name="hello")])
    >>> placeholder = placeholders_find(root)[0]
    >>> node_replace(placeholder, [ContentLeaf("Hello")])
    >>> root.children
    [ContentLeaf(text='Hello')]
"""

from typing import Iterator, List, Optional, Sequence

from ..models.nodes import Node, NodeKind, Placeholder


class TreeError(Exception):
    """Raised when the document tree is structurally broken"""
    pass


def nodes_walk(root: Node) -> Iterator[Node]:
    """
    Yield every node under root, root included, depth-first in document order

    Args:
        root: Node to start from

    Yields:
        Nodes in pre-order
    """
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def placeholders_find(root: Node) -> List[Placeholder]:
    """
    Collect all placeholders under root in document order

    The list is computed fresh on every call; callers must not keep it
    across tree modifications.
    """
    return [node for node in nodes_walk(root) if node.kind is NodeKind.PLACEHOLDER]


def parent_of(node: Node) -> Optional[Node]:
    """Owner of node, or None for a root or detached node"""
    return node.parent


def parents_repair(root: Node) -> None:
    """Reset every back-reference under root to the node whose children hold it"""
    for node in nodes_walk(root):
        for child in node.children:
            child.parent = node


def ancestors_iterate(node: Node) -> Iterator[Node]:
    """Yield node's parent, grandparent, ... up to the root"""
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def index_find(parent: Node, node: Node) -> int:
    """Position of node among its parent's children, by identity"""
    for index, child in enumerate(parent.children):
        if child is node:
            return index
    raise TreeError(
        f"Stale parent reference: {node!r} is not among the children of {parent!r}"
    )


def node_replace(node: Node, replacements: Sequence[Node]) -> None:
    """
    Splice replacements into the tree in place of node

    The replacements adopt node's parent and node is detached.

    Args:
        node: Node currently in the tree
        replacements: Ordered nodes to put at node's position (may be empty)

    Raises:
        TreeError: If node has no parent, its parent does not contain it,
                   or a replacement is an ancestor of the position
    """
    parent = node.parent
    if parent is None:
        raise TreeError(f"Cannot replace {node!r}: node has no parent")

    index = index_find(parent, node)

    lineage = [parent, *ancestors_iterate(parent)]
    for replacement in replacements:
        if any(replacement is ancestor for ancestor in lineage):
            raise TreeError(
                f"Cannot replace {node!r}: {replacement!r} is one of its ancestors"
            )

    parent.children[index:index + 1] = list(replacements)
    for replacement in replacements:
        replacement.parent = parent
    if not any(replacement is node for replacement in replacements):
        node.parent = None
