"""
Provenance wrapping of macro output

Nodes generated by a macro are wrapped in a Marker so that renderers that
need to know which nodes came from which macro (e.g. to reconstruct the
source) can. A placeholder sitting directly inside a Marker is not wrapped
again: the outer marker already attributes that region.
"""

from typing import List, Sequence

from ..models.nodes import Marker, Node, NodeKind, Placeholder


def result_wrap(placeholder: Placeholder, nodes: Sequence[Node]) -> List[Node]:
    """
    Wrap the nodes replacing a placeholder

    Args:
        placeholder: Placeholder being replaced
        nodes: Output generated for it (macro result or error elements)

    Returns:
        The nodes themselves when the placeholder's parent is a Marker,
        otherwise a single Marker recording the original invocation
    """
    parent = placeholder.parent
    if parent is not None and parent.kind is NodeKind.MARKER:
        return list(nodes)

    return [Marker(
        name=placeholder.name,
        parameters=dict(placeholder.parameters),
        content=placeholder.content,
        inline=placeholder.inline,
        children=list(nodes),
    )]
