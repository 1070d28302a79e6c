"""
Document tree node model

A closed set of node variants, each carrying an explicit NodeKind
discriminant. Code that needs to tell nodes apart matches on ``node.kind``
rather than on the Python class.

Ownership is strictly tree-shaped: a node belongs to exactly one parent's
``children`` list. The ``parent`` attribute is a back-reference for traversal
only and takes no part in equality or repr.

Example:
    >>> root = Container(children=[
    ...     ContentLeaf("Intro "),
    ...     Placeholder(name="toc", parameters={"depth": "2"}),
    ... ])
    >>> root.children[1].parent is root
    True
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Union


class NodeKind(Enum):
    """Discriminant of the node variants"""
    CONTENT = "content"
    CONTAINER = "container"
    PLACEHOLDER = "placeholder"
    MARKER = "marker"
    ELEMENT = "element"


def children_adopt(owner: "Node", children: List["Node"]) -> None:
    """Point every child's back-reference at its owner"""
    for child in children:
        child.parent = owner


@dataclass
class ContentLeaf:
    """
    Opaque terminal content

    Attributes:
        text: The content itself, never interpreted by the transformation
    """
    text: str
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    kind: ClassVar[NodeKind] = NodeKind.CONTENT

    @property
    def children(self) -> List["Node"]:
        return []


@dataclass
class Container:
    """
    Ordered group of children with no semantic tag

    A document root is a Container without a parent.
    """
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    kind: ClassVar[NodeKind] = NodeKind.CONTAINER

    def __post_init__(self) -> None:
        children_adopt(self, self.children)


@dataclass
class Placeholder:
    """
    Macro invocation awaiting expansion

    Placeholders are replaced by the transformation, never mutated.

    Attributes:
        name: Macro name as written in the source
        parameters: Ordered string-to-string parameter mapping
        content: Raw, unparsed macro content (None when the macro has no body)
        inline: True when the invocation sits inside running text
    """
    name: str
    parameters: Dict[str, str] = field(default_factory=dict)
    content: Optional[str] = None
    inline: bool = False
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    kind: ClassVar[NodeKind] = NodeKind.PLACEHOLDER

    @property
    def children(self) -> List["Node"]:
        return []


@dataclass
class Marker:
    """
    Provenance wrapper around the output of an expanded macro

    Carries the invocation it replaced (name, parameters, content, inline)
    so renderers can reconstruct the original macro call. Its children may
    still hold placeholders produced by the macro.
    """
    name: str
    parameters: Dict[str, str] = field(default_factory=dict)
    content: Optional[str] = None
    inline: bool = False
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    kind: ClassVar[NodeKind] = NodeKind.MARKER

    def __post_init__(self) -> None:
        children_adopt(self, self.children)


@dataclass
class Element:
    """
    Styled container, e.g. a ``span`` or ``div`` with a class attribute

    Attributes:
        tag: Element name
        attributes: Ordered attribute mapping (e.g. {"class": "rendering-error"})
        children: Element content
    """
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, repr=False, compare=False)

    kind: ClassVar[NodeKind] = NodeKind.ELEMENT

    def __post_init__(self) -> None:
        children_adopt(self, self.children)


Node = Union[ContentLeaf, Container, Placeholder, Marker, Element]

NODE_TYPES = (ContentLeaf, Container, Placeholder, Marker, Element)
