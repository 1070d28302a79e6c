"""
YAML representation of document trees

Each node is a mapping whose ``type`` is its NodeKind value:

    type: container
    children:
      - type: content
        text: "Contents: "
      - type: placeholder
        name: toc
        parameters: {depth: "2"}
        inline: true
      - type: element
        tag: div
        attributes: {class: note}
        children: [...]
      - type: marker
        name: include
        parameters: {}
        content: null
        inline: false
        children: [...]

A top-level list is read as the children of an implicit container root.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..models.nodes import Node, NodeKind, ContentLeaf, Container, Placeholder, Marker, Element


class DocumentError(Exception):
    """Raised when a document cannot be decoded into a tree"""
    pass


def parameters_coerce(raw: Any, where: str) -> Dict[str, str]:
    """Read a parameter/attribute mapping, turning values into strings"""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise DocumentError(f"{where}: expected a mapping, got {type(raw).__name__}")
    return {str(key): "" if value is None else str(value) for key, value in raw.items()}


def children_fromList(raw: Any, where: str) -> List[Node]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DocumentError(f"{where}: 'children' must be a list")
    prefix = where.rstrip("/")
    return [node_fromDict(item, f"{prefix}/{index}") for index, item in enumerate(raw)]


def node_fromDict(data: Any, where: str = "") -> Node:
    """
    Build a node (and its subtree) from its mapping form

    Args:
        data: Mapping with a 'type' key
        where: Path of the node in the document, used in error messages

    Returns:
        Decoded node with parent references set on its children

    Raises:
        DocumentError: If the mapping is not a valid node
    """
    where = where or "/"
    if not isinstance(data, dict):
        raise DocumentError(f"{where}: expected a node mapping, got {type(data).__name__}")

    try:
        kind = NodeKind(data.get("type", NodeKind.CONTAINER.value))
    except ValueError:
        raise DocumentError(f"{where}: unknown node type {data.get('type')!r}")

    if kind is NodeKind.CONTENT:
        return ContentLeaf(text=str(data.get("text", "")))

    if kind is NodeKind.CONTAINER:
        return Container(children=children_fromList(data.get("children"), where))

    if kind is NodeKind.ELEMENT:
        if "tag" not in data:
            raise DocumentError(f"{where}: element without 'tag'")
        return Element(
            tag=str(data["tag"]),
            attributes=parameters_coerce(data.get("attributes"), where),
            children=children_fromList(data.get("children"), where),
        )

    if "name" not in data:
        raise DocumentError(f"{where}: {kind.value} without 'name'")
    content = data.get("content")

    if kind is NodeKind.PLACEHOLDER:
        return Placeholder(
            name=str(data["name"]),
            parameters=parameters_coerce(data.get("parameters"), where),
            content=None if content is None else str(content),
            inline=bool(data.get("inline", False)),
        )

    return Marker(
        name=str(data["name"]),
        parameters=parameters_coerce(data.get("parameters"), where),
        content=None if content is None else str(content),
        inline=bool(data.get("inline", False)),
        children=children_fromList(data.get("children"), where),
    )


def node_toDict(node: Node) -> Dict[str, Any]:
    """Mapping form of node and its subtree, suitable for yaml.safe_dump"""
    data: Dict[str, Any] = {"type": node.kind.value}

    if node.kind is NodeKind.CONTENT:
        data["text"] = node.text
        return data

    if node.kind is NodeKind.ELEMENT:
        data["tag"] = node.tag
        data["attributes"] = dict(node.attributes)

    if node.kind in (NodeKind.PLACEHOLDER, NodeKind.MARKER):
        data["name"] = node.name
        data["parameters"] = dict(node.parameters)
        data["content"] = node.content
        data["inline"] = node.inline

    if node.kind is not NodeKind.PLACEHOLDER:
        data["children"] = [node_toDict(child) for child in node.children]

    return data


def document_fromData(data: Any) -> Container:
    """Decode loaded YAML data into a document root"""
    if isinstance(data, list):
        return Container(children=children_fromList(data, ""))

    root = node_fromDict(data)
    if root.kind is not NodeKind.CONTAINER:
        return Container(children=[root])
    return root


def document_load(path: Union[str, Path]) -> Container:
    """
    Read a YAML document file into a tree

    Raises:
        DocumentError: If the file is not valid YAML or not a valid tree
    """
    source = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise DocumentError(f"Failed to parse {path}: {e}")

    if data is None:
        return Container()
    return document_fromData(data)


def document_save(root: Node, path: Union[str, Path]) -> None:
    """Write a tree to a YAML document file"""
    output = yaml.safe_dump(node_toDict(root), sort_keys=False, allow_unicode=True)
    Path(path).write_text(output, encoding="utf-8")
