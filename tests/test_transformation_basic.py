"""
Basic transformation tests - simplest cases

Tests documents without macros, single macro expansion, and the provenance
markers wrapped around macro output.
"""

from docmacro.lib.registry import MacroRegistry
from docmacro.lib.transformation import MacroTransformation
from docmacro.lib.tree import placeholders_find
from docmacro.models.nodes import ContentLeaf, Container, Element, Marker, NodeKind, Placeholder


def registry_make() -> MacroRegistry:
    registry = MacroRegistry()

    @registry.macro("hello", priority=10)
    def hello(parameters, content, context):
        return [ContentLeaf("Hello"), ContentLeaf(" world")]

    @registry.macro("nothing")
    def nothing(parameters, content, context):
        return []

    @registry.macro("echo", supports_inline=True)
    def echo(parameters, content, context):
        return [ContentLeaf(content or "")]

    return registry


class TestNoMacros:
    """Documents without placeholders are left untouched"""

    def test_empty_document(self):
        """Empty root stays empty"""
        document = Container()
        MacroTransformation(registry_make()).transform(document, "markdown")
        assert document == Container()

    def test_document_without_placeholders(self):
        """Static content is not modified and no macro runs"""
        calls = []
        registry = MacroRegistry()

        @registry.macro("spy")
        def spy(parameters, content, context):
            calls.append(parameters)
            return []

        document = Container(children=[
            ContentLeaf("Title"),
            Element(tag="p", children=[ContentLeaf("Paragraph")]),
        ])
        expected = Container(children=[
            ContentLeaf("Title"),
            Element(tag="p", children=[ContentLeaf("Paragraph")]),
        ])

        MacroTransformation(registry).transform(document, "markdown")

        assert document == expected
        assert calls == []


class TestSingleMacro:
    """One resolvable macro is replaced by a marker wrapping its output"""

    def test_placeholder_replaced_by_marker(self):
        """Placeholder gone, one Marker holding exactly the result nodes"""
        document = Container(children=[Placeholder(name="hello", parameters={"a": "1"})])

        MacroTransformation(registry_make()).transform(document, "markdown")

        assert placeholders_find(document) == []
        assert len(document.children) == 1
        marker = document.children[0]
        assert marker.kind is NodeKind.MARKER
        assert marker.name == "hello"
        assert marker.parameters == {"a": "1"}
        assert marker.children == [ContentLeaf("Hello"), ContentLeaf(" world")]

    def test_result_nodes_attached_to_marker(self):
        """Generated nodes point back to the marker, the marker to the root"""
        document = Container(children=[Placeholder(name="hello")])

        MacroTransformation(registry_make()).transform(document, "markdown")

        marker = document.children[0]
        assert marker.parent is document
        assert all(child.parent is marker for child in marker.children)

    def test_surrounding_content_preserved(self):
        """Siblings of the placeholder keep their position"""
        document = Container(children=[
            ContentLeaf("before"),
            Placeholder(name="hello"),
            ContentLeaf("after"),
        ])

        MacroTransformation(registry_make()).transform(document, "markdown")

        assert document.children[0] == ContentLeaf("before")
        assert document.children[1].kind is NodeKind.MARKER
        assert document.children[2] == ContentLeaf("after")

    def test_empty_result(self):
        """Macro producing nothing still leaves an (empty) marker"""
        document = Container(children=[Placeholder(name="nothing")])

        MacroTransformation(registry_make()).transform(document, "markdown")

        assert document.children == [Marker(name="nothing")]

    def test_placeholder_deep_in_tree(self):
        """Placeholders nested in elements are found and expanded"""
        document = Container(children=[
            Element(tag="section", children=[
                Element(tag="p", children=[Placeholder(name="echo", content="deep", inline=True)]),
            ]),
        ])

        MacroTransformation(registry_make()).transform(document, "markdown")

        paragraph = document.children[0].children[0]
        assert paragraph.children == [
            Marker(name="echo", content="deep", inline=True, children=[ContentLeaf("deep")])
        ]


class TestProvenance:
    """Markers record the original invocation, independent of the output"""

    def test_marker_keeps_invocation(self):
        """Name, parameters, content and inline flag are copied to the marker"""
        placeholder = Placeholder(
            name="echo", parameters={"x": "1", "y": "2"}, content="raw {text}", inline=True
        )
        document = Container(children=[placeholder])

        MacroTransformation(registry_make()).transform(document, "markdown")

        marker = document.children[0]
        assert marker.name == "echo"
        assert marker.parameters == {"x": "1", "y": "2"}
        assert list(marker.parameters) == ["x", "y"]
        assert marker.content == "raw {text}"
        assert marker.inline is True

    def test_marker_parameters_are_a_copy(self):
        """Changing the consumed placeholder does not alter the marker"""
        placeholder = Placeholder(name="hello", parameters={"x": "1"})
        document = Container(children=[placeholder])

        MacroTransformation(registry_make()).transform(document, "markdown")
        placeholder.parameters["x"] = "changed"

        assert document.children[0].parameters == {"x": "1"}

    def test_placeholder_detached_after_expansion(self):
        """The consumed placeholder no longer belongs to the tree"""
        placeholder = Placeholder(name="hello")
        document = Container(children=[placeholder])

        MacroTransformation(registry_make()).transform(document, "markdown")

        assert placeholder.parent is None

    def test_nested_macro_not_rewrapped(self):
        """Macro generated inside a marker is expanded without a second marker"""
        registry = registry_make()

        @registry.macro("wrapper")
        def wrapper(parameters, content, context):
            return [ContentLeaf("<"), Placeholder(name="hello"), ContentLeaf(">")]

        document = Container(children=[Placeholder(name="wrapper")])

        MacroTransformation(registry).transform(document, "markdown")

        assert document.children == [
            Marker(name="wrapper", children=[
                ContentLeaf("<"),
                ContentLeaf("Hello"),
                ContentLeaf(" world"),
                ContentLeaf(">"),
            ])
        ]

    def test_nested_in_element_inside_marker_is_wrapped(self):
        """Only the immediate parent counts: an element in between gets a marker"""
        registry = registry_make()

        @registry.macro("box")
        def box(parameters, content, context):
            return [Element(tag="div", children=[Placeholder(name="nothing")])]

        document = Container(children=[Placeholder(name="box")])

        MacroTransformation(registry).transform(document, "markdown")

        div = document.children[0].children[0]
        assert div.children == [Marker(name="nothing")]
