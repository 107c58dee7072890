"""GexfWriter - Writes graphs as GEXF 1.3 with visualization data.

GEXF (Graph Exchange XML Format) is read by Gephi and most graph tools.
See https://gexf.net/ for the format.

The document is assembled once as an ElementTree and then rendered in
one of two modes:
- pretty: indented, two spaces per level, one element per line
- compact: streamed through xml.sax.saxutils.XMLGenerator, no whitespace

Both modes carry exactly the same elements, attributes and text.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, TextIO
from xml.sax.saxutils import XMLGenerator

from grph.graph.GraphNode import (
    BindingNode,
    ComponentNode,
    MissingBindingNode,
    ModuleNode,
    Node,
)
from grph.graph.model import Graph
from grph.graph.relations import DependencyEdge, Edge
from grph.writer.style import node_style

logger = logging.getLogger(__name__)

GEXF_NAMESPACE = "http://gexf.net/1.3"
VIZ_NAMESPACE = "http://gexf.net/1.3/viz"
GEXF_VERSION = "1.3"

INDENT = "  "

# (id, title, type)
NODE_ATTRIBUTES: tuple[tuple[str, str, str], ...] = (
    ("nodeType", "Node Type", "string"),
    ("bindingKind", "Binding Kind", "string"),
    ("scope", "Scope", "string"),
    ("qualifiedName", "Qualified Name", "string"),
    ("isMultibinding", "Is Multibinding", "boolean"),
    ("contributingModule", "Contributing Module", "string"),
    ("componentPath", "Component Path", "string"),
    ("isEntryPoint", "Is Entry Point", "boolean"),
    ("isSubcomponent", "Is Subcomponent", "boolean"),
    ("bindingCount", "Binding Count", "integer"),
    ("installedInComponents", "Installed In Components", "string"),
)

EDGE_ATTRIBUTES: tuple[tuple[str, str, str], ...] = (
    ("edgeType", "Edge Type", "string"),
    ("isEntryPoint", "Is Entry Point", "boolean"),
)


def escape_xml(text: str) -> str:
    """Escape the five XML special characters, `&` first."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def escape_attribute(value: str) -> str:
    """Escape a double-quoted attribute value.

    Parsers normalize literal tabs and line breaks in attributes to spaces,
    so they are written as character references.
    """
    return escape_xml(value).replace("\n", "&#10;").replace("\r", "&#13;").replace("\t", "&#9;")


class _GexfGenerator(XMLGenerator):
    """XMLGenerator writing attributes and text with the same escaping as pretty mode."""

    def startElement(self, name, attrs):
        self._finish_pending_start_element()
        self._write("<" + name)
        for attr, value in attrs.items():
            self._write(f' {attr}="{escape_attribute(value)}"')
        if self._short_empty_elements:
            self._pending_start_element = True
        else:
            self._write(">")

    def characters(self, content):
        if content:
            self._finish_pending_start_element()
            self._write(escape_xml(content))


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _custom_columns(
    items: tuple[Node, ...] | tuple[Edge, ...], fixed: tuple[tuple[str, str, str], ...]
) -> list[str]:
    """Custom attribute keys in first-seen order, minus fixed column ids."""
    reserved = {column for column, _, _ in fixed}
    columns: dict[str, None] = {}
    for item in items:
        for key in item.attributes:
            if key not in reserved:
                columns.setdefault(key, None)
    return list(columns)


def node_attvalues(node: Node) -> list[tuple[str, str]]:
    """Fixed-schema attribute values of a node, absent optionals omitted.

    Raises:
        TypeError: For an object that is not a node variant.
    """
    values = [("nodeType", node.type.name)]
    if isinstance(node, BindingNode):
        values.append(("bindingKind", node.binding_kind.name))
        if node.scope is not None:
            values.append(("scope", node.scope))
        values.append(("qualifiedName", node.key))
        values.append(("isMultibinding", _bool(node.is_multibinding)))
        if node.contributing_module is not None:
            values.append(("contributingModule", node.contributing_module))
        if node.component_path is not None:
            values.append(("componentPath", node.component_path))
        values.append(("isEntryPoint", _bool(node.is_entry_point)))
    elif isinstance(node, ComponentNode):
        values.append(("qualifiedName", node.qualified_name))
        if node.scopes:
            values.append(("scope", ",".join(node.scopes)))
        values.append(("isSubcomponent", _bool(node.is_subcomponent)))
        values.append(("componentPath", node.component_path))
    elif isinstance(node, ModuleNode):
        values.append(("qualifiedName", node.qualified_name))
        values.append(("bindingCount", str(node.binding_count)))
        if node.installed_in_components:
            values.append(("installedInComponents", ",".join(node.installed_in_components)))
    elif isinstance(node, MissingBindingNode):
        values.append(("qualifiedName", node.key))
    else:
        raise TypeError(f"Unknown node variant: {type(node).__name__}")
    return values


def edge_attvalues(edge: Edge) -> list[tuple[str, str]]:
    values = [("edgeType", edge.type.name)]
    if isinstance(edge, DependencyEdge):
        values.append(("isEntryPoint", _bool(edge.is_entry_point)))
    return values


class GexfWriter:
    """Writes a Graph as a GEXF 1.3 document.

    Usage:
        writer = GexfWriter(pretty_print=False)
        writer.write_path(graph, Path("build/grph/AppComponent.gexf"))
    """

    format_name = "GEXF"
    file_extension = "gexf"

    def __init__(self, pretty_print: bool = True, include_visualization: bool = True) -> None:
        self.pretty_print = pretty_print
        self.include_visualization = include_visualization

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def write(self, graph: Graph, output: BinaryIO) -> None:
        """Write UTF-8 encoded GEXF to a binary stream.

        The stream is flushed but left open; the caller owns it.
        """
        document = self.build_document(graph)
        text = io.TextIOWrapper(output, encoding="utf-8", newline="\n")
        try:
            if self.pretty_print:
                self._render_pretty(document, text)
            else:
                self._render_compact(document, text)
            text.flush()
        finally:
            text.detach()
        output.flush()

    def write_path(self, graph: Graph, path: Path) -> None:
        """Write GEXF to a file, replacing any existing content."""
        with open(path, "wb") as f:
            self.write(graph, f)
        logger.debug("Wrote %s (%d nodes, %d edges)", path, len(graph.nodes), len(graph.edges))

    def to_string(self, graph: Graph) -> str:
        """Render the document as a string."""
        buffer = io.BytesIO()
        self.write(graph, buffer)
        return buffer.getvalue().decode("utf-8")

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def build_document(self, graph: Graph) -> ET.Element:
        """Assemble the GEXF element tree for a graph."""
        root = ET.Element("gexf", {"xmlns": GEXF_NAMESPACE})
        if self.include_visualization:
            root.set("xmlns:viz", VIZ_NAMESPACE)
        root.set("version", GEXF_VERSION)

        meta = ET.SubElement(root, "meta", {"lastmodifieddate": graph.metadata.created_date})
        ET.SubElement(meta, "creator").text = graph.metadata.creator
        if graph.metadata.description:
            ET.SubElement(meta, "description").text = graph.metadata.description

        graph_elem = ET.SubElement(
            root,
            "graph",
            {"mode": "static", "defaultedgetype": "directed" if graph.directed else "undirected"},
        )

        node_columns = _custom_columns(graph.nodes, NODE_ATTRIBUTES)
        edge_columns = _custom_columns(graph.edges, EDGE_ATTRIBUTES)
        if graph.nodes:
            self._declare_attributes(graph_elem, "node", NODE_ATTRIBUTES, node_columns)
        if graph.edges:
            self._declare_attributes(graph_elem, "edge", EDGE_ATTRIBUTES, edge_columns)

        nodes_elem = ET.SubElement(graph_elem, "nodes")
        for node in graph.nodes:
            self._add_node(nodes_elem, node, set(node_columns))

        edges_elem = ET.SubElement(graph_elem, "edges")
        for edge in graph.edges:
            self._add_edge(edges_elem, edge, set(edge_columns))

        return root

    @staticmethod
    def _declare_attributes(
        parent: ET.Element,
        attr_class: str,
        fixed: tuple[tuple[str, str, str], ...],
        custom: list[str],
    ) -> None:
        attributes = ET.SubElement(parent, "attributes", {"class": attr_class})
        for column, title, column_type in fixed:
            ET.SubElement(attributes, "attribute", {"id": column, "title": title, "type": column_type})
        for column in custom:
            ET.SubElement(attributes, "attribute", {"id": column, "title": column, "type": "string"})

    @staticmethod
    def _add_attvalues(parent: ET.Element, values: list[tuple[str, str]]) -> None:
        attvalues = ET.SubElement(parent, "attvalues")
        for column, value in values:
            ET.SubElement(attvalues, "attvalue", {"for": column, "value": value})

    def _add_node(self, parent: ET.Element, node: Node, custom: set[str]) -> None:
        node_elem = ET.SubElement(parent, "node", {"id": node.id, "label": node.label})
        if self.include_visualization:
            style = node_style(node)
            red, green, blue = style.color
            ET.SubElement(node_elem, "viz:color", {"r": str(red), "g": str(green), "b": str(blue)})
            ET.SubElement(node_elem, "viz:size", {"value": str(style.size)})
            ET.SubElement(node_elem, "viz:shape", {"value": style.shape})
        values = node_attvalues(node)
        values.extend((k, v) for k, v in node.attributes.items() if k in custom)
        self._add_attvalues(node_elem, values)

    def _add_edge(self, parent: ET.Element, edge: Edge, custom: set[str]) -> None:
        edge_elem = ET.SubElement(
            parent, "edge", {"id": edge.id, "source": edge.source, "target": edge.target}
        )
        values = edge_attvalues(edge)
        values.extend((k, v) for k, v in edge.attributes.items() if k in custom)
        self._add_attvalues(edge_elem, values)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_pretty(self, document: ET.Element, out: TextIO) -> None:
        out.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self._render_element(document, out, 0)

    def _render_element(self, element: ET.Element, out: TextIO, depth: int) -> None:
        pad = INDENT * depth
        attrs = "".join(f' {name}="{escape_attribute(value)}"' for name, value in element.attrib.items())
        children = list(element)
        if element.text is not None:
            out.write(f"{pad}<{element.tag}{attrs}>{escape_xml(element.text)}</{element.tag}>\n")
        elif children:
            out.write(f"{pad}<{element.tag}{attrs}>\n")
            for child in children:
                self._render_element(child, out, depth + 1)
            out.write(f"{pad}</{element.tag}>\n")
        elif element.tag in ("nodes", "edges"):
            out.write(f"{pad}<{element.tag}{attrs}>\n{pad}</{element.tag}>\n")
        else:
            out.write(f"{pad}<{element.tag}{attrs}/>\n")

    def _render_compact(self, document: ET.Element, out: TextIO) -> None:
        generator = _GexfGenerator(out, encoding="UTF-8", short_empty_elements=True)
        generator.startDocument()
        self._stream_element(document, generator)
        generator.endDocument()

    def _stream_element(self, element: ET.Element, generator: _GexfGenerator) -> None:
        generator.startElement(element.tag, dict(element.attrib))
        if element.text is not None:
            generator.characters(element.text)
        for child in element:
            self._stream_element(child, generator)
        generator.endElement(element.tag)


__all__ = [
    "GexfWriter",
    "escape_xml",
    "escape_attribute",
    "node_attvalues",
    "edge_attvalues",
    "NODE_ATTRIBUTES",
    "EDGE_ATTRIBUTES",
]
