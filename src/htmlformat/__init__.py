from .formatter import Formatter, format_document, format_fragment, format_html, format_nodes
from .node import Node, NodeKind
from .parser import from_dom, parse_document, parse_fragment

__all__ = [
    "Formatter",
    "Node",
    "NodeKind",
    "format_document",
    "format_fragment",
    "format_html",
    "format_nodes",
    "from_dom",
    "parse_document",
    "parse_fragment",
]
