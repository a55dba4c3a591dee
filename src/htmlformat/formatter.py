"""Re-indenting HTML formatter.

Every element starts on its own line, indented one space per nesting level.
Elements whose only child is text stay on one line, punctuation stays glued
to the content in front of it, <style> and <script> bodies are re-indented
line by line and <pre> subtrees are copied through untouched.

Usage:
    from htmlformat import format_html

    format_html("<ul><li>One</li></ul>", fragment=True)  # '<ul>\\n <li>One</li>\\n</ul>\\n'
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterable
from typing import Any, Protocol

from .constants import PREFORMATTED_ELEMENTS
from .node import Node, NodeKind
from .parser import parse_document, parse_fragment
from .serialize import serialize_end_tag, serialize_start_tag
from .utils import (
    collapse_whitespace,
    glues_to_next,
    glues_to_previous,
    has_single_text_child,
    is_empty_text,
    is_special_content_element,
    is_void_element,
    trim_space,
)


class TextSink(Protocol):
    def write(self, s: str, /) -> Any: ...


class Formatter:
    """Writes formatted HTML for Node trees to a text sink.

    The only state is the sink itself; indent level and raw mode travel with
    the recursion. Errors raised by the sink propagate immediately and leave
    whatever was already written in place.
    """

    __slots__ = ("debug_enabled", "out")

    def __init__(self, out: TextSink, *, debug: bool = False) -> None:
        self.out = out
        self.debug_enabled = bool(debug)

    def debug(self, message: str, indent: int = 0) -> None:
        if self.debug_enabled:
            print(f"{' ' * indent}{self.__class__.__name__}: {message}", file=sys.stderr)

    def format_nodes(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self.print_node(node, 0)

    def print_node(self, node: Node, level: int, raw: bool = False) -> None:
        if self.debug_enabled:
            self._trace(node, level, raw)

        if raw:
            self._print_raw(node)
            return

        kind = node.kind
        if kind is NodeKind.TEXT:
            self._print_text(node, level)
        elif kind is NodeKind.ELEMENT:
            self._print_element(node, level)
        elif kind is NodeKind.COMMENT:
            self._indent(level)
            self._write(f"<!--{node.text_content}-->\n")
            self._print_children(node, level)
        else:
            # Document and doctype produce no output of their own
            self._print_children(node, level)

    def _print_text(self, node: Node, level: int) -> None:
        if is_empty_text(node):
            return

        text = trim_space(node.text_content)

        parent = node.parent
        if is_special_content_element(parent):
            for line in text.split("\n"):
                self._write("\n")
                self._indent(level + 1)
                self._write(line.removesuffix("\r"))
            self._write("\n")
            return

        inline = has_single_text_child(parent)
        if not inline and not glues_to_previous(node, text):
            self._indent(level)
        self._write(text)
        if not inline and not glues_to_next(node):
            self._write("\n")

    def _print_element(self, node: Node, level: int) -> None:
        self._indent(level)
        self._write(serialize_start_tag(node.tag_name, node.attributes))
        inline = has_single_text_child(node)
        preformatted = node.tag_name in PREFORMATTED_ELEMENTS
        # Parsers drop one newline right after <pre>, so a leading one needs a spare
        if not inline or (preformatted and node.first_child.text_content.startswith("\n")):
            self._write("\n")
        if is_void_element(node):
            return

        self._print_children(node, level + 1, raw=preformatted)
        # An indent before </pre> would become part of its content
        if is_special_content_element(node) or not (inline or preformatted):
            self._indent(level)
        self._write(serialize_end_tag(node.tag_name))
        if not glues_to_next(node):
            self._write("\n")

    def _print_raw(self, node: Node) -> None:
        kind = node.kind
        if kind is NodeKind.TEXT:
            self._write(node.text_content)
        elif kind is NodeKind.ELEMENT:
            self._write(serialize_start_tag(node.tag_name, node.attributes))
            if not is_void_element(node):
                self._print_children(node, 0, raw=True)
                self._write(serialize_end_tag(node.tag_name))
        elif kind is NodeKind.COMMENT:
            self._write(f"<!--{node.text_content}-->")
        else:
            self._print_children(node, 0, raw=True)

    def _print_children(self, node: Node, level: int, raw: bool = False) -> None:
        for child in node.children:
            self.print_node(child, level, raw)

    def _indent(self, level: int) -> None:
        self._write(" " * level)

    def _write(self, s: str) -> None:
        self.out.write(s)

    def _trace(self, node: Node, level: int, raw: bool) -> None:
        if node.kind is NodeKind.TEXT:
            label = f"#text {collapse_whitespace(node.text_content)[:30]!r}"
        else:
            label = node.tag_name
        self.debug(f"{label} level={level}{' raw' if raw else ''}", indent=level)


def format_nodes(nodes: Iterable[Node], out: TextSink, *, debug: bool = False) -> None:
    """Format already-built Nodes into out, starting at indent level 0."""
    nodes = list(nodes)
    for node in nodes:
        if not isinstance(node, Node):
            msg = f"Expected Node, got {type(node).__name__}"
            raise TypeError(msg)
    Formatter(out, debug=debug).format_nodes(nodes)


def format_document(source: str | bytes, out: TextSink, *, strict: bool = False, debug: bool = False) -> None:
    """Parse a complete HTML document and format it into out."""
    root = parse_document(source, strict=strict)
    format_nodes([root], out, debug=debug)


def format_fragment(
    source: str | bytes,
    out: TextSink,
    *,
    context: str = "div",
    strict: bool = False,
    debug: bool = False,
) -> None:
    """Parse an HTML fragment in the given context element and format it into out."""
    nodes = parse_fragment(source, context=context, strict=strict)
    format_nodes(nodes, out, debug=debug)


def format_html(
    source: str | bytes,
    *,
    fragment: bool = False,
    context: str = "div",
    strict: bool = False,
    debug: bool = False,
) -> str:
    """Format HTML source and return the result as a string."""
    out = io.StringIO()
    if fragment:
        format_fragment(source, out, context=context, strict=strict, debug=debug)
    else:
        format_document(source, out, strict=strict, debug=debug)
    return out.getvalue()
