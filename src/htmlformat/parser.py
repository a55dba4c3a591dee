"""Parser entry points.

HTML5 tokenizing and tree construction are done by JustHTML. The trees it
returns are converted into htmlformat Nodes, which carry the parent and
sibling links the formatter looks at.
"""

import inspect

from justhtml import JustHTML
from justhtml.parser.context import FragmentContext

from .constants import COMMENT_NAME, DOCTYPE_NAME, DOCUMENT_NAME, TEXT_NAME
from .node import Node

FRAGMENT_NAME = "#document-fragment"


def _parser_options():
    # Releases that sanitize while parsing take a switch for it; <script> and
    # <style> must reach the formatter as written.
    try:
        params = inspect.signature(JustHTML).parameters
    except (TypeError, ValueError):
        return {}
    return {name: False for name in ("sanitize", "safe") if name in params}


_PARSER_OPTIONS = _parser_options()


def parse_document(source, *, strict=False):
    """Parse a complete document and return its #document Node.

    With strict=True the first parse error raises justhtml.StrictModeError.
    """
    doc = JustHTML(source, strict=strict, **_PARSER_OPTIONS)
    return from_dom(doc.root)


def parse_fragment(source, *, context="div", strict=False):
    """Parse a fragment in the given context element.

    Returns the top-level Nodes detached from each other: no parent and no
    siblings.
    """
    doc = JustHTML(source, fragment_context=FragmentContext(context), strict=strict, **_PARSER_OPTIONS)
    return [from_dom(child) for child in _dom_children(doc.root)]


def from_dom(dom_node):
    """Convert a JustHTML node and its subtree into an htmlformat Node."""
    name = dom_node.name
    if name in (DOCUMENT_NAME, FRAGMENT_NAME):
        node = Node(DOCUMENT_NAME)
    elif name == DOCTYPE_NAME:
        node = Node(DOCTYPE_NAME, text_content=_doctype_name(dom_node.data))
    elif name in (TEXT_NAME, COMMENT_NAME):
        node = Node(name, text_content=dom_node.data or "")
    else:
        node = Node(name, dom_node.attrs)

    for child in _dom_children(dom_node):
        node.append_child(from_dom(child))
    return node


def _dom_children(dom_node):
    # Template contents live in a separate fragment
    if dom_node.name == "template":
        content = getattr(dom_node, "template_content", None)
        if content is not None:
            return content.children or []
    return getattr(dom_node, "children", None) or []


def _doctype_name(data):
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.name or ""
