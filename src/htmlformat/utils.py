"""Layout predicates.

Classifier and whitespace helpers consulted by the formatter for every node.
None of them look further than a node's immediate parent, children or
siblings.
"""

import unicodedata

from htmlformat.constants import SPECIAL_CONTENT_ELEMENTS, VOID_ELEMENTS
from htmlformat.node import NodeKind


def is_void_element(node):
    """Check if this node is a tag with no end tag such as <meta> or <br>."""
    return node.kind is NodeKind.ELEMENT and node.tag_name in VOID_ELEMENTS


def is_special_content_element(node):
    """Check if node is a <style> or <script> element. Accepts None."""
    return node is not None and node.kind is NodeKind.ELEMENT and node.tag_name in SPECIAL_CONTENT_ELEMENTS


def has_single_text_child(node):
    """Check if node's only child is a text node. Accepts None."""
    if node is None:
        return False
    first = node.first_child
    return first is not None and first is node.last_child and first.kind is NodeKind.TEXT


# White_Space characters only. str.strip() also removes the \x1c-\x1f
# separators, which are content here.
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def trim_space(text):
    return text.strip(WHITESPACE)


def is_empty_text(node):
    return node.kind is NodeKind.TEXT and trim_space(node.text_content) == ""


def collapse_whitespace(text):
    """Reduce leading and trailing whitespace to at most one space each.

    Whitespace inside the text is left untouched.
    """
    core = trim_space(text)
    if not core:
        return " " if text else ""
    prefix = " " if text[0] in WHITESPACE else ""
    suffix = " " if text[-1] in WHITESPACE else ""
    return f"{prefix}{core}{suffix}"


def first_rune(text):
    return text[0] if text else ""


def is_punctuation(ch):
    # Unicode P* categories only; symbols like '$' or '+' do not glue
    return bool(ch) and unicodedata.category(ch).startswith("P")


def starts_with_punctuation(node):
    """Check if a text node's raw content begins with punctuation."""
    return node is not None and node.kind is NodeKind.TEXT and is_punctuation(first_rune(node.text_content))


def glues_to_previous(node, text):
    """Leading punctuation rule: trimmed text that opens with punctuation stays on the previous line."""
    return node.previous_sibling is not None and is_punctuation(first_rune(text))


def glues_to_next(node):
    """Trailing punctuation rule: no newline before a punctuation-led text sibling."""
    return starts_with_punctuation(node.next_sibling)
