"""HTML element constants used by the formatter.

Elements are kept in lists to maintain a stable iteration order; the frozen
sets below them are what the classifier actually looks up.

Usage:
    from htmlformat.constants import VOID_ELEMENTS, SPECIAL_CONTENT_ELEMENTS

References:
    - http://www.w3.org/TR/html-markup/syntax.html#syntax-elements
"""

# Tags with no end tag. Includes the obsolete command/keygen so that legacy
# markup is still rendered without a closing tag.
VOID_ELEMENT_NAMES = [
    "area",
    "base",
    "br",
    "col",
    "command",
    "embed",
    "hr",
    "img",
    "input",
    "keygen",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
]

# Raw-text bodies re-indented line by line instead of reflowed
SPECIAL_CONTENT_ELEMENT_NAMES = [
    "style",
    "script",
]

# Subtrees copied through verbatim
PREFORMATTED_ELEMENT_NAMES = [
    "pre",
]

VOID_ELEMENTS = frozenset(VOID_ELEMENT_NAMES)
SPECIAL_CONTENT_ELEMENTS = frozenset(SPECIAL_CONTENT_ELEMENT_NAMES)
PREFORMATTED_ELEMENTS = frozenset(PREFORMATTED_ELEMENT_NAMES)

# Sentinel tag names for non-element nodes
DOCUMENT_NAME = "#document"
DOCTYPE_NAME = "!doctype"
TEXT_NAME = "#text"
COMMENT_NAME = "#comment"
