import enum

from .constants import COMMENT_NAME, DOCTYPE_NAME, DOCUMENT_NAME, TEXT_NAME


class NodeKind(enum.Enum):
    DOCUMENT = "document"
    DOCTYPE = "doctype"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


_KIND_BY_NAME = {
    DOCUMENT_NAME: NodeKind.DOCUMENT,
    DOCTYPE_NAME: NodeKind.DOCTYPE,
    TEXT_NAME: NodeKind.TEXT,
    COMMENT_NAME: NodeKind.COMMENT,
}


class Node:
    """Represents a node of the tree handed to the formatter.
    - tag_name: e.g., 'div', 'p', etc. Use '#text' for text nodes.
    - kind: NodeKind, derived from tag_name
    - attributes: list of (name, value) pairs in source order
    - children: list of child Nodes
    - parent: reference to parent Node (or None for root)
    - next_sibling/previous_sibling: references to adjacent nodes in the tree.
    """

    __slots__ = (
        "attributes",
        "children",
        "kind",
        "next_sibling",
        "parent",
        "previous_sibling",
        "tag_name",
        "text_content",
    )

    def __init__(self, tag_name, attributes=None, text_content=None):
        if tag_name is None or tag_name == "":
            msg = "Empty tag_name passed to Node constructor"
            raise ValueError(msg)

        self.tag_name = tag_name
        self.kind = _KIND_BY_NAME.get(tag_name, NodeKind.ELEMENT)
        if attributes:
            items = attributes.items() if isinstance(attributes, dict) else attributes
            # Duplicates are kept; the formatter never dedupes
            self.attributes = [(name, "" if value is None else value) for name, value in items]
        else:
            self.attributes = []
        self.children = []
        self.parent = None
        self.text_content = text_content if text_content is not None else ""
        self.next_sibling = None
        self.previous_sibling = None

    @classmethod
    def text(cls, data):
        return cls(TEXT_NAME, text_content=data)

    @classmethod
    def comment(cls, data):
        return cls(COMMENT_NAME, text_content=data)

    @property
    def first_child(self):
        return self.children[0] if self.children else None

    @property
    def last_child(self):
        return self.children[-1] if self.children else None

    def append_child(self, child):
        if self._would_create_circular_reference(child):
            msg = f"Adding {child.tag_name} as child of {self.tag_name} would create circular reference"
            raise ValueError(msg)

        if child.parent:
            # Update sibling links in old location
            if child.previous_sibling:
                child.previous_sibling.next_sibling = child.next_sibling
            if child.next_sibling:
                child.next_sibling.previous_sibling = child.previous_sibling
            child.parent.children.remove(child)

        if self.children:
            self.children[-1].next_sibling = child
            child.previous_sibling = self.children[-1]
        else:
            child.previous_sibling = None

        child.parent = self
        child.next_sibling = None
        self.children.append(child)
        return child

    def _would_create_circular_reference(self, child):
        """Check if self is child or one of its descendants."""
        current = self
        while current is not None:
            if current is child:
                return True
            current = current.parent
        return False

    def __repr__(self):
        if self.kind is NodeKind.TEXT:
            return f"Node(#text='{self.text_content[:30]}')"
        if self.kind is NodeKind.COMMENT:
            return f"Node(#comment='{self.text_content[:30]}')"
        return f"Node(<{self.tag_name}>, children={len(self.children)})"

    def to_test_format(self, indent=0):
        """Render the tree in the html5lib test format, attributes in source order."""
        if self.kind is NodeKind.DOCUMENT:
            return "\n".join(child.to_test_format(0) for child in self.children)
        if self.kind is NodeKind.TEXT:
            return f'| {" " * indent}"{self.text_content}"'
        if self.kind is NodeKind.COMMENT:
            return f"| {' ' * indent}<!-- {self.text_content} -->"
        if self.kind is NodeKind.DOCTYPE:
            if self.text_content.strip():
                return f"| <!DOCTYPE {self.text_content}>"
            return "| <!DOCTYPE >"

        parts = [f"| {' ' * indent}<{self.tag_name}>"]
        parts.extend(f'| {" " * (indent + 2)}{key}="{value}"' for key, value in self.attributes)
        parts.extend(child.to_test_format(indent + 2) for child in self.children)
        return "\n".join(parts)
