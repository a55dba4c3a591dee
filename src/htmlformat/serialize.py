"""Tag serialization helpers for the formatter."""

from __future__ import annotations

from collections.abc import Iterable

_ATTR_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
    },
)


def escape_attr_value(value: str | None) -> str:
    # Values arrive decoded, so "&amp;&#38;" in the source comes back as "&amp;&amp;"
    if value is None:
        return ""
    return str(value).translate(_ATTR_ESCAPES)


def serialize_start_tag(name: str, attributes: Iterable[tuple[str, str | None]] | None) -> str:
    parts: list[str] = ["<", name]
    for key, value in attributes or ():
        parts.extend([" ", key, '="', escape_attr_value(value), '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"
