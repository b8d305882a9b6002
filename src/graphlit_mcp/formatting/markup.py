"""Render flat result rows as a bounded markup document.

Attribute values are emitted verbatim, without escaping. Results come from the
platform and are consumed by a trusted client; a value containing a double
quote will produce malformed markup.
"""

import re
from typing import Any, Iterable, Mapping, Union

from pydantic import BaseModel


# Fields rendered as the element body or dropped, never as attributes
EXCLUDED_FIELDS = frozenset({"metadata", "text", "content", "__typename"})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

ResultRow = Union[BaseModel, Mapping[str, Any]]


def kebab_case(name: str) -> str:
    """Convert a camelCase field name to kebab-case (``resourceUri`` -> ``resource-uri``)."""
    return _CAMEL_BOUNDARY.sub("-", name).lower()


def _as_mapping(result: ResultRow) -> Mapping[str, Any]:
    if isinstance(result, BaseModel):
        return result.model_dump(by_alias=True)
    return result


def format_result(result: ResultRow, element: str = "result") -> str:
    """Render one result row as an element with attributes and a text body."""
    fields = _as_mapping(result)

    attributes = "".join(
        f' {kebab_case(key)}="{value}"'
        for key, value in fields.items()
        if key not in EXCLUDED_FIELDS and value is not None
    )
    body = "\n".join(
        str(fields[key]) for key in ("metadata", "text") if fields.get(key)
    )

    return f"<{element}{attributes}>\n{body}\n</{element}>"


def format_results(
    results: Iterable[ResultRow],
    wrapper: str = "results",
    element: str = "result",
) -> str:
    """
    Wrap result rows in a single element, preserving input order.

    Args:
        results: Result rows (pydantic models or plain mappings)
        wrapper: Name of the wrapping element
        element: Name of each child element

    Returns:
        Markup document with one child element per result
    """
    children = [format_result(result, element) for result in results]
    return "\n".join([f"<{wrapper}>", *children, f"</{wrapper}>"])
