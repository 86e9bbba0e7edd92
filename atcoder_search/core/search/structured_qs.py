"""
Structured query string parsing.

Dotted keys build nested objects: ``filter.difficulty.from=800`` becomes
``{"filter": {"difficulty": {"from": "800"}}}``. Values stay strings;
splitting comma-separated lists and type coercion belong to the request
models.

Dependencies: urllib (stdlib)
System role: Query string decoding for the search API
"""

from typing import Any
from urllib.parse import parse_qsl

from atcoder_search.core.exceptions import RequestValidationError


def parse_structured_query(query_string: str) -> dict[str, Any]:
    """
    Decode a query string into a nested mapping.

    Blank values are dropped. A repeated key keeps its last value.

    Args:
        query_string: Raw query string without the leading ``?``

    Returns:
        dict: Nested mapping of string values

    Raises:
        RequestValidationError: If a key is empty or used both as a value
            and as a parent of nested keys
    """
    result: dict[str, Any] = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        if value == "":
            continue
        parts = key.split(".")
        if any(part == "" for part in parts):
            raise RequestValidationError(
                f"invalid format query string: [empty key segment in '{key}']"
            )

        node = result
        for part in parts[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise RequestValidationError(
                    f"invalid format query string: [conflicting key '{key}']"
                )
            node = child

        leaf = parts[-1]
        if isinstance(node.get(leaf), dict):
            raise RequestValidationError(
                f"invalid format query string: [conflicting key '{key}']"
            )
        node[leaf] = value
    return result
