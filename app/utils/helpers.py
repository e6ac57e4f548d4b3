"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import logging
from typing import Any, List

logger = logging.getLogger(__name__)


def flatten_list(items: Any) -> List[str]:
    """
    Flatten a potentially nested list to a single-level list of strings.

    Handles various formats:
    - Nested lists: [["a", "b"]] → ["a", "b"]
    - Flat lists: ["a", "b"] → ["a", "b"]
    - Single string: "a" → ["a"]
    - None/empty: None → []

    Args:
        items: Any value that could be a list, nested list, or string

    Returns:
        Flat list of strings
    """
    if not items:
        return []

    if isinstance(items, str):
        return [items]

    if not isinstance(items, (list, tuple)):
        return [str(items)]

    result = []
    for item in items:
        if isinstance(item, (list, tuple)):
            result.extend(str(subitem) for subitem in item)
        else:
            result.append(str(item))

    return result


def normalize_tags(tags: Any) -> List[str]:
    """
    Normalize tags for storage: flatten, strip, drop empties and duplicates.

    Duplicates are detected case-insensitively; the first spelling wins and
    input order is kept.

    Args:
        tags: Tags as a list, nested list, single string or None

    Returns:
        Clean list of tags
    """
    seen = set()
    result = []
    for tag in flatten_list(tags):
        cleaned = " ".join(tag.split())
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result
