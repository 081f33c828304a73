"""
Normalization of heterogeneous query, ground truth and result entries.

Queries may be plain strings or records carrying the text under one of a
few keys. Field lists may be plain arrays or records wrapping the array.
The key order in each tuple below is a priority order.
"""
from enum import Enum
from typing import Any, List, Tuple

QUERY_TEXT_KEYS: Tuple[str, ...] = ("query", "text", "question", "prompt")
GROUND_TRUTH_KEYS: Tuple[str, ...] = ("fields", "ground_truth", "expected")
RETRIEVED_KEYS: Tuple[str, ...] = ("retrieved", "top", "fields")


class FieldListContext(Enum):
    """Where a field list comes from; selects the recognized record keys."""
    GROUND_TRUTH = "ground_truth"
    RETRIEVED = "retrieved"

    @property
    def keys(self) -> Tuple[str, ...]:
        if self is FieldListContext.GROUND_TRUTH:
            return GROUND_TRUTH_KEYS
        return RETRIEVED_KEYS


def normalize_query_text(item: Any) -> str:
    """
    Convert a raw query entry into its text.

    Args:
        item: A string, a record with one of QUERY_TEXT_KEYS, or anything else

    Returns:
        The query text; ``""`` for None
    """
    if isinstance(item, str):
        return item

    if isinstance(item, dict):
        for key in QUERY_TEXT_KEYS:
            value = item.get(key)
            if isinstance(value, str):
                return value

    if item is None:
        return ""
    return str(item)


def normalize_field_list(item: Any, context: FieldListContext) -> List[Any]:
    """
    Convert a raw ground truth or result entry into a list of field names.

    Lists are returned as-is (elements are filtered later by the set
    matcher). Records are searched for the first list-valued key of the
    context. Anything else gives an empty list.
    """
    if isinstance(item, list):
        return item

    if isinstance(item, dict):
        for key in context.keys:
            value = item.get(key)
            if isinstance(value, list):
                return value

    return []


def normalize_ground_truth(item: Any) -> List[Any]:
    """Normalize a ground truth entry (keys: fields, ground_truth, expected)."""
    return normalize_field_list(item, FieldListContext.GROUND_TRUTH)


def normalize_retrieved(item: Any) -> List[Any]:
    """Normalize a system result entry (keys: retrieved, top, fields)."""
    return normalize_field_list(item, FieldListContext.RETRIEVED)
