"""
Evaluation of slug filter documents against stored documents.

Stores without a native query engine use this to run the filters produced
by ``SlugQuery.to_filter()``. Only the operators slug queries use are
supported: ``$or`` at the top level and ``$in`` on a (dotted) field path.
As in document databases, ``$in`` against an array field matches when any
element of the array is one of the values.
"""

from typing import Any, Dict, List, Mapping

_MISSING = object()


def resolve_path(document: Mapping[str, Any], path: str) -> Any:
    """Follow a dotted path through nested mappings."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _matches_in(value: Any, candidates: List[Any]) -> bool:
    if value is _MISSING:
        return False
    if isinstance(value, list):
        return any(item in candidates for item in value)
    return value in candidates


def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, Mapping):
        unsupported = set(condition) - {"$in"}
        if unsupported:
            raise ValueError(
                f"Unsupported filter operators: {sorted(unsupported)}"
            )
        return _matches_in(value, list(condition["$in"]))
    if value is _MISSING:
        return False
    if isinstance(value, list):
        return condition in value
    return value == condition


def matches_filter(
    document: Mapping[str, Any], filter_doc: Dict[str, Any]
) -> bool:
    """Whether a document satisfies every clause of a filter."""
    for key, condition in filter_doc.items():
        if key == "$or":
            if not any(matches_filter(document, sub) for sub in condition):
                return False
        elif key.startswith("$"):
            raise ValueError(f"Unsupported filter operator: {key}")
        elif not _matches_condition(resolve_path(document, key), condition):
            return False
    return True
