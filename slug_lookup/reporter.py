"""
Detection of requested slugs that matched no document.
"""

import logging
from typing import Any, List, Sequence

from slug_lookup.domain import SlugDocument
from slug_lookup.errors import DocumentNotFoundError

logger = logging.getLogger(__name__)


def find_missing_slugs(
    documents: Sequence[SlugDocument], keys: Sequence[Any]
) -> List[Any]:
    """Keys that are not an alias of any of the documents."""
    found: List[str] = []
    for document in documents:
        found.extend(document.slug_aliases)
    return [key for key in keys if key not in found]


def check_for_missing_documents(
    documents: Sequence[SlugDocument],
    keys: Sequence[Any],
    record_type: str,
    raise_not_found: bool,
) -> List[Any]:
    """Report every requested key without a matching document.

    Args:
        documents: Documents returned by the slug query
        keys: Normalized keys that were requested
        record_type: Name of the record type, used in the error
        raise_not_found: Whether missing keys are an error

    Returns:
        The missing keys (empty when every key matched)

    Raises:
        DocumentNotFoundError: If keys are missing and raise_not_found is set
    """
    missing = find_missing_slugs(documents, keys)
    if not missing:
        return missing

    if raise_not_found:
        logger.error(
            "Documents not found for slugs",
            extra={
                "record_type": record_type,
                "requested_slugs": list(keys),
                "missing_slugs": missing,
            },
        )
        raise DocumentNotFoundError(record_type, keys, missing)

    logger.warning(
        "Some slugs matched no document, returning partial result",
        extra={
            "record_type": record_type,
            "missing_slugs": missing,
            "found_count": len(documents),
        },
    )
    return missing
