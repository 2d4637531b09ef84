"""
Memory implementation of DocumentStore.

This module provides an in-memory implementation of the DocumentStore
protocol. Documents are kept in a dictionary keyed by the string form of
their id, which makes it ideal for testing scenarios where external
dependencies should be avoided.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, Union

from slug_lookup.domain import SlugDocument
from slug_lookup.query import SlugQuery
from slug_lookup.repos.base import DocumentStoreMixin, build_field_metadata
from slug_lookup.repos.matching import matches_filter

logger = logging.getLogger(__name__)


class MemoryDocumentStore(DocumentStoreMixin):
    """
    Memory implementation of DocumentStore using Python dictionaries.

    Documents are matched against slug queries in insertion order.
    """

    def __init__(
        self,
        record_type: str = "Document",
        id_type: Union[str, Type[Any]] = "ObjectId",
        localize_slugs: bool = False,
        slug_id_strategy: Optional[Callable[[Any], bool]] = None,
        raise_not_found_error: bool = True,
        id_field: str = "_id",
        slug_field: str = "_slugs",
    ) -> None:
        """Initialize store with empty in-memory storage."""
        self.logger = logger
        self.record_type = record_type
        self.raise_not_found_error = raise_not_found_error
        self.id_field = id_field
        self.slug_field = slug_field
        self.fields = build_field_metadata(
            id_field=id_field,
            id_type=id_type,
            slug_field=slug_field,
            localize_slugs=localize_slugs,
            slug_id_strategy=slug_id_strategy,
        )
        self.storage_dict: Dict[str, SlugDocument] = {}

        logger.debug(
            "Initializing MemoryDocumentStore",
            extra={"record_type": record_type, "id_type": str(id_type)},
        )

    def save(self, document: SlugDocument) -> None:
        """Store a document, replacing any document with the same id."""
        self.storage_dict[str(document.document_id)] = document

        logger.debug(
            "MemoryDocumentStore: Document saved",
            extra={
                "record_type": self.record_type,
                "document_id": str(document.document_id),
            },
        )

    def get(self, document_id: str) -> Optional[SlugDocument]:
        """Retrieve a document by id, None if absent."""
        return self.load_document(str(document_id))

    def load_document(self, document_id: str) -> Optional[SlugDocument]:
        return self.storage_dict.get(document_id)

    def execute_query(
        self, query: SlugQuery, limit: int
    ) -> List[SlugDocument]:
        """Return up to ``limit`` documents matching the slug query."""
        filter_doc = query.to_filter()
        results: List[SlugDocument] = []
        for document in self.storage_dict.values():
            if len(results) >= limit:
                break
            stored = document.to_store_dict(self.id_field, self.slug_field)
            if matches_filter(stored, filter_doc):
                results.append(document)

        logger.debug(
            "MemoryDocumentStore: Slug query executed",
            extra={
                "record_type": self.record_type,
                "limit": limit,
                "result_count": len(results),
            },
        )
        return results
