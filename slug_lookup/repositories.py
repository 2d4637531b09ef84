"""
Collaborator interfaces defined as Protocols.

The resolver never talks to a database directly. It depends on the
protocols below, which concrete stores (in-memory, MinIO) and test doubles
implement:

- **DocumentStore**: runs slug filter queries, performs the store's own
  lookup by native id, and exposes field metadata of its record type.
- **LocaleProvider**: answers the default locale used for localized slugs.
- **NativeIdValidator**: recognises the string form of a native id.

Architectural Notes:

- These are pure interfaces with no implementation details
- Store errors are never translated by the resolver; whatever a store
  raises reaches the caller unchanged
- The resolver depends on these protocols, not on concrete implementations
"""

from typing import (
    Any,
    List,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

from slug_lookup.domain import FieldMeta, SlugDocument
from slug_lookup.query import SlugQuery


@runtime_checkable
class DocumentStore(Protocol):
    """Storage and native lookup of slug addressable documents.

    ``record_type`` names the kind of record the store holds; it is
    reported in not-found errors.
    """

    record_type: str

    def execute_query(
        self, query: SlugQuery, limit: int
    ) -> List[SlugDocument]:
        """Fetch the documents matching a slug query.

        Args:
            query: Slug membership query built by the resolver
            limit: Maximum number of documents to return

        Returns:
            Matching documents, each carrying its full slug alias set

        Implementation Notes:
        - Must be idempotent: multiple calls return same result
        - May return the same document more than once; the resolver
          deduplicates
        """
        ...

    def find_by_native_id(
        self, *args: Any
    ) -> Union[SlugDocument, List[SlugDocument], None]:
        """Look documents up by native id.

        Receives the caller's original, unnormalized arguments. Result
        shape and not-found behaviour are the store's own.
        """
        ...

    def field_meta(self, name: str) -> Optional[FieldMeta]:
        """Return the declared metadata of a field of the record type.

        May return None, or raise LookupError, for unknown fields.
        """
        ...


@runtime_checkable
class LocaleProvider(Protocol):
    """Source of the default locale for localized slug fields."""

    def default_locale(self) -> str:
        """Return the default locale code, e.g. ``"en"``."""
        ...


@runtime_checkable
class NativeIdValidator(Protocol):
    """Format check for the store's native identifiers."""

    def is_legal(self, value: Any) -> bool:
        """Return True if value is a syntactically legal native id."""
        ...
