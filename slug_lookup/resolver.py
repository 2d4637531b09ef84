"""
Find dispatcher choosing between native id and slug lookups.

``SlugResolver.find`` accepts the same arguments a plain lookup by id
would. If every key is a string and not all of them look like native ids,
the keys are treated as slugs and resolved through the slug field;
otherwise the call is handed, untouched, to the store's own lookup by id.
A batch mixing id-shaped and other strings goes to the slug path. Keys
that are not all strings never touch the id field's metadata.

Example:
    >>> resolver = SlugResolver(store)
    >>> resolver.find("red-shoes")               # one document
    >>> resolver.find(["red-shoes"])             # list of documents
    >>> resolver.find("red-shoes", "blue-hat")   # list of documents
"""

import logging
from typing import Any, List, Optional, Sequence, Union

from slug_lookup.arguments import NormalizedKeySet, normalize_arguments
from slug_lookup.config import ResolverConfig, StaticLocaleProvider
from slug_lookup.domain import SlugDocument
from slug_lookup.errors import InvalidFindArgumentError
from slug_lookup.identifiers import ObjectIdValidator
from slug_lookup.query import build_slug_query, slug_field_is_localized
from slug_lookup.reporter import check_for_missing_documents
from slug_lookup.repositories import (
    DocumentStore,
    LocaleProvider,
    NativeIdValidator,
)
from slug_lookup.strategies import ClassificationStrategy, strategy_for
from slug_lookup.validation import ensure_collaborator

logger = logging.getLogger(__name__)

FindResult = Union[SlugDocument, List[SlugDocument], None]


class SlugResolver:
    """Resolves find arguments to documents by native id or by slug.

    Args:
        store: Document store holding the records
        config: Not-found policy and field names; read from the environment
            when omitted
        locale_provider: Source of the default locale for localized slugs;
            defaults to the configured ``default_locale``
        id_validator: Format check for native ids; defaults to object ids
    """

    def __init__(
        self,
        store: DocumentStore,
        config: Optional[ResolverConfig] = None,
        locale_provider: Optional[LocaleProvider] = None,
        id_validator: Optional[NativeIdValidator] = None,
    ) -> None:
        self.store = ensure_collaborator(
            store, DocumentStore, "document store"
        )
        self.config = config or ResolverConfig.from_env()
        if locale_provider is None:
            locale_provider = StaticLocaleProvider(self.config.default_locale)
        self.locale_provider = ensure_collaborator(
            locale_provider, LocaleProvider, "locale provider"
        )
        self.id_validator = ensure_collaborator(
            id_validator or ObjectIdValidator(), NativeIdValidator, "id validator"
        )

        logger.debug(
            "Initialized SlugResolver",
            extra={
                "record_type": store.record_type,
                "raise_not_found_error": self.config.raise_not_found_error,
            },
        )

    def find(self, *args: Any) -> FindResult:
        """Find documents by native id or slug.

        Args:
            *args: Ids or slugs, as scalars or (nested) lists, tuples, sets
                and ranges

        Returns:
            A single document for one scalar argument, otherwise a list

        Raises:
            InvalidFindArgumentError: If no key, or a None key, was given
            DocumentNotFoundError: If slugs are missing and the not-found
                policy is enabled
        """
        normalized = normalize_arguments(args)
        self._ensure_valid_keys(normalized.keys)

        if self.look_like_slugs(normalized.keys):
            return self._find_by_slugs(normalized)

        logger.debug(
            "SlugResolver: Keys look like native ids, delegating to store",
            extra={
                "record_type": self.store.record_type,
                "key_count": len(normalized.keys),
            },
        )
        return self.store.find_by_native_id(*args)

    def find_by_slug(self, *args: Any) -> FindResult:
        """Find documents by slug, without checking for native ids.

        Raises:
            InvalidFindArgumentError: If no key, or a None key, was given
            DocumentNotFoundError: If slugs are missing and the not-found
                policy is enabled
        """
        normalized = normalize_arguments(args)
        self._ensure_valid_keys(normalized.keys)
        return self._find_by_slugs(normalized)

    def look_like_slugs(
        self,
        keys: Sequence[Any],
        strategy: Optional[ClassificationStrategy] = None,
    ) -> bool:
        """Whether every key is a string and not all look like native ids.

        The strategy is only resolved once the keys are known to be
        strings, so non-string keys never read the id field's metadata.
        """
        if not all(isinstance(key, str) for key in keys):
            return False
        strategy = strategy or self.resolve_strategy()
        return not all(strategy.looks_like_native_id(key) for key in keys)

    def resolve_strategy(self) -> ClassificationStrategy:
        """Classification strategy for the store's native id field.

        A store that does not know the id field gets the always-slug
        strategy.
        """
        try:
            meta = self.store.field_meta(self.config.id_field)
        except LookupError:
            logger.debug(
                "SlugResolver: Id field unknown to store, keys are slugs",
                extra={
                    "record_type": self.store.record_type,
                    "id_field": self.config.id_field,
                },
            )
            meta = None
        return strategy_for(meta, self.id_validator)

    def _ensure_valid_keys(self, keys: Sequence[Any]) -> None:
        if not keys:
            raise InvalidFindArgumentError(
                "Calling find requires at least one id or slug"
            )
        if any(key is None for key in keys):
            raise InvalidFindArgumentError(
                "Calling find with None as an id or slug is not allowed"
            )

    def _find_by_slugs(self, normalized: NormalizedKeySet) -> FindResult:
        keys = normalized.keys
        localized = slug_field_is_localized(
            self.store, self.config.slug_field
        )
        query = build_slug_query(
            keys,
            localized=localized,
            default_locale=self.locale_provider.default_locale(),
            field=self.config.slug_field,
        )

        documents = unique_documents(
            self.store.execute_query(query, limit=query.limit)
        )
        check_for_missing_documents(
            documents,
            keys,
            record_type=self.store.record_type,
            raise_not_found=self.config.raise_not_found_error,
        )

        logger.info(
            "SlugResolver: Documents resolved by slug",
            extra={
                "record_type": self.store.record_type,
                "requested_count": len(keys),
                "found_count": len(documents),
                "is_multi": normalized.is_multi,
            },
        )

        if normalized.is_multi:
            return documents
        return documents[0] if documents else None


def unique_documents(documents: Sequence[SlugDocument]) -> List[SlugDocument]:
    """Drop repeated documents (same id), keeping first order."""
    seen = set()
    unique: List[SlugDocument] = []
    for document in documents:
        if document.document_id in seen:
            continue
        seen.add(document.document_id)
        unique.append(document)
    return unique
