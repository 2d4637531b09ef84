"""
Construction of slug membership queries.

A slug field stores every alias a document ever had, so lookups test
membership (``$in``) rather than equality. Localized slug fields keep their
aliases in a mapping keyed by locale; older documents may still hold the
flat form, so a localized query matches either shape:

    {"$or": [{"_slugs": {"$in": keys}}, {"_slugs.en": {"$in": keys}}]}
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from slug_lookup.repositories import DocumentStore

logger = logging.getLogger(__name__)


class SlugQuery(BaseModel):
    """Query for documents whose slug field contains any of the keys."""

    field: str = "_slugs"
    keys: List[Any] = Field(default_factory=list)
    localized: bool = False
    locale: Optional[str] = None

    @model_validator(mode="after")
    def localized_query_needs_locale(self) -> "SlugQuery":
        if self.localized and not self.locale:
            raise ValueError("Localized slug query requires a locale")
        return self

    @property
    def limit(self) -> int:
        """Upper bound on matching documents: one per requested key."""
        return len(self.keys)

    def to_filter(self) -> Dict[str, Any]:
        """Render the query as a store filter document."""
        membership = {"$in": list(self.keys)}
        if not self.localized:
            return {self.field: membership}
        return {
            "$or": [
                {self.field: membership},
                {f"{self.field}.{self.locale}": dict(membership)},
            ]
        }


def build_slug_query(
    keys: List[Any],
    localized: bool,
    default_locale: str,
    field: str = "_slugs",
) -> SlugQuery:
    """Build the slug query for a set of normalized keys."""
    query = SlugQuery(
        field=field,
        keys=list(keys),
        localized=localized,
        locale=default_locale if localized else None,
    )

    logger.debug(
        "Built slug query",
        extra={
            "slug_field": field,
            "key_count": len(query.keys),
            "localized": localized,
            "locale": query.locale,
        },
    )
    return query


def slug_field_is_localized(store: "DocumentStore", field: str) -> bool:
    """Whether the store declares the slug field as localized.

    Missing metadata, or any error raised while resolving it, means the
    field is not localized.
    """
    try:
        meta = store.field_meta(field)
        if meta is None:
            return False
        return bool(meta.options.localize)
    except Exception as e:
        logger.debug(
            "Could not resolve slug field metadata, assuming not localized",
            extra={
                "slug_field": field,
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
        return False
