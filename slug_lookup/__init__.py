"""
Slug-or-identifier lookups in front of a document store.

``SlugResolver.find`` takes ids or slugs and decides per call whether to
use the store's native lookup by id or to search the slug field.
"""

from .arguments import KeyRange, NormalizedKeySet, normalize_arguments
from .config import ResolverConfig, StaticLocaleProvider, setup_logging
from .domain import FieldMeta, FieldOptions, SlugDocument
from .errors import (
    DocumentNotFoundError,
    InvalidFindArgumentError,
    SlugLookupError,
)
from .resolver import SlugResolver

__all__ = [
    "DocumentNotFoundError",
    "FieldMeta",
    "FieldOptions",
    "InvalidFindArgumentError",
    "KeyRange",
    "NormalizedKeySet",
    "ResolverConfig",
    "SlugDocument",
    "SlugLookupError",
    "SlugResolver",
    "StaticLocaleProvider",
    "normalize_arguments",
    "setup_logging",
]
