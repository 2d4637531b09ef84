"""
Classification strategies deciding whether a key looks like a native id.

A strategy answers one question for a single key: could this be the
store's native identifier? The resolver only takes the slug path when no
key does. Which strategy applies depends on the declared type of the id
field:

- an explicit ``slug_id_strategy`` option on the id field always wins;
- object-id typed fields check the key against the object-id format;
- string typed fields treat every key as a native id;
- any other id type treats every key as a slug.
"""

import logging
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from slug_lookup.domain import FieldMeta
from slug_lookup.repositories import NativeIdValidator

logger = logging.getLogger(__name__)


@runtime_checkable
class ClassificationStrategy(Protocol):
    """Decides whether a single key looks like a native identifier."""

    def looks_like_native_id(self, key: Any) -> bool:
        """Return True if the key should be looked up by native id."""
        ...


class NativeIdLegalityStrategy:
    """A key is a native id when it is a legal identifier string."""

    def __init__(self, validator: NativeIdValidator) -> None:
        self.validator = validator

    def looks_like_native_id(self, key: Any) -> bool:
        return self.validator.is_legal(key)


class AlwaysNativeStrategy:
    """Every key is a native id; string keyed stores never see slugs."""

    def looks_like_native_id(self, key: Any) -> bool:
        return True


class AlwaysSlugStrategy:
    """No key is a native id."""

    def looks_like_native_id(self, key: Any) -> bool:
        return False


class CustomOverrideStrategy:
    """Wraps a predicate configured on the id field."""

    def __init__(self, predicate: Callable[[Any], bool]) -> None:
        self.predicate = predicate

    def looks_like_native_id(self, key: Any) -> bool:
        return bool(self.predicate(key))


StrategyFactory = Callable[[NativeIdValidator], ClassificationStrategy]

BUILTIN_STRATEGIES: Dict[str, StrategyFactory] = {
    "objectid": NativeIdLegalityStrategy,
    "str": lambda validator: AlwaysNativeStrategy(),
    "string": lambda validator: AlwaysNativeStrategy(),
}


def strategy_for(
    field: Optional[FieldMeta], validator: NativeIdValidator
) -> ClassificationStrategy:
    """Pick the classification strategy for an id field.

    Args:
        field: Metadata of the native id field, None if unknown
        validator: Format check for the store's native identifiers

    Returns:
        The strategy to apply to every key of one find call
    """
    if field is None:
        logger.debug("No id field metadata, treating every key as a slug")
        return AlwaysSlugStrategy()

    override = field.options.slug_id_strategy
    if override is not None:
        logger.debug(
            "Using slug id strategy override",
            extra={"field_name": field.name},
        )
        return CustomOverrideStrategy(override)

    factory = BUILTIN_STRATEGIES.get(field.type_name)
    if factory is None:
        logger.debug(
            "No built-in strategy for id type, treating keys as slugs",
            extra={"field_name": field.name, "type_name": field.type_name},
        )
        return AlwaysSlugStrategy()

    strategy = factory(validator)
    logger.debug(
        "Resolved built-in slug id strategy",
        extra={
            "field_name": field.name,
            "type_name": field.type_name,
            "strategy": type(strategy).__name__,
        },
    )
    return strategy
