"""
Checks that a resolver's collaborators honour their protocols.

``SlugResolver`` is wired with a document store, a locale provider and a
native id validator. Each one is checked against its ``@runtime_checkable``
protocol when the resolver is built, so a wrongly wired resolver fails at
construction naming the collaborator and the members it lacks, instead of
failing on the first ``find``.
"""

import logging
from typing import List, Type, TypeVar

from slug_lookup.errors import SlugLookupError

logger = logging.getLogger(__name__)

P = TypeVar("P")


class CollaboratorValidationError(SlugLookupError, TypeError):
    """Raised when a resolver collaborator does not implement its protocol.

    Attributes:
        role: What the collaborator is for, e.g. ``"document store"``
        protocol_name: Name of the protocol it was checked against
        missing: Protocol members the collaborator does not provide
    """

    def __init__(
        self, role: str, collaborator: object, protocol: type, missing: List[str]
    ) -> None:
        self.role = role
        self.protocol_name = protocol.__name__
        self.missing = list(missing)
        detail = (
            f"missing {', '.join(self.missing)}"
            if self.missing
            else "members have the wrong kind"
        )
        super().__init__(
            f"{type(collaborator).__name__} cannot be used as the resolver's "
            f"{role}: it does not implement {self.protocol_name} ({detail})"
        )


def protocol_members(protocol: type) -> List[str]:
    """Public attributes and methods a protocol declares."""
    names = set(getattr(protocol, "__annotations__", {}))
    names.update(
        name
        for name, value in vars(protocol).items()
        if callable(value) and not name.startswith("_")
    )
    return sorted(names)


def missing_members(collaborator: object, protocol: type) -> List[str]:
    return [
        name
        for name in protocol_members(protocol)
        if not hasattr(collaborator, name)
    ]


def validate_collaborator(
    collaborator: object, protocol: Type[P], role: str
) -> None:
    """
    Check that a collaborator satisfies the protocol for its role.

    Raises:
        CollaboratorValidationError: If it does not

    Example:
        >>> from slug_lookup.repos.memory import MemoryDocumentStore
        >>> from slug_lookup.repositories import DocumentStore
        >>> validate_collaborator(
        ...     MemoryDocumentStore(), DocumentStore, "document store"
        ... )
    """
    if isinstance(collaborator, protocol):
        logger.debug(
            "Resolver collaborator accepted",
            extra={
                "role": role,
                "collaborator_type": type(collaborator).__name__,
                "protocol_name": protocol.__name__,
            },
        )
        return

    error = CollaboratorValidationError(
        role, collaborator, protocol, missing_members(collaborator, protocol)
    )
    logger.error(
        "Resolver collaborator rejected",
        extra={
            "role": role,
            "collaborator_type": type(collaborator).__name__,
            "protocol_name": protocol.__name__,
            "missing_members": error.missing,
        },
    )
    raise error


def ensure_collaborator(collaborator: object, protocol: Type[P], role: str) -> P:
    """Validate a collaborator and return it typed as its protocol."""
    validate_collaborator(collaborator, protocol, role)
    return collaborator  # type: ignore[return-value]
