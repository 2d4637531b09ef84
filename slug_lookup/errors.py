"""
Exceptions raised by the slug lookup layer.

Errors raised by a document store (including MinIO ``S3Error``) are never
wrapped; only the failures the resolver itself detects live here.
"""

from typing import Any, List, Sequence


class SlugLookupError(Exception):
    """Base class for resolver errors"""

    pass


class InvalidFindArgumentError(SlugLookupError, ValueError):
    """Raised when find is called without keys or with a None key"""

    pass


class DocumentNotFoundError(SlugLookupError):
    """Raised when requested keys match no stored document.

    Attributes:
        record_type: Name of the record type that was searched
        requested: Every key that was requested
        missing: The keys that matched nothing, in request order
    """

    def __init__(
        self,
        record_type: str,
        requested: Sequence[Any],
        missing: Sequence[Any],
    ) -> None:
        self.record_type = record_type
        self.requested: List[Any] = list(requested)
        self.missing: List[Any] = list(missing)
        super().__init__(
            f"Document(s) not found for class {record_type} with key(s) "
            f"{', '.join(str(key) for key in self.requested)}. "
            f"Missing: {', '.join(str(key) for key in self.missing)}"
        )
