"""
Memory document store for slug_lookup.

Uses Python dictionaries for storage and is ideal for testing scenarios
where external dependencies should be avoided.
"""

from .document_store import MemoryDocumentStore

__all__ = [
    "MemoryDocumentStore",
]
