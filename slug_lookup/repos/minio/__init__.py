"""
MinIO document store for slug_lookup.
"""

from .client import MinioClient
from .document_store import MinioDocumentStore

__all__ = [
    "MinioClient",
    "MinioDocumentStore",
]
