"""
MinioClient protocol definition.

This module defines the protocol interface that both the real Minio client
and the fake test client must implement, so the document store depends on
an abstraction rather than on ``minio.Minio`` itself.
"""

from typing import Any, Dict, Iterator, Optional, Protocol, runtime_checkable

from minio.datatypes import Object
from urllib3.response import HTTPResponse


@runtime_checkable
class MinioClient(Protocol):
    """
    Protocol defining the MinIO client interface used by the store.

    This protocol captures only the methods we actually use. Both the real
    minio.Minio client and the FakeMinioClient used in tests implement it.
    """

    def bucket_exists(self, bucket_name: str) -> bool:
        """Check if a bucket exists."""
        ...

    def make_bucket(self, bucket_name: str) -> None:
        """Create a bucket.

        Raises:
            S3Error: If bucket creation fails
        """
        ...

    def put_object(
        self,
        bucket_name: str,
        object_name: str,
        data: Any,
        length: int,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Store an object in the bucket.

        Raises:
            S3Error: If object storage fails
        """
        ...

    def get_object(self, bucket_name: str, object_name: str) -> HTTPResponse:
        """Retrieve an object from the bucket.

        Raises:
            S3Error: If object retrieval fails (e.g., NoSuchKey)
        """
        ...

    def list_objects(
        self,
        bucket_name: str,
        prefix: Optional[str] = None,
        recursive: bool = False,
    ) -> Iterator[Object]:
        """Iterate over the objects of a bucket.

        Raises:
            S3Error: If the bucket cannot be listed
        """
        ...
