"""
Minio implementation of DocumentStore.

Each document is stored as one JSON object in a bucket, named by the string
form of its id. Lookups by native id read objects by name; slug queries
list the bucket and evaluate the query filter against every document, so
this store suits modest collections rather than large ones.
"""

import io
import logging
import os
from typing import Any, Callable, List, Optional, Type, Union

from minio import Minio
from minio.error import S3Error

from slug_lookup.domain import SlugDocument
from slug_lookup.query import SlugQuery
from slug_lookup.repos.base import DocumentStoreMixin, build_field_metadata
from slug_lookup.repos.matching import matches_filter
from .client import MinioClient

logger = logging.getLogger(__name__)


class MinioDocumentStore(DocumentStoreMixin):
    """
    Minio implementation of DocumentStore.
    Uses Minio for persistence of SlugDocument objects.
    """

    def __init__(
        self,
        client: MinioClient,
        bucket_name: str = "slug-documents",
        record_type: str = "Document",
        id_type: Union[str, Type[Any]] = "ObjectId",
        localize_slugs: bool = False,
        slug_id_strategy: Optional[Callable[[Any], bool]] = None,
        raise_not_found_error: bool = True,
        id_field: str = "_id",
        slug_field: str = "_slugs",
    ) -> None:
        """Initialize store with a Minio client.

        Args:
            client: MinioClient protocol implementation (real or fake)
            bucket_name: Bucket holding the documents, created if absent
        """
        self.client = client
        self.bucket_name = bucket_name
        self.logger = logger
        self.record_type = record_type
        self.raise_not_found_error = raise_not_found_error
        self.id_field = id_field
        self.slug_field = slug_field
        self.fields = build_field_metadata(
            id_field=id_field,
            id_type=id_type,
            slug_field=slug_field,
            localize_slugs=localize_slugs,
            slug_id_strategy=slug_id_strategy,
        )
        self._ensure_bucket_exists()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "MinioDocumentStore":
        """Connect to MinIO using the ``MINIO_*`` environment variables."""
        endpoint = os.environ.get("MINIO_ENDPOINT", "localhost:9000")
        logger.debug(
            "Creating Minio client from environment",
            extra={"minio_endpoint": endpoint},
        )
        client = Minio(
            endpoint,
            access_key=os.environ.get("MINIO_ROOT_USER", "minioadmin"),
            secret_key=os.environ.get("MINIO_ROOT_PASSWORD", "minioadmin"),
            secure=False,
        )
        kwargs.setdefault(
            "bucket_name",
            os.environ.get("MINIO_BUCKET_NAME", "slug-documents"),
        )
        return cls(client, **kwargs)

    def _ensure_bucket_exists(self) -> None:
        try:
            if not self.client.bucket_exists(self.bucket_name):
                logger.info(
                    "Creating documents bucket",
                    extra={"bucket_name": self.bucket_name},
                )
                self.client.make_bucket(self.bucket_name)
            else:
                logger.debug(
                    "Documents bucket already exists",
                    extra={"bucket_name": self.bucket_name},
                )
        except S3Error as e:
            logger.error(
                "Failed to create documents bucket",
                extra={"bucket_name": self.bucket_name, "error": str(e)},
            )
            raise

    def _read_object(self, object_name: str) -> bytes:
        response = self.client.get_object(
            bucket_name=self.bucket_name, object_name=object_name
        )
        try:
            return response.read()
        finally:
            response.close()
            response.release_conn()

    def load_document(self, document_id: str) -> Optional[SlugDocument]:
        """Read one document by id, None if there is no such object."""
        try:
            data = self._read_object(document_id)
        except S3Error as e:
            if getattr(e, "code", None) == "NoSuchKey":
                logger.debug(
                    "MinioDocumentStore: Document not found",
                    extra={
                        "document_id": document_id,
                        "bucket_name": self.bucket_name,
                    },
                )
                return None
            raise  # Re-raise if it's another S3 error
        return SlugDocument.model_validate_json(data)

    def get(self, document_id: str) -> Optional[SlugDocument]:
        """Retrieve a document by id, None if absent."""
        return self.load_document(str(document_id))

    def save(self, document: SlugDocument) -> None:
        """Persist a document to Minio.

        Saving a document whose stored JSON is already identical is a no-op.
        """
        object_name = str(document.document_id)
        document_json = document.model_dump_json().encode("utf-8")

        try:
            existing = self._read_object(object_name)
            if existing == document_json:
                logger.info(
                    "MinioDocumentStore: Document already matches, "
                    "skipping save (idempotent)",
                    extra={"document_id": object_name},
                )
                return
        except S3Error as e:
            if getattr(e, "code", None) != "NoSuchKey":
                raise  # Re-raise if it's another S3 error

        self.client.put_object(
            bucket_name=self.bucket_name,
            object_name=object_name,
            data=io.BytesIO(document_json),
            length=len(document_json),
            content_type="application/json",
            metadata={"record_type": self.record_type},
        )

        logger.info(
            "MinioDocumentStore: Document saved",
            extra={
                "document_id": object_name,
                "bucket_name": self.bucket_name,
                "payload_size_bytes": len(document_json),
            },
        )

    def execute_query(
        self, query: SlugQuery, limit: int
    ) -> List[SlugDocument]:
        """Return up to ``limit`` documents matching the slug query."""
        filter_doc = query.to_filter()
        results: List[SlugDocument] = []
        for obj in self.client.list_objects(
            bucket_name=self.bucket_name, recursive=True
        ):
            if len(results) >= limit:
                break
            document = SlugDocument.model_validate_json(
                self._read_object(obj.object_name)
            )
            stored = document.to_store_dict(self.id_field, self.slug_field)
            if matches_filter(stored, filter_doc):
                results.append(document)

        logger.debug(
            "MinioDocumentStore: Slug query executed",
            extra={
                "bucket_name": self.bucket_name,
                "limit": limit,
                "result_count": len(results),
            },
        )
        return results
