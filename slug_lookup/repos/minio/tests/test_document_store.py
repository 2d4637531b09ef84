"""
Tests for MinioDocumentStore implementation.

These tests use the fake client to avoid external dependencies, and run
the resolver end to end against the MinIO-backed store.
"""

from unittest.mock import patch

import pytest
from minio.error import S3Error

from slug_lookup.config import ResolverConfig
from slug_lookup.domain import SlugDocument
from slug_lookup.errors import DocumentNotFoundError
from slug_lookup.query import build_slug_query
from slug_lookup.repos.minio.document_store import MinioDocumentStore
from slug_lookup.repositories import DocumentStore
from slug_lookup.resolver import SlugResolver
from slug_lookup.tests.factories import (
    LocalizedSlugDocumentFactory,
    SlugDocumentFactory,
)
from .fake_client import FakeMinioClient, _error

RED_SHOES_ID = "5f1d7a3e9b1e8a0012345678"
BLUE_HAT_ID = "5f1d7a3e9b1e8a0087654321"


@pytest.fixture
def fake_client() -> FakeMinioClient:
    """Create a fresh fake Minio client for each test."""
    return FakeMinioClient()


@pytest.fixture
def store(fake_client: FakeMinioClient) -> MinioDocumentStore:
    """Create a document store with two products."""
    store = MinioDocumentStore(fake_client, record_type="Product")
    store.save(
        SlugDocumentFactory(
            document_id=RED_SHOES_ID, slugs=["red-shoes", "old-red-shoes"]
        )
    )
    store.save(
        SlugDocumentFactory(document_id=BLUE_HAT_ID, slugs=["blue-hat"])
    )
    return store


class TestMinioDocumentStoreBasicOperations:
    def test_creates_bucket(self, fake_client: FakeMinioClient) -> None:
        MinioDocumentStore(fake_client, bucket_name="products")

        assert fake_client.bucket_exists("products")

    def test_satisfies_document_store_protocol(
        self, store: MinioDocumentStore
    ) -> None:
        assert isinstance(store, DocumentStore)

    def test_save_and_get(self, store: MinioDocumentStore) -> None:
        document = store.get(RED_SHOES_ID)

        assert document is not None
        assert document.slugs == ["red-shoes", "old-red-shoes"]

    def test_get_missing_returns_none(self, store: MinioDocumentStore) -> None:
        assert store.get("missing") is None

    def test_save_stores_record_type_metadata(
        self, store: MinioDocumentStore, fake_client: FakeMinioClient
    ) -> None:
        metadata = fake_client.stored_metadata("slug-documents", BLUE_HAT_ID)
        assert metadata == {"record_type": "Product"}

    def test_identical_save_is_skipped(
        self, store: MinioDocumentStore, fake_client: FakeMinioClient
    ) -> None:
        document = store.get(BLUE_HAT_ID)

        with patch.object(fake_client, "put_object") as put:
            store.save(document)

        put.assert_not_called()

    def test_localized_document_round_trip(
        self, store: MinioDocumentStore
    ) -> None:
        store.save(
            LocalizedSlugDocumentFactory(
                document_id="c" * 24, slugs={"en": "green-socks"}
            )
        )

        assert store.get("c" * 24).slugs == {"en": "green-socks"}

    def test_other_s3_errors_propagate(
        self, store: MinioDocumentStore, fake_client: FakeMinioClient
    ) -> None:
        with patch.object(
            fake_client,
            "get_object",
            side_effect=_error("AccessDenied", "slug-documents", "x"),
        ):
            with pytest.raises(S3Error):
                store.get("x")


class TestMinioDocumentStoreQueries:
    def test_execute_query(self, store: MinioDocumentStore) -> None:
        query = build_slug_query(
            ["old-red-shoes"], localized=False, default_locale="en"
        )

        documents = store.execute_query(query, limit=query.limit)

        assert [d.document_id for d in documents] == [RED_SHOES_ID]

    def test_find_by_native_id(self, store: MinioDocumentStore) -> None:
        documents = store.find_by_native_id([BLUE_HAT_ID, RED_SHOES_ID])

        assert [d.document_id for d in documents] == [
            BLUE_HAT_ID,
            RED_SHOES_ID,
        ]

    def test_find_by_native_id_missing(
        self, store: MinioDocumentStore
    ) -> None:
        with pytest.raises(DocumentNotFoundError) as exc_info:
            store.find_by_native_id("a" * 24)

        assert exc_info.value.missing == ["a" * 24]


class TestResolverWithMinioStore:
    @pytest.fixture
    def resolver(self, store: MinioDocumentStore) -> SlugResolver:
        return SlugResolver(
            store, config=ResolverConfig(raise_not_found_error=True)
        )

    def test_find_by_historical_slug(self, resolver: SlugResolver) -> None:
        document = resolver.find("old-red-shoes")

        assert isinstance(document, SlugDocument)
        assert document.document_id == RED_SHOES_ID

    def test_find_by_object_id(
        self, resolver: SlugResolver, fake_client: FakeMinioClient
    ) -> None:
        fake_client.get_calls.clear()

        document = resolver.find(BLUE_HAT_ID)

        assert document.document_id == BLUE_HAT_ID
        assert fake_client.get_calls == [BLUE_HAT_ID]

    def test_missing_slug(self, resolver: SlugResolver) -> None:
        with pytest.raises(DocumentNotFoundError) as exc_info:
            resolver.find("red-shoes", "green-socks")

        assert exc_info.value.missing == ["green-socks"]

    def test_localized_store(self, fake_client: FakeMinioClient) -> None:
        store = MinioDocumentStore(
            fake_client, bucket_name="localized", localize_slugs=True
        )
        store.save(
            LocalizedSlugDocumentFactory(
                document_id=RED_SHOES_ID, slugs={"en": "red-shoes"}
            )
        )
        resolver = SlugResolver(store, config=ResolverConfig())

        assert resolver.find("red-shoes").document_id == RED_SHOES_ID
