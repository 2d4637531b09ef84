"""
Tests for the slug-lookup command line program.

The MinIO store is replaced by the in-memory store; these tests cover
argument parsing, logging setup, output and exit codes.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from slug_lookup.cli import main
from slug_lookup.repos.memory import MemoryDocumentStore
from .factories import SlugDocumentFactory

RED_SHOES_ID = "5f1d7a3e9b1e8a0012345678"


@pytest.fixture
def store() -> MemoryDocumentStore:
    store = MemoryDocumentStore(record_type="Product")
    store.save(
        SlugDocumentFactory(
            document_id=RED_SHOES_ID, slugs=["red-shoes"], attributes={}
        )
    )
    return store


@pytest.fixture(autouse=True)
def logging_setup():
    with patch("slug_lookup.cli.setup_logging") as logging_setup:
        yield logging_setup


@pytest.fixture
def store_class(store: MemoryDocumentStore):
    with patch("slug_lookup.cli.MinioDocumentStore") as store_class:
        store_class.from_env.return_value = store
        yield store_class


class TestFindCommand:
    def test_prints_document_found_by_slug(
        self, store_class, logging_setup
    ) -> None:
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["--log-level", "debug", "find", "red-shoes"],
            env={"SLUG_LOOKUP_RAISE_NOT_FOUND": "true"},
        )

        assert result.exit_code == 0, result.output
        logging_setup.assert_called_once_with("debug")
        assert json.loads(result.output)["_id"] == RED_SHOES_ID
        store_class.from_env.assert_called_once()
        assert store_class.from_env.call_args.kwargs["record_type"] == (
            "Document"
        )

    def test_several_keys_print_a_list(self, store_class) -> None:
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["find", "red-shoes", RED_SHOES_ID],
            env={"SLUG_LOOKUP_RAISE_NOT_FOUND": "false"},
        )

        assert result.exit_code == 0, result.output
        assert [d["_id"] for d in json.loads(result.output)] == [RED_SHOES_ID]

    def test_object_id_is_looked_up_natively(self, store_class) -> None:
        runner = CliRunner()

        result = runner.invoke(main, ["find", RED_SHOES_ID])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["_slugs"] == ["red-shoes"]

    def test_slugs_only_skips_native_lookup(
        self, store_class, store: MemoryDocumentStore
    ) -> None:
        runner = CliRunner()

        with patch.object(store, "find_by_native_id") as native:
            result = runner.invoke(
                main,
                ["find", "--slugs-only", RED_SHOES_ID],
                env={"SLUG_LOOKUP_RAISE_NOT_FOUND": "false"},
            )

        assert result.exit_code == 0, result.output
        native.assert_not_called()
        assert json.loads(result.output) is None

    def test_missing_slug_exits_with_error(self, store_class) -> None:
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["find", "no-such-slug"],
            env={"SLUG_LOOKUP_RAISE_NOT_FOUND": "true"},
        )

        assert result.exit_code == 1
        assert "no-such-slug" in result.output

    def test_requires_at_least_one_key(self, store_class) -> None:
        runner = CliRunner()

        result = runner.invoke(main, ["find"])

        assert result.exit_code == 2
        store_class.from_env.assert_not_called()
