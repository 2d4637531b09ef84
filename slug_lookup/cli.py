"""
Command line lookup of documents by id or slug.

Resolves the given keys against the MinIO document store configured by the
``MINIO_*`` environment variables, using the resolver settings from the
``SLUG_LOOKUP_*`` variables, and prints the matching documents as JSON.

Example:
    $ slug-lookup find red-shoes blue-hat
    $ slug-lookup find --slugs-only 5f1d7a3e9b1e8a0012345678
"""

import json
import logging
import sys
from typing import Optional, Tuple

import click

from slug_lookup.config import ResolverConfig, setup_logging
from slug_lookup.errors import SlugLookupError
from slug_lookup.repos.minio import MinioDocumentStore
from slug_lookup.resolver import FindResult, SlugResolver

logger = logging.getLogger(__name__)


def render_result(result: FindResult) -> str:
    if result is None:
        return json.dumps(None)
    if isinstance(result, list):
        return json.dumps(
            [document.to_store_dict() for document in result],
            indent=2,
            default=str,
        )
    return json.dumps(result.to_store_dict(), indent=2, default=str)


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level; defaults to the LOG_LEVEL environment variable",
)
def main(log_level: Optional[str]) -> None:
    """Look documents up by native id or slug."""
    setup_logging(log_level)


@main.command()
@click.argument("keys", nargs=-1, required=True)
@click.option("--record-type", default="Document", show_default=True)
@click.option(
    "--localized/--not-localized",
    default=False,
    help="Whether the slug field holds per-locale aliases",
)
@click.option(
    "--slugs-only",
    is_flag=True,
    help="Treat every key as a slug, even when it looks like an id",
)
def find(
    keys: Tuple[str, ...],
    record_type: str,
    localized: bool,
    slugs_only: bool,
) -> None:
    """Find documents by id or slug."""
    config = ResolverConfig.from_env()
    store = MinioDocumentStore.from_env(
        record_type=record_type,
        localize_slugs=localized,
        raise_not_found_error=config.raise_not_found_error,
        id_field=config.id_field,
        slug_field=config.slug_field,
    )
    resolver = SlugResolver(store, config=config)

    # One key prints one document, several keys print a list
    try:
        if slugs_only:
            result = resolver.find_by_slug(*keys)
        else:
            result = resolver.find(*keys)
    except SlugLookupError as e:
        logger.error(
            "Lookup failed",
            extra={"record_type": record_type, "error": str(e)},
        )
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(render_result(result))


if __name__ == "__main__":
    main()
