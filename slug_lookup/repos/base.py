"""
Behaviour shared by the concrete document stores.

Both stores keep their documents addressable by the string form of the
document id, describe their two relevant fields (native id and slugs) with
``FieldMeta``, and implement the store-side lookup by native id.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, Union

from slug_lookup.arguments import normalize_arguments
from slug_lookup.domain import FieldMeta, FieldOptions, SlugDocument
from slug_lookup.errors import DocumentNotFoundError


def build_field_metadata(
    id_field: str = "_id",
    id_type: Union[str, Type[Any]] = "ObjectId",
    slug_field: str = "_slugs",
    localize_slugs: bool = False,
    slug_id_strategy: Optional[Callable[[Any], bool]] = None,
) -> Dict[str, FieldMeta]:
    """Field metadata for a record type with an id and a slug field."""
    return {
        id_field: FieldMeta(
            name=id_field,
            declared_type=id_type,
            options=FieldOptions(slug_id_strategy=slug_id_strategy),
        ),
        slug_field: FieldMeta(
            name=slug_field,
            declared_type=dict if localize_slugs else list,
            options=FieldOptions(localize=localize_slugs),
        ),
    }


class DocumentStoreMixin:
    """
    Mixin providing field metadata and lookup by native id.

    Classes using this mixin must provide:
    - self.logger: logging.Logger instance
    - self.record_type: str naming the stored record type
    - self.fields: Dict[str, FieldMeta]
    - self.raise_not_found_error: bool
    - self.load_document(document_id: str) -> Optional[SlugDocument]
    """

    logger: logging.Logger
    record_type: str
    fields: Dict[str, FieldMeta]
    raise_not_found_error: bool

    def load_document(self, document_id: str) -> Optional[SlugDocument]:
        raise NotImplementedError

    def field_meta(self, name: str) -> Optional[FieldMeta]:
        """Declared metadata of a field.

        Raises:
            KeyError: If the record type has no such field
        """
        return self.fields[name]

    def find_by_native_id(
        self, *args: Any
    ) -> Union[SlugDocument, List[SlugDocument], None]:
        """Look documents up by native id.

        One scalar argument returns a single document (or None); any list,
        set, range or several arguments return a list.

        Raises:
            DocumentNotFoundError: If ids are missing and the store raises
                on missing documents
        """
        normalized = normalize_arguments(args)
        documents: List[SlugDocument] = []
        missing: List[Any] = []
        for key in normalized.keys:
            document = self.load_document(str(key))
            if document is None:
                missing.append(key)
            else:
                documents.append(document)

        if missing:
            self.logger.debug(
                "Documents not found by native id",
                extra={
                    "record_type": self.record_type,
                    "missing_ids": [str(key) for key in missing],
                },
            )
            if self.raise_not_found_error:
                raise DocumentNotFoundError(
                    self.record_type, normalized.keys, missing
                )

        if normalized.is_multi:
            return documents
        return documents[0] if documents else None
