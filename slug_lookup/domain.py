"""
Domain models defined as Pydantic models.

These are the records returned by a document store and the field metadata
the resolver reads to decide how a lookup is performed. They are pure data
structures with validation.
"""

from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A slug field holds either a flat list of aliases, or, when localized, a
# mapping from locale code to one alias or a list of aliases.
SlugValue = Union[List[str], Dict[str, Union[str, List[str]]]]


class SlugDocument(BaseModel):
    """A stored record addressable by its native id or any of its slugs.

    ``slugs`` keeps every historical alias, so a record stays reachable
    under old slugs after it has been renamed.
    """

    document_id: Union[str, int]
    slugs: SlugValue = Field(default_factory=list)
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("document_id")
    @classmethod
    def document_id_must_not_be_empty(
        cls, v: Union[str, int]
    ) -> Union[str, int]:
        if isinstance(v, str) and not v.strip():
            raise ValueError("Document id cannot be empty")
        return v

    @property
    def slug_aliases(self) -> List[str]:
        """Every alias of the document, across all locales."""
        if isinstance(self.slugs, dict):
            aliases: List[str] = []
            for value in self.slugs.values():
                if isinstance(value, str):
                    aliases.append(value)
                else:
                    aliases.extend(value)
            return aliases
        return list(self.slugs)

    def to_store_dict(
        self, id_field: str = "_id", slug_field: str = "_slugs"
    ) -> Dict[str, Any]:
        """Render the document the way the store filters see it."""
        data = dict(self.attributes)
        data[id_field] = self.document_id
        data[slug_field] = self.slugs
        return data


class FieldOptions(BaseModel):
    """Per-field configuration declared on a record type."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    localize: bool = False
    slug_id_strategy: Optional[Callable[[Any], bool]] = None


class FieldMeta(BaseModel):
    """Declared metadata for one field of a record type.

    ``declared_type`` is either the Python type of the field or its type
    name as the store reports it (``"ObjectId"``, ``"BSON::ObjectId"``,
    ``"bson.objectid.ObjectId"``).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    declared_type: Union[str, Type[Any]]
    options: FieldOptions = Field(default_factory=FieldOptions)

    @property
    def type_name(self) -> str:
        """Simple, lower-cased name of the declared type."""
        if isinstance(self.declared_type, str):
            raw = self.declared_type
        else:
            raw = self.declared_type.__name__
        return raw.replace("::", ".").split(".")[-1].lower()
