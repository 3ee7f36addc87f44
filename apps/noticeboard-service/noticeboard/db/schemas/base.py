"""
Shared pydantic configuration for document-shaped schemas.

Fields are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class FrozenDocumentModel(DocumentModel):
    """Read model; mutations go through ``model_copy(update=...)``."""
    model_config = ConfigDict(frozen=True)
