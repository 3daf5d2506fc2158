"""
Shared pydantic base for documents written to disk.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Model with snake_case attributes and camelCase document keys.

    Either spelling is accepted on input; ``to_document()`` always emits
    the camelCase aliases.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
