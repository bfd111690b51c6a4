"""Base model for entities persisted in the document store.

Attributes are snake_case in Python; documents use camelCase keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Pydantic model that round-trips through camelCase documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the full document written by put_document."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
