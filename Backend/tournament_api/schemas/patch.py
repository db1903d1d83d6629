from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field


class PatchOperation(BaseModel):
    """One RFC 6902 operation of a JSON Patch document."""

    model_config = ConfigDict(populate_by_name=True)

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)
