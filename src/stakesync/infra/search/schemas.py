"""Wire types of the search store REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BulkItemError(BaseModel):
    type: str = ""
    reason: str = ""


class BulkItemResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", alias="_id")
    status: int = 0
    error: BulkItemError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None and self.error.type != ""


class BulkResponse(BaseModel):
    """Body of a ``_bulk`` call. ``items`` hold one ``{action: result}`` entry per document."""

    errors: bool = False
    items: list[dict[str, BulkItemResult]] = []

    def results(self) -> list[BulkItemResult]:
        return [result for item in self.items for result in item.values()]

    def failed_items(self) -> list[BulkItemResult]:
        return [result for result in self.results() if result.failed]


class MultiGetDoc(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    found: bool = False
    source: dict[str, Any] = Field(default_factory=dict, alias="_source")
    error: dict[str, Any] | None = None


class MultiGetResponse(BaseModel):
    docs: list[MultiGetDoc] = []
