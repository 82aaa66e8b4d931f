"""Pydantic schemas for content endpoints."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from distributor.types import ContentNode, ContentSnapshot
from distributor.utils import format_timestamp


class ContentNodeResponse(BaseModel):
    """Response model for one listing entry."""
    name: str
    path: str
    type: Literal["file", "directory"]
    size: int
    modified: str

    @classmethod
    def from_node(cls, node: ContentNode) -> "ContentNodeResponse":
        return cls(
            name=node.name,
            path=node.path,
            type=node.type,
            size=node.size,
            modified=format_timestamp(node.modified),
        )


class ContentListingResponse(BaseModel):
    """Response model for the content listing."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    content: List[ContentNodeResponse]
    total_files: int = Field(alias="totalFiles")

    @classmethod
    def from_snapshot(cls, snapshot: ContentSnapshot) -> "ContentListingResponse":
        return cls(
            content=[ContentNodeResponse.from_node(node) for node in snapshot.content],
            total_files=snapshot.total_files,
        )
