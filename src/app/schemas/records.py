"""Invitee record schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import ListFormat


class Record(BaseModel):
    """One invitee and their optional table assignment."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name, trimmed")
    table: str = Field(
        default="", description="Table number or label; empty when not given"
    )


class ParsedList(BaseModel):
    """Records extracted from one uploaded list file."""

    filename: str
    list_format: ListFormat
    records: list[Record]

    @property
    def total(self) -> int:
        return len(self.records)
