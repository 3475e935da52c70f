"""Rendering schemas: text placement and batch settings."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 48
DEFAULT_COLOR = "#000000"


class TextElement(BaseModel):
    """A piece of text drawn with its top-left corner at (x, y)."""

    text: str
    x: float
    y: float
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: int = Field(default=DEFAULT_FONT_SIZE, gt=0)
    color: str = DEFAULT_COLOR


class RenderSettings(BaseModel):
    """Placement and styling shared by the preview and batch endpoints.

    Accepts both snake_case and the camelCase keys sent by the web client
    (``sessionId``, ``useTable``, ``fontFamily``, ``fontSize``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str
    x: float = Field(..., description="Name position, pixels from the left")
    y: float = Field(..., description="Name position, pixels from the top")
    tx: float | None = Field(None, description="Table position, pixels from the left")
    ty: float | None = Field(None, description="Table position, pixels from the top")
    use_table: bool = False
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: int = Field(default=DEFAULT_FONT_SIZE, gt=0)
    color: str = DEFAULT_COLOR

    @property
    def draws_table(self) -> bool:
        return self.use_table and self.tx is not None and self.ty is not None


class BatchSettings(RenderSettings):
    """Render settings plus the window of records to generate."""

    offset: int = Field(default=0, description="Index of the first record")
    limit: int | None = Field(
        default=None, description="Records to render; capped by the batch limit"
    )


class BatchResult(BaseModel):
    """Outcome of one batch generation call."""

    session_id: str
    processed: int
    total: int
    archive_path: str
