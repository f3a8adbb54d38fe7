from pydantic import Field

from writing_compass.schemas.base import CamelModel


class ParagraphSuggestion(CamelModel):
    """One proposed paragraph and why the split helps."""

    text: str
    reason: str = ""


class ParagraphSuggestionResult(CamelModel):
    paragraphs: list[ParagraphSuggestion] = Field(default_factory=list)
