from typing import Literal

from pydantic import Field

from writing_compass.schemas.base import CamelModel


class EssayMetadata(CamelModel):
    """학생 글 제출 정보. ``content`` 는 줄바꿈으로 문단을 구분한 원문."""

    title: str = ""
    content: str = ""
    grade: str = ""  # 학년
    class_: str = Field(default="", alias="class")  # 반
    number: str = ""  # 번호
    name: str = ""


class ReportParseRequest(CamelModel):
    """Already-generated report text plus the essay it describes."""

    raw_text: str
    essay: EssayMetadata


class ParagraphSuggestionRequest(CamelModel):
    content: str
    request_type: Literal["paragraphSuggestion"] = "paragraphSuggestion"


class DraftStatisticsRequest(CamelModel):
    content: str = ""
