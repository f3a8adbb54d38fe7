from pydantic import Field

from writing_compass.schemas.base import CamelModel
from writing_compass.schemas.chart import RadarChart

NOT_ANALYZED = "아직 분석되지 않았습니다."


class CategoryAssessment(CamelModel):
    grade: str = "F"
    evaluation: str = ""
    good_points: str = ""
    improvements: str = ""


class TitleAssessment(CamelModel):
    current: str = ""
    grade: str = "C"
    analysis: str = ""
    suggestions: list[str] = Field(default_factory=list)


class SpellingCorrection(CamelModel):
    original: str
    fixed: str
    reason: str = ""


class ParagraphAssessment(CamelModel):
    index: int
    content: str = ""
    analysis: str = ""
    good_points: str = ""
    improvements: str = ""
    suggestions: list[str] = Field(default_factory=list)
    spelling_corrections: list[SpellingCorrection] = Field(default_factory=list)


class StructureAdvice(CamelModel):
    current: str = NOT_ANALYZED
    improved: str = NOT_ANALYZED
    actions: str = NOT_ANALYZED


class Statistics(CamelModel):
    char_count: int = Field(default=0, ge=0)
    sentence_count: int = Field(default=0, ge=0)
    paragraph_count: int = Field(default=1, ge=1)
    avg_sentence_length: int = Field(default=0, ge=0)


class DraftStatistics(CamelModel):
    """Live counts shown while the essay is still being typed."""

    char_count: int = 0
    paragraph_count: int = 0


class AnalysisReport(CamelModel):
    title: TitleAssessment
    categories: dict[str, CategoryAssessment]
    paragraphs: list[ParagraphAssessment] = Field(default_factory=list)
    structure: StructureAdvice = Field(default_factory=StructureAdvice)
    total_evaluation: str = ""
    score: int = Field(ge=0, le=100)
    statistics: Statistics
    chart: RadarChart
