"""Writing Compass schemas."""

from writing_compass.schemas.chart import RadarChart
from writing_compass.schemas.essay import EssayMetadata
from writing_compass.schemas.report import (
    AnalysisReport,
    CategoryAssessment,
    ParagraphAssessment,
    Statistics,
    TitleAssessment,
)

__all__ = [
    "AnalysisReport",
    "CategoryAssessment",
    "EssayMetadata",
    "ParagraphAssessment",
    "RadarChart",
    "Statistics",
    "TitleAssessment",
]
