"""분석 보고서 조립

(원본 보고서 텍스트, 글 정보) -> AnalysisReport 순수 변환.
같은 입력이면 항상 같은 보고서를 만든다. 시계나 난수에 의존하지 않는다.
"""

import logging

from writing_compass.exceptions import EssayValidationError, ReportRenderError
from writing_compass.schemas.essay import EssayMetadata
from writing_compass.schemas.report import AnalysisReport
from writing_compass.services.categories import category_names
from writing_compass.services.chart import build_radar_chart
from writing_compass.services.report_parser import (
    parse_categories,
    parse_paragraphs,
    parse_structure,
    parse_title,
    parse_total_evaluation,
)
from writing_compass.services.scoring import (
    calculate_score,
    validate_assessments,
    validate_title,
)
from writing_compass.utils.text import compute_statistics

logger = logging.getLogger(__name__)


def validate_essay(essay: EssayMetadata) -> None:
    """Reject submissions without a title or content."""
    missing = [
        field
        for field, value in (("title", essay.title), ("content", essay.content))
        if not value.strip()
    ]
    if missing:
        raise EssayValidationError(f"필수 항목이 비어 있습니다: {', '.join(missing)}")


def build_report(
    raw_text: str,
    essay: EssayMetadata,
    *,
    chart_center: float = 200.0,
    chart_radius: float = 120.0,
) -> AnalysisReport:
    """Parse, validate and score a generated report.

    Raises:
        EssayValidationError: the essay has no title or content.
        ReportRenderError: anything unexpected while assembling the report.
    """
    validate_essay(essay)

    try:
        statistics = compute_statistics(essay.content)
        names = category_names()

        title = validate_title(parse_title(raw_text, essay.title))
        categories = validate_assessments(
            parse_categories(raw_text, names), statistics.paragraph_count
        )
        paragraphs = parse_paragraphs(raw_text)

        chart = build_radar_chart(
            [(name, categories[name].grade) for name in names],
            center=chart_center,
            radius=chart_radius,
        )

        report = AnalysisReport(
            title=title,
            categories=categories,
            paragraphs=paragraphs,
            structure=parse_structure(raw_text),
            total_evaluation=parse_total_evaluation(raw_text),
            score=calculate_score(categories, title.grade),
            statistics=statistics,
            chart=chart,
        )
    except Exception as e:
        logger.exception("Report assembly failed")
        raise ReportRenderError() from e

    logger.info(
        "Report built: score=%d, paragraphs=%d, grades=%s",
        report.score,
        len(report.paragraphs),
        ",".join(c.grade for c in report.categories.values()),
    )
    return report
