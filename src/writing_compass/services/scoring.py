"""등급 검증 및 종합 점수 계산"""

import logging
import math
import re

from writing_compass.schemas.report import CategoryAssessment, TitleAssessment
from writing_compass.services.categories import TITLE_WEIGHT, get_categories

logger = logging.getLogger(__name__)

GRADES: tuple[str, ...] = ("A+", "A", "B+", "B", "C+", "C", "D+", "D", "F")

GRADE_POINTS: dict[str, int] = {
    "A+": 100,
    "A": 90,
    "B+": 80,
    "B": 70,
    "C+": 60,
    "C": 50,
    "D+": 40,
    "D": 35,
    "F": 30,
}

DEFAULT_CATEGORY_GRADE = "F"
DEFAULT_TITLE_GRADE = "C"

_GRADE_PREFIX_RE = re.compile(r"^(?:[A-D]\+?|F)")


def grade_to_point(grade: str) -> int:
    """Point value of a grade; anything outside the table counts as ``F``."""
    return GRADE_POINTS.get(grade, GRADE_POINTS["F"])


def normalize_grade(raw: str | None, default: str = DEFAULT_CATEGORY_GRADE) -> str:
    """Coerce a raw grade token into one of the nine grades.

    ``" b ＋"`` -> ``"B+"``, ``"A+등급"`` -> ``"A+"``, ``"E"`` -> *default*.
    """
    if not raw:
        return default
    token = re.sub(r"\s+", "", raw.replace("＋", "+")).upper()
    match = _GRADE_PREFIX_RE.match(token)
    return match.group(0) if match else default


def validate_assessments(
    categories: dict[str, CategoryAssessment],
    paragraph_count: int,
) -> dict[str, CategoryAssessment]:
    """Return new assessments whose grades are all in ``GRADES``.

    Every fixed category is present in the result, in table order; a category
    missing from *categories* gets the all-default assessment.
    """
    validated: dict[str, CategoryAssessment] = {}
    repaired = 0
    for category in get_categories():
        assessment = categories.get(category.name) or CategoryAssessment()
        grade = normalize_grade(assessment.grade)
        if grade != assessment.grade:
            repaired += 1
            logger.info(
                "Category %s grade %r normalized to %s",
                category.name,
                assessment.grade,
                grade,
            )
            assessment = assessment.model_copy(update={"grade": grade})
        validated[category.name] = assessment

    logger.info(
        "Validated %d categories (%d repaired, paragraphs=%d)",
        len(validated),
        repaired,
        paragraph_count,
    )
    return validated


def validate_title(title: TitleAssessment) -> TitleAssessment:
    grade = normalize_grade(title.grade, default=DEFAULT_TITLE_GRADE)
    if grade == title.grade:
        return title
    return title.model_copy(update={"grade": grade})


def calculate_score(
    categories: dict[str, CategoryAssessment],
    title_grade: str | None,
) -> int:
    """Weighted composite score, always rounded up.

    Components are summed in category-table order followed by the title so the
    floating-point result is reproducible.
    """
    total = 0.0
    for category in get_categories():
        assessment = categories.get(category.name)
        grade = assessment.grade if assessment else DEFAULT_CATEGORY_GRADE
        total += grade_to_point(grade) * category.weight
    if title_grade is not None:
        total += grade_to_point(title_grade) * TITLE_WEIGHT
    return math.ceil(total)
