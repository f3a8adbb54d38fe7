"""분석 보고서 파서

외부 글쓰기 분석 모델이 돌려준 반정형 텍스트에서 제목/영역/문단/문단 구성 정보를 추출한다.

모든 추출 함수는 total 하다:
- 표식이 없으면 모델에 정의된 기본값을 돌려준다 (빈 문자열, 영역 등급 F, 제목 등급 C)
- 한 영역/문단 처리 중 예외가 나면 그 단위만 기본값으로 대체하고 나머지는 계속 추출한다

등급 문자열은 여기서 정규화하지 않는다. scoring.validate_assessments 가 담당한다.
"""

import logging
import re

from writing_compass.schemas.report import (
    NOT_ANALYZED,
    CategoryAssessment,
    ParagraphAssessment,
    SpellingCorrection,
    StructureAdvice,
    TitleAssessment,
)
from writing_compass.utils.sections import (
    extract_field,
    extract_heading_section,
    extract_line_field,
    extract_tagged_block,
    iter_numbered_blocks,
)

logger = logging.getLogger(__name__)

TITLE_HEADING = "제목 분석"
STRUCTURE_HEADING = "문단 구성 제안"
PARAGRAPH_TAG_SUFFIX = "문단"
TOTAL_EVALUATION_LABEL = "총평"

_CATEGORY_LABELS = ("등급", "평가", "잘된 점", "개선점", TOTAL_EVALUATION_LABEL)
_TITLE_LABELS = ("등급", "분석", "제안", TOTAL_EVALUATION_LABEL)
_PARAGRAPH_LABELS = (
    "원문",
    "분석",
    "잘된 점",
    "개선점",
    "표현 개선 제안",
    "맞춤법 교정",
    TOTAL_EVALUATION_LABEL,
)
_STRUCTURE_LABELS = (
    "현재 문단 구조",
    "문단 구성 개선안",
    "구체적 실행 방안",
    TOTAL_EVALUATION_LABEL,
)

_BULLET_RE = re.compile(r"^\s*(?:[-*•·]|\d+[.)])\s*")
_CORRECTION_SPLIT_RE = re.compile(r"\s*(?:->|→|=>|,)\s*")
_TITLE_NUMBERING_RE = re.compile(r"\d+\.\s")
_QUOTES = "\"'“”‘’「」『』"


_GRADE_WRAPPERS = "*_`[]()<>" + _QUOTES


def _grade_token(value: str) -> str:
    """First line after ``등급:`` without markdown emphasis or brackets.

    The raw value is validated later, so ``B +`` stays whole here.
    """
    lines = value.strip().splitlines()
    if not lines:
        return ""
    return lines[0].replace("*", "").strip().strip(_GRADE_WRAPPERS).strip()


# ------------------------------------------------------------------ #
#  영역별 평가
# ------------------------------------------------------------------ #


def parse_category(text: str, name: str) -> CategoryAssessment:
    """Extract the ``[name]`` block as a CategoryAssessment.

    Missing fields fall back to ``CategoryAssessment`` defaults; any internal
    failure degrades to the all-default assessment.
    """
    try:
        block = extract_tagged_block(text, name)
        if not block:
            return CategoryAssessment()
        grade = _grade_token(extract_field(block, "등급", _CATEGORY_LABELS))
        return CategoryAssessment(
            grade=grade or "F",
            evaluation=extract_field(block, "평가", _CATEGORY_LABELS),
            good_points=extract_field(block, "잘된 점", _CATEGORY_LABELS),
            improvements=extract_field(block, "개선점", _CATEGORY_LABELS),
        )
    except Exception as e:
        logger.warning("Category %s extraction failed: %s", name, e)
        return CategoryAssessment()


def parse_categories(text: str, names: list[str]) -> dict[str, CategoryAssessment]:
    return {name: parse_category(text, name) for name in names}


# ------------------------------------------------------------------ #
#  문단별 분석
# ------------------------------------------------------------------ #


def _parse_list(value: str) -> list[str]:
    items = (_BULLET_RE.sub("", line).strip() for line in value.split("\n"))
    return [item for item in items if item]


def _parse_spelling_corrections(value: str) -> list[SpellingCorrection]:
    corrections: list[SpellingCorrection] = []
    for line in value.split("\n"):
        line = _BULLET_RE.sub("", line).strip()
        if not line:
            continue
        parts = [p.strip().strip(_QUOTES).strip() for p in _CORRECTION_SPLIT_RE.split(line)]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            continue
        corrections.append(
            SpellingCorrection(
                original=parts[0],
                fixed=parts[1],
                reason=", ".join(p for p in parts[2:] if p),
            )
        )
    return corrections


def _parse_paragraph_block(index: int, block: str) -> ParagraphAssessment:
    return ParagraphAssessment(
        index=index,
        content=extract_field(block, "원문", _PARAGRAPH_LABELS),
        analysis=extract_field(block, "분석", _PARAGRAPH_LABELS),
        good_points=extract_field(block, "잘된 점", _PARAGRAPH_LABELS),
        improvements=extract_field(block, "개선점", _PARAGRAPH_LABELS),
        suggestions=_parse_list(
            extract_field(block, "표현 개선 제안", _PARAGRAPH_LABELS)
        ),
        spelling_corrections=_parse_spelling_corrections(
            extract_field(block, "맞춤법 교정", _PARAGRAPH_LABELS)
        ),
    )


def parse_paragraphs(text: str) -> list[ParagraphAssessment]:
    """Extract every ``[N문단]`` block, sorted by declared index."""
    paragraphs: list[ParagraphAssessment] = []
    for index, block in iter_numbered_blocks(text, PARAGRAPH_TAG_SUFFIX):
        if index < 1:
            logger.warning("Skipping paragraph block with non-positive index %d", index)
            continue
        try:
            paragraphs.append(_parse_paragraph_block(index, block))
        except Exception as e:
            logger.warning("Paragraph %d extraction failed: %s", index, e)
            paragraphs.append(ParagraphAssessment(index=index))

    paragraphs.sort(key=lambda p: p.index)
    return paragraphs


# ------------------------------------------------------------------ #
#  제목 분석
# ------------------------------------------------------------------ #


def _split_title_suggestions(value: str) -> list[str]:
    return [s.strip() for s in _TITLE_NUMBERING_RE.split(value) if s.strip()]


def parse_title(text: str, current_title: str) -> TitleAssessment:
    """Extract the ``# 제목 분석`` section; grade defaults to ``C``."""
    try:
        section = extract_heading_section(text, TITLE_HEADING)
        if not section:
            return TitleAssessment(current=current_title)
        grade = _grade_token(extract_field(section, "등급", _TITLE_LABELS))
        return TitleAssessment(
            current=current_title,
            grade=grade or "C",
            analysis=extract_field(section, "분석", _TITLE_LABELS),
            suggestions=_split_title_suggestions(
                extract_field(section, "제안", _TITLE_LABELS)
            ),
        )
    except Exception as e:
        logger.warning("Title extraction failed: %s", e)
        return TitleAssessment(current=current_title)


# ------------------------------------------------------------------ #
#  문단 구성 제안 / 총평
# ------------------------------------------------------------------ #


def parse_structure(text: str) -> StructureAdvice:
    try:
        section = extract_heading_section(text, STRUCTURE_HEADING)
        return StructureAdvice(
            current=extract_field(section, "현재 문단 구조", _STRUCTURE_LABELS)
            or NOT_ANALYZED,
            improved=extract_field(section, "문단 구성 개선안", _STRUCTURE_LABELS)
            or NOT_ANALYZED,
            actions=extract_field(section, "구체적 실행 방안", _STRUCTURE_LABELS)
            or NOT_ANALYZED,
        )
    except Exception as e:
        logger.warning("Structure extraction failed: %s", e)
        return StructureAdvice()


def parse_total_evaluation(text: str) -> str:
    return extract_line_field(text, TOTAL_EVALUATION_LABEL)
