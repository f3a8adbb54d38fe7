"""글 분석 서비스

흐름:
  analyze(essay) -> 분석 프롬프트 구성 -> 외부 모델 호출 -> build_report(원문 보고서, essay)
  suggest_paragraphs(content) -> 문단 나누기 프롬프트 -> JSON 응답 파싱

보고서 파싱/채점은 report_builder 의 순수 함수가 담당하고,
이 서비스는 프롬프트와 외부 호출만 책임진다.
"""

import json
import logging

from pydantic import ValidationError

from writing_compass.config import Settings
from writing_compass.exceptions import SuggestionParseError
from writing_compass.schemas.essay import EssayMetadata
from writing_compass.schemas.report import AnalysisReport
from writing_compass.schemas.suggestion import ParagraphSuggestionResult
from writing_compass.services.categories import get_categories
from writing_compass.services.llm import ChatClient
from writing_compass.services.report_builder import build_report, validate_essay
from writing_compass.services.scoring import GRADES
from writing_compass.utils.llm_parse import extract_json_object, strip_think_tags

logger = logging.getLogger(__name__)

_ANALYSIS_SYSTEM_PROMPT = """\
당신은 초등학생의 글쓰기를 지도하는 친절하고 꼼꼼한 선생님입니다.
학생의 글을 읽고 아래 형식을 정확히 지켜 분석 보고서를 작성하세요.

### 등급
등급은 반드시 다음 중 하나로만 씁니다: {grades}

### 평가 영역
{categories}

### 출력 형식 (머리말과 라벨을 그대로 사용)
# 제목 분석
등급: <등급>
분석: <제목에 대한 분석>
제안: 1. <대안 제목> 2. <대안 제목> 3. <대안 제목>

# 영역별 평가
{category_blocks}

# 문단별 분석
[1문단]
원문: <해당 문단 원문>
분석: <문단 분석>
잘된 점: <잘된 점>
개선점: <개선할 점>
표현 개선 제안:
- <고쳐 쓴 문장 예시>
맞춤법 교정:
- <틀린 표현> → <바른 표현>, <이유>
(학생 글의 모든 문단에 대해 [2문단], [3문단] ... 순서로 반복)

# 문단 구성 제안
현재 문단 구조: <현재 짜임 설명>
문단 구성 개선안: <더 나은 문단 나누기>
구체적 실행 방안: <학생이 바로 해볼 수 있는 방법>

총평: <한 줄 총평>

### 주의
1. 학생의 눈높이에 맞게 쉽고 따뜻한 말로 씁니다.
2. 라벨 뒤에는 반드시 콜론(:)을 붙입니다.
3. 위 형식 밖의 인사말이나 설명을 덧붙이지 않습니다."""

_CATEGORY_BLOCK_TEMPLATE = """\
[{name}]
등급: <등급>
평가: <평가>
잘된 점: <잘된 점>
개선점: <개선점>"""

_SUGGESTION_SYSTEM_PROMPT = """\
당신은 초등학생의 글을 문단으로 나누어 주는 선생님입니다.
학생의 글을 내용 흐름에 맞게 문단으로 나누고, 각 문단을 나눈 이유를 설명하세요.

### 절대 형식 조건
1. 반드시 올바른 JSON 객체 하나만 출력합니다.
2. 마크다운, 인사말, 설명 문장을 덧붙이지 않습니다.
3. 원문 문장을 고치지 말고 그대로 나눕니다.

### JSON 출력 구조
{
    "paragraphs": [
        {"text": "첫 번째 문단 원문", "reason": "이렇게 나눈 이유"},
        {"text": "두 번째 문단 원문", "reason": "이렇게 나눈 이유"}
    ]
}"""


def build_analysis_messages(essay: EssayMetadata) -> list[dict[str, str]]:
    categories = get_categories()
    system_prompt = _ANALYSIS_SYSTEM_PROMPT.format(
        grades=", ".join(GRADES),
        categories="\n".join(
            f"{i}. {c.name}: {c.description}" for i, c in enumerate(categories, 1)
        ),
        category_blocks="\n\n".join(
            _CATEGORY_BLOCK_TEMPLATE.format(name=c.name) for c in categories
        ),
    )

    paragraphs = [line.strip() for line in essay.content.split("\n") if line.strip()]
    numbered = "\n".join(f"[{i}문단] {p}" for i, p in enumerate(paragraphs, 1))
    user_prompt = (
        f"학년: {essay.grade}  반: {essay.class_}  번호: {essay.number}  이름: {essay.name}\n"
        f"제목: {essay.title}\n\n"
        f"【학생 글 시작】\n{numbered}\n【학생 글 끝】"
    )
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


def parse_suggestion_reply(raw: str) -> ParagraphSuggestionResult:
    """Parse a paragraph-suggestion reply.

    Raises:
        SuggestionParseError: the reply is not a ``{"paragraphs": [...]}`` object.
    """
    content = extract_json_object(raw)
    try:
        data = json.loads(content)
        if not isinstance(data, dict) or not isinstance(data.get("paragraphs"), list):
            raise ValueError("missing 'paragraphs' list")
        return ParagraphSuggestionResult.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SuggestionParseError("문단 제안 응답을 해석할 수 없습니다.") from e


class AnalyzerService:
    def __init__(self, client: ChatClient, settings: Settings) -> None:
        self._client = client
        self._chart_center = settings.chart_center
        self._chart_radius = settings.chart_radius

    def build(self, raw_text: str, essay: EssayMetadata) -> AnalysisReport:
        """Turn an already-generated report text into an AnalysisReport."""
        return build_report(
            raw_text,
            essay,
            chart_center=self._chart_center,
            chart_radius=self._chart_radius,
        )

    async def analyze(self, essay: EssayMetadata) -> AnalysisReport:
        """Request an analysis report for *essay* and parse it."""
        validate_essay(essay)
        logger.info(
            "Analyzing essay %r (%d chars)", essay.title, len(essay.content)
        )
        response = await self._client.chat(messages=build_analysis_messages(essay))
        raw_text = strip_think_tags(response.content).strip()
        logger.info("Analysis reply received: %d chars from %s", len(raw_text), response.model)
        return self.build(raw_text, essay)

    async def suggest_paragraphs(
        self, content: str, *, max_retries: int = 2
    ) -> ParagraphSuggestionResult:
        """Ask for a paragraph split of *content*; retried on malformed JSON."""
        max_retries = max(1, max_retries)
        last_error: SuggestionParseError | None = None

        for attempt in range(1, max_retries + 1):
            messages: list[dict[str, str]] = [
                {"role": "system", "content": _SUGGESTION_SYSTEM_PROMPT},
                {"role": "user", "content": f"【학생 글】\n{content}"},
            ]
            if attempt > 1:
                messages.append(
                    {
                        "role": "user",
                        "content": "지난 답변은 올바른 JSON 이 아니었습니다. JSON 객체만 출력하세요.",
                    }
                )

            response = await self._client.chat(messages=messages, json_format=True)
            try:
                result = parse_suggestion_reply(response.content)
                logger.info(
                    "Paragraph suggestion succeeded on attempt %d/%d: %d paragraphs",
                    attempt,
                    max_retries,
                    len(result.paragraphs),
                )
                return result
            except SuggestionParseError as e:
                last_error = e
                logger.warning(
                    "Paragraph suggestion attempt %d/%d failed: %s | reply: %s",
                    attempt,
                    max_retries,
                    e.__cause__,
                    response.content[:150],
                )

        logger.error("All %d paragraph suggestion attempts failed", max_retries)
        raise last_error  # type: ignore[misc]
