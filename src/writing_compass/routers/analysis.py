from fastapi import APIRouter, Depends, HTTPException

from writing_compass.dependencies import get_analyzer, get_chat_client
from writing_compass.exceptions import (
    EssayValidationError,
    GenerationError,
    ReportRenderError,
    SuggestionParseError,
)
from writing_compass.schemas.essay import (
    DraftStatisticsRequest,
    EssayMetadata,
    ParagraphSuggestionRequest,
    ReportParseRequest,
)
from writing_compass.schemas.report import AnalysisReport, DraftStatistics
from writing_compass.schemas.suggestion import ParagraphSuggestionResult
from writing_compass.services.analyzer import AnalyzerService
from writing_compass.services.llm import ChatClient
from writing_compass.utils.text import compute_draft_statistics

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post("/analyze", response_model=AnalysisReport)
async def analyze_essay(
    essay: EssayMetadata,
    analyzer: AnalyzerService = Depends(get_analyzer),
) -> AnalysisReport:
    """Generate an analysis report for a submitted essay."""
    try:
        return await analyzer.analyze(essay)
    except EssayValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ReportRenderError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/analyze/report", response_model=AnalysisReport)
async def parse_report(
    body: ReportParseRequest,
    analyzer: AnalyzerService = Depends(get_analyzer),
) -> AnalysisReport:
    """Parse an already-generated report text (no outbound request)."""
    try:
        return analyzer.build(body.raw_text, body.essay)
    except EssayValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ReportRenderError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/analyze/paragraphs", response_model=ParagraphSuggestionResult)
async def suggest_paragraphs(
    body: ParagraphSuggestionRequest,
    analyzer: AnalyzerService = Depends(get_analyzer),
) -> ParagraphSuggestionResult:
    """Suggest how to split the essay into paragraphs."""
    if not body.content.strip():
        raise HTTPException(status_code=422, detail="내용을 입력해 주세요.")
    try:
        return await analyzer.suggest_paragraphs(body.content)
    except (SuggestionParseError, GenerationError) as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/statistics", response_model=DraftStatistics)
async def draft_statistics(body: DraftStatisticsRequest) -> DraftStatistics:
    """Live character and paragraph counts for an essay being typed."""
    return compute_draft_statistics(body.content)


@router.get("/health")
async def health_check(client: ChatClient = Depends(get_chat_client)) -> dict:
    return {"status": "ok", "llm_reachable": await client.is_reachable()}
