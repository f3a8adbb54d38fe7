import logging
from contextlib import asynccontextmanager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from writing_compass.config import settings
from writing_compass.exceptions import ReportRenderError, WritingCompassError
from writing_compass.routers import analysis
from writing_compass.services.analyzer import AnalyzerService
from writing_compass.services.llm import ChatClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the outbound client on startup, close it on shutdown."""
    logger.info("Starting Writing Compass service ...")

    chat_client = ChatClient(settings)
    try:
        app.state.chat_client = chat_client
        app.state.analyzer = AnalyzerService(chat_client, settings)
        logger.info("Writing Compass service ready.")
        yield
    finally:
        logger.info("Shutting down Writing Compass service ...")
        await chat_client.close()


app = FastAPI(
    title="Writing Compass",
    description="초등 글쓰기 분석 보고서 파싱 및 채점 서비스",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router)


@app.exception_handler(WritingCompassError)
async def writing_compass_error_handler(request: Request, exc: WritingCompassError):
    logger.error("Unhandled service error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": ReportRenderError.DEFAULT_MESSAGE})
