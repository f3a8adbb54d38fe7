from fastapi import Request

from writing_compass.services.analyzer import AnalyzerService
from writing_compass.services.llm import ChatClient


def get_analyzer(request: Request) -> AnalyzerService:
    """Retrieve the AnalyzerService singleton from app state."""
    return request.app.state.analyzer


def get_chat_client(request: Request) -> ChatClient:
    """Retrieve the ChatClient singleton from app state."""
    return request.app.state.chat_client
