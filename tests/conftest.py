from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from writing_compass.config import Settings
from writing_compass.schemas.essay import EssayMetadata
from writing_compass.services.analyzer import AnalyzerService
from writing_compass.services.llm import ChatClient

SAMPLE_REPORT = """\
# 제목 분석
등급: B+
분석: 글의 중심 내용을 잘 드러내는 제목입니다.
제안: 1. 봄 소풍에서 만난 친구 2. 도시락 속 작은 행복 3. 함께라서 즐거운 날

# 영역별 평가
[논리성]
등급: A
평가: 겪은 일을 차례대로 썼어요.
잘된 점: 느낀 점이 분명해요.
개선점: 까닭을 하나 더 써 보세요.

[구조성]
등급: B
평가: 처음과 끝이 있어요.
잘된 점: 마무리가 자연스러워요.
개선점: 가운데 부분을 나누어 보세요.

[표현성]
등급: C+
평가: 쉬운 낱말로 썼어요.
잘된 점: 대화글을 넣었어요.
개선점: 흉내 내는 말을 써 보세요.

[완성도]
등급: B
평가: 주제에 맞게 끝맺었어요.
잘된 점: 제목과 내용이 어울려요.
개선점: 마지막 문장을 다듬어 보세요.

# 문단별 분석
[2문단]
원문: 점심에는 김밥을 먹었다.
분석: 먹은 음식을 썼어요.
잘된 점: 짧고 분명해요.
개선점: 맛을 표현해 보세요.
표현 개선 제안:
- 고소한 김밥을 한입 가득 먹었다.
- 친구와 김밥을 나누어 먹었다.
맞춤법 교정:
없음

[1문단]
원문: 오늘은 봄 소풍을 갔다. 날씨가 참 좋았다.
분석: 글의 배경을 알려 줘요.
잘된 점: 날씨를 잘 나타냈어요.
개선점: 장소를 써 보세요.
표현 개선 제안:
1. 따스한 햇살 아래 봄 소풍을 떠났다.
맞춤법 교정:
- 갔읍니다 → 갔습니다, 표준어 규정
- 않되요 -> 안 돼요, 띄어쓰기, 부정 표현

# 문단 구성 제안
현재 문단 구조: 두 문단으로 되어 있어요.
문단 구성 개선안: 느낀 점을 따로 한 문단으로 써요.
구체적 실행 방안: 마지막에 느낀 점 문단을 더해요.

총평: 즐거운 하루가 잘 드러난 글이에요.
"""


@pytest.fixture
def sample_report() -> str:
    return SAMPLE_REPORT


@pytest.fixture
def essay() -> EssayMetadata:
    return EssayMetadata(
        title="봄 소풍",
        content="오늘은 봄 소풍을 갔다. 날씨가 참 좋았다.\n점심에는 김밥을 먹었다.",
        grade="3",
        class_="2",
        number="15",
        name="김하늘",
    )


@pytest.fixture
def mock_settings() -> Settings:
    return Settings(
        llm_api_key="test-key",
        llm_base_url="http://llm.test/v1",
        llm_model_name="test-model",
        llm_retry_delay=0.0,
    )


@pytest.fixture
def mock_analyzer() -> MagicMock:
    """Create a mocked AnalyzerService for router tests."""
    return MagicMock(spec=AnalyzerService)


@pytest.fixture
def mock_chat_client() -> MagicMock:
    client = MagicMock(spec=ChatClient)
    client.is_reachable = AsyncMock(return_value=True)
    return client


@pytest.fixture
def test_app(mock_analyzer: MagicMock, mock_chat_client: MagicMock):
    """Create a test FastAPI app with mocked dependencies."""
    from fastapi import FastAPI
    from writing_compass.routers.analysis import router as analysis_router

    app = FastAPI()
    app.state.analyzer = mock_analyzer
    app.state.chat_client = mock_chat_client
    app.include_router(analysis_router)
    return app


@pytest.fixture
def client(test_app) -> TestClient:
    return TestClient(test_app)
