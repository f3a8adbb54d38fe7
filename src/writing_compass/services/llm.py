"""OpenAI-compatible chat completion client using httpx.

글 분석 보고서와 문단 나누기 제안을 생성하는 외부 모델 호출 계층.
보고서 파싱/채점은 이 모듈에 의존하지 않는다.

- 전송 계층 오류(연결 끊김, 타임아웃 포함)와 HTTP 5xx 는 지수 백오프로 재시도
- 동시 요청 수는 세마포어로 제한
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from writing_compass.config import Settings
from writing_compass.exceptions import GenerationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatResponse:
    content: str
    model: str
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


class ChatClient:
    """Async client for an OpenAI-compatible ``/chat/completions`` endpoint."""

    def __init__(self, settings: Settings) -> None:
        self._base_url = settings.llm_base_url.rstrip("/")
        self._api_key = settings.llm_api_key
        self._model = settings.llm_model_name
        self._temperature = settings.llm_temperature
        self._max_tokens = settings.llm_max_tokens
        self._max_retries = settings.llm_max_retries
        self._retry_delay = settings.llm_retry_delay
        self._semaphore = asyncio.Semaphore(settings.llm_max_concurrent)
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=30.0,
                read=settings.llm_timeout,
                write=30.0,
                pool=30.0,
            )
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        json_format: bool = False,
        max_tokens: int | None = None,
    ) -> ChatResponse:
        """Send a chat completion request with retry.

        Args:
            json_format: ask the service for a JSON object reply
                (``response_format={"type": "json_object"}``).
            max_tokens: override the configured completion length limit.

        Raises:
            GenerationError: all attempts failed or the reply has no content.
        """
        max_attempts = 1 + self._max_retries

        for attempt in range(1, max_attempts + 1):
            try:
                async with self._semaphore:
                    return await self._do_chat(
                        messages,
                        temperature=temperature,
                        json_format=json_format,
                        max_tokens=max_tokens,
                    )
            except (httpx.TransportError, httpx.HTTPStatusError) as e:
                retryable = not isinstance(e, httpx.HTTPStatusError) or (
                    e.response.status_code >= 500
                )
                if not retryable or attempt >= max_attempts:
                    logger.error("Chat request failed after %d attempt(s): %s", attempt, e)
                    raise GenerationError(f"분석 요청 실패: {e}") from e
                delay = self._retry_delay * (2 ** (attempt - 1))
                logger.warning(
                    "Chat attempt %d/%d failed, retry in %.1fs: %s",
                    attempt,
                    max_attempts,
                    delay,
                    e,
                )
                await asyncio.sleep(delay)

        raise GenerationError("분석 요청 실패")

    async def _do_chat(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        json_format: bool = False,
        max_tokens: int | None = None,
    ) -> ChatResponse:
        """Execute a single chat request (no retry logic)."""
        payload: dict = {
            "model": self._model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self._temperature,
            "max_tokens": max_tokens if max_tokens is not None else self._max_tokens,
        }
        if json_format:
            payload["response_format"] = {"type": "json_object"}

        response = await self._client.post(
            f"{self._base_url}/chat/completions",
            json=payload,
            headers=self._headers(),
        )
        response.raise_for_status()

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationError("분석 응답 형식이 올바르지 않습니다") from e

        usage = data.get("usage") or {}
        logger.debug("Chat response (first 200 chars): %s", content[:200])
        return ChatResponse(
            content=content,
            model=data.get("model", self._model),
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
        )

    async def is_reachable(self) -> bool:
        """Check if the text-generation service answers its model listing."""
        try:
            response = await self._client.get(
                f"{self._base_url}/models",
                headers=self._headers(),
                timeout=httpx.Timeout(5.0),
            )
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        await self._client.aclose()
