from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Text-generation service (OpenAI-compatible /chat/completions)
    llm_api_key: str = ""
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model_name: str = "gpt-4o-mini"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 4096
    llm_timeout: float = 120.0  # 단일 요청 read timeout (초)
    llm_max_retries: int = 2  # 네트워크 오류 / 5xx 재시도 횟수 (지수 백오프)
    llm_retry_delay: float = 2.0  # 첫 재시도 지연 (초), 이후 2배씩 증가
    llm_max_concurrent: int = 3  # 동시 요청 상한

    # Radar chart geometry
    chart_center: float = 200.0
    chart_radius: float = 120.0

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]


settings = Settings()
