from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "openai", "vllm", "gemini"
    llm_provider: str = "openai"

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # vLLM/OpenAI 호환 서버 설정
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout: float = 120.0

    # 생성 설정
    generation_max_output_tokens: int = 500
    generation_temperature: float = 0.7
    generation_timeout: float = 90.0

    # GitHub
    github_token: str = ""
    github_timeout: float = 60.0
    github_max_concurrent_requests: int = 5
    commit_page_size: int = 50
    # 커밋 상세 조회 실패 정책
    commit_detail_failure_policy: Literal["abort", "drop", "retry_once"] = "abort"

    # 프롬프트 크기 제한
    prompt_max_patch_chars: int = 1500
    prompt_max_chars: int = 12000

    # 데이터베이스
    database_url: str = "sqlite+aiosqlite:///./changelog.db"
    db_pool_size: int = 3
    db_max_overflow: int = 0
    db_pool_timeout: float = 5.0
    db_pool_recycle: int = 600
    db_connect_timeout: float = 5.0
    db_create_schema: bool = True

    # 체인지로그 제목/그룹핑 기준 타임존
    changelog_timezone: str = "UTC"

    # Rate limit
    rate_limit_default: str = "120/minute"
    rate_limit_generate: str = "10/minute"

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if self.database_url.startswith("sqlite"):
            errors.append("DATABASE_URL")
        if not self.github_token:
            errors.append("GITHUB_TOKEN")
        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        if self.llm_provider == "vllm" and not self.vllm_api_url:
            errors.append("VLLM_API_URL")
        if self.llm_provider == "gemini" and not self.gemini_api_key:
            errors.append("GEMINI_API_KEY")
        return errors

    @model_validator(mode="after")
    def validate_production_settings(self):
        """프로덕션 환경에서 필수 설정 검증"""
        if self.is_production:
            missing = self.validate_for_production()
            if missing:
                raise ValueError(f"프로덕션 환경에서 필수 설정 누락: {', '.join(missing)}")
        return self


settings = Settings()
