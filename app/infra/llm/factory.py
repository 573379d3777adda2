from app.core.config import settings
from app.core.logging import get_logger
from app.infra.llm.base import BaseLLMClient
from app.infra.llm.providers import GeminiClient, OpenAIClient, VLLMClient

logger = get_logger(__name__)

PROVIDERS: dict[str, type[BaseLLMClient]] = {
    OpenAIClient.provider: OpenAIClient,
    VLLMClient.provider: VLLMClient,
    GeminiClient.provider: GeminiClient,
}

_generator_client: BaseLLMClient | None = None


def get_generator_client() -> BaseLLMClient:
    """설정된 프로바이더의 체인지로그 생성용 클라이언트 반환

    Raises:
        ValueError: 알 수 없는 프로바이더이거나 필수 설정이 없는 경우
    """
    global _generator_client

    if _generator_client is not None:
        return _generator_client

    client_class = PROVIDERS.get(settings.llm_provider)
    if client_class is None:
        raise ValueError(f"지원하지 않는 LLM 프로바이더: {settings.llm_provider}")

    _generator_client = client_class()
    logger.info(
        "LLM 클라이언트 초기화 provider=%s model=%s",
        settings.llm_provider,
        _generator_client.get_model_name(),
    )
    return _generator_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _generator_client
    _generator_client = None
