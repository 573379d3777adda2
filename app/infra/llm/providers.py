"""LLM 프로바이더별 클라이언트

OpenAI, OpenAI 호환 서버(vLLM), Gemini 를 같은 인터페이스로 감싼다.
필수 설정이 없으면 생성 시점에 ValueError 를 던진다.
"""

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.infra.llm.base import BaseLLMClient, require_setting


class OpenAIClient(BaseLLMClient):
    provider = "openai"

    def __init__(self):
        super().__init__()
        self._api_key = require_setting(settings.openai_api_key, "OPENAI_API_KEY")

    def _create_model(self) -> BaseChatModel:
        return ChatOpenAI(
            model=settings.openai_model,
            api_key=self._api_key,
            timeout=settings.openai_timeout,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_output_tokens,
        )

    def get_model_name(self) -> str:
        return settings.openai_model


class VLLMClient(BaseLLMClient):
    """vLLM 등 OpenAI 호환 서버"""

    provider = "vllm"

    def __init__(self):
        super().__init__()
        self._base_url = require_setting(settings.vllm_api_url, "VLLM_API_URL")

    def _create_model(self) -> BaseChatModel:
        return ChatOpenAI(
            model=settings.vllm_model,
            # 인증 없는 로컬 서버도 키 값은 필요
            api_key=settings.vllm_api_key or "EMPTY",
            base_url=self._base_url,
            timeout=settings.vllm_timeout,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_output_tokens,
        )

    def get_model_name(self) -> str:
        return settings.vllm_model


class GeminiClient(BaseLLMClient):
    provider = "gemini"
    max_output_field = "max_output_tokens"

    def __init__(self):
        super().__init__()
        self._api_key = require_setting(settings.gemini_api_key, "GEMINI_API_KEY")

    def _create_model(self) -> BaseChatModel:
        return ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=self._api_key,
            timeout=settings.gemini_timeout,
            temperature=settings.generation_temperature,
            max_output_tokens=settings.generation_max_output_tokens,
        )

    def get_model_name(self) -> str:
        return settings.gemini_model
