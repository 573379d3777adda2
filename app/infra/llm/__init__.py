from app.infra.llm.base import BaseLLMClient
from app.infra.llm.client import complete
from app.infra.llm.factory import PROVIDERS, get_generator_client, reset_clients
from app.infra.llm.providers import GeminiClient, OpenAIClient, VLLMClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "VLLMClient",
    "GeminiClient",
    "PROVIDERS",
    "get_generator_client",
    "reset_clients",
    "complete",
]
