import asyncio
import os

from langchain_core.messages import HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from app.core.config import settings
from app.core.exceptions import GenerationUnavailableError
from app.core.logging import get_logger
from app.infra.llm.factory import get_generator_client

logger = get_logger(__name__)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def _message_text(content) -> str:
    """LangChain 메시지 content를 문자열로 변환"""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


async def complete(
    prompt: str,
    max_output_tokens: int | None = None,
    system_prompt: str | None = None,
    session_id: str | None = None,
) -> str:
    """텍스트 프롬프트로 LLM 응답 텍스트 생성

    Args:
        prompt: 사람 메시지로 전달할 프롬프트
        max_output_tokens: 최대 출력 토큰 수
        system_prompt: 시스템 프롬프트
        session_id: Langfuse 세션 ID

    Returns:
        응답 텍스트, 비어 있을 수 있음

    Raises:
        GenerationUnavailableError: 클라이언트 초기화, 호출, 타임아웃 실패 시
    """
    if max_output_tokens is None:
        max_output_tokens = settings.generation_max_output_tokens

    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["changelog", "generate"],
        },
    }

    messages = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))
    messages.append(HumanMessage(content=prompt))

    try:
        client = get_generator_client()
        llm = client.with_max_output(max_output_tokens)
        logger.debug(
            "LLM 호출 model=%s prompt_chars=%d max_tokens=%d",
            client.get_model_name(),
            len(prompt),
            max_output_tokens,
        )
        result = await asyncio.wait_for(
            llm.ainvoke(messages, config=config),
            timeout=settings.generation_timeout,
        )
    except asyncio.TimeoutError as e:
        logger.warning("LLM 호출 타임아웃 timeout=%.1f", settings.generation_timeout)
        raise GenerationUnavailableError(detail="LLM 응답 시간 초과") from e
    except Exception as e:
        logger.warning("LLM 호출 실패 error=%s", type(e).__name__)
        raise GenerationUnavailableError(detail=f"{type(e).__name__}: {e}") from e

    text = _message_text(result.content)
    logger.debug("LLM 응답 수신 chars=%d", len(text))
    return text
