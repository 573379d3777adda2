from typing import Literal

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from app.core.config import settings
from app.core.exceptions import GenerationUnavailableError
from app.core.logging import get_logger
from app.domain.changelog.composer import compose_prompt
from app.domain.changelog.constants import FALLBACK_MARKER
from app.domain.changelog.dates import changelog_title, now_in_changelog_tz
from app.domain.changelog.extractor import extract_entries, fallback_entries
from app.domain.changelog.prompts import CHANGELOG_GENERATOR_SYSTEM
from app.domain.changelog.schemas import ChangeType, Commit, GeneratedChangelog, GenerationState
from app.infra.llm.client import complete

logger = get_logger(__name__)


async def compose_node(state: GenerationState) -> GenerationState:
    """프롬프트 구성 노드"""
    commits = state["commits"]
    change_type = state.get("change_type", ChangeType.FEATURE)
    prompt = compose_prompt(commits, change_type)
    logger.info("compose_node 완료 commits=%d chars=%d", len(commits), len(prompt))
    return {**state, "prompt": prompt}


async def generate_node(state: GenerationState) -> GenerationState:
    """LLM 호출 노드, 실패는 상태에 기록하고 예외를 전파하지 않음"""
    try:
        response_text = await complete(
            state["prompt"],
            max_output_tokens=settings.generation_max_output_tokens,
            system_prompt=CHANGELOG_GENERATOR_SYSTEM,
            session_id=state.get("session_id"),
        )
    except GenerationUnavailableError as e:
        logger.warning("generate_node LLM 사용 불가 detail=%s", e.detail)
        return {**state, "error_message": e.detail or e.message}

    logger.info("generate_node 완료 chars=%d", len(response_text))
    return {**state, "response_text": response_text}


async def extract_node(state: GenerationState) -> GenerationState:
    """응답 파싱 노드"""
    entries = extract_entries(state.get("response_text", ""))
    if not entries:
        return {**state, "entries": [], "error_message": "LLM 응답이 비어 있습니다"}
    return {**state, "entries": entries, "is_fallback": False}


async def fallback_node(state: GenerationState) -> GenerationState:
    """고정 항목으로 대체하는 노드"""
    entries = fallback_entries()
    logger.warning(
        "%s 고정 항목 사용 reason=%s entries=%d",
        FALLBACK_MARKER,
        state.get("error_message", ""),
        len(entries),
    )
    return {**state, "entries": entries, "is_fallback": True}


def should_extract(state: GenerationState) -> Literal["extract", "fallback"]:
    """LLM 호출 실패 시 fallback 으로 분기"""
    if state.get("error_message"):
        return "fallback"
    return "extract"


def should_fallback(state: GenerationState) -> Literal["fallback", "end"]:
    """추출된 항목이 없으면 fallback 으로 분기"""
    if not state.get("entries"):
        return "fallback"
    return "end"


def create_generation_workflow() -> CompiledStateGraph:
    """체인지로그 생성 워크플로우 생성"""
    workflow = StateGraph(GenerationState)

    workflow.add_node("compose", compose_node)
    workflow.add_node("generate", generate_node)
    workflow.add_node("extract", extract_node)
    workflow.add_node("fallback", fallback_node)

    workflow.set_entry_point("compose")
    workflow.add_edge("compose", "generate")

    workflow.add_conditional_edges(
        "generate",
        should_extract,
        {
            "extract": "extract",
            "fallback": "fallback",
        },
    )

    workflow.add_conditional_edges(
        "extract",
        should_fallback,
        {
            "fallback": "fallback",
            "end": END,
        },
    )

    workflow.add_edge("fallback", END)

    return workflow.compile()


_workflow: CompiledStateGraph | None = None


def get_generation_workflow() -> CompiledStateGraph:
    global _workflow
    if _workflow is None:
        _workflow = create_generation_workflow()
    return _workflow


async def generate_changelog(
    commits: list[Commit],
    change_type: ChangeType = ChangeType.FEATURE,
    session_id: str | None = None,
) -> GeneratedChangelog:
    """커밋 배치로 체인지로그 초안 생성

    LLM 을 사용할 수 없으면 고정 항목으로 대체하므로 실패를 전파하지 않는다.
    """
    logger.info("체인지로그 생성 시작 commits=%d type=%s", len(commits), change_type.value)

    result = await get_generation_workflow().ainvoke(
        GenerationState(commits=commits, change_type=change_type, session_id=session_id)
    )

    moment = now_in_changelog_tz()
    generated = GeneratedChangelog(
        title=changelog_title(moment),
        date=moment,
        type=change_type,
        entries=result["entries"],
        is_fallback=result.get("is_fallback", False),
    )
    logger.info(
        "체인지로그 생성 완료 entries=%d fallback=%s",
        len(generated.entries),
        generated.is_fallback,
    )
    return generated
