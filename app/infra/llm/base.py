from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel


class BaseLLMClient(ABC):
    """LLM 클라이언트 추상 클래스

    채팅 모델은 처음 사용할 때 한 번 생성하고, 호출마다 출력 길이만 바꾼 복사본을 쓴다.
    """

    provider: str = ""
    # 최대 출력 토큰 수를 지정하는 모델 필드 이름
    max_output_field: str = "max_tokens"

    def __init__(self):
        self._model: BaseChatModel | None = None

    @abstractmethod
    def _create_model(self) -> BaseChatModel:
        """프로바이더별 LangChain 채팅 모델 생성"""

    @abstractmethod
    def get_model_name(self) -> str:
        """사용 중인 모델 이름 반환"""

    def get_chat_model(self) -> BaseChatModel:
        if self._model is None:
            self._model = self._create_model()
        return self._model

    def with_max_output(self, max_output_tokens: int) -> BaseChatModel:
        """최대 출력 길이가 제한된 모델 반환"""
        return self.get_chat_model().model_copy(update={self.max_output_field: max_output_tokens})


def require_setting(value: str, env_name: str) -> str:
    if not value:
        raise ValueError(f"{env_name}이 설정되지 않았습니다")
    return value
