from abc import ABC, abstractmethod
from typing import Any, Dict, List
from orchestrator.database import models

class IBotRepository(ABC):
    @abstractmethod
    def list_all(self) -> List[models.Bot]:
        """모든 봇을 id 오름차순으로 조회합니다."""
        pass

    @abstractmethod
    def create(self, bot_model: models.Bot) -> models.Bot:
        """새로운 봇을 생성합니다. 참조하는 VM이 없으면 DB의 외래 키 제약에 의해 실패합니다."""
        pass

    @abstractmethod
    def update(self, bot_id: int, changes: Dict[str, Any]) -> int:
        """주어진 필드만 수정하고 영향을 받은 행의 수를 반환합니다."""
        pass

    @abstractmethod
    def delete(self, bot_id: int) -> int:
        """봇을 삭제하고 영향을 받은 행의 수를 반환합니다."""
        pass
