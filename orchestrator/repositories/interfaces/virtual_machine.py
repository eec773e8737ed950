from abc import ABC, abstractmethod
from typing import Any, Dict, List
from orchestrator.database import models

class IVirtualMachineRepository(ABC):
    @abstractmethod
    def list_all(self) -> List[models.VirtualMachine]:
        """모든 VM을 id 오름차순으로 조회합니다."""
        pass

    @abstractmethod
    def create(self, vm_model: models.VirtualMachine) -> models.VirtualMachine:
        """새로운 VM을 생성하고, DB가 부여한 id가 채워진 모델을 반환합니다."""
        pass

    @abstractmethod
    def update(self, vm_id: int, changes: Dict[str, Any]) -> int:
        """
        주어진 필드만 수정합니다.

        Args:
            vm_id: 수정할 VM의 ID.
            changes: 속성 이름 -> 새 값. 포함되지 않은 컬럼은 변경되지 않습니다.

        Returns:
            영향을 받은 행의 수 (0이면 해당 id가 없음).
        """
        pass

    @abstractmethod
    def delete(self, vm_id: int) -> int:
        """VM을 삭제하고 영향을 받은 행의 수를 반환합니다."""
        pass
