from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple
from console_access.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def create(self, role_model: models.Role) -> models.Role:
        """
        새로운 역할을 데이터베이스에 생성합니다.

        Raises:
            RoleConflictError: 이름 또는 기본 역할의 유일성 제약을 위반했을 때.
        """
        pass

    @abstractmethod
    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        """삭제되지 않은 역할을 ID로 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Role]:
        """삭제되지 않은 역할을 이름으로 조회합니다."""
        pass

    @abstractmethod
    def find_default(self) -> Optional[models.Role]:
        """현재 기본 역할로 지정된 역할을 조회합니다."""
        pass

    @abstractmethod
    def update(self, role_id: int, values: Dict[str, Any]) -> int:
        """
        역할의 일부 필드를 수정하고, 영향을 받은 행의 개수를 반환합니다.

        Raises:
            RoleConflictError: 이름 또는 기본 역할의 유일성 제약을 위반했을 때.
        """
        pass

    @abstractmethod
    def soft_delete(self, role_id: int) -> int:
        """역할을 소프트 삭제하고, 영향을 받은 행의 개수를 반환합니다."""
        pass

    @abstractmethod
    def list_page(self, criteria) -> Tuple[List[models.Role], int]:
        """
        조회 조건(RoleListCriteria)에 맞는 역할 목록을 페이지 단위로 조회합니다.

        Returns:
            (현재 페이지의 역할 리스트, 페이지와 무관한 전체 개수) 튜플.
        """
        pass
