from abc import ABC, abstractmethod
from typing import List

class IAccountRoleRepository(ABC):
    @abstractmethod
    def list_role_ids_by_account_id(self, account_id: int) -> List[int]:
        """계정에 연결된 모든 역할 ID를 조회합니다."""
        pass

    @abstractmethod
    def exists_by_role_id(self, role_id: int) -> bool:
        """해당 역할에 연결된 계정이 하나라도 있는지 확인합니다."""
        pass
