from abc import ABC, abstractmethod
from typing import Iterable, List
from console_access.enums import RoleAccessType

class IRoleAccessRepository(ABC):
    @abstractmethod
    def list_access_ids_by_role_ids(self, role_ids: Iterable[int], link_type: RoleAccessType) -> List[int]:
        """
        역할 ID 목록에 연결된 리소스 ID를 권한 종류(link_type)로 필터링하여 조회합니다.
        역할 ID 목록이 비어 있으면 쿼리 없이 빈 리스트를 반환합니다.
        """
        pass
