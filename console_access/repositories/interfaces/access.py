from abc import ABC, abstractmethod
from typing import Iterable, List
from console_access.database import models
from console_access.enums import AccessType

class IAccessRepository(ABC):
    @abstractmethod
    def list_by_types(self, types: Iterable[AccessType]) -> List[models.Access]:
        """주어진 종류에 해당하는 모든 리소스를 조회합니다."""
        pass

    @abstractmethod
    def list_by_ids_and_types(self, access_ids: Iterable[int], types: Iterable[AccessType]) -> List[models.Access]:
        """
        ID 목록에 포함되면서 주어진 종류에 해당하는 리소스를 조회합니다.
        ID 목록이 비어 있으면 쿼리 없이 빈 리스트를 반환합니다.
        """
        pass
