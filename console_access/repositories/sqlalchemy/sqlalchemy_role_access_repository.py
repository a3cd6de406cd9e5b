from typing import Iterable, List
from sqlalchemy.orm import Session
from console_access.database import models
from console_access.enums import RoleAccessType
from console_access.repositories.interfaces import IRoleAccessRepository

class SqlalchemyRoleAccessRepository(IRoleAccessRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def list_access_ids_by_role_ids(self, role_ids: Iterable[int], link_type: RoleAccessType) -> List[int]:
        role_ids = list(role_ids)
        # 빈 IN 조건은 쿼리로 보내지 않습니다.
        if not role_ids:
            return []
        rows = self.db.query(models.RoleAccess.access_id).filter(
            models.RoleAccess.role_id.in_(role_ids),
            models.RoleAccess.type == int(link_type)
        ).distinct().all()
        return [row[0] for row in rows]
