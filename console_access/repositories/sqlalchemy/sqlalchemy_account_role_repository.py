from typing import List
from sqlalchemy.orm import Session
from console_access.database import models
from console_access.repositories.interfaces import IAccountRoleRepository

class SqlalchemyAccountRoleRepository(IAccountRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def list_role_ids_by_account_id(self, account_id: int) -> List[int]:
        rows = self.db.query(models.AccountRole.role_id).filter(
            models.AccountRole.account_id == account_id
        ).order_by(models.AccountRole.role_id.asc()).all()
        return [row[0] for row in rows]

    def exists_by_role_id(self, role_id: int) -> bool:
        return self.db.query(models.AccountRole.id).filter(
            models.AccountRole.role_id == role_id
        ).first() is not None
