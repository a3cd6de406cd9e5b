from typing import Iterable, List
from sqlalchemy.orm import Session
from console_access.database import models
from console_access.enums import AccessType
from console_access.repositories.interfaces import IAccessRepository

class SqlalchemyAccessRepository(IAccessRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _active(self):
        return self.db.query(models.Access).filter(models.Access.deleted_at.is_(None))

    def list_by_types(self, types: Iterable[AccessType]) -> List[models.Access]:
        return self._active().filter(
            models.Access.type.in_([int(t) for t in types])
        ).order_by(models.Access.sort.asc(), models.Access.id.asc()).all()

    def list_by_ids_and_types(self, access_ids: Iterable[int], types: Iterable[AccessType]) -> List[models.Access]:
        access_ids = list(access_ids)
        if not access_ids:
            return []
        return self._active().filter(
            models.Access.id.in_(access_ids),
            models.Access.type.in_([int(t) for t in types])
        ).order_by(models.Access.sort.asc(), models.Access.id.asc()).all()
