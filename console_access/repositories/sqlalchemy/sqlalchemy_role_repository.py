import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session
from console_access.database import models
from console_access.enums import RoleDefault
from console_access.repositories.interfaces import IRoleRepository
from console_access.services.exceptions import RoleConflictError

logger = logging.getLogger(__name__)


def _like_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def apply_role_criteria(query: Query, criteria) -> Query:
    """RoleListCriteria의 선택적 조건들을 Role 쿼리의 필터로 변환합니다."""
    if criteria.name:
        query = query.filter(models.Role.name.ilike(_like_pattern(criteria.name), escape="\\"))
    if criteria.status is not None:
        query = query.filter(models.Role.status == int(criteria.status))
    return query


class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _active(self) -> Query:
        return self.db.query(models.Role).filter(models.Role.deleted_at.is_(None))

    def _rollback_conflict(self, error: IntegrityError):
        self.db.rollback()
        logger.warning("Role write rejected by unique constraint: %s", error.orig)
        raise RoleConflictError(str(error.orig)) from error

    def create(self, role_model: models.Role) -> models.Role:
        try:
            self.db.add(role_model)
            self.db.commit()
        except IntegrityError as e:
            self._rollback_conflict(e)
        self.db.refresh(role_model)
        return role_model

    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        return self._active().filter(models.Role.id == role_id).first()

    def find_by_name(self, name: str) -> Optional[models.Role]:
        return self._active().filter(models.Role.name == name).first()

    def find_default(self) -> Optional[models.Role]:
        return self._active().filter(
            models.Role.is_default == int(RoleDefault.DEFAULT)
        ).order_by(models.Role.id.asc()).first()

    def update(self, role_id: int, values: Dict[str, Any]) -> int:
        try:
            affected = self._active().filter(models.Role.id == role_id).update(
                values, synchronize_session=False
            )
            self.db.commit()
        except IntegrityError as e:
            self._rollback_conflict(e)
        return affected

    def soft_delete(self, role_id: int) -> int:
        affected = self._active().filter(models.Role.id == role_id).update(
            {models.Role.deleted_at: func.now()}, synchronize_session=False
        )
        self.db.commit()
        return affected

    def list_page(self, criteria) -> Tuple[List[models.Role], int]:
        query = apply_role_criteria(self._active(), criteria)
        total = query.count()
        roles = query.order_by(models.Role.id.asc()).offset(criteria.offset).limit(criteria.page_size).all()
        return roles, total
