import logging
from typing import Any, Dict, Optional

from console_access.database import models
from console_access.enums import RoleDefault, Status, parse_enum
from console_access.repositories.interfaces import IRoleRepository, IAccountRoleRepository
from console_access.services.schemas import OperationResult, RoleListCriteria
from console_access.services.exceptions import (
    DuplicateNameError, DuplicateDefaultError, RoleInUseError, RoleConflictError
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "is_default", "status")


class RoleService:
    """역할 생성, 수정, 삭제, 조회 및 목록 조회를 담당합니다."""

    def __init__(self, role_repo: IRoleRepository, account_role_repo: IAccountRoleRepository):
        """
        RoleService를 초기화합니다.

        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            account_role_repo: 계정-역할 연결에 접근하기 위한 리포지토리 (삭제 시 검증용).
        """
        self.role_repo = role_repo
        self.account_role_repo = account_role_repo

    def create_role(self, name: str, is_default=RoleDefault.NOT_DEFAULT, description: Optional[str] = None, status=Status.NORMAL) -> OperationResult:
        """
        새로운 역할을 생성합니다. 생성된 역할 자체는 반환하지 않습니다.

        Raises:
            ValueError: 이름이 비어 있거나 is_default, status 값이 올바르지 않을 때.
            DuplicateNameError: 동일한 이름의 역할이 이미 존재할 때.
            DuplicateDefaultError: 기본 역할로 생성하려는데 이미 기본 역할이 존재할 때.
        """
        if not name:
            raise ValueError("Role name is required.")
        is_default = RoleDefault.NOT_DEFAULT if is_default is None else self._parse_required(RoleDefault, is_default, "is_default")
        status = Status.NORMAL if status is None else self._parse_required(Status, status, "status")

        self._ensure_name_available(name)
        if is_default == RoleDefault.DEFAULT:
            self._ensure_default_available()

        new_role = models.Role(
            name=name,
            description=description,
            is_default=int(is_default),
            status=int(status),
        )
        try:
            self.role_repo.create(new_role)
        except RoleConflictError:
            # 동시에 같은 검사를 통과한 요청이 먼저 저장된 경우
            self._ensure_name_available(name)
            if is_default == RoleDefault.DEFAULT:
                self._ensure_default_available()
            raise
        logger.info("Role '%s' created.", name)
        return OperationResult(success=True, message="Role created.")

    def delete_role(self, role_id: int) -> OperationResult:
        """
        역할을 소프트 삭제합니다. 계정에 연결된 역할은 삭제할 수 없습니다.

        Returns:
            삭제된 행이 없으면 success=False인 결과.

        Raises:
            RoleInUseError: 해당 역할에 연결된 계정이 존재할 때.
        """
        if self.account_role_repo.exists_by_role_id(role_id):
            raise RoleInUseError(f"Role '{role_id}' is still assigned to one or more accounts.")

        if self.role_repo.soft_delete(role_id):
            logger.info("Role %s deleted.", role_id)
            return OperationResult(success=True, message="Role deleted.")
        return OperationResult(success=False, message="Role could not be deleted.", code="ROLE_NOT_AFFECTED")

    def update_role(self, role_id: int, **fields) -> OperationResult:
        """
        역할의 일부 필드(name, description, is_default, status)를 수정합니다.
        그 외의 필드는 무시합니다.

        기본 역할 지정은 현재 기본 역할이 없거나 자기 자신일 때만 허용됩니다.

        Raises:
            ValueError: 이름이 비어 있거나 is_default, status 값이 올바르지 않을 때.
            DuplicateNameError: 다른 역할이 이미 같은 이름을 사용 중일 때.
            DuplicateDefaultError: 다른 역할이 이미 기본 역할일 때.
        """
        values = {key: fields[key] for key in UPDATABLE_FIELDS if fields.get(key) is not None}
        if not values:
            return OperationResult(success=False, message="No fields to update.", code="NO_FIELDS")

        if "name" in values and not values["name"]:
            raise ValueError("Role name must not be empty.")
        if "is_default" in values:
            values["is_default"] = int(self._parse_required(RoleDefault, values["is_default"], "is_default"))
        if "status" in values:
            values["status"] = int(self._parse_required(Status, values["status"], "status"))

        if "name" in values:
            self._ensure_name_available(values["name"], role_id)
        if values.get("is_default") == RoleDefault.DEFAULT:
            self._ensure_default_available(role_id)

        try:
            affected = self.role_repo.update(role_id, values)
        except RoleConflictError:
            if "name" in values:
                self._ensure_name_available(values["name"], role_id)
            if values.get("is_default") == RoleDefault.DEFAULT:
                self._ensure_default_available(role_id)
            raise

        if affected:
            logger.info("Role %s updated: %s", role_id, sorted(values))
            return OperationResult(success=True, message="Role updated.")
        return OperationResult(success=False, message="Role could not be updated.", code="ROLE_NOT_AFFECTED")

    def get_role(self, role_id: int) -> Optional[Dict[str, Any]]:
        """ID로 역할을 조회합니다. 없거나 삭제된 역할이면 None을 반환합니다."""
        role = self.role_repo.find_by_id(role_id)
        return self._to_view(role) if role else None

    def list_roles(self, criteria: RoleListCriteria) -> Dict[str, Any]:
        """
        조회 조건에 맞는 역할 목록을 페이지 단위로 반환합니다.

        Returns:
            {data, total, pageSize, pageNumber} 형태의 딕셔너리.
            total은 페이지와 무관한 전체 일치 개수입니다.
        """
        roles, total = self.role_repo.list_page(criteria)
        return {
            "data": [self._to_view(role) for role in roles],
            "total": total,
            "pageSize": criteria.page_size,
            "pageNumber": criteria.page_number,
        }

    def _ensure_name_available(self, name: str, role_id: Optional[int] = None):
        existing = self.role_repo.find_by_name(name)
        if existing and existing.id != role_id:
            logger.info("Rejected role name '%s': already used by role %s.", name, existing.id)
            raise DuplicateNameError(f"Role '{name}' already exists.")

    def _ensure_default_available(self, role_id: Optional[int] = None):
        current_default = self.role_repo.find_default()
        if current_default and current_default.id != role_id:
            logger.info("Rejected default flag: role %s is already the default.", current_default.id)
            raise DuplicateDefaultError("A default role already exists.")

    @staticmethod
    def _parse_required(enum_cls, value, field: str):
        parsed = parse_enum(enum_cls, value)
        if parsed is None:
            raise ValueError(f"Invalid value for '{field}': {value!r}")
        return parsed

    @staticmethod
    def _to_view(role: models.Role) -> Dict[str, Any]:
        return {
            "id": role.id,
            "name": role.name,
            "description": role.description,
            "isDefault": role.is_default,
            "status": role.status,
            "createdAt": role.created_at.isoformat() if role.created_at else None,
            "updatedAt": role.updated_at.isoformat() if role.updated_at else None,
        }
