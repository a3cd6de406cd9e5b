import logging
from typing import Any, Dict, Iterable, List

from console_access.database import models
from console_access.enums import AccessType, RoleAccessType
from console_access.repositories.interfaces import (
    IAccessRepository, IAccountRoleRepository, IRoleAccessRepository
)
from console_access.services.schemas import CurrentUser

logger = logging.getLogger(__name__)

# 메뉴로 노출되는 리소스 종류. ACTION은 화면이 없으므로 제외됩니다.
MENU_ACCESS_TYPES = (AccessType.MODULE, AccessType.MENU)


class MenuService:
    """현재 사용자가 볼 수 있는 관리 콘솔 메뉴를 계산합니다."""

    def __init__(self, access_repo: IAccessRepository, account_role_repo: IAccountRoleRepository, role_access_repo: IRoleAccessRepository):
        """
        MenuService를 초기화합니다.

        Args:
            access_repo: 리소스 카탈로그에 접근하기 위한 리포지토리.
            account_role_repo: 계정-역할 연결에 접근하기 위한 리포지토리.
            role_access_repo: 역할-리소스 연결에 접근하기 위한 리포지토리.
        """
        self.access_repo = access_repo
        self.account_role_repo = account_role_repo
        self.role_access_repo = role_access_repo

    def list_menus(self, current_user: CurrentUser) -> List[Dict[str, Any]]:
        """
        현재 사용자의 권한에 맞는 메뉴 목록을 반환합니다.

        슈퍼 관리자는 역할과 상관없이 모든 모듈/메뉴를 봅니다.
        일반 사용자는 계정 -> 역할 -> (MENU 권한) 리소스 순서로 조회한 결과만 봅니다.
        트리 구성은 하지 않으며 parentId를 그대로 전달합니다.

        Args:
            current_user: 인증 게이트웨이가 전달한 현재 사용자.

        Returns:
            {id, name, parentId, url, sort, icon} 형태의 딕셔너리 리스트.
            권한이 하나도 없으면 빈 리스트.
        """
        if current_user.is_super:
            logger.debug("Account %s is a super admin, returning full menu catalog.", current_user.account_id)
            return self._format_menus(self.access_repo.list_by_types(MENU_ACCESS_TYPES))

        role_ids = self.account_role_repo.list_role_ids_by_account_id(current_user.account_id)
        if not role_ids:
            logger.info("Account %s has no roles, no menus granted.", current_user.account_id)
            return []

        access_ids = self.role_access_repo.list_access_ids_by_role_ids(role_ids, RoleAccessType.MENU)
        logger.debug("Account %s roles=%s granted access ids=%s", current_user.account_id, role_ids, access_ids)
        if not access_ids:
            return []

        access_list = self.access_repo.list_by_ids_and_types(access_ids, MENU_ACCESS_TYPES)
        return self._format_menus(access_list)

    def _format_menus(self, access_list: Iterable[models.Access]) -> List[Dict[str, Any]]:
        return [
            {
                "id": access.id,
                "name": access.module_name if access.module_name else access.action_name,
                "parentId": access.parent_id,
                "url": access.url,
                "sort": access.sort,
                "icon": access.icon,
            }
            for access in access_list
        ]
