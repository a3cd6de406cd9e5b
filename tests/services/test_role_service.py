# tests/services/test_role_service.py
import pytest
from unittest.mock import MagicMock, ANY

from console_access.services.role_service import RoleService
from console_access.services.schemas import RoleListCriteria
from console_access.services.exceptions import *
from console_access.repositories.interfaces import IRoleRepository, IAccountRoleRepository
from console_access.enums import RoleDefault, Status
from console_access import config
from console_access.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_role_repo() -> MagicMock:
    """IRoleRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IRoleRepository)

@pytest.fixture
def mock_account_role_repo() -> MagicMock:
    """IAccountRoleRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IAccountRoleRepository)

@pytest.fixture
def role_service(mock_role_repo: MagicMock, mock_account_role_repo: MagicMock) -> RoleService:
    """테스트에 사용될 RoleService 인스턴스를 생성하고, 의존성을 주입합니다."""
    return RoleService(mock_role_repo, mock_account_role_repo)

# ===================================================================
#  역할 생성 테스트
# ===================================================================
class TestCreateRole:
    def test_create_role_success(self, role_service: RoleService, mock_role_repo: MagicMock):
        """역할 생성 성공 시나리오를 테스트합니다."""
        # === Arrange ===
        # 시나리오: 이름이 중복되지 않음
        mock_role_repo.find_by_name.return_value = None

        # === Act ===
        result = role_service.create_role("Editor")

        # === Assert ===
        assert result.success is True
        mock_role_repo.find_by_name.assert_called_once_with("Editor")
        # 검증: 기본 역할이 아니므로 기본 역할 조회는 하지 않아야 함
        mock_role_repo.find_default.assert_not_called()
        mock_role_repo.create.assert_called_once_with(ANY)
        created = mock_role_repo.create.call_args.args[0]
        assert created.name == "Editor"
        assert created.is_default == RoleDefault.NOT_DEFAULT
        assert created.status == Status.NORMAL

    def test_create_role_fails_if_name_exists(self, role_service: RoleService, mock_role_repo: MagicMock):
        """이름이 중복될 경우 DuplicateNameError가 발생하는지 테스트합니다."""
        # === Arrange ===
        mock_role_repo.find_by_name.return_value = models.Role(id=1, name="Editor")

        # === Act & Assert ===
        with pytest.raises(DuplicateNameError):
            role_service.create_role("Editor")
        # 검증: create는 호출되지 않았어야 함
        mock_role_repo.create.assert_not_called()

    def test_create_default_role_fails_if_default_exists(self, role_service: RoleService, mock_role_repo: MagicMock):
        """이미 기본 역할이 있을 때 기본 역할 생성이 거부되는지 테스트합니다."""
        # === Arrange ===
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.find_default.return_value = models.Role(id=1, name="A", is_default=1)

        # === Act & Assert ===
        with pytest.raises(DuplicateDefaultError):
            role_service.create_role("B", is_default=True)
        mock_role_repo.create.assert_not_called()

    def test_create_default_role_success(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.find_default.return_value = None

        result = role_service.create_role("A", is_default="1")

        assert result.success is True
        assert mock_role_repo.create.call_args.args[0].is_default == RoleDefault.DEFAULT

    def test_create_role_lost_race_reports_duplicate_name(self, role_service: RoleService, mock_role_repo: MagicMock):
        """검사 후 저장 직전에 다른 요청이 같은 이름을 저장한 경우를 테스트합니다."""
        # === Arrange ===
        # 시나리오: 첫 검사에서는 없었지만, DB 제약 조건 위반 후 재검사에서는 존재함
        mock_role_repo.find_by_name.side_effect = [None, models.Role(id=9, name="Editor")]
        mock_role_repo.create.side_effect = RoleConflictError("UNIQUE constraint failed: roles.name")

        # === Act & Assert ===
        with pytest.raises(DuplicateNameError):
            role_service.create_role("Editor")

    def test_create_role_requires_name(self, role_service: RoleService, mock_role_repo: MagicMock):
        with pytest.raises(ValueError):
            role_service.create_role("")
        mock_role_repo.create.assert_not_called()

    def test_create_role_rejects_invalid_status(self, role_service: RoleService, mock_role_repo: MagicMock):
        with pytest.raises(ValueError):
            role_service.create_role("Editor", status=5)
        mock_role_repo.create.assert_not_called()

    def test_create_role_rejects_fractional_flags(self, role_service: RoleService, mock_role_repo: MagicMock):
        """소수 값은 잘라내지 않고 잘못된 값으로 거부하는지 테스트합니다."""
        with pytest.raises(ValueError):
            role_service.create_role("Editor", is_default=1.9)
        with pytest.raises(ValueError):
            role_service.create_role("Editor", status=0.5)
        mock_role_repo.create.assert_not_called()

    def test_create_role_conflict_without_matching_guard_propagates(self, role_service: RoleService, mock_role_repo: MagicMock):
        """재검사에서도 원인을 찾지 못하면 RoleConflictError를 그대로 전달하는지 테스트합니다."""
        mock_role_repo.find_by_name.return_value = None
        mock_role_repo.create.side_effect = RoleConflictError("UNIQUE constraint failed")

        with pytest.raises(RoleConflictError):
            role_service.create_role("Editor")

# ===================================================================
#  역할 삭제 테스트
# ===================================================================
class TestDeleteRole:
    def test_delete_role_in_use(self, role_service: RoleService, mock_role_repo: MagicMock, mock_account_role_repo: MagicMock):
        """계정에 연결된 역할 삭제 시 RoleInUseError가 발생하는지 테스트합니다."""
        # === Arrange ===
        mock_account_role_repo.exists_by_role_id.return_value = True

        # === Act & Assert ===
        with pytest.raises(RoleInUseError):
            role_service.delete_role(3)
        mock_account_role_repo.exists_by_role_id.assert_called_once_with(3)
        mock_role_repo.soft_delete.assert_not_called()

    def test_delete_role_success(self, role_service: RoleService, mock_role_repo: MagicMock, mock_account_role_repo: MagicMock):
        """연결된 계정이 없는 역할 삭제 성공을 테스트합니다."""
        mock_account_role_repo.exists_by_role_id.return_value = False
        mock_role_repo.soft_delete.return_value = 1

        result = role_service.delete_role(3)

        assert result.success is True
        mock_role_repo.soft_delete.assert_called_once_with(3)

    def test_delete_role_affecting_no_rows_is_soft_failure(self, role_service: RoleService, mock_role_repo: MagicMock, mock_account_role_repo: MagicMock):
        """삭제된 행이 없으면 예외 대신 실패 결과를 반환하는지 테스트합니다."""
        mock_account_role_repo.exists_by_role_id.return_value = False
        mock_role_repo.soft_delete.return_value = 0

        result = role_service.delete_role(404)

        assert result.success is False
        assert result.code == "ROLE_NOT_AFFECTED"

# ===================================================================
#  역할 수정 테스트
# ===================================================================
class TestUpdateRole:
    def test_reaffirm_own_default_flag(self, role_service: RoleService, mock_role_repo: MagicMock):
        """이미 기본 역할인 역할을 다시 기본으로 지정하는 것은 허용되는지 테스트합니다."""
        # === Arrange ===
        mock_role_repo.find_default.return_value = models.Role(id=5, name="A", is_default=1)
        mock_role_repo.update.return_value = 1

        # === Act ===
        result = role_service.update_role(5, is_default=RoleDefault.DEFAULT)

        # === Assert ===
        assert result.success is True
        mock_role_repo.update.assert_called_once_with(5, {"is_default": 1})

    def test_taking_default_from_other_role_fails(self, role_service: RoleService, mock_role_repo: MagicMock):
        """다른 역할이 기본 역할일 때 기본 역할 지정이 거부되는지 테스트합니다."""
        mock_role_repo.find_default.return_value = models.Role(id=5, name="A", is_default=1)

        with pytest.raises(DuplicateDefaultError):
            role_service.update_role(6, is_default="1")
        mock_role_repo.update.assert_not_called()

    def test_set_default_when_no_default_exists(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.find_default.return_value = None
        mock_role_repo.update.return_value = 1

        result = role_service.update_role(6, is_default=1)

        assert result.success is True

    def test_clearing_default_flag_skips_default_check(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.update.return_value = 1

        role_service.update_role(5, is_default=0, description="no longer default")

        mock_role_repo.find_default.assert_not_called()
        mock_role_repo.update.assert_called_once_with(5, {"description": "no longer default", "is_default": 0})

    def test_rename_to_existing_name_fails(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = models.Role(id=2, name="Editor")

        with pytest.raises(DuplicateNameError):
            role_service.update_role(3, name="Editor")
        mock_role_repo.update.assert_not_called()

    def test_rename_to_own_name_is_allowed(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_name.return_value = models.Role(id=3, name="Editor")
        mock_role_repo.update.return_value = 1

        assert role_service.update_role(3, name="Editor").success is True

    def test_update_ignores_unknown_fields(self, role_service: RoleService, mock_role_repo: MagicMock):
        result = role_service.update_role(3, created_at="2020-01-01")

        assert result.success is False
        assert result.code == "NO_FIELDS"
        mock_role_repo.update.assert_not_called()

    def test_update_affecting_no_rows_is_soft_failure(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.update.return_value = 0

        result = role_service.update_role(404, status=Status.FORBIDDEN)

        assert result.success is False
        mock_role_repo.update.assert_called_once_with(404, {"status": 0})

# ===================================================================
#  역할 조회 테스트
# ===================================================================
class TestQueryRoles:
    def test_get_role_not_found_returns_none(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = None

        assert role_service.get_role(99) is None

    def test_get_role_returns_view(self, role_service: RoleService, mock_role_repo: MagicMock):
        mock_role_repo.find_by_id.return_value = models.Role(id=1, name="admin", description="d", is_default=1, status=1)

        role = role_service.get_role(1)

        assert role == {
            "id": 1, "name": "admin", "description": "d", "isDefault": 1, "status": 1,
            "createdAt": None, "updatedAt": None,
        }

    def test_list_roles_envelope(self, role_service: RoleService, mock_role_repo: MagicMock):
        """목록 조회 결과가 data/total/pageSize/pageNumber 형태인지 테스트합니다."""
        # === Arrange ===
        criteria = RoleListCriteria(page_number=2, page_size=1, name="adm", status=Status.NORMAL)
        mock_role_repo.list_page.return_value = ([models.Role(id=2, name="Admins", is_default=0, status=1)], 3)

        # === Act ===
        result = role_service.list_roles(criteria)

        # === Assert ===
        mock_role_repo.list_page.assert_called_once_with(criteria)
        assert result["total"] == 3
        assert result["pageSize"] == 1
        assert result["pageNumber"] == 2
        assert [role["name"] for role in result["data"]] == ["Admins"]

# ===================================================================
#  조회 조건 파싱 테스트
# ===================================================================
class TestRoleListCriteria:
    def test_defaults(self):
        criteria = RoleListCriteria.from_params({})
        assert criteria.page_number == 1
        assert criteria.page_size == 10
        assert criteria.name is None
        assert criteria.status is None

    def test_invalid_status_is_ignored(self):
        assert RoleListCriteria.from_params({"status": "7"}).status is None
        assert RoleListCriteria.from_params({"status": "abc"}).status is None

    def test_valid_values_are_parsed(self):
        criteria = RoleListCriteria.from_params({"pageNumber": "3", "pageSize": "5", "name": "adm", "status": "0"})
        assert criteria.page_number == 3
        assert criteria.page_size == 5
        assert criteria.name == "adm"
        assert criteria.status == Status.FORBIDDEN
        assert criteria.offset == 10

    def test_non_positive_page_values_fall_back(self):
        criteria = RoleListCriteria.from_params({"pageNumber": "0", "pageSize": "-4"})
        assert criteria.page_number == 1
        assert criteria.page_size == 10

    def test_fractional_status_is_ignored(self):
        assert RoleListCriteria.from_params({"status": 0.5}).status is None
        assert RoleListCriteria.from_params({"status": 1.0}).status == Status.NORMAL

    def test_huge_page_values_are_clamped(self):
        """매우 큰 페이지 값도 OFFSET이 64비트 정수 범위를 넘지 않도록 제한되는지 테스트합니다."""
        # === Act ===
        criteria = RoleListCriteria.from_params({"pageNumber": str(10 ** 20), "pageSize": str(10 ** 20)})

        # === Assert ===
        assert criteria.page_size == config.MAX_PAGE_SIZE
        assert criteria.page_number == config.MAX_OFFSET // config.MAX_PAGE_SIZE + 1
        assert 0 <= criteria.offset <= config.MAX_OFFSET

    def test_direct_construction_is_clamped(self):
        criteria = RoleListCriteria(page_number=10 ** 30, page_size=0)
        assert criteria.page_size == config.DEFAULT_PAGE_SIZE
        assert criteria.offset <= config.MAX_OFFSET
