# console_access/services/schemas.py
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from console_access import config
from console_access.enums import AdminIdentity, Status, parse_enum


@dataclass(frozen=True)
class CurrentUser:
    """인증 게이트웨이가 전달한 현재 로그인 사용자 정보."""
    account_id: int
    identity: AdminIdentity = AdminIdentity.NORMAL

    @property
    def is_super(self) -> bool:
        return self.identity == AdminIdentity.SUPER


@dataclass
class OperationResult:
    """생성/수정/삭제 요청의 처리 결과."""
    success: bool
    message: str
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RoleListCriteria:
    """
    역할 목록 조회 조건입니다.

    name은 대소문자를 구분하지 않는 부분 일치로, status는 유효한 Status 값일 때만
    필터로 적용됩니다.
    """
    page_number: int = config.DEFAULT_PAGE_NUMBER
    page_size: int = config.DEFAULT_PAGE_SIZE
    name: Optional[str] = None
    status: Optional[Status] = None

    def __post_init__(self):
        if self.page_size < 1:
            self.page_size = config.DEFAULT_PAGE_SIZE
        if self.page_number < 1:
            self.page_number = config.DEFAULT_PAGE_NUMBER
        self.page_size = min(self.page_size, config.MAX_PAGE_SIZE)
        # OFFSET이 64비트 정수 범위를 넘지 않도록 페이지 번호를 제한합니다.
        self.page_number = min(self.page_number, config.MAX_OFFSET // self.page_size + 1)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "RoleListCriteria":
        """
        쿼리 파라미터(pageNumber, pageSize, name, status)로부터 조회 조건을 만듭니다.
        잘못된 페이지 값은 기본값으로, 너무 큰 값은 허용 범위로, 잘못된 status는 조건 없음으로 처리합니다.
        """
        return cls(
            page_number=_positive_int(params.get("pageNumber"), config.DEFAULT_PAGE_NUMBER),
            page_size=_positive_int(params.get("pageSize"), config.DEFAULT_PAGE_SIZE),
            name=params.get("name") or None,
            status=parse_enum(Status, params.get("status")),
        )


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default
