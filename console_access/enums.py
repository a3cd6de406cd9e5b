# console_access/enums.py
from enum import IntEnum


class AccessType(IntEnum):
    """리소스(access) 카탈로그 항목의 종류."""
    MODULE = 1
    MENU = 2
    ACTION = 3


class RoleAccessType(IntEnum):
    """
    역할-리소스 연결(role_access) 행의 권한 종류.
    AccessType과 숫자 값이 겹치지만 서로 다른 열거형입니다.
    """
    API = 1
    MENU = 2


class AdminIdentity(IntEnum):
    NORMAL = 0
    SUPER = 1


class RoleDefault(IntEnum):
    NOT_DEFAULT = 0
    DEFAULT = 1


class Status(IntEnum):
    FORBIDDEN = 0
    NORMAL = 1


def parse_enum(enum_cls, value, default=None):
    """
    요청에서 들어온 값(int, bool, '1' 같은 문자열)을 열거형으로 변환합니다.
    변환할 수 없으면 default를 반환합니다.
    """
    if value is None:
        return default
    try:
        number = int(value)
        # 1.9 같은 소수는 잘라내지 않고 거부합니다.
        if not isinstance(value, str) and number != value:
            return default
        return enum_cls(number)
    except (TypeError, ValueError):
        return default
