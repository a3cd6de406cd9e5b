# console_access/services/exceptions.py

# --- Role Validation Exceptions ---
class DuplicateNameError(Exception):
    """동일한 이름의 역할이 이미 존재할 때"""
    code = "DUPLICATE_NAME"

class DuplicateDefaultError(Exception):
    """다른 역할이 이미 기본 역할로 지정되어 있을 때"""
    code = "DUPLICATE_DEFAULT"

class RoleInUseError(Exception):
    """계정에 연결된 역할을 삭제하려고 할 때"""
    code = "ROLE_IN_USE"

# --- Storage Exceptions ---
class RoleConflictError(Exception):
    """DB의 유일성 제약 조건에 의해 역할 저장이 거부되었을 때"""
    code = "ROLE_CONFLICT"

# --- Auth Exceptions ---
class AuthenticationError(Exception):
    """현재 사용자 정보가 없거나 올바르지 않을 때"""
    pass
