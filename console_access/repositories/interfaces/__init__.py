from .access import IAccessRepository
from .role import IRoleRepository
from .account_role import IAccountRoleRepository
from .role_access import IRoleAccessRepository

__all__ = [
    "IAccessRepository",
    "IRoleRepository",
    "IAccountRoleRepository",
    "IRoleAccessRepository",
]
