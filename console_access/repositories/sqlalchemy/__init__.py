from .sqlalchemy_access_repository import SqlalchemyAccessRepository
from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_account_role_repository import SqlalchemyAccountRoleRepository
from .sqlalchemy_role_access_repository import SqlalchemyRoleAccessRepository

__all__ = [
    "SqlalchemyAccessRepository",
    "SqlalchemyRoleRepository",
    "SqlalchemyAccountRoleRepository",
    "SqlalchemyRoleAccessRepository",
]
