from .access import Access
from .role import Role
from .association import AccountRole, RoleAccess

__all__ = ["Access", "Role", "AccountRole", "RoleAccess"]
