from sqlalchemy import Column, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base


class AccountRole(Base):
    """
    계정(account)과 역할(Role) 사이의 다대다 관계를 연결하는 연관 테이블입니다.
    계정 자체는 외부 인증 시스템이 관리하므로 account_id는 외래 키가 아닙니다.
    """
    __tablename__ = "account_roles"
    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())

    role = relationship("Role")


class RoleAccess(Base):
    """
    역할(Role)과 리소스(Access) 사이의 연결입니다.
    type은 권한 종류(RoleAccessType)를 나타내며, 메뉴 조회에는 MENU 권한만 사용됩니다.
    """
    __tablename__ = "role_access"
    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    access_id = Column(Integer, ForeignKey("access.id"), nullable=False, index=True)
    type = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    role = relationship("Role")
    access = relationship("Access")
