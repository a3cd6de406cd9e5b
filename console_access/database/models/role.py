from sqlalchemy import Column, Integer, String, DateTime, Index, func, text
from ..database import Base

# 부분 인덱스(WHERE 절)를 지원하는 DB에서만 유일성 인덱스를 생성합니다.
# 그 외의 DB에서는 서비스의 사전 검사만으로 유일성을 보장합니다.
PARTIAL_INDEX_DIALECTS = ("sqlite", "postgresql")


class Role(Base):
    """
    관리 콘솔 계정에 부여되는 권한 묶음입니다. (예: 'admin', 'editor').
    삭제 시 deleted_at만 기록하는 소프트 삭제를 사용합니다.
    이름과 기본 역할(is_default=1)은 삭제되지 않은 행들 사이에서만 유일합니다.
    """
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    description = Column(String(100))
    is_default = Column(Integer, nullable=False, default=0)
    status = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime)

    __table_args__ = (
        Index(
            "uq_roles_name_active", "name", unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ).ddl_if(dialect=PARTIAL_INDEX_DIALECTS),
        Index(
            "uq_roles_default_active", "is_default", unique=True,
            sqlite_where=text("is_default = 1 AND deleted_at IS NULL"),
            postgresql_where=text("is_default = 1 AND deleted_at IS NULL"),
        ).ddl_if(dialect=PARTIAL_INDEX_DIALECTS),
    )
