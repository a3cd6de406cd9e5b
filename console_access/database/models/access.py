from sqlalchemy import Column, Integer, String, DateTime, func
from ..database import Base


class Access(Base):
    """
    관리 콘솔에서 탐색 가능한 리소스 카탈로그 항목입니다.
    type 값에 따라 모듈(그룹), 메뉴, 액션(화면 없이 권한만 가지는 항목)으로 나뉩니다.
    parent_id로 자기 자신을 참조하여 트리를 구성하며, 최상위 항목은 parent_id가 NULL입니다.
    """
    __tablename__ = "access"
    id = Column(Integer, primary_key=True, index=True)
    module_name = Column(String(50))
    action_name = Column(String(100))
    type = Column(Integer, nullable=False, index=True)
    parent_id = Column(Integer, index=True)
    url = Column(String(100))
    sort = Column(Integer, nullable=False, default=1)
    icon = Column(String(100))
    status = Column(Integer, nullable=False, default=1)
    description = Column(String(100))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime)
