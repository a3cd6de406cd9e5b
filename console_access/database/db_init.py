import logging
from .database import engine, SessionLocal, Base
from .models import Access, Role, AccountRole, RoleAccess
from console_access.enums import AccessType, RoleAccessType, RoleDefault, Status

logger = logging.getLogger(__name__)

# 기본 관리자 계정 ID (계정 자체는 인증 시스템에서 관리합니다)
SEED_ADMIN_ACCOUNT_ID = 1


def initialize_db(bind=None):
    """
    테이블을 생성하고, 비어 있으면 기본 리소스 카탈로그와 역할을 삽입합니다.
    """
    bind = bind or engine
    logger.info("Initializing console_access database...")

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=bind)

    db = SessionLocal(bind=bind)
    try:
        # 기본 데이터가 이미 있는지 확인
        if db.query(Access).first():
            logger.info("Seed data already present, skipping.")
            return

        # 모듈
        system_module = Access(module_name="System", type=AccessType.MODULE, url="/system", sort=1, icon="setting")
        db.add(system_module)
        db.commit()

        # 메뉴와 액션
        role_menu = Access(action_name="Roles", type=AccessType.MENU, parent_id=system_module.id, url="/system/roles", sort=1, icon="team")
        access_menu = Access(action_name="Access", type=AccessType.MENU, parent_id=system_module.id, url="/system/access", sort=2, icon="lock")
        db.add_all([role_menu, access_menu])
        db.commit()

        create_role_action = Access(action_name="Create role", type=AccessType.ACTION, parent_id=role_menu.id, url="/v1/roles", sort=1)
        db.add(create_role_action)

        # 역할
        admin_role = Role(name="admin", description="Administrators", is_default=RoleDefault.DEFAULT, status=Status.NORMAL)
        editor_role = Role(name="editor", description="Content editors", is_default=RoleDefault.NOT_DEFAULT, status=Status.NORMAL)
        db.add_all([admin_role, editor_role])
        db.commit()

        # 계정-역할, 역할-리소스 연결
        db.add(AccountRole(account_id=SEED_ADMIN_ACCOUNT_ID, role_id=admin_role.id))
        db.add_all([
            RoleAccess(role_id=admin_role.id, access_id=system_module.id, type=RoleAccessType.MENU),
            RoleAccess(role_id=admin_role.id, access_id=role_menu.id, type=RoleAccessType.MENU),
            RoleAccess(role_id=admin_role.id, access_id=access_menu.id, type=RoleAccessType.MENU),
            RoleAccess(role_id=admin_role.id, access_id=create_role_action.id, type=RoleAccessType.API),
        ])
        db.commit()
        logger.info("Seed data inserted.")

    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    initialize_db()
