# console_access/app.py
from wsgiref.simple_server import make_server
from urllib.parse import parse_qs
import json
import logging
import re

from console_access import config
from console_access.enums import AdminIdentity, parse_enum
from console_access.database.database import SessionLocal
from console_access.database.db_init import initialize_db
from console_access.repositories.sqlalchemy import (
    SqlalchemyAccessRepository,
    SqlalchemyRoleRepository,
    SqlalchemyAccountRoleRepository,
    SqlalchemyRoleAccessRepository,
)
from console_access.services.menu_service import MenuService
from console_access.services.role_service import RoleService
from console_access.services.schemas import CurrentUser, RoleListCriteria
from console_access.services.exceptions import (
    AuthenticationError, DuplicateNameError, DuplicateDefaultError, RoleInUseError, RoleConflictError
)

logger = logging.getLogger(__name__)

# 요청 본문(camelCase) -> 서비스 인자(snake_case)
ROLE_BODY_FIELDS = {
    "name": "name",
    "description": "description",
    "isDefault": "is_default",
    "status": "status",
}

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        data = json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValueError("Invalid or missing JSON body.")
    if not isinstance(data, dict):
        raise ValueError("JSON body must be an object.")
    return data

def get_query_params(environ):
    return {key: values[0] for key, values in parse_qs(environ.get("QUERY_STRING", "")).items()}

def get_current_user(environ):
    """인증 게이트웨이가 설정한 헤더에서 현재 사용자 정보를 읽습니다."""
    account_id = environ.get("HTTP_X_ACCOUNT_ID")
    try:
        account_id = int(account_id)
    except (TypeError, ValueError):
        raise AuthenticationError("Missing or invalid 'X-Account-Id' header.")
    identity = parse_enum(AdminIdentity, environ.get("HTTP_X_ADMIN_IDENTITY"), AdminIdentity.NORMAL)
    return CurrentUser(account_id=account_id, identity=identity)

def role_fields_from_body(data):
    return {field: data[key] for key, field in ROLE_BODY_FIELDS.items() if key in data}

def handle_exception(e):
    error_map = {
        AuthenticationError: "401 Unauthorized",
        ValueError: "400 Bad Request",
        DuplicateNameError: "409 Conflict",
        DuplicateDefaultError: "409 Conflict",
        RoleInUseError: "409 Conflict",
        RoleConflictError: "409 Conflict",
    }
    status = error_map.get(type(e))
    if status is None:
        logger.exception("Unhandled error while processing request")
        return "500 Internal Server Error", json.dumps({"error": "Internal Server Error"})
    body = {"success": False, "message": str(e), "code": getattr(e, "code", None)}
    return status, json.dumps(body)

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def make_application(session_factory=SessionLocal):
    """요청마다 session_factory로 세션을 열어 서비스를 구성하는 WSGI 애플리케이션을 만듭니다."""

    def application(environ, start_response):
        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            access_repo = SqlalchemyAccessRepository(db_session)
            role_repo = SqlalchemyRoleRepository(db_session)
            account_role_repo = SqlalchemyAccountRoleRepository(db_session)
            role_access_repo = SqlalchemyRoleAccessRepository(db_session)

            # 2. 생성된 서비스 객체들을 environ을 통해 핸들러에 전달
            environ['services'] = {
                'menu': MenuService(access_repo, account_role_repo, role_access_repo),
                'role': RoleService(role_repo, account_role_repo),
            }

            # 3. 라우팅 및 핸들러 실행
            path = environ.get("PATH_INFO", "")
            method = environ.get("REQUEST_METHOD", "")

            handler, path_args = None, []
            for route_method, pattern, route_handler in ROUTES:
                if method == route_method and (match := re.match(pattern, path)):
                    handler, path_args = route_handler, match.groups()
                    break

            if handler:
                environ['current_user'] = get_current_user(environ)
                status, response_body = handler(environ, *path_args)
            else:
                status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

        except Exception as e:
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        start_response(status, [("Content-Type", "application/json")])
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def list_menus_handler(environ, *args):
    menus = environ['services']['menu'].list_menus(environ['current_user'])
    return '200 OK', json.dumps(menus)

def create_role_handler(environ, *args):
    fields = role_fields_from_body(get_request_data(environ))
    fields.setdefault("name", None)
    result = environ['services']['role'].create_role(**fields)
    return '201 Created', json.dumps(result.to_dict())

def delete_role_handler(environ, role_id):
    result = environ['services']['role'].delete_role(int(role_id))
    return '200 OK', json.dumps(result.to_dict())

def update_role_handler(environ, role_id):
    data = get_request_data(environ)
    result = environ['services']['role'].update_role(int(role_id), **role_fields_from_body(data))
    return '200 OK', json.dumps(result.to_dict())

def get_role_handler(environ, role_id):
    role = environ['services']['role'].get_role(int(role_id))
    return '200 OK', json.dumps(role)

def list_roles_handler(environ, *args):
    criteria = RoleListCriteria.from_params(get_query_params(environ))
    roles = environ['services']['role'].list_roles(criteria)
    return '200 OK', json.dumps(roles)

ROUTES = [
    ('GET', r'^/v1/menus$', list_menus_handler),
    ('POST', r'^/v1/roles$', create_role_handler),
    ('GET', r'^/v1/roles$', list_roles_handler),
    ('GET', r'^/v1/roles/([0-9]+)$', get_role_handler),
    ('PATCH', r'^/v1/roles/([0-9]+)$', update_role_handler),
    ('DELETE', r'^/v1/roles/([0-9]+)$', delete_role_handler),
]

application = make_application()

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    initialize_db()
    try:
        with make_server("", config.PORT, application) as httpd:
            logger.info("Serving console_access on port %s...", config.PORT)
            httpd.serve_forever()
    except OSError:
        logger.exception("Error starting server")
        raise
