# console_access/config.py
import os

# 환경 변수로 덮어쓸 수 있는 설정값들
DATABASE_URL = os.environ.get("CONSOLE_ACCESS_DATABASE_URL", "sqlite:///console_access.db")
DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = int(os.environ.get("CONSOLE_ACCESS_PAGE_SIZE", "10"))
LOG_LEVEL = os.environ.get("CONSOLE_ACCESS_LOG_LEVEL", "INFO")
PORT = int(os.environ.get("CONSOLE_ACCESS_PORT", "8000"))
MAX_PAGE_SIZE = int(os.environ.get("CONSOLE_ACCESS_MAX_PAGE_SIZE", "100"))
# SQL OFFSET으로 보낼 수 있는 최댓값 (64비트 부호 있는 정수)
MAX_OFFSET = 2 ** 63 - 1
