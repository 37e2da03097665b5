# database/connection.py
import logging
import os
import re
from typing import Optional

from databases import Database
from sqlalchemy import MetaData
from sqlalchemy.engine import make_url
from sqlalchemy.schema import CreateTable
from starlette import status

from errors import StorageUnavailable

logger = logging.getLogger(__name__)

metadata = MetaData()

_DB_NAME_RE = re.compile(r"^[A-Za-z0-9_$]+$")


class DatabaseState:
    """공유 커넥션 풀 + 준비 상태. 부트스트랩 실패 시 ready=False 로 남는다."""

    def __init__(self, database: Database):
        self.database = database
        self.ready = False
        self.error: Optional[str] = None

    def require(self) -> Database:
        if not self.ready:
            raise StorageUnavailable(
                "Database is not available",
                self.error,
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return self.database


def create_database(url: str) -> Database:
    return Database(url)


async def ensure_database(url: str) -> None:
    """
    대상 DB 자체를 준비.
    - sqlite: 파일 상위 디렉토리 생성
    - mysql: 서버에 접속해 CREATE DATABASE IF NOT EXISTS
    - 그 외: 외부에서 준비된 것으로 간주
    """
    u = make_url(url)
    backend = u.get_backend_name()

    if backend == "sqlite":
        path = u.database
        if path and path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        return

    if backend == "mysql":
        name = u.database
        if not name:
            return
        if not _DB_NAME_RE.match(name):
            raise ValueError(f"Unsupported database name: {name!r}")
        server = Database(u.set(database="").render_as_string(hide_password=False))
        await server.connect()
        try:
            await server.execute(f"CREATE DATABASE IF NOT EXISTS `{name}`")
        finally:
            await server.disconnect()
        logger.info('Database "%s" ensured', name)


async def create_tables(database: Database):
    # 테이블 정의가 metadata 에 등록되도록 import
    from models.posts import posts, comments
    from models.reference import social_media_links, site_icons

    if not database.is_connected:
        await database.connect()

    for table in (posts, comments, social_media_links, site_icons):
        await database.execute(CreateTable(table, if_not_exists=True))

    # databases 는 자동 커밋


async def bootstrap(state: DatabaseState, url: str, strict: bool = False) -> bool:
    """
    시작 시 1회: DB 확인 → 접속 → 테이블 생성.
    실패하면 로그만 남기고 계속 (strict=True 면 예외 전파). 재시도 없음.
    """
    try:
        await ensure_database(url)
        if not state.database.is_connected:
            await state.database.connect()
        await create_tables(state.database)
    except Exception as e:
        state.ready = False
        state.error = str(e)
        logger.error("Error bootstrapping database: %s", e)
        if strict:
            raise
        return False

    state.ready = True
    state.error = None
    logger.info("Tables created successfully")
    return True
