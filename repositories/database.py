# repositories/database.py
import logging
from typing import Any, List, Mapping

from sqlalchemy import select

from database.connection import DatabaseState
from errors import ContentError, InvalidInput, NotFound, StorageUnavailable
from models.posts import posts, comments
from models.schemas import PostFields, CommentFields, clean_fields
from .base import PostRepository, CommentRepository, DELETED_MESSAGE, parse_id

logger = logging.getLogger(__name__)


def _is_integrity_error(e: Exception) -> bool:
    # sqlite3 / pymysql 모두 DB-API IntegrityError 이름을 사용
    return any(cls.__name__ == "IntegrityError" for cls in type(e).__mro__)


def _as_dict(row, table) -> dict:
    # Record 는 컬럼명으로 접근할 때 타입 변환(DateTime 등)이 적용된다
    return {c.name: row[c.name] for c in table.c}


async def _run(label: str, coro):
    """드라이버 예외를 분류: 제약 위반 -> InvalidInput, 그 외 -> StorageUnavailable."""
    try:
        return await coro
    except ContentError:
        raise
    except Exception as e:
        if _is_integrity_error(e):
            raise InvalidInput(f"Failed to {label}", str(e)) from e
        logger.error("Error trying to %s: %s", label, e)
        raise StorageUnavailable(f"Failed to {label}", str(e)) from e


class DatabasePostRepository(PostRepository):
    """posts 테이블 CRUD. 각 호출은 쓰기 문장 최대 1개 (트랜잭션 없음)."""

    def __init__(self, state: DatabaseState):
        self.state = state

    async def create(self, fields: Mapping[str, Any]) -> dict:
        values = clean_fields(PostFields, fields)
        db = self.state.require()
        # 컬럼 목록은 허용 목록을 통과한 키만
        new_id = await _run("create post", db.execute(posts.insert().values(**values)))
        return {"id": new_id, **values}

    async def list(self) -> List[dict]:
        db = self.state.require()
        rows = await _run("fetch posts", db.fetch_all(posts.select()))
        return [_as_dict(r, posts) for r in rows]

    async def get_by_id(self, post_id: Any) -> dict:
        pid = parse_id(post_id)
        db = self.state.require()
        row = await _run("fetch post", db.fetch_one(posts.select().where(posts.c.id == pid)))
        if row is None:
            raise NotFound("Post not found", {"id": pid})
        return _as_dict(row, posts)

    async def update(self, post_id: Any, fields: Mapping[str, Any]) -> dict:
        pid = parse_id(post_id)
        values = clean_fields(PostFields, fields)
        db = self.state.require()
        await _run("update post", db.execute(posts.update().where(posts.c.id == pid).values(**values)))
        return await self.get_by_id(pid)

    async def delete(self, post_id: Any) -> dict:
        pid = parse_id(post_id)
        db = self.state.require()
        # 존재 여부와 무관하게 성공 처리. 댓글은 연쇄 삭제하지 않음
        await _run("delete post", db.execute(posts.delete().where(posts.c.id == pid)))
        return dict(DELETED_MESSAGE)


class DatabaseCommentRepository(CommentRepository):

    def __init__(self, state: DatabaseState):
        self.state = state

    async def _require_post(self, post_id: Any) -> int:
        pid = parse_id(post_id)
        db = self.state.require()
        row = await _run("fetch post", db.fetch_one(select(posts.c.id).where(posts.c.id == pid)))
        if row is None:
            raise NotFound("Post not found", {"id": pid})
        return pid

    async def list_for_post(self, post_id: Any) -> List[dict]:
        pid = await self._require_post(post_id)
        q = comments.select().where(comments.c.post_id == pid).order_by(comments.c.id)
        rows = await _run("fetch comments", self.state.database.fetch_all(q))
        return [_as_dict(r, comments) for r in rows]

    async def add(self, post_id: Any, fields: Mapping[str, Any]) -> dict:
        values = clean_fields(CommentFields, fields, what="comment")
        pid = await self._require_post(post_id)
        db = self.state.database
        new_id = await _run("create comment", db.execute(comments.insert().values(post_id=pid, **values)))
        row = await _run("fetch comment", db.fetch_one(comments.select().where(comments.c.id == new_id)))
        return _as_dict(row, comments) if row else {"id": new_id, "post_id": pid, **values}

    async def remove(self, post_id: Any, comment_id: Any) -> None:
        cid = parse_id(comment_id, what="comment")
        pid = await self._require_post(post_id)
        await _run(
            "delete comment",
            self.state.database.execute(
                comments.delete().where(comments.c.id == cid, comments.c.post_id == pid)
            ),
        )
