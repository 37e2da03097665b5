# repositories/memory.py
import itertools
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from errors import InvalidInput, NotFound
from models.schemas import PostFields, CommentFields, clean_fields
from .base import PostRepository, CommentRepository, DELETED_MESSAGE, parse_id

logger = logging.getLogger(__name__)

POST_DEFAULTS = {
    "title": None,
    "content": None,
    "image_location": None,
    "views": 0,
    "image_id": None,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """프로세스 내부 저장소. 게시글과 댓글을 함께 보관 (재시작 시 초기화)."""

    def __init__(self):
        self.posts: Dict[int, dict] = {}
        self.comments: Dict[int, List[dict]] = {}
        self._post_ids = itertools.count(1)
        self._comment_ids = itertools.count(1)

    def next_post_id(self) -> int:
        return next(self._post_ids)

    def next_comment_id(self) -> int:
        return next(self._comment_ids)


class MemoryPostRepository(PostRepository):

    def __init__(self, store: Optional[MemoryStore] = None):
        self.store = store or MemoryStore()

    def _check_image_id(self, values: dict, exclude: Optional[int] = None) -> None:
        image_id = values.get("image_id")
        if image_id is None:
            return
        for pid, post in self.store.posts.items():
            if pid != exclude and post.get("image_id") == image_id:
                raise InvalidInput("Failed to save post", f"image_id {image_id!r} already exists")

    async def create(self, fields: Mapping[str, Any]) -> dict:
        values = clean_fields(PostFields, fields)
        self._check_image_id(values)
        pid = self.store.next_post_id()
        self.store.posts[pid] = {"id": pid, **POST_DEFAULTS, "created_at": _now(), **values}
        self.store.comments[pid] = []
        return {"id": pid, **values}

    async def list(self) -> List[dict]:
        return [dict(p) for p in self.store.posts.values()]

    async def get_by_id(self, post_id: Any) -> dict:
        pid = parse_id(post_id)
        post = self.store.posts.get(pid)
        if post is None:
            raise NotFound("Post not found", {"id": pid})
        return dict(post)

    async def update(self, post_id: Any, fields: Mapping[str, Any]) -> dict:
        pid = parse_id(post_id)
        values = clean_fields(PostFields, fields)
        if pid not in self.store.posts:
            raise NotFound("Post not found", {"id": pid})
        self._check_image_id(values, exclude=pid)
        self.store.posts[pid].update(values)
        return await self.get_by_id(pid)

    async def delete(self, post_id: Any) -> dict:
        pid = parse_id(post_id)
        self.store.posts.pop(pid, None)
        self.store.comments.pop(pid, None)
        return dict(DELETED_MESSAGE)


class MemoryCommentRepository(CommentRepository):

    def __init__(self, store: MemoryStore):
        self.store = store

    def _comments_of(self, post_id: Any) -> List[dict]:
        pid = parse_id(post_id)
        if pid not in self.store.posts:
            raise NotFound("Post not found", {"id": pid})
        return self.store.comments.setdefault(pid, [])

    async def list_for_post(self, post_id: Any) -> List[dict]:
        return [dict(c) for c in self._comments_of(post_id)]

    async def add(self, post_id: Any, fields: Mapping[str, Any]) -> dict:
        values = clean_fields(CommentFields, fields, what="comment")
        bucket = self._comments_of(post_id)
        comment = {
            "id": self.store.next_comment_id(),
            "post_id": parse_id(post_id),
            "author": None,
            "content": None,
            "created_at": _now(),
            **values,
        }
        bucket.append(comment)
        return dict(comment)

    async def remove(self, post_id: Any, comment_id: Any) -> None:
        cid = parse_id(comment_id, what="comment")
        bucket = self._comments_of(post_id)
        bucket[:] = [c for c in bucket if c["id"] != cid]


def load_seed(store: MemoryStore, path: str) -> int:
    """시드 fixture(JSON) 를 메모리 저장소에 적재. 적재한 게시글 수 반환."""
    with open(path, encoding="utf-8") as f:
        items = json.load(f)

    count = 0
    for item in items:
        item = dict(item)
        seed_comments = item.pop("comments", [])
        values = clean_fields(PostFields, item)
        pid = store.next_post_id()
        store.posts[pid] = {"id": pid, **POST_DEFAULTS, "created_at": _now(), **values}
        store.comments[pid] = [
            {
                "id": store.next_comment_id(),
                "post_id": pid,
                "author": None,
                "content": None,
                "created_at": _now(),
                **clean_fields(CommentFields, c, what="comment"),
            }
            for c in seed_comments
        ]
        count += 1
    logger.info("Loaded %d seed posts from %s", count, path)
    return count
