# repositories/base.py
from abc import ABC, abstractmethod
from typing import Any, List, Mapping

from errors import InvalidInput

DELETED_MESSAGE = {"message": "Post deleted successfully"}


def parse_id(raw: Any, what: str = "post") -> int:
    """양의 정수 ID 만 허용 (int 또는 10진 문자열)."""
    if isinstance(raw, bool):
        raise InvalidInput(f"Invalid {what} ID", repr(raw))
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
    else:
        raise InvalidInput(f"Invalid {what} ID", repr(raw))
    if value <= 0:
        raise InvalidInput(f"Invalid {what} ID", repr(raw))
    return value


class PostRepository(ABC):
    """게시글 저장소 인터페이스. DB/메모리 구현이 같은 계약을 따른다."""

    @abstractmethod
    async def create(self, fields: Mapping[str, Any]) -> dict: ...

    @abstractmethod
    async def list(self) -> List[dict]: ...

    @abstractmethod
    async def get_by_id(self, post_id: Any) -> dict: ...

    @abstractmethod
    async def update(self, post_id: Any, fields: Mapping[str, Any]) -> dict: ...

    @abstractmethod
    async def delete(self, post_id: Any) -> dict: ...


class CommentRepository(ABC):

    @abstractmethod
    async def list_for_post(self, post_id: Any) -> List[dict]: ...

    @abstractmethod
    async def add(self, post_id: Any, fields: Mapping[str, Any]) -> dict: ...

    @abstractmethod
    async def remove(self, post_id: Any, comment_id: Any) -> None: ...
