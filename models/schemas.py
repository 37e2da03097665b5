# models/schemas.py
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errors import InvalidInput


class PostFields(BaseModel):
    """게시글 입력 필드 허용 목록. 목록에 없는 키는 거절."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    image_location: Optional[str] = Field(None, max_length=255)
    views: int = Field(0, ge=0)  # null 불가 (기본 0)
    image_id: Optional[str] = Field(None, max_length=50)


class CommentFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    author: Optional[str] = Field(None, max_length=100)
    content: Optional[str] = None


def clean_fields(model: Type[BaseModel], fields: Any, what: str = "post") -> dict:
    """
    요청 바디(임의 매핑)를 허용된 컬럼 -> 값 dict 로 정리.
    - 매핑이 아니거나 비어 있으면 InvalidInput
    - 알 수 없는 키/잘못된 타입이면 InvalidInput (details 에 검증 메시지)
    - 실제로 전달된 키만 반환 (부분 업데이트용)
    """
    if not isinstance(fields, Mapping) or not fields:
        raise InvalidInput(f"Invalid {what} data", "Expected a non-empty JSON object")
    try:
        parsed = model.model_validate(dict(fields))
    except ValidationError as e:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise InvalidInput(f"Invalid {what} data", details) from e
    return parsed.model_dump(exclude_unset=True)
