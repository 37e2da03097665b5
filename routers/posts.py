# routers/posts.py
from typing import Any

from fastapi import APIRouter, Body, Depends
from starlette import status

from repositories.base import PostRepository
from .deps import get_post_repository

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    fields: Any = Body(None),
    repo: PostRepository = Depends(get_post_repository),
):
    return await repo.create(fields)


@router.get("")
async def list_posts(repo: PostRepository = Depends(get_post_repository)):
    # 글이 없으면 빈 배열
    return await repo.list() or []


# post_id 는 문자열로 받아 저장소에서 검증 (잘못된 ID -> 400)
@router.get("/{post_id}")
async def get_post(post_id: str, repo: PostRepository = Depends(get_post_repository)):
    return await repo.get_by_id(post_id)


@router.put("/{post_id}")
async def update_post(
    post_id: str,
    fields: Any = Body(None),
    repo: PostRepository = Depends(get_post_repository),
):
    return await repo.update(post_id, fields)


@router.delete("/{post_id}")
async def delete_post(post_id: str, repo: PostRepository = Depends(get_post_repository)):
    return await repo.delete(post_id)
