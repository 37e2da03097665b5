# routers/comments.py
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from starlette import status

from repositories.base import CommentRepository
from .deps import get_comment_repository

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/{post_id}")
async def list_comments(post_id: str, repo: CommentRepository = Depends(get_comment_repository)):
    return await repo.list_for_post(post_id)


@router.post("/{post_id}", status_code=status.HTTP_201_CREATED)
async def create_comment(
    post_id: str,
    fields: Any = Body(None),
    repo: CommentRepository = Depends(get_comment_repository),
):
    """댓글 작성 (게시글이 없으면 404)"""
    return await repo.add(post_id, fields)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    post_id: str,
    comment_id: Optional[str] = Query(None, alias="commentId"),
    repo: CommentRepository = Depends(get_comment_repository),
):
    """댓글 삭제. 해당 댓글이 이미 없으면 그대로 204"""
    await repo.remove(post_id, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
