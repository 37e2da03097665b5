# routers/deps.py
from fastapi import Request

from models.reference import ReferenceData
from repositories.base import PostRepository, CommentRepository
from storage.uploads import UploadManager


def get_post_repository(request: Request) -> PostRepository:
    return request.app.state.posts


def get_comment_repository(request: Request) -> CommentRepository:
    return request.app.state.comments


def get_upload_manager(request: Request) -> UploadManager:
    return request.app.state.uploads


def get_reference_data(request: Request) -> ReferenceData:
    return request.app.state.reference
