# routers/uploads.py
import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from errors import ContentError, InvalidInput
from storage.uploads import UploadManager
from .deps import get_upload_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload-image")
async def upload_image(request: Request, uploads: UploadManager = Depends(get_upload_manager)):
    # 본문을 받기 전에 Content-Length 로 먼저 거절
    uploads.check_request_size(request.headers.get("content-length"))

    try:
        form = await request.form(max_files=1)
    except (MultiPartException, StarletteHTTPException) as e:
        raise InvalidInput("Invalid multipart form data", getattr(e, "detail", None) or str(e)) from e

    try:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            raise InvalidInput("Invalid multipart form data", "Missing file field 'image'")
        stored = await uploads.store(image, image.filename)
    finally:
        await form.close()
    return {"location": f"/api/uploads/{quote(stored)}"}


@router.delete("/delete-image/{filename}")
async def delete_image(filename: str, uploads: UploadManager = Depends(get_upload_manager)):
    # 실패해도 HTTP 에러 대신 success:false (게시글 레코드와는 무관)
    try:
        uploads.delete(filename)
    except ContentError as e:
        logger.error("Error deleting file %s: %s", filename, e.message)
        return {"success": False, "message": "Failed to delete file"}
    return {"success": True, "message": "File deleted successfully"}


@router.get("/uploads")
async def list_uploads(uploads: UploadManager = Depends(get_upload_manager)):
    return uploads.list()


@router.get("/uploads/{filename}")
async def get_upload(filename: str, uploads: UploadManager = Depends(get_upload_manager)):
    return FileResponse(uploads.resolve(filename))
