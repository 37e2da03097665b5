# routers/public.py
import os

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from starlette import status

router = APIRouter()


# ✅ DB 준비 상태 확인
@router.get("/api/health")
async def health(request: Request):
    backend = request.app.state.settings.storage_backend
    db_state = request.app.state.db_state
    if db_state is not None and not db_state.ready:
        return JSONResponse(
            {"status": "unavailable", "backend": backend, "details": db_state.error},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return {"status": "ok", "backend": backend}


# ✅ 나머지 GET 경로 (catch-all) - 반드시 마지막에 등록
@router.get("/{full_path:path}", include_in_schema=False)
async def spa_fallback(request: Request, full_path: str):
    # API 경로는 HTML 셸 대신 JSON 404
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse(
            {"message": "Not Found", "details": "/" + full_path},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    index = os.path.join(request.app.state.settings.spa_build_dir, "index.html")
    if os.path.isfile(index):
        return FileResponse(index, media_type="text/html")
    return PlainTextResponse("Page Not Found", status_code=status.HTTP_404_NOT_FOUND)
