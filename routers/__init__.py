# routers/__init__.py
from fastapi import APIRouter
from .posts import router as posts_router
from .comments import router as comments_router
from .uploads import router as uploads_router
from .reference import router as reference_router
from .public import router as public_router

router = APIRouter()

# ✅ 순서 중요: public 은 catch-all 이므로 가장 마지막
router.include_router(posts_router)
router.include_router(comments_router)
router.include_router(uploads_router)
router.include_router(reference_router)
router.include_router(public_router)
