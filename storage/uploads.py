# storage/uploads.py
import logging
import os
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from config import MAX_UPLOAD_SIZE
from errors import InvalidInput, NotFound, PayloadTooLarge, StorageUnavailable

logger = logging.getLogger(__name__)

# ── 파일명 정책 ─────────────────────────────────────────────
# minute: 분 단위 타임스탬프. 같은 분에 같은 이름이면 덮어씀 (알려진 약점)
# unique: 마이크로초 + 랜덤 접미사. 충돌 없음
MINUTE_FORMAT = "%Y-%m-%d %H:%M"
UNIQUE_FORMAT = "%Y-%m-%d %H:%M:%S.%f"

# multipart 경계/헤더 여유분
MULTIPART_OVERHEAD = 16 * 1024


def _check_stored_name(name: str) -> str:
    if not name or name in {".", ".."} or "/" in name or "\\" in name or "\x00" in name:
        raise InvalidInput("Invalid filename", name)
    return name


class UploadManager:
    """
    업로드 디렉토리 관리.
    - 디렉토리 자동 생성
    - MAX 크기 초과 시 아무것도 쓰지 않고 거절
    - 저장 파일명: '<타임스탬프>-<원본 파일명>'
    """

    def __init__(
        self,
        directory: str,
        max_size: int = MAX_UPLOAD_SIZE,
        name_policy: str = "minute",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.directory = os.path.abspath(directory)
        self.max_size = max_size
        self.name_policy = name_policy
        self.clock = clock

    def ensure_directory(self) -> str:
        try:
            os.makedirs(self.directory, exist_ok=True)
        except OSError as e:
            logger.error("Error creating upload directory %s: %s", self.directory, e)
            raise StorageUnavailable("Failed to create upload directory", str(e)) from e
        return self.directory

    def check_request_size(self, content_length: Optional[str]) -> None:
        """요청 본문을 읽기 전에 Content-Length 로 거절. 헤더가 없거나 이상하면 store() 에서 다시 검사."""
        try:
            length = int(content_length) if content_length is not None else None
        except ValueError:
            return
        if length is not None and length > self.max_size + MULTIPART_OVERHEAD:
            raise PayloadTooLarge(
                "File too large",
                f"Maximum upload size is {self.max_size} bytes",
            )

    def generate_name(self, original_name: str) -> str:
        now = self.clock()
        if self.name_policy == "unique":
            return f"{now.strftime(UNIQUE_FORMAT)}-{uuid.uuid4().hex[:8]}-{original_name}"
        return f"{now.strftime(MINUTE_FORMAT)}-{original_name}"

    async def store(self, file, original_name: Optional[str]) -> str:
        """file 은 async read(n) 을 제공하는 객체 (starlette UploadFile 등)."""
        # 경로 성분 제거 (../, C:\ 등)
        base = os.path.basename((original_name or "").replace("\\", "/")).strip()
        if not base or base in {".", ".."}:
            raise InvalidInput("Invalid multipart form data", "Missing file name")

        data = await file.read(self.max_size + 1)
        if len(data) > self.max_size:
            raise PayloadTooLarge(
                "File too large",
                f"Maximum upload size is {self.max_size} bytes",
            )

        self.ensure_directory()
        stored_name = self.generate_name(base)
        try:
            with open(os.path.join(self.directory, stored_name), "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error("Error saving upload %s: %s", stored_name, e)
            raise StorageUnavailable("Failed to upload image", str(e)) from e

        logger.info("Stored upload %s (%d bytes)", stored_name, len(data))
        return stored_name

    def resolve(self, stored_name: str) -> str:
        path = os.path.join(self.directory, _check_stored_name(stored_name))
        if not os.path.isfile(path):
            raise NotFound("File not found", stored_name)
        return path

    def delete(self, stored_name: str) -> None:
        path = os.path.join(self.directory, _check_stored_name(stored_name))
        try:
            os.remove(path)
        except FileNotFoundError as e:
            raise NotFound("File not found", stored_name) from e
        except OSError as e:
            logger.error("Error deleting file %s: %s", stored_name, e)
            raise StorageUnavailable("Failed to delete file", str(e)) from e
        logger.info("File %s deleted successfully", stored_name)

    def list(self) -> List[str]:
        try:
            return [
                name for name in os.listdir(self.directory)
                if os.path.isfile(os.path.join(self.directory, name))
            ]
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("Error listing uploads in %s: %s", self.directory, e)
            raise StorageUnavailable("Failed to list uploads", str(e)) from e
