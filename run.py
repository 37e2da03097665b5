# run.py
import sys
import os
import uvicorn

# 현재 파일 기준 루트 디렉토리를 모듈 경로로 등록
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, BASE_DIR)

from config import Settings  # noqa: E402

if __name__ == "__main__":
    settings = Settings.from_env()
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=os.getenv("RELOAD") == "1")
