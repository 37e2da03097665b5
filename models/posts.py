# models/posts.py

from sqlalchemy import Table, Column, Integer, String, Text, DateTime, ForeignKey, func, text
from database.connection import metadata

posts = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255)),                          # 제목
    Column("content", Text),                               # 본문
    Column("image_location", String(255)),                 # 대표 이미지 경로/URL
    Column("views", Integer, nullable=False, server_default=text("0")),  # 조회수
    Column("created_at", DateTime, server_default=func.current_timestamp()),  # 작성일시 (서버 지정)
    Column("image_id", String(50), unique=True),           # 업로드 이미지 식별자
)

# 댓글 테이블 (게시글 삭제 시 연쇄 삭제 없음)
comments = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("post_id", Integer, ForeignKey("posts.id")),    # 게시글 ID
    Column("author", String(100)),                         # 작성자
    Column("content", Text),                               # 댓글 내용
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

# 게시글에서 클라이언트가 쓸 수 있는 컬럼 (id, created_at 은 서버 전용)
POST_WRITABLE_COLUMNS = ("title", "content", "image_location", "views", "image_id")
COMMENT_WRITABLE_COLUMNS = ("author", "content")
