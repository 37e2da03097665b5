# models/reference.py
import base64
import logging
import mimetypes
import os
from typing import Dict, List, Optional

from sqlalchemy import Table, Column, Integer, String
from database.connection import metadata

logger = logging.getLogger(__name__)

social_media_links = Table(
    "social_media_links",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("url", String(255)),
    Column("name", String(100)),
    Column("icon", String(255)),
)

site_icons = Table(
    "site_icons",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100)),
    Column("icon", String(255)),
)

# (id, url, name, 아이콘 파일명)
SOCIAL_MEDIA_LINKS = [
    (1, "https://www.facebook.com", "Facebook", "facebook-app-symbol.png"),
    (2, "https://www.twitter.com", "Twitter", "twitter.png"),
    (3, "https://www.instagram.com", "Instagram", "instagram.png"),
    (4, "https://www.linkedin.com", "Linkedin", "linkedin.png"),
    (5, "https://www.pinterest.com", "Pinterest", "pinterest-logo.png"),
    (6, "https://www.youtube.com", "Youtube", "youtube.png"),
]

# (id, name, 아이콘 파일명)
SITE_ICONS = [
    (1, "Site Icon", "woman.png"),
    (2, "List", "list.png"),
    (3, "Close", "close.png"),
]


def _embed(assets_dir: str, filename: str) -> Optional[str]:
    path = os.path.join(assets_dir, filename)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error("Error loading asset %s: %s", path, e)
        return None
    mime = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


class ReferenceData:
    """
    정적 참조 데이터(소셜 링크, 사이트 아이콘). 시작 시 한 번 만들어 그대로 반환.
    embed=True 면 assets_dir 의 파일을 data URI 로 넣고, 읽지 못한 파일은 URL 로 남긴다.
    """

    def __init__(self, base_url: str, assets_dir: Optional[str] = None, embed: bool = False):
        self.base_url = base_url.rstrip("/")
        self.assets_dir = assets_dir
        self.embed = embed and bool(assets_dir)
        self._cache: Dict[str, Optional[str]] = {}
        self.social_media_links: List[dict] = [
            {"id": i, "url": url, "name": name, "icon": self._icon(icon)}
            for i, url, name, icon in SOCIAL_MEDIA_LINKS
        ]
        self.site_icons: List[dict] = [
            {"id": i, "name": name, "icon": self._icon(icon)}
            for i, name, icon in SITE_ICONS
        ]

    def _icon(self, filename: str) -> str:
        if self.embed:
            if filename not in self._cache:
                self._cache[filename] = _embed(self.assets_dir, filename)
            embedded = self._cache[filename]
            if embedded:
                return embedded
        return f"{self.base_url}/assets/{filename}"
