# config.py
import os
from dataclasses import dataclass

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

DB_PATH = os.path.join(BASE_DIR, "db.sqlite3")

# 5MB
MAX_UPLOAD_SIZE = 5 * 1024 * 1024

BACKENDS = {"database", "memory"}
NAME_POLICIES = {"minute", "unique"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    storage_backend: str = "database"
    database_url: str = f"sqlite+aiosqlite:///{DB_PATH}"
    strict_startup: bool = False
    upload_dir: str = os.path.join(BASE_DIR, "uploads")
    max_upload_size: int = MAX_UPLOAD_SIZE
    upload_name_policy: str = "minute"
    public_base_url: str = "http://localhost:3001"
    embed_assets: bool = False
    assets_dir: str = os.path.join(BASE_DIR, "assets")
    memory_seed: bool = False
    spa_build_dir: str = os.path.join(BASE_DIR, "build")
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001

    def __post_init__(self):
        if self.storage_backend not in BACKENDS:
            raise ValueError(f"Unknown STORAGE_BACKEND: {self.storage_backend!r}")
        if self.upload_name_policy not in NAME_POLICIES:
            raise ValueError(f"Unknown UPLOAD_NAME_POLICY: {self.upload_name_policy!r}")

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            storage_backend=os.getenv("STORAGE_BACKEND", defaults.storage_backend).strip().lower(),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            strict_startup=_env_bool("STRICT_STARTUP", defaults.strict_startup),
            upload_dir=os.getenv("UPLOAD_DIR", defaults.upload_dir),
            max_upload_size=int(os.getenv("MAX_UPLOAD_SIZE", str(defaults.max_upload_size))),
            upload_name_policy=os.getenv("UPLOAD_NAME_POLICY", defaults.upload_name_policy).strip().lower(),
            public_base_url=os.getenv("PUBLIC_BASE_URL", defaults.public_base_url).rstrip("/"),
            embed_assets=_env_bool("EMBED_ASSETS", defaults.embed_assets),
            assets_dir=os.getenv("ASSETS_DIR", defaults.assets_dir),
            memory_seed=_env_bool("MEMORY_SEED", defaults.memory_seed),
            spa_build_dir=os.getenv("SPA_BUILD_DIR", defaults.spa_build_dir),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", str(defaults.port))),
        )
