"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
BUNDLED_CONTENT_DIR = Path(__file__).resolve().parent / "content" / "lessons"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings:
    ENV: str
    LESSON_CONTENT_DIR: Path
    ALLOW_SLUG_OVERRIDE: bool
    ALLOW_DEV_CORS: bool
    DATABASE_URL: str
    MAX_SAVED_CODE_BYTES: int
    LOG_LEVEL: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        content_dir = os.getenv("LESSON_CONTENT_DIR", "").strip()
        self.LESSON_CONTENT_DIR = Path(content_dir).expanduser() if content_dir else BUNDLED_CONTENT_DIR
        self.ALLOW_SLUG_OVERRIDE = os.getenv("ALLOW_SLUG_OVERRIDE", "false").lower() == "true"
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'app.db'}")
        self.MAX_SAVED_CODE_BYTES = int(os.getenv("MAX_SAVED_CODE_BYTES", str(64 * 1024)))  # 64 KB default
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and self.ALLOW_SLUG_OVERRIDE:
            raise RuntimeError("ALLOW_SLUG_OVERRIDE is only permitted in the dev environment")
        if self.MAX_SAVED_CODE_BYTES <= 0:
            raise RuntimeError("MAX_SAVED_CODE_BYTES must be a positive integer")
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise RuntimeError(f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}")


settings = Settings()
