# newsdesk/config.py
import os
from dotenv import load_dotenv

# load .env as soon as this module is imported
load_dotenv()


def _env_true(v: str | None) -> bool:
    return str(v).lower() in {"1", "true", "yes", "y"}


class Settings:
    # database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./newsdesk.db")
    SQL_ECHO: bool = _env_true(os.getenv("SQL_ECHO", "0"))
    DB_USE_NULLPOOL: bool = _env_true(os.getenv("DB_USE_NULLPOOL", "0"))
    DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "300"))
    SKIP_DB_INIT: bool = _env_true(os.getenv("SKIP_DB_INIT", "0"))

    # http
    FRONTEND_URL: str | None = os.getenv("FRONTEND_URL")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # LLM providers (absent key -> provider skipped)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TIMEOUT: float = float(os.getenv("GEMINI_TIMEOUT", "30"))
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    OPENAI_TIMEOUT: float = float(os.getenv("OPENAI_TIMEOUT", "15"))

    # minimum age of the newest article in a category before refetching
    FETCH_CACHE_MINUTES: int = int(os.getenv("FETCH_CACHE_MINUTES", "60"))


settings = Settings()
