import os

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./ewave-autos.db"


def is_production() -> bool:
    """Detects if running in production via PRODUCTION variable"""
    return os.getenv("PRODUCTION", "false").lower() == "true"

def get_database_url() -> str:
    """Returns SQLAlchemy database URL based on environment"""
    if is_production():
        return os.getenv("DATABASE_URL_PROD")
    else:
        return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

def get_cors_origins() -> list[str]:
    """Returns allowed CORS origins (comma separated CORS_ORIGINS, default all)"""
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

def sql_echo_enabled() -> bool:
    return os.getenv("SQL_ECHO", "false").lower() == "true"
