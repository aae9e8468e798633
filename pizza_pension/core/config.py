import logging
import sys

from pizza_pension.core.logging import InterceptHandler
from loguru import logger
from starlette.config import Config
from starlette.datastructures import Secret

# Load .env
config = Config(".env")

# Core App Settings
API_PREFIX: str = config("API_PREFIX", default="/api/v1")
VERSION = "0.1.0"

# Session signing
# Load SECRET_KEY as Starlette Secret, fallback default included
try:
    SECRET_KEY: Secret = config("SECRET_KEY", cast=Secret)
except Exception:
    SECRET_KEY = Secret("testsecretkey1234567890")

ALGORITHM: str = config("ALGORITHM", default="HS256")

SESSION_EXPIRE_MINUTES: int = config("SESSION_EXPIRE_MINUTES", cast=int, default=60 * 24)
SESSION_COOKIE_NAME: str = config("SESSION_COOKIE_NAME", default="pizza_pension_session")
SESSION_COOKIE_SECURE: bool = config("SESSION_COOKIE_SECURE", cast=bool, default=False)
DEBUG: bool = config("DEBUG", cast=bool, default=False)
CREATE_TABLES_ON_STARTUP: bool = config("CREATE_TABLES_ON_STARTUP", cast=bool, default=True)
DESCRIPTION: str = config("DESCRIPTION", default="Pizza & Pension event registration")
DOCS_URL: str = config("DOCS_URL", default="/api/v1/docs")
PROJECT_NAME: str = config("PROJECT_NAME", default="pizza-pension")

# Event
EVENT_CAPACITY: int = config("EVENT_CAPACITY", cast=int, default=18)
ENFORCE_CAPACITY: bool = config("ENFORCE_CAPACITY", cast=bool, default=False)
ENFORCE_PIZZA_MENU: bool = config("ENFORCE_PIZZA_MENU", cast=bool, default=False)
EXPORT_DATE_FORMAT: str = config("EXPORT_DATE_FORMAT", default="%Y-%m-%d")

# DB Connection Pieces
POSTGRES_HOST: str = config("POSTGRES_HOST", default="127.0.0.1")
POSTGRES_PORT: str = config("POSTGRES_PORT", default="5432")
POSTGRES_USER: str = config("POSTGRES_USER", default="postgres")
POSTGRES_PASSWORD: str = config("POSTGRES_PASSWORD", default="password")
POSTGRES_DB: str = config("POSTGRES_DB", default="pizzapension")

# Full URL for SQLAlchemy, DATABASE_URL wins over the pieces
DATABASE_URL: str = config(
    "DATABASE_URL",
    default=(
        f"postgresql+asyncpg://{POSTGRES_USER}:{POSTGRES_PASSWORD}"
        f"@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
    ),
)
DB_ECHO: bool = config("DB_ECHO", cast=bool, default=False)

# Uvicorn settings
HOST: str = config("HOST", default="0.0.0.0")
PORT: int = config("PORT", cast=int, default=8080)
RELOAD: bool = config("RELOAD", cast=bool, default=False)

# Logging
LOGGING_LEVEL = logging.DEBUG if DEBUG else logging.INFO
logging.basicConfig(
    handlers=[InterceptHandler(level=LOGGING_LEVEL)],
    level=LOGGING_LEVEL,
)
logger.configure(handlers=[{"sink": sys.stderr, "level": LOGGING_LEVEL}])
