from functools import lru_cache
import os
from urllib.parse import quote_plus

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config_models import DatabaseConfig, InitConfig, LoggingConfig, ServerConfig

TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUE_VALUES


def to_async_dsn(url: str) -> str:
    """Rewrite a database URL so it uses an async driver."""
    if "+asyncpg" in url or "+aiosqlite" in url:
        return url
    if url.startswith("postgresql+psycopg2://"):
        return url.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def build_database_url() -> str:
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return to_async_dsn(explicit)

    user = os.getenv("DB_USER", "bloguser")
    password = os.getenv("DB_PASSWORD", "blogpassword")
    host = os.getenv("DB_HOST", "postgres-service")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "blogdb")
    auth = quote_plus(user) if not password else f"{quote_plus(user)}:{quote_plus(password)}"
    return f"postgresql+asyncpg://{auth}@{host}:{port}/{name}"


class Settings(BaseSettings):
    """Application settings assembled from environment variables and defaults."""

    # Environment
    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    debug: bool = Field(default=False)

    # API
    api_title: str = Field(default="Personal Blog API")
    api_version: str = Field(default="1.0.0")
    api_description: str = Field(default="REST API for a personal blog")
    service_name: str = Field(default="personal-blog-backend")

    # Public base URL the blog client uses to reach this API
    public_api_url: str = Field(default="http://localhost:3001")

    # Server
    server: ServerConfig = ServerConfig()

    # Logging
    logging: LoggingConfig = LoggingConfig()

    # Startup initialization
    init: InitConfig = InitConfig()

    # Database (populated in validator)
    database: DatabaseConfig | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _assemble_subconfigs(self):
        """Assemble nested configurations from environment variables."""
        self.database = DatabaseConfig(
            url=build_database_url(),
            echo=self.environment == "development" and self.debug,
            pool_max=int(os.getenv("DB_POOL_MAX", "20")),
            idle_timeout=float(os.getenv("DB_IDLE_TIMEOUT", "30")),
            connect_timeout=float(os.getenv("DB_CONNECT_TIMEOUT", "2")),
            pool_pre_ping=_env_flag("DB_POOL_PRE_PING", True),
            exit_on_pool_fault=_env_flag("DB_EXIT_ON_POOL_FAULT", True),
        )

        self.init = InitConfig(
            on_start=_env_flag("DB_INIT_ON_START", True),
            max_attempts=int(os.getenv("DB_INIT_MAX_ATTEMPTS", "5")),
            retry_delay=float(os.getenv("DB_INIT_RETRY_DELAY", "3")),
        )

        # Explicit LOG_LEVEL wins over the environment defaults
        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            self.logging.level = log_level.strip().upper()
        elif self.environment == "production":
            self.logging.level = "WARNING"
        elif self.environment == "development":
            self.logging.level = "DEBUG"

        # Server env overrides
        if os.getenv("HOST"):
            self.server.host = os.environ["HOST"]
        if os.getenv("PORT"):
            self.server.port = int(os.environ["PORT"])
        self.server.reload = _env_flag("RELOAD", self.server.reload)

        return self


@lru_cache
def get_settings() -> "Settings":
    """Return cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
