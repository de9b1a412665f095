from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """Database connection and pool configuration."""

    url: str = Field(..., description="Async database connection URL")
    echo: bool = Field(default=False, description="Enable SQL query logging")
    pool_max: int = Field(default=20, ge=1, le=100, description="Maximum concurrent connections")
    idle_timeout: float = Field(default=30.0, gt=0, description="Seconds before a pooled connection is recycled")
    connect_timeout: float = Field(default=2.0, gt=0, description="Seconds to wait for a new connection")
    pool_pre_ping: bool = Field(default=True)
    exit_on_pool_fault: bool = Field(default=True, description="Terminate the process on a pool-level fault")


class InitConfig(BaseModel):
    """Startup schema initialization configuration."""

    on_start: bool = Field(default=True, description="Initialize schema and seed data on startup")
    max_attempts: int = Field(default=5, ge=1, le=100)
    retry_delay: float = Field(default=3.0, ge=0, description="Fixed delay between attempts in seconds")


class ServerConfig(BaseModel):
    """Server runtime configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3001, ge=1, le=65535, description="Server port")
    reload: bool = Field(default=False, description="Enable auto-reload in development")


class LoggingConfig(BaseModel):
    """Application logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
