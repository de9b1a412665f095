from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .posts import PostOut


class PaginationMeta(BaseModel):
    """Pagination metadata, serialized with camelCase keys."""

    current_page: int = Field(..., description="Current page number")
    total_pages: int = Field(..., ge=0, description="ceil(total_posts / limit)")
    total_posts: int = Field(..., ge=0, description="Total number of posts")
    has_next: bool = Field(..., description="Whether there is a next page")
    has_prev: bool = Field(..., description="Whether there is a previous page")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PostListResponse(BaseModel):
    posts: list[PostOut] = Field(..., description="Posts on the requested page, newest first")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")


class MessageResponse(BaseModel):
    """Simple message response schema."""

    message: str = Field(..., description="Response message")


class FieldError(BaseModel):
    field: str = Field(..., description="Name of the invalid field")
    message: str = Field(..., description="Why the value was rejected")


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = Field(default=False)
    error: str = Field(..., description="Error message")
    errors: list[FieldError] | None = Field(None, description="Field-level validation errors")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Response timestamp")


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    uptime: float = Field(..., description="Process uptime in seconds")
    message: str = Field(..., description="OK or the failing dependency")
    timestamp: int = Field(..., description="Milliseconds since the epoch")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    database: str = Field(..., description="connected or disconnected")


class ProbeResponse(BaseModel):
    status: str = Field(..., description="Probe status")
    error: str | None = Field(None, description="Reason when not ready")


class ServiceInfoResponse(BaseModel):
    service: str = Field(..., description="Service name")
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="API version")
    docs: str | None = Field(None, description="OpenAPI docs path, hidden in production")
    health: str = Field(..., description="Health endpoint path")
    api_url: str = Field(..., description="Public base URL used by the blog client")
