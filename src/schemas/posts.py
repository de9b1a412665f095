from datetime import datetime
from typing import Any

from markupsafe import escape
from pydantic import BaseModel, Field, field_validator

from db.models.post import MAX_TAGS_LENGTH, MAX_TITLE_LENGTH, derive_excerpt


def sanitize_text(text: str) -> str:
    """Trim surrounding whitespace and HTML-escape any markup."""
    return str(escape(text.strip()))


class TitleValidationMixin:
    @field_validator("title")
    @classmethod
    def validate_title(cls, title: str | None) -> str | None:
        if title is None:
            return None
        title = sanitize_text(title)
        if not title:
            raise ValueError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValueError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
        return title


class ExcerptValidationMixin:
    @field_validator("excerpt")
    @classmethod
    def validate_excerpt(cls, excerpt: str | None) -> str | None:
        if excerpt is None:
            return None
        return sanitize_text(excerpt)


class PostCreate(TitleValidationMixin, ExcerptValidationMixin, BaseModel):
    title: str = Field(..., description="Post title, HTML-escaped and trimmed before storage")
    content: str = Field(..., min_length=1, description="Post content, markdown allowed")
    excerpt: str | None = Field(None, description="Optional short summary")
    tags: str | None = Field(None, max_length=MAX_TAGS_LENGTH, description="Comma-separated labels")


class PostUpdate(TitleValidationMixin, ExcerptValidationMixin, BaseModel):
    """Partial update; only fields present in the request body are applied."""

    title: str | None = Field(None, description="New post title")
    content: str | None = Field(None, min_length=1, description="New post content")
    excerpt: str | None = Field(None, description="New excerpt; blank clears it")
    tags: str | None = Field(None, max_length=MAX_TAGS_LENGTH, description="New labels")

    def changes(self) -> dict[str, Any]:
        """Return the provided fields. Fields left out or sent as null keep their stored value."""
        result: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "excerpt" and value == "":
                value = None
            result[name] = value
        return result


class PostOut(BaseModel):
    id: int = Field(..., description="Post ID")
    title: str = Field(..., description="Post title")
    content: str = Field(..., description="Post content")
    excerpt: str | None = Field(None, description="Stored excerpt")
    tags: str | None = Field(None, description="Comma-separated labels")
    created_at: datetime = Field(..., description="Post creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    summary: str | None = Field(None, description="Excerpt, or a preview derived from content")

    model_config = {"from_attributes": True}

    def model_post_init(self, __context):
        self.summary = self.excerpt or derive_excerpt(self.content)
