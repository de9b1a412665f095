from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from ..database import Base

DEFAULT_EXCERPT_LENGTH = 200
MAX_TITLE_LENGTH = 255
MAX_TAGS_LENGTH = 255


def utcnow() -> datetime:
    """Naive UTC timestamp with microsecond precision."""
    return datetime.now(UTC).replace(tzinfo=None)


class Post(Base):
    """SQLAlchemy model representing a blog post.

    Attributes:
        id (int): Generated identifier, never reused.
        title (str): Sanitized post title, max 255 characters.
        content (str): Full post content, usually markdown.
        excerpt (str | None): Optional sanitized short summary.
        tags (str | None): Free-text comma-separated labels.
        created_at (datetime): Creation timestamp (UTC).
        updated_at (datetime): Last modification timestamp (UTC).
    """

    __tablename__ = "posts"
    # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Unique post identifier",
    )
    title = Column(
        String(MAX_TITLE_LENGTH),
        nullable=False,
        doc="Post title with maximum 255 characters",
    )
    content = Column(
        Text,
        nullable=False,
        doc="Full post content",
    )
    excerpt = Column(
        Text,
        nullable=True,
        doc="Optional short summary",
    )
    tags = Column(
        String(MAX_TAGS_LENGTH),
        nullable=True,
        doc="Comma-separated labels",
    )
    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        index=True,
        doc="Post creation timestamp",
    )
    updated_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        doc="Last modification timestamp",
    )

    def __repr__(self) -> str:
        title_value = getattr(self, "title", None) or ""
        title_repr = title_value[:30] + "..." if len(title_value) > 30 else title_value
        return f"<Post(id={self.id}, title={title_repr!r})>"


posts_table = Post.__table__


def derive_excerpt(content: str | None, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Return a shortened preview of post content.

    Args:
        content: Full post content.
        length: Maximum number of characters kept before the ellipsis.

    Returns:
        str: Content unchanged when short enough, otherwise truncated with "...".
    """
    content = content or ""
    if len(content) <= length:
        return content
    return content[:length] + "..."
