"""
Blog database models.

One flat collection of blog posts. The author is kept as a small JSON
document ({"firstName": ..., "lastName": ...}); the display name is derived
on read and never stored.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, String, Text

from apps.shared.database import Base


def generate_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlogPost(Base):
    """
    A single blog post.

    - id: opaque identifier, generated on insert
    - title, content: required text
    - author: {"firstName": str, "lastName": str}
    - created: set on insert unless supplied
    """
    __tablename__ = "blogs"

    id = Column(String(32), primary_key=True, default=generate_id)
    title = Column(Text, nullable=False)
    author = Column(JSON, nullable=False)
    content = Column(Text, nullable=False)
    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<BlogPost id={self.id} title={self.title!r}>"
