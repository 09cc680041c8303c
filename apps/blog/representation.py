"""Mapping from stored blog posts to their public JSON shape."""
from datetime import datetime, timezone

from apps.blog.models import BlogPost


def full_name(author: dict) -> str:
    """Display name of an author document: "firstName lastName"."""
    return f"{author.get('firstName')} {author.get('lastName')}"


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def api_repr(post: BlogPost) -> dict:
    return {
        "id": post.id,
        "title": post.title,
        "author": full_name(post.author),
        "content": post.content,
        "created": as_utc(post.created),
    }
