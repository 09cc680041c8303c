"""
Blog collection handle

All store access for blog posts goes through BlogCollection. Each operation
is attempted once; any SQLAlchemy failure is rolled back and raised as
StoreError so the API can answer with a generic 500.
"""
import logging
from datetime import datetime
from functools import wraps
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from apps.blog.models import BlogPost
from apps.blog.schemas import BlogPostCreate
from apps.shared.errors import StoreError

logger = logging.getLogger(__name__)


def store_operation(description: str):
    """Translate store failures in a BlogCollection method into StoreError."""

    def decorator(method):
        @wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except SQLAlchemyError as e:
                self.db.rollback()
                raise StoreError(description) from e
        return wrapper

    return decorator


class BlogCollection:
    def __init__(self, db: Session):
        self.db = db

    @store_operation("List blog posts")
    def find_all(self) -> list[BlogPost]:
        return self.db.query(BlogPost).all()

    @store_operation("Count blog posts")
    def count(self) -> int:
        return self.db.query(BlogPost).count()

    @store_operation("Fetch blog post")
    def find_by_id(self, post_id: str) -> Optional[BlogPost]:
        return self.db.query(BlogPost).filter(BlogPost.id == post_id).first()

    @store_operation("Create blog post")
    def create(self, data: BlogPostCreate, created: Optional[datetime] = None) -> BlogPost:
        post = BlogPost(
            title=data.title,
            author=data.author.model_dump(),
            content=data.content,
        )
        if created is not None:
            post.created = created
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info(f"Created blog post {post.id}")
        return post

    @store_operation("Update blog post")
    def find_by_id_and_update(self, post_id: str, changes: dict) -> Optional[BlogPost]:
        """
        Apply a partial update and return the updated post.

        `changes` holds only the fields to replace (title, author, content).
        An author dict is merged over the stored author. Returns None if no
        post has this id.
        """
        post = self.db.query(BlogPost).filter(BlogPost.id == post_id).first()
        if post is None:
            return None

        for key, value in changes.items():
            if key == "author":
                # Assign a new dict so the JSON column is flagged as modified
                value = {**post.author, **value}
            setattr(post, key, value)

        self.db.commit()
        self.db.refresh(post)
        logger.info(f"Updated blog post {post_id}: {sorted(changes)}")
        return post

    @store_operation("Delete blog post")
    def find_by_id_and_remove(self, post_id: str) -> bool:
        """Delete a post by id. Returns False if there was nothing to delete."""
        post = self.db.query(BlogPost).filter(BlogPost.id == post_id).first()
        if post is None:
            return False
        self.db.delete(post)
        self.db.commit()
        logger.info(f"Deleted blog post {post_id}")
        return True
