"""
Pydantic schemas for the Blog API.

Write schemas take the author as an object; the response schema carries it
as a single display string.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AuthorName(BaseModel):
    """Author as accepted on create."""
    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)


class BlogPostCreate(BaseModel):
    """Schema for creating a new post. Unknown keys (id, created) are ignored."""
    title: str = Field(..., min_length=1)
    author: AuthorName
    content: str = Field(..., min_length=1)


class AuthorPatch(BaseModel):
    """Partial author for updates. Only supplied names are replaced."""
    firstName: Optional[str] = None
    lastName: Optional[str] = None

    @field_validator("firstName", "lastName")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class BlogPostPatch(BaseModel):
    """
    Schema for updating a post. All fields optional.

    Use model_dump(exclude_unset=True) to get only the fields the client sent.
    """
    title: Optional[str] = None
    author: Optional[AuthorPatch] = None
    content: Optional[str] = None

    @field_validator("title", "author", "content")
    @classmethod
    def reject_null(cls, value):
        # Fields may be omitted, but not cleared
        if value is None:
            raise ValueError("may not be null")
        return value


class BlogPostResponse(BaseModel):
    """Public representation of a post."""
    id: str
    title: str
    author: str
    content: str
    created: datetime


class BlogPostList(BaseModel):
    blogs: list[BlogPostResponse]
