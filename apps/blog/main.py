"""
Blog API

CRUD endpoints for a single collection of blog posts.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional, Type, TypeVar

from fastapi import APIRouter, Body, Depends, FastAPI, Response
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from apps.blog.collection import BlogCollection
from apps.blog.representation import api_repr
from apps.blog.schemas import BlogPostCreate, BlogPostList, BlogPostPatch, BlogPostResponse
from apps.shared.config import DATABASE_URL
from apps.shared.cors import setup_cors
from apps.shared.database import Database, get_db
from apps.shared.errors import NotFoundError, ValidationError, register_error_handlers
from apps.shared.request_logging import setup_request_logging

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "author", "content")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_collection(db: Session = Depends(get_db)) -> BlogCollection:
    return BlogCollection(db)


def parse_body(schema: Type[SchemaT], payload: dict) -> SchemaT:
    """Validate a request body against a schema, raising a 400 on failure."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ValidationError(f"Invalid request body: {details}") from e


router = APIRouter(prefix="/blogs", tags=["blogs"])


@router.get("", response_model=BlogPostList)
def list_blogs(blogs: BlogCollection = Depends(get_collection)):
    """List every blog post. No pagination."""
    return {"blogs": [api_repr(post) for post in blogs.find_all()]}


@router.get("/{blog_id}", response_model=BlogPostResponse)
def get_blog(blog_id: str, blogs: BlogCollection = Depends(get_collection)):
    post = blogs.find_by_id(blog_id)
    if post is None:
        raise NotFoundError(f"Blog post `{blog_id}` not found")
    return api_repr(post)


@router.post("", response_model=BlogPostResponse, status_code=201)
def create_blog(
    response: Response,
    payload: dict = Body(...),
    blogs: BlogCollection = Depends(get_collection),
):
    """
    Create a new blog post.
    Requires title, author ({firstName, lastName}) and content.
    """
    for field in REQUIRED_FIELDS:
        if field not in payload:
            raise ValidationError(f"Missing `{field}` in request body")

    data = parse_body(BlogPostCreate, payload)
    post = blogs.create(data)

    response.headers["Location"] = f"/blogs/{post.id}"
    return api_repr(post)


@router.put("/{blog_id}", response_model=BlogPostResponse)
def update_blog(
    blog_id: str,
    payload: dict = Body(...),
    blogs: BlogCollection = Depends(get_collection),
):
    """
    Update an existing blog post.
    The body must repeat the path id; only title, author and content are applied.
    """
    body_id = payload.get("id")
    if not (blog_id and body_id and blog_id == body_id):
        raise ValidationError(
            f"Request path id ({blog_id}) and request body id ({body_id}) must match"
        )

    # Update only provided fields
    patch = parse_body(BlogPostPatch, payload)
    post = blogs.find_by_id_and_update(blog_id, patch.model_dump(exclude_unset=True))
    if post is None:
        raise NotFoundError(f"Blog post `{blog_id}` not found")
    return api_repr(post)


@router.delete("/{blog_id}", status_code=204)
def delete_blog(blog_id: str, blogs: BlogCollection = Depends(get_collection)):
    """Delete a blog post. Succeeds whether or not the post existed."""
    blogs.find_by_id_and_remove(blog_id)
    return Response(status_code=204)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the Blog API around a Database.

    If the database has not been started by the caller (e.g. BlogServer),
    the app starts it from DATABASE_URL on startup and stops it on shutdown.
    In that mode uvicorn closes the listener before the lifespan exits, so
    the database is released after the listener. Use BlogServer.stop() when
    the database must be released first.
    """
    database = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_database = not database.is_started
        if owns_database:
            database.start(DATABASE_URL)
        try:
            yield
        finally:
            if owns_database:
                database.stop()

    app = FastAPI(
        title="Blog Service",
        version="1.0.0",
        description="CRUD API for blog posts",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        # "/blogs/" is not a route; answer 404 instead of redirecting
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.database = database

    # Setup CORS from shared configuration
    setup_cors(app)
    setup_request_logging(app)
    register_error_handlers(app)

    app.include_router(router)
    return app


app = create_app()
