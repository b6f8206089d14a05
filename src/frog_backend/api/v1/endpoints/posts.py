# src/frog_backend/api/v1/endpoints/posts.py
"""Off-chain post store endpoints."""

from typing import Any

from fastapi import APIRouter, Query, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from frog_backend.api.v1.dependencies import PostServiceDep
from frog_backend.core.settings import settings
from frog_backend.schemas.post import (
    PostCreate,
    PostCreated,
    PostDeleted,
    PostResponse,
    PostsByHashResponse,
)
from frog_backend.services.errors import InvalidInput
from frog_backend.services.post_service import ImageUpload

router = APIRouter(prefix="/posts", tags=["posts"])


async def _read_submission(
    request: Request,
    max_image_bytes: int,
) -> tuple[PostCreate, ImageUpload | None]:
    """Accept either a JSON body or a multipart form with an optional ``image`` file.

    At most one byte past ``max_image_bytes`` is read from the upload, enough
    for the size check to reject it.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        try:
            raw: Any = await request.json()
        except ValueError as err:
            raise InvalidInput("invalid json body") from err
        try:
            return PostCreate.model_validate(raw if isinstance(raw, dict) else {}), None
        except ValidationError as err:
            raise InvalidInput("invalid post body") from err

    form = await request.form()
    upload: ImageUpload | None = None
    image = form.get("image")
    if isinstance(image, UploadFile):
        upload = ImageUpload(
            filename=image.filename,
            content_type=image.content_type,
            data=await image.read(max_image_bytes + 1),
        )
    submission = PostCreate(
        text=str(form.get("text") or ""),
        links=str(form.get("links") or "[]"),
        images=str(form.get("images") or "[]"),
    )
    return submission, upload


def _public_base_url(request: Request) -> str:
    if settings.public_base_url:
        return settings.public_base_url.strip().rstrip("/")
    return str(request.base_url).rstrip("/")


@router.post("", response_model=PostCreated)
async def create_post(request: Request, posts: PostServiceDep) -> PostCreated:
    """Store a post body and return its content hash.

    Args:
        request: Incoming request carrying JSON or multipart post data
        posts: Post service

    Returns:
        The content hash under which the post is stored
    """
    submission, upload = await _read_submission(request, posts.max_image_size_bytes)
    digest = await posts.create_post(
        text=submission.text,
        links=submission.links,
        images=submission.images,
        upload=upload,
        public_base_url=_public_base_url(request),
    )
    return PostCreated(content_hash=digest)


@router.get("/by-hash", response_model=PostsByHashResponse)
async def get_posts_by_hash(
    posts: PostServiceDep,
    hashes: str | None = Query(None, description="Comma-separated content hashes (max 100)"),
) -> PostsByHashResponse:
    """Return the stored posts for the requested hashes; unknown hashes are omitted."""
    found = posts.get_posts_by_hash(hashes)
    return PostsByHashResponse(
        posts={digest: PostResponse.model_validate(post) for digest, post in found.items()}
    )


@router.delete("/{content_hash}", response_model=PostDeleted)
async def delete_post(content_hash: str, posts: PostServiceDep) -> PostDeleted:
    """Delete a post by hash together with its uploaded image."""
    return PostDeleted(deleted=await posts.delete_post(content_hash))
