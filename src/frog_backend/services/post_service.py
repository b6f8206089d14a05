"""Service-level helpers for the content-addressed post store."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from frog_backend.models.post import Post
from frog_backend.repositories.post_repo import PostRepository
from frog_backend.services.errors import InternalError, InvalidInput
from frog_backend.services.storage import LocalBlobStore, build_upload_name, local_upload_name
from frog_backend.services.validation import (
    HEX64_PATTERN,
    normalize_hex64,
    normalize_images,
    normalize_links,
    normalize_post_text,
    parse_list_input,
)
from frog_backend.utils.hash import content_hash as compute_content_hash

logger = logging.getLogger(__name__)

MAX_LOOKUP_HASHES: Final[int] = 100


@dataclass(frozen=True)
class ImageUpload:
    """An image file received with a post submission."""

    filename: str | None
    content_type: str | None
    data: bytes

    @property
    def is_image(self) -> bool:
        return str(self.content_type or "").lower().startswith("image/")


class PostService:
    """Create, look up and delete off-chain post bodies."""

    def __init__(
        self,
        session: Session,
        blobs: LocalBlobStore,
        *,
        max_image_size_bytes: int,
    ) -> None:
        self.session = session
        self.blobs = blobs
        self.max_image_size_bytes = max_image_size_bytes
        self.posts = PostRepository(session)

    async def create_post(
        self,
        *,
        text: Any,
        links: Any,
        images: Any,
        upload: ImageUpload | None,
        public_base_url: str,
    ) -> str:
        """Store a post body and return its content hash.

        Submitting the same normalized payload twice is a no-op that returns
        the same hash. An uploaded image replaces any image URLs provided.

        Raises:
            InvalidInput: If the text or the image upload is invalid.
            InternalError: If the post could not be stored.
        """
        normalized_text = normalize_post_text(text)
        normalized_links = normalize_links(parse_list_input(links))

        blob_name: str | None = None
        if upload is not None and upload.is_image:
            if len(upload.data) > self.max_image_size_bytes:
                raise InvalidInput(f"image max size is {self.max_image_size_bytes // (1024 * 1024)}MB")
            blob_name = build_upload_name(upload.filename)
            normalized_images = [self.blobs.public_url(blob_name, public_base_url)]
        else:
            normalized_images = normalize_images(parse_list_input(images))

        digest = compute_content_hash(normalized_text, normalized_links, normalized_images)

        try:
            if self.posts.get_by_hash(digest) is not None:
                return digest
            if blob_name is not None:
                await self.blobs.save(blob_name, upload.data)  # type: ignore[union-attr]
            self.posts.create(
                content_hash=digest,
                text=normalized_text,
                links=normalized_links,
                images=normalized_images,
            )
            self.session.commit()
        except IntegrityError:
            # A concurrent request stored the same payload first.
            self.session.rollback()
            await self._discard_blob(blob_name)
            return digest
        except (SQLAlchemyError, OSError) as exc:
            self.session.rollback()
            await self._discard_blob(blob_name)
            logger.exception("Failed to store post %s", digest)
            raise InternalError("failed to store post") from exc

        logger.info("Stored post %s", digest)
        return digest

    async def _discard_blob(self, blob_name: str | None) -> None:
        if blob_name is not None:
            await self.blobs.remove(blob_name)

    async def delete_post(self, raw_hash: Any) -> bool:
        """Delete a post and its uploaded images; return whether it existed.

        Raises:
            InvalidInput: If the hash is not 64 hex characters.
        """
        try:
            digest = normalize_hex64(raw_hash, "hash")
        except InvalidInput as exc:
            raise InvalidInput("invalid hash") from exc

        post = self.posts.get_by_hash(digest)
        if post is None:
            return False

        images = normalize_images(list(post.images or []))
        try:
            self.posts.delete(post)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Failed to delete post %s", digest)
            raise InternalError("failed to delete post") from exc

        for image_url in images:
            name = local_upload_name(image_url)
            if name is not None:
                await self.blobs.remove(name)
        logger.info("Deleted post %s", digest)
        return True

    def get_posts_by_hash(self, raw_hashes: str | None) -> dict[str, Post]:
        """Look up up to 100 comma-separated hashes; unknown ones are omitted."""
        raw = str(raw_hashes or "").strip()
        if not raw:
            return {}
        hashes = [item.strip().lower() for item in raw.split(",")]
        hashes = [item for item in hashes if HEX64_PATTERN.match(item)][:MAX_LOOKUP_HASHES]
        found = {post.content_hash: post for post in self.posts.list_by_hashes(hashes)}
        return {digest: found[digest] for digest in hashes if digest in found}
