"""Shared API dependencies wiring services to request-scoped resources."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from frog_backend.core.settings import settings
from frog_backend.db import get_db
from frog_backend.services.chain import ChainVerifier, get_chain_verifier
from frog_backend.services.post_service import PostService
from frog_backend.services.storage import LocalBlobStore, get_blob_store
from frog_backend.services.tip_service import TipLedgerService

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_chain_verifier_dep() -> ChainVerifier:
    """Return the shared chain verifier."""
    return get_chain_verifier()


def get_blob_store_dep() -> LocalBlobStore:
    """Return the shared blob store for uploaded images."""
    return get_blob_store()


ChainVerifierDep = Annotated[ChainVerifier, Depends(get_chain_verifier_dep)]
BlobStoreDep = Annotated[LocalBlobStore, Depends(get_blob_store_dep)]


def get_tip_service(db: SessionDep, verifier: ChainVerifierDep) -> TipLedgerService:
    """Build the tip ledger service for the current request."""
    return TipLedgerService(db, verifier)


def get_post_service(db: SessionDep, blobs: BlobStoreDep) -> PostService:
    """Build the post service for the current request."""
    return PostService(db, blobs, max_image_size_bytes=settings.max_image_size_bytes)


TipServiceDep = Annotated[TipLedgerService, Depends(get_tip_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
