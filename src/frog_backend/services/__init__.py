# src/frog_backend/services/__init__.py
"""Business logic services for the FROG social backend."""

from .chain import ChainVerifier
from .post_service import PostService
from .storage import LocalBlobStore
from .tip_service import TipLedgerService

__all__ = [
    "ChainVerifier",
    "LocalBlobStore",
    "PostService",
    "TipLedgerService",
]
