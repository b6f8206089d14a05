"""SQLAlchemy models for the FROG social backend."""

from .post import Post
from .tip_receipt import TipReceipt

__all__ = [
    "Post",
    "TipReceipt",
]
