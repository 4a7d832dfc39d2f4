"""
Article Manager - An interactive command-line article (inventory item) manager

Features:
- In-memory article store, unique by id
- Create, list, update, search and delete from a text menu
- Optional demo articles at startup
"""

from ._version import __version__
from .articles import (
    Article,
    ArticleError,
    ArticleStore,
    DuplicateIdError,
    InvalidInputError,
    NotFoundError,
    seed_demo_data,
)
from .validation import is_integer, is_numeric

__all__ = [
    "__version__",
    "Article",
    "ArticleStore",
    "ArticleError",
    "DuplicateIdError",
    "NotFoundError",
    "InvalidInputError",
    "seed_demo_data",
    "is_numeric",
    "is_integer",
]
