"""
Article records and the in-memory article store.

The store keeps articles keyed by id, so at most one article exists per id.
Listing and search results are always produced in ascending id order.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .validation import is_numeric

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("id", "name", "price", "code")


class ArticleError(Exception):
    """Base class for article store errors."""


class DuplicateIdError(ArticleError):
    """An article with this id already exists."""


class NotFoundError(ArticleError):
    """No article with this id exists."""


class InvalidInputError(ArticleError, ValueError):
    """A value could not be parsed, or a search field is unknown."""


@dataclass(frozen=True)
class Article:
    """
    A single article.

    Attributes:
        id: Unique identifier (case-sensitive)
        name: Free text name, may be empty
        price: Price, any float including zero and negative values
        codes: EAN/barcode strings in input order, not validated
    """
    id: str
    name: str
    price: float
    codes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Frozen, so normalise via object.__setattr__; a bare string is one code
        if isinstance(self.codes, str):
            object.__setattr__(self, "codes", (self.codes,))
        elif not isinstance(self.codes, tuple):
            object.__setattr__(self, "codes", tuple(self.codes))


DEMO_ARTICLES = (
    Article("1001", "Apfel grün", 1.99, ("1234567890128", "9876543210986")),
    Article("1002", "Apfel rot", 2.99, ("5678901234565", "3456789012340")),
    Article("1003", "Banane", 3.49, ("7890123456789",)),
)


def split_codes(raw: str) -> list[str]:
    """Split a comma-separated code line. Individual codes are not trimmed."""
    return raw.split(",")


def parse_price(value: str | float) -> float:
    """Convert a price to float.

    Raises:
        InvalidInputError: If a string price is not numeric.
    """
    if isinstance(value, str):
        if not is_numeric(value):
            raise InvalidInputError(f"Not a number: {value!r}")
        return float(value)
    return float(value)


def _matches(article: Article, field_name: str, value: str | float) -> bool:
    if field_name == "code":
        return value in article.codes
    return getattr(article, field_name) == value


def format_header() -> str:
    """Return the table header line used for listings and search results."""
    return "%-10s | %-12s | %-8s | %-13s" % ("ID", "NAME", "PREIS", "EANS")


def format_article(article: Article) -> str:
    """Return one fixed-width table row for an article."""
    row = "%10s | %12s | %8.2f | " % (article.id, article.name, article.price)
    return row + " | ".join("%13s" % code for code in article.codes)


class ArticleStore:
    """In-memory collection of articles, unique by id."""

    def __init__(self, articles: Sequence[Article] = ()):
        self._articles: dict[str, Article] = {}
        for article in articles:
            self.create(article.id, article.name, article.price, article.codes)

    def __len__(self) -> int:
        return len(self._articles)

    def __contains__(self, article_id: object) -> bool:
        return article_id in self._articles

    def _require(self, article_id: str) -> Article:
        article = self._articles.get(article_id)
        if article is None:
            raise NotFoundError(f"Article with ID {article_id} does not exist")
        return article

    def get(self, article_id: str) -> Article | None:
        """Return the article with this id, or None."""
        return self._articles.get(article_id)

    def create(self, article_id: str, name: str, price: str | float, codes: str | Sequence[str]) -> Article:
        """Insert a new article.

        codes may be a raw comma-separated line or a sequence of codes.

        Raises:
            DuplicateIdError: If the id is already taken. The store is unchanged.
            InvalidInputError: If price is a non-numeric string.
        """
        if article_id in self._articles:
            raise DuplicateIdError(f"Article with ID {article_id} already exists")
        if isinstance(codes, str):
            codes = split_codes(codes)
        article = Article(article_id, name, parse_price(price), tuple(codes))
        self._articles[article_id] = article
        logger.debug("Created article %s", article_id)
        return article

    def list_articles(self) -> Iterator[Article]:
        """Yield all articles in ascending id order."""
        yield from sorted(self._articles.values(), key=lambda a: a.id)

    def update(
        self,
        article_id: str,
        name: str | None = None,
        price: str | float | None = None,
        codes: str | Sequence[str] | None = None,
    ) -> Article:
        """Replace an article with a rebuilt record.

        A field given as None or empty keeps the existing value. codes may be
        a raw comma-separated line or a sequence of codes.

        Raises:
            NotFoundError: If no article has this id.
            InvalidInputError: If price is a non-numeric string. Raised before
                any change is made.
        """
        current = self._require(article_id)

        new_price = current.price if price is None or price == "" else parse_price(price)
        if isinstance(codes, str):
            codes = split_codes(codes) if codes else None
        new_codes = tuple(codes) if codes else current.codes

        article = Article(
            id=article_id,
            name=name if name else current.name,
            price=new_price,
            codes=new_codes,
        )
        # Single assignment, readers see either the old or the new record
        self._articles[article_id] = article
        logger.debug("Updated article %s", article_id)
        return article

    def find_by(self, field_name: str, value: str | float) -> Iterator[Article]:
        """Yield articles whose field exactly equals value, in ascending id order.

        Args:
            field_name: One of "id", "name", "price", "code"
            value: Value to compare; for "code", membership in the article's codes

        Raises:
            InvalidInputError: For an unknown field or a non-numeric price.
        """
        if field_name not in SEARCH_FIELDS:
            raise InvalidInputError(
                f"Unknown search field {field_name!r}, expected one of {', '.join(SEARCH_FIELDS)}"
            )
        if field_name == "price":
            value = parse_price(value)
        # Validation above runs eagerly, only the scan is lazy
        return (article for article in self.list_articles() if _matches(article, field_name, value))

    def delete(self, article_id: str) -> Article:
        """Remove an article.

        Raises:
            NotFoundError: If no article has this id. The store is unchanged.
        """
        article = self._require(article_id)
        del self._articles[article_id]
        logger.debug("Deleted article %s", article_id)
        return article


def seed_demo_data(store: ArticleStore) -> int:
    """Insert the demo articles, skipping ids already present.

    Returns:
        Number of articles added.
    """
    added = 0
    for article in DEMO_ARTICLES:
        if article.id not in store:
            store.create(article.id, article.name, article.price, article.codes)
            added += 1
    logger.info("Seeded %d demo articles", added)
    return added
