"""Entity: Book."""

from pydantic import Field

from src.book_catalog.entities._base import Entity, Payload


class BookCreate(Payload):
    """Fields accepted when appending a book.

    Every field is optional and unknown fields are kept, so a payload is
    stored exactly as submitted once its declared fields pass type checks.
    """

    title: str | None = Field(default=None, description="Title")
    author: str | None = Field(default=None, description="Author")
    publishedYear: int | None = Field(default=None, description="Year of publication")


class Book(BookCreate, Entity):
    """A persisted book record, identified by the store-assigned ``id``."""
