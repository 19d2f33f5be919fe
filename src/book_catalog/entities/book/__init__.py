"""Entity package: Book."""

from .entity import Book, BookCreate
from .repository import BookRepository

__all__ = ["Book", "BookCreate", "BookRepository"]
