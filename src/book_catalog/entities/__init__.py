"""Entities organized by business concept.

Each entity package holds its domain model (entity.py) next to its data
access layer (repository.py):
- book: records mapped to the Book model
- document: raw collection access with no model
"""

from .book import Book, BookCreate, BookRepository
from .document import DocumentRepository

__all__ = ["Book", "BookCreate", "BookRepository", "DocumentRepository"]
