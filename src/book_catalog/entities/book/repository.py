"""Repository: Book."""

from bson.errors import BSONError
from loguru import logger
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from src.book_catalog.core.errors import InvalidDocumentError, StoreOperationError

from .entity import Book, BookCreate


class BookRepository:
    """Data-access layer for books, mapping documents to the Book entity."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def list_all(self) -> list[Book]:
        """Return every book in the collection, in store order."""
        try:
            documents = await self._collection.find({}).to_list()
        except PyMongoError as e:
            raise StoreOperationError("Failed to list books") from e

        # ValidationError is a ValueError
        try:
            return [Book.from_document(document) for document in documents]
        except (TypeError, ValueError) as e:
            raise InvalidDocumentError("Stored document is not a valid book") from e

    async def create(self, book: BookCreate) -> Book:
        """Insert one book and return it with its assigned id.

        Raises:
            StoreOperationError: If the driver rejects the write, including
                documents it cannot encode as BSON (integers wider than
                64 bits, keys containing NUL, documents over the size limit).
        """
        document = book.to_document()
        try:
            result = await self._collection.insert_one(document)
        except (PyMongoError, BSONError, OverflowError) as e:
            raise StoreOperationError("Failed to save book") from e

        logger.debug("Inserted book {}", result.inserted_id)
        return Book.from_document({**document, "_id": result.inserted_id})
