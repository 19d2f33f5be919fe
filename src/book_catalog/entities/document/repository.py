"""Repository for documents served as stored, without a model mapping."""

from typing import Any

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from src.book_catalog.core.errors import InvalidDocumentError, StoreOperationError
from src.book_catalog.entities._base import to_jsonable


class DocumentRepository:
    """Raw collection access: every document, JSON-encoded, nothing else."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def list_all(self) -> list[dict[str, Any]]:
        try:
            documents = await self._collection.find({}).to_list()
        except PyMongoError as e:
            raise StoreOperationError(
                f"Failed to query collection '{self._collection.name}'"
            ) from e

        try:
            return [to_jsonable(document) for document in documents]
        except (TypeError, ValueError) as e:
            raise InvalidDocumentError(
                f"Collection '{self._collection.name}' holds a document that cannot be rendered as JSON"
            ) from e
