"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, Request

from src.book_catalog.api.http.app_data import ApplicationDependencies
from src.book_catalog.core.services import DocumentStoreService
from src.book_catalog.entities import BookRepository, DocumentRepository


def get_document_store(request: Request) -> DocumentStoreService:
    """Get the document store service created at startup."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.document_store


def get_book_repository(
    store: DocumentStoreService = Depends(get_document_store),
) -> BookRepository:
    """Get a repository over the books collection."""
    return BookRepository(store.books_collection())


def get_document_repository(
    store: DocumentStoreService = Depends(get_document_store),
) -> DocumentRepository:
    """Get a repository over the raw documents collection."""
    return DocumentRepository(store.documents_collection())
