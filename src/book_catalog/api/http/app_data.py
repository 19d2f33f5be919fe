from dataclasses import dataclass

from src.book_catalog.core.services import DocumentStoreService


@dataclass
class ApplicationDependencies:
    document_store: DocumentStoreService
