"""Core services exports."""

from .document_store import DocumentStoreService

__all__ = ["DocumentStoreService"]
