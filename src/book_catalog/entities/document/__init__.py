from .repository import DocumentRepository

__all__ = ["DocumentRepository"]
