"""Exceptions raised by the catalog services and repositories."""


class CatalogError(Exception):
    """Base class for book catalog errors."""


class StoreUnavailableError(CatalogError):
    """The document store could not be reached at startup."""


class StoreOperationError(CatalogError):
    """A database call made on behalf of a request failed."""


class InvalidBookError(CatalogError):
    """A request body could not be turned into a book."""


class InvalidDocumentError(CatalogError):
    """A stored document could not be mapped to a book."""
