"""Book Catalog: list and append book records kept in MongoDB over HTTP."""

__version__ = "0.1.0"
