"""Catalog error taxonomy"""


class CatalogError(Exception):
    """Base class for errors raised by the catalog core."""


class InvalidRequest(CatalogError):
    """The caller asked for something the query layer refuses to build."""


class StorageError(CatalogError):
    """The underlying store failed. Never retried at this layer."""
