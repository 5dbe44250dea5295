"""Errors raised by the product store.

Validation failures are reported before the database is touched. Not-found
failures are reported once the database has established that the targeted
row does not exist. Anything raised by SQLAlchemy or the driver passes
through untouched.
"""


class ProductStoreError(Exception):
    """Base class for errors raised by the store itself."""


class ValidationError(ProductStoreError, ValueError):
    """The item is malformed or carries a disallowed value."""


class NotFoundError(ProductStoreError, LookupError):
    """No product row matches the requested id."""
