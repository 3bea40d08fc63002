"""
Error taxonomy for the storefront services.

Services raise these; the HTTP layer turns them into responses using the
``status_code`` each one carries.
"""


class StorefrontError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    """A referenced Product, Customer or Purchase does not exist."""

    status_code = 404

    def __init__(self, entity: str, key=None):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found")


class ValidationError(StorefrontError):
    status_code = 400


class ConflictError(StorefrontError):
    """The write would break a uniqueness or referential-integrity rule."""

    status_code = 409


class TransactionError(StorefrontError):
    """Any failure inside the purchase workflow other than a missing entity."""

    status_code = 400


class AggregationError(StorefrontError):
    status_code = 500
