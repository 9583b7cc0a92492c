class ReadlistError(Exception):
    """Base exception for failures raised by readlist services."""

    pass


class CatalogUnavailable(ReadlistError):
    """Raised when the book catalog cannot be reached or answers with an error."""

    pass


class RecommendationUnavailable(ReadlistError):
    """Raised when the language model is misconfigured, fails, or returns nothing usable."""

    pass


class StorageFailure(ReadlistError):
    """Raised when a shelf operation fails in the persistence layer."""

    pass
