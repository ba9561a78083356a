class BlogError(Exception):
    """Base exception for post and category operations."""


class ValidationError(BlogError):
    """Raised when submitted fields violate a constraint."""


class NotFoundError(BlogError):
    """Raised when a post or category lookup misses."""


class ConflictError(BlogError):
    """Raised when a unique constraint is violated, e.g. a duplicate slug."""
