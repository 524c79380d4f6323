"""Domain layer errors."""

from collections.abc import Iterable


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised for malformed paths and for category/target/post mismatches.
    """

    pass


class NotFoundError(DomainError):
    """Raised when one or more referenced resources do not exist.

    Every missing identifier is reported, not just the first one.
    """

    def __init__(self, resource: str, identifiers: str | Iterable[object]):
        if isinstance(identifiers, str):
            identifiers = [identifiers]
        self.resource = resource
        self.identifiers = [str(identifier) for identifier in identifiers]
        super().__init__(f"{resource} not found: {', '.join(self.identifiers)}")

    @property
    def identifier(self) -> str:
        """First missing identifier."""
        return self.identifiers[0] if self.identifiers else ""


class InconsistencyError(DomainError):
    """Raised when stored rows do not form a valid tree.

    Covers orphaned rows (parent vanished) and repeated ids. These are
    server-side faults and are never repaired silently.
    """

    def __init__(self, message: str, comment_id: str | None = None):
        self.comment_id = comment_id
        super().__init__(message)
