"""
repositories/exceptions.py
--------------------------
Errors raised by the data access layer.

Callers branch on the class (and on `field` / `entity`) and show
`message` to the end user as-is.
"""

from typing import Optional


class RepositoryError(Exception):
    """Base class for every error raised by a repository."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RepositoryError):
    """Input rejected before touching the database."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NotFoundError(RepositoryError):
    """A referenced row does not exist."""

    def __init__(self, entity: str, entity_id: int, message: Optional[str] = None):
        super().__init__(message or f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InfrastructureError(RepositoryError):
    """The database driver failed; the original exception is kept in `cause`."""

    def __init__(self, cause: Exception):
        super().__init__(str(cause))
        self.cause = cause
