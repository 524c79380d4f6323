"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from remarks.domain.repository.comment import CommentRepository
from remarks.domain.repository.post import PostRepository
from remarks.domain.repository.user import UserRepository

__all__ = [
    "CommentRepository",
    "PostRepository",
    "UserRepository",
]
