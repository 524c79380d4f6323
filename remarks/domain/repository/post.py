"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from remarks.domain.model.post import Post
from remarks.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post lookups.

    Comments only need to check that the article they attach to exists.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass
