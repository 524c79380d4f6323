"""Post entity.

Articles are owned by the content module; comments only need to know that
a post exists before attaching to it.
"""

from datetime import datetime

from pydantic import Field

from remarks.domain.model.common import DomainModel
from remarks.domain.value import PostId


class Post(DomainModel):
    """Minimal post identity."""

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    created_at: datetime = Field(default_factory=datetime.now)
