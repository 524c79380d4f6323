"""User entity.

Only the identity needed to validate comment ownership is modelled here;
accounts themselves are managed elsewhere.
"""

from datetime import datetime

from pydantic import Field

from remarks.domain.model.common import DomainModel
from remarks.domain.value import UserId


class User(DomainModel):
    """Minimal user identity."""

    id: UserId
    handle: str = Field(min_length=1, max_length=255)
    created_at: datetime = Field(default_factory=datetime.now)
