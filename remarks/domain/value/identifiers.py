"""Strongly typed identifiers for domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
PostId = NewType("PostId", UUID)
UserId = NewType("UserId", UUID)

# Id of the content a comment is attached to (post, manga, novel, chapter)
TargetId = NewType("TargetId", UUID)
