"""Materialized path codec.

Every comment row stores its full ancestor chain as a string of id
segments joined by ``SEPARATOR``::

    root                      -> "<root-id>"
    reply to root             -> "<root-id>/<reply-id>"
    reply to that reply       -> "<root-id>/<reply-id>/<id>"

Ancestor/descendant checks are then plain prefix checks. The prefix always
includes the trailing separator so that ``"1/20"`` is never mistaken for a
descendant of ``"1/2"``.

All functions are pure. Malformed input raises ``ValidationError``.
"""

import re
from uuid import UUID

from remarks.domain.error import ValidationError

SEPARATOR = "/"

# Ids are UUIDs in practice; any alphanumeric/hyphen label is accepted
SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")


def _segment(value: UUID | str) -> str:
    segment = str(value)
    if not SEGMENT_PATTERN.match(segment):
        raise ValidationError(f"Invalid path segment: {segment!r}")
    return segment


def segments(path: str) -> list[str]:
    """Split a path into its id segments.

    Args:
        path: Materialized path

    Returns:
        Segments from root to leaf

    Raises:
        ValidationError: If the path is empty or has an empty/invalid segment
    """
    if not isinstance(path, str) or not path:
        raise ValidationError("Path must be a non-empty string")
    parts = path.split(SEPARATOR)
    for part in parts:
        if not part:
            raise ValidationError(f"Path has an empty segment: {path!r}")
        _segment(part)
    return parts


def encode(parent_path: str | None, self_id: UUID | str) -> str:
    """Compute the path of a new node.

    Args:
        parent_path: Path of the parent, or None/"" for a root
        self_id: Id of the new node

    Returns:
        ``parent_path/self_id``, or ``self_id`` alone for a root
    """
    segment = _segment(self_id)
    if not parent_path:
        return segment
    segments(parent_path)
    return f"{parent_path}{SEPARATOR}{segment}"


def is_descendant(path: str, ancestor_path: str) -> bool:
    """Check whether ``path`` lies strictly below ``ancestor_path``."""
    segments(path)
    segments(ancestor_path)
    return path.startswith(ancestor_path + SEPARATOR)


def depth(path: str) -> int:
    """Number of separators in the path (0 for a root)."""
    return len(segments(path)) - 1


def parent_path(path: str) -> str | None:
    """Path of the parent node, or None for a root."""
    parts = segments(path)
    if len(parts) == 1:
        return None
    return SEPARATOR.join(parts[:-1])


def contains(path: str, node_id: UUID | str) -> bool:
    """Check whether ``node_id`` is one of the path's components."""
    return _segment(node_id) in segments(path)


def descendant_prefix(path: str) -> str:
    """Prefix shared by every strict descendant of ``path``."""
    segments(path)
    return path + SEPARATOR
