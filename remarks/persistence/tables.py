"""SQLAlchemy table definitions.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("handle", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_handle", users_table.c.handle)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(300), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("body", Text, nullable=False),
    Column(
        "category",
        postgresql.ENUM(
            "post",
            "manga",
            "novel",
            "chapter",
            name="comment_category",
            create_type=False,
        ),
        nullable=False,
        server_default="post",
    ),
    Column("target_id", UUID(as_uuid=True), nullable=False),
    # Only set for category = 'post'
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # Materialized path: "<root-id>/<child-id>/..."
    Column("path", String, nullable=False),
    Column(
        "parent_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(category = 'post') = (post_id IS NOT NULL)",
        name="post_reference_matches_category",
    ),
)

Index("idx_comments_category_target", comments_table.c.category, comments_table.c.target_id)
Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_user_id", comments_table.c.user_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
# Prefix range scans on path need the pattern operator class
Index(
    "idx_comments_path",
    comments_table.c.path,
    postgresql_ops={"path": "text_pattern_ops"},
)
