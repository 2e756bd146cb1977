"""Initial schema."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20261019_01_initial"
down_revision = None
branch_labels = None
depends_on = None

CONTENT_TABLES = ("bio", "social_media", "posts", "projects", "experiences")


def _content_columns() -> list[sa.Column]:
    """Columns every owned content table starts with."""
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "bio",
        *_content_columns(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
    )

    op.create_table(
        "social_media",
        *_content_columns(),
        sa.Column("platform", sa.String(32), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.CheckConstraint(
            "platform IN ('x', 'bluesky', 'github', 'instagram')",
            name="ck_social_media_platform",
        ),
    )

    op.create_table(
        "posts",
        *_content_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "status",
            sa.String(16),
            nullable=False,
            server_default=sa.text("'draft'"),
        ),
        sa.CheckConstraint(
            "status IN ('published', 'draft')",
            name="ck_post_status",
        ),
    )
    op.create_index("idx_posts_status_created", "posts", ["status", "created_at"])

    op.create_table(
        "projects",
        *_content_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
    )

    op.create_table(
        "experiences",
        *_content_columns(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("company", sa.Text(), nullable=False),
        sa.Column("company_url", sa.Text(), nullable=True),
        sa.Column("start_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("end_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
    )

    for table in CONTENT_TABLES:
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])


def downgrade() -> None:
    for table in reversed(CONTENT_TABLES):
        op.drop_index(f"ix_{table}_user_id", table_name=table)

    op.drop_table("experiences")
    op.drop_table("projects")
    op.drop_index("idx_posts_status_created", table_name="posts")
    op.drop_table("posts")
    op.drop_table("social_media")
    op.drop_table("bio")
    op.drop_table("users")
