"""create content and auth tables

Revision ID: 4c1d2e7a9b10
Revises:
Create Date: 2026-10-19 10:12:44.318201
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "4c1d2e7a9b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

visibility_status = sa.Enum("draft", "hidden", "published", name="visibility_status")
verse_status = sa.Enum("pending", "uploaded", "processing", "published", name="verse_status")
user_role = sa.Enum("viewer", "editor", "admin", name="user_role")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="viewer"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )

    op.create_table(
        "chapters",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("chapter_number", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("sanskrit_title", sa.String(length=200), nullable=True),
        sa.Column("english_title", sa.String(length=240), nullable=True),
        sa.Column("total_verses", sa.Integer(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("visibility", visibility_status, nullable=False, server_default="draft"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_index("ix_chapters_id", "chapters", ["id"])
    op.create_index("ix_chapters_chapter_number", "chapters", ["chapter_number"], unique=True)
    op.create_index("ix_chapters_visibility", "chapters", ["visibility"])
    op.create_index("ix_chapters_sort_order", "chapters", ["sort_order"])

    op.create_table(
        "languages",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("code", sa.String(length=5), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("native_name", sa.String(length=120), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("manual_verse_count", sa.Integer(), nullable=True),
        sa.Column("manual_chapter_count", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_index("ix_languages_id", "languages", ["id"])
    op.create_index("ix_languages_code", "languages", ["code"], unique=True)

    op.create_table(
        "verses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("chapter_id", sa.Integer(), sa.ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("language_id", sa.Integer(), sa.ForeignKey("languages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("verse_number", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=240), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sanskrit_text", sa.Text(), nullable=True),
        sa.Column("transliteration", sa.Text(), nullable=True),
        sa.Column("english_translation", sa.Text(), nullable=True),
        sa.Column("commentary", sa.Text(), nullable=True),
        sa.Column("youtube_url", sa.String(length=400), nullable=True),
        sa.Column("video_file_path", sa.String(length=1024), nullable=True),
        sa.Column("status", verse_status, nullable=False, server_default="pending"),
        sa.Column("visibility", visibility_status, nullable=False, server_default="draft"),
        sa.Column("is_daily_verse", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("whatsapp_share_text", sa.Text(), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=True),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.UniqueConstraint("chapter_id", "language_id", "verse_number", name="uq_verse_chapter_language_number"),
    )
    op.create_index("ix_verses_chapter_id", "verses", ["chapter_id"])
    op.create_index("ix_verses_language_id", "verses", ["language_id"])
    op.create_index("ix_verses_visibility", "verses", ["visibility"])
    op.create_index("ix_verses_chapter_visibility", "verses", ["chapter_id", "visibility"])


def downgrade() -> None:
    # Use IF EXISTS so downgrade doesn't fail when objects are missing
    op.execute("DROP TABLE IF EXISTS verses;")
    op.execute("DROP TABLE IF EXISTS languages;")
    op.execute("DROP TABLE IF EXISTS chapters;")
    op.execute("DROP TABLE IF EXISTS profiles;")
    op.execute("DROP TABLE IF EXISTS users;")
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute("DROP TYPE IF EXISTS visibility_status;")
        op.execute("DROP TYPE IF EXISTS verse_status;")
        op.execute("DROP TYPE IF EXISTS user_role;")
