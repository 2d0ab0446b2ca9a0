"""Initial schema: dustbins, notifications, collections, analytics, user_profile.

Ownership is a user_id string from the auth layer (no users table here).
Indexes support: "my bins" (active filter), "my unread notifications", "my collections by status",
and the analytics date-range queries.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "dustbins",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("type", sa.String(8), nullable=False),
        sa.Column("location_name", sa.String(256), nullable=False),
        sa.Column("latitude", sa.String(32), nullable=False),
        sa.Column("longitude", sa.String(32), nullable=False),
        sa.Column("fill_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(16), nullable=False, server_default="empty"),
        sa.Column("last_collection_date", sa.String(32), nullable=True),
        sa.Column("next_collection_date", sa.String(32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dustbins_user_id", "dustbins", ["user_id"], unique=False)
    op.create_index("ix_dustbins_user_id_is_active", "dustbins", ["user_id", "is_active"], unique=False)
    op.create_index("ix_dustbins_status", "dustbins", ["status"], unique=False)
    op.create_index("ix_dustbins_type", "dustbins", ["type"], unique=False)
    op.create_index("ix_dustbins_fill_level", "dustbins", ["fill_level"], unique=False)

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("dustbin_id", sa.Integer(), sa.ForeignKey("dustbins.id", ondelete="CASCADE"), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False, server_default="info"),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"], unique=False)
    op.create_index("ix_notifications_user_id_is_read", "notifications", ["user_id", "is_read"], unique=False)
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"], unique=False)

    op.create_table(
        "collections",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("dustbin_id", sa.Integer(), sa.ForeignKey("dustbins.id", ondelete="CASCADE"), nullable=False),
        sa.Column("scheduled_date", sa.String(32), nullable=False),
        sa.Column("completed_date", sa.String(32), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="scheduled"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_collections_user_id", "collections", ["user_id"], unique=False)
    op.create_index("ix_collections_user_id_status", "collections", ["user_id", "status"], unique=False)
    op.create_index("ix_collections_scheduled_date", "collections", ["scheduled_date"], unique=False)
    op.create_index("ix_collections_dustbin_id", "collections", ["dustbin_id"], unique=False)

    op.create_table(
        "analytics",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("dustbin_id", sa.Integer(), sa.ForeignKey("dustbins.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("waste_collected_kg", sa.Float(), nullable=False, server_default="0"),
        sa.Column("fill_level_avg", sa.Integer(), nullable=False),
        sa.Column("collections_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("dustbin_id", "date", name="uq_analytics_dustbin_date"),
    )
    op.create_index("ix_analytics_user_id", "analytics", ["user_id"], unique=False)
    op.create_index("ix_analytics_user_id_date", "analytics", ["user_id", "date"], unique=False)
    op.create_index("ix_analytics_dustbin_id", "analytics", ["dustbin_id"], unique=False)

    op.create_table(
        "user_profile",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("organization_name", sa.String(256), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("mobile_number", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_profile_user_id", "user_profile", ["user_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_user_profile_user_id", table_name="user_profile")
    op.drop_table("user_profile")
    op.drop_index("ix_analytics_dustbin_id", table_name="analytics")
    op.drop_index("ix_analytics_user_id_date", table_name="analytics")
    op.drop_index("ix_analytics_user_id", table_name="analytics")
    op.drop_table("analytics")
    op.drop_index("ix_collections_dustbin_id", table_name="collections")
    op.drop_index("ix_collections_scheduled_date", table_name="collections")
    op.drop_index("ix_collections_user_id_status", table_name="collections")
    op.drop_index("ix_collections_user_id", table_name="collections")
    op.drop_table("collections")
    op.drop_index("ix_notifications_created_at", table_name="notifications")
    op.drop_index("ix_notifications_user_id_is_read", table_name="notifications")
    op.drop_index("ix_notifications_user_id", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_dustbins_fill_level", table_name="dustbins")
    op.drop_index("ix_dustbins_type", table_name="dustbins")
    op.drop_index("ix_dustbins_status", table_name="dustbins")
    op.drop_index("ix_dustbins_user_id_is_active", table_name="dustbins")
    op.drop_index("ix_dustbins_user_id", table_name="dustbins")
    op.drop_table("dustbins")
