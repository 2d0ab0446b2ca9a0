"""One alert per dustbin: partial unique index on notifications(dustbin_id) WHERE type = 'alert'.

Hardware ingestion inserts alerts with ON CONFLICT DO NOTHING against this index, so two
reports arriving together cannot both create an alert. Duplicate alerts left from before the
index are removed first (oldest kept).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(
        sa.text(
            "DELETE FROM notifications WHERE type = 'alert' AND dustbin_id IS NOT NULL AND id NOT IN ("
            "SELECT MIN(id) FROM notifications WHERE type = 'alert' AND dustbin_id IS NOT NULL GROUP BY dustbin_id)"
        )
    )
    op.create_index(
        "uq_notifications_dustbin_alert",
        "notifications",
        ["dustbin_id"],
        unique=True,
        sqlite_where=sa.text("type = 'alert'"),
        postgresql_where=sa.text("type = 'alert'"),
    )


def downgrade() -> None:
    op.drop_index("uq_notifications_dustbin_alert", table_name="notifications")
