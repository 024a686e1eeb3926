"""Customer details on users; store settings table.

Revision ID: 002_customer_details
Revises: 001_initial
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_customer_details"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("users", sa.Column("phone", sa.String(50), nullable=True))
    op.add_column("users", sa.Column("address", sa.Text, nullable=True))
    op.add_column(
        "users", sa.Column("tags", sa.JSON, nullable=False, server_default="[]"),
    )
    op.add_column("users", sa.Column("notes", sa.Text, nullable=True))
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "store_settings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("overrides", sa.JSON, nullable=False, server_default="{}"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("store_settings")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_column("users", "notes")
    op.drop_column("users", "tags")
    op.drop_column("users", "address")
    op.drop_column("users", "phone")
