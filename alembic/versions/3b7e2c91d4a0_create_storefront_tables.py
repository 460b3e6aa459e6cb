"""Create storefront tables

Revision ID: 3b7e2c91d4a0
Revises:
Create Date: 2026-10-17 12:05:41.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "3b7e2c91d4a0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "stores",
        sa.Column("id", sa.String, primary_key=True, index=True),
        sa.Column("owner_id", sa.String, nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("whatsapp", sa.String, nullable=False, server_default=""),
        sa.Column("color", sa.String, nullable=False),
        sa.Column("status", sa.String, nullable=False, server_default="pending"),
        sa.Column("plan", sa.String, nullable=False, server_default="mensal"),
        sa.Column("created_at", sa.BigInteger, nullable=False),
    )
    op.create_index("ix_stores_owner_id", "stores", ["owner_id"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.String, primary_key=True, index=True),
        sa.Column("store_id", sa.String, nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("price", sa.Float, nullable=False, server_default="0"),
        sa.Column("image_url", sa.String, nullable=False, server_default=""),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_products_store_id", "products", ["store_id"])

    op.create_table(
        "system_config",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("admin_pix_key", sa.String, nullable=False),
    )

    op.create_table(
        "account_sessions",
        sa.Column("chat_id", sa.BigInteger, primary_key=True),
        sa.Column("uid", sa.String, nullable=False),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("display_name", sa.String, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_account_sessions_uid", "account_sessions", ["uid"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_account_sessions_uid", "account_sessions")
    op.drop_table("account_sessions")
    op.drop_table("system_config")
    op.drop_index("ix_products_store_id", "products")
    op.drop_table("products")
    op.drop_index("ix_stores_owner_id", "stores")
    op.drop_table("stores")
