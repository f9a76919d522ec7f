"""Initial schema with the contacts table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("phone_no", sa.String(50), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_contact_email", "contacts", ["email"])
    op.create_index("idx_contact_category", "contacts", ["category", "is_active"])
    op.create_index("idx_contact_creation_date", "contacts", ["creation_date"])


def downgrade() -> None:
    op.drop_index("idx_contact_creation_date", table_name="contacts")
    op.drop_index("idx_contact_category", table_name="contacts")
    op.drop_index("idx_contact_email", table_name="contacts")
    op.drop_table("contacts")
