"""initial_schema

Create the identities table: one row per user per provider, keyed by
"<provider_uid>@<provider>".

Revision ID: 3f2c9a61d0b4
Revises:
Create Date: 2025-11-02 10:14:07.512384

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a61d0b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "identities",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("profile_link", sa.Text(), nullable=True),
        sa.Column("portrait_link", sa.Text(), nullable=True),
        sa.Column("credential_token", sa.Text(), nullable=False),
        sa.Column("credential_secret", sa.Text(), nullable=True),
        sa.Column(
            "raw_provider_payload", sa.Text(), nullable=False, server_default="{}"
        ),
        sa.Column(
            "is_administrator", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("favorite_value", sa.String(64), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "edited_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    # Recent favorites feed
    op.create_index(
        "idx_identities_edited_at",
        "identities",
        [sa.text("edited_at DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_identities_edited_at", table_name="identities")
    op.drop_table("identities")
