"""SQLAlchemy table definitions for Hello Social.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import Boolean, Column, Index, MetaData, String, Table, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# IDENTITIES TABLE (one row per user per provider)
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", String(255), primary_key=True),  # "<uid>@<provider>"
    Column("provider", String(50), nullable=False),
    # Profile, refreshed on every login
    Column("name", String(255), nullable=True),
    Column("location", String(255), nullable=True),
    Column("email", String(255), nullable=True),
    Column("profile_link", Text, nullable=True),
    Column("portrait_link", Text, nullable=True),
    # Provider credential
    Column("credential_token", Text, nullable=False),
    Column("credential_secret", Text, nullable=True),
    Column("raw_provider_payload", Text, nullable=False, server_default="{}"),
    Column("is_administrator", Boolean, nullable=False, server_default="false"),
    Column("favorite_value", String(64), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "edited_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_identities_edited_at", identities_table.c.edited_at.desc())
